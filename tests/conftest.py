from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Generator, Iterator
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def configure_test_logging() -> Generator[None, None, None]:
    """Configure structlog for the test environment.

    Runs automatically for every test so log output goes to stderr at
    WARNING level and never mixes with captured stdout.
    """
    from infixcalc.logging import clear_context, configure_logging

    configure_logging(level=logging.WARNING)
    yield
    clear_context()


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory for test files.

    Also saves and restores the current working directory so tests that
    chdir into it do not affect other tests.
    """
    original_cwd = os.getcwd()
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
    os.chdir(original_cwd)


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Remove all INFIXCALC_ environment variables for clean testing."""
    original_env = os.environ.copy()
    for key in list(os.environ.keys()):
        if key.startswith("INFIXCALC_"):
            del os.environ[key]
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def isolated_config(
    temp_dir: Path, clean_env: None, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Run in an empty working directory with an empty home directory.

    Keeps a developer's own infixcalc.yaml or ~/.config/infixcalc from
    leaking into configuration tests.
    """
    monkeypatch.chdir(temp_dir)
    monkeypatch.setattr(Path, "home", lambda: temp_dir)
    return temp_dir


@pytest.fixture
def sample_config_yaml() -> str:
    """Return sample infixcalc.yaml content for testing."""
    return """
evaluation:
  strict_numbers: false
  allow_non_finite: false

output:
  format: json
  show_postfix: true

verbosity: info
"""
