"""Shared test fixtures for connprops.

Provides fake collaborators for the session resolver, isolated config
environments, and output state management. These fixtures are
automatically discovered by pytest and available to all test modules
without explicit imports.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import pytest

from connprops.output import reset_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the process-wide console and log handler after every test.

    A verbose console attaches a handler to the ``connprops`` logger;
    it must not leak into the next test.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Fake collaborators
# ---------------------------------------------------------------------------


class FakePrompter:
    """Prompter that replays scripted answers and records every call."""

    def __init__(self, answers: Iterable[Optional[str]] = ()) -> None:
        self._answers = list(answers)
        self.calls: list[tuple[str, bool]] = []

    def prompt_with_timeout(self, text: str, mask: bool = False) -> Optional[str]:
        self.calls.append((text, mask))
        if not self._answers:
            raise AssertionError(f"Unexpected prompt: {text!r}")
        return self._answers.pop(0)


class FakeLogger:
    """Logger that keeps debug messages in memory."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def debug(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture
def fake_logger() -> FakeLogger:
    return FakeLogger()


@pytest.fixture
def make_prompter():
    """Factory for :class:`FakePrompter` instances with scripted answers."""
    return FakePrompter


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_DATA_HOME to subdirectories of tmp_path
    so that tests never touch real user config, forces the XDG code path,
    and clears all CONNPROPS_* environment variables.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("connprops.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    for var in [
        "CONNPROPS_PROMPT_TIMEOUT",
        "CONNPROPS_DEFAULT_TOKEN_TYPE",
        "CONNPROPS_NO_INPUT",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path
