"""Interactive prompting with a timeout.

The resolver asks for missing connection properties through the
:class:`Prompter` protocol. A prompter returns the typed answer, or ``None``
when nobody answered in time, so the resolver can tell a timeout apart from
an empty answer.

:class:`TerminalPrompter` is the production implementation. Each prompt
reads one line on a daemon thread and stops waiting after ``timeout``
seconds, so an unattended script is never blocked indefinitely. Prompt text
goes to stderr; stdout stays reserved for the resolved configuration.
"""

from __future__ import annotations

import getpass
import os
import queue
import sys
import threading
from typing import Any, Optional, Protocol

import typer

DEFAULT_PROMPT_TIMEOUT = 30.0
"""Seconds a prompt waits for an answer before giving up."""


class Prompter(Protocol):
    """Something that can ask the user for a value."""

    def prompt_with_timeout(self, text: str, mask: bool = False) -> Optional[str]:
        """Ask for a value and wait a bounded time for the answer.

        Args:
            text: The prompt displayed to the user.
            mask: Hide the typed characters (for passwords).

        Returns:
            The answer without its trailing newline (possibly ``""``), or
            ``None`` if the prompt timed out.
        """
        ...


def _save_terminal_state() -> Optional[tuple[int, Any]]:
    """Capture the controlling terminal's attributes, or None without a tty.

    :func:`getpass.getpass` switches echo off on ``/dev/tty`` and only
    switches it back on once a line has been read. A read abandoned on
    timeout needs these attributes to put the terminal back.
    """
    if sys.platform == "win32":
        return None
    import termios

    try:
        fd = os.open("/dev/tty", os.O_RDWR | os.O_NOCTTY)
    except OSError:
        return None
    try:
        return fd, termios.tcgetattr(fd)
    except termios.error:
        os.close(fd)
        return None


def _restore_terminal_state(state: tuple[int, Any]) -> None:
    import termios

    fd, attrs = state
    try:
        termios.tcsetattr(fd, termios.TCSAFLUSH, attrs)
    finally:
        os.close(fd)


def _read_line(text: str) -> str:
    """Read one answer line from stdin. EOF raises EOFError."""
    line = sys.stdin.readline()
    if line == "":
        raise EOFError
    return line


class TerminalPrompter:
    """Prompt on the controlling terminal, giving up after a fixed timeout.

    Unmasked prompts are written to stderr and answered on stdin; masked
    prompts use :func:`getpass.getpass`. End-of-file on stdin counts as no
    answer. When a masked read is abandoned (timeout or Ctrl-C) the terminal
    attributes saved before the prompt are restored, so echo comes back on.

    Args:
        timeout: Seconds to wait for each answer.

    Example::

        prompter = TerminalPrompter(timeout=10)
        host = prompter.prompt_with_timeout("Enter the host name: ")
        if host is None:
            ...  # nobody answered
    """

    def __init__(self, timeout: float = DEFAULT_PROMPT_TIMEOUT) -> None:
        self._timeout = timeout

    @property
    def timeout(self) -> float:
        """Seconds each prompt waits for an answer."""
        return self._timeout

    def prompt_with_timeout(self, text: str, mask: bool = False) -> Optional[str]:
        answers: queue.Queue[Optional[str]] = queue.Queue(maxsize=1)
        saved_state = _save_terminal_state() if mask else None

        if mask:
            reader = getpass.getpass
        else:
            typer.echo(text, nl=False, err=True)
            reader = _read_line

        def _read() -> None:
            try:
                answer: Optional[str] = reader(text)
            except (EOFError, OSError):
                answer = None
            answers.put(answer)

        # A daemon thread is left behind on timeout; it must not keep the
        # interpreter alive.
        thread = threading.Thread(target=_read, name="connprops-prompt", daemon=True)
        thread.start()
        try:
            answer = answers.get(timeout=self._timeout)
        except queue.Empty:
            typer.echo(err=True)
            return None
        finally:
            if saved_state is not None:
                if thread.is_alive():
                    _restore_terminal_state(saved_state)
                else:
                    os.close(saved_state[0])
        if answer is None:
            return None
        return answer.rstrip("\r\n")
