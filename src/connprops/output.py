"""Terminal output for resolved session configurations.

stdout carries only the resolved configuration, always redacted; errors,
debug records and log messages go to stderr. The format is JSON, plain
``key<TAB>value`` lines, or a Rich table. ``AUTO`` picks the table on an
interactive terminal and plain lines when piped. ``NO_COLOR``, ``TERM=dumb``
and ``--no-color`` turn colour off.

:class:`SessionConsole` is also the default logger of
:class:`~connprops.session.resolver.SessionResolver`: its :meth:`debug`
receives the redacted configuration record when ``--verbose`` is on.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from enum import Enum
from typing import Any, Mapping, Optional, Union

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from connprops.models import SessionConfig
from connprops.session.redact import sanitize_session_config


class OutputFormat(str, Enum):
    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


def _color_disabled() -> bool:
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


def _stdout_is_terminal() -> bool:
    return sys.stdout.isatty()


def _plain_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str)


class SessionConsole:
    """Writes resolved session configs to stdout and diagnostics to stderr.

    Args:
        format: How to render the configuration. ``AUTO`` becomes ``RICH``
            on a colour terminal and ``PLAIN`` otherwise.
        no_color: Disable colour even on a terminal.
        verbose: Show :meth:`debug` records.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        verbose: bool = False,
    ) -> None:
        self.no_color = no_color or _color_disabled()
        self.verbose = verbose
        if format == OutputFormat.AUTO:
            use_table = _stdout_is_terminal() and not self.no_color
            format = OutputFormat.RICH if use_table else OutputFormat.PLAIN
        self.format = format
        self._stderr = Console(stderr=True, no_color=self.no_color)

    def show_session_config(
        self, sess_cfg: Union[SessionConfig, Mapping[str, Any]]
    ) -> None:
        """Print *sess_cfg* to stdout with user, password and token hidden."""
        props = sanitize_session_config(sess_cfg)
        if self.format == OutputFormat.JSON:
            print(json.dumps(props, indent=2, ensure_ascii=False, default=str), flush=True)
        elif self.format == OutputFormat.PLAIN:
            for name, value in props.items():
                print(f"{name}\t{_plain_value(value)}", flush=True)
        else:
            table = Table("Property", "Value", title="Session configuration")
            for name, value in props.items():
                table.add_row(name, _plain_value(value))
            Console(no_color=self.no_color).print(table)

    def error(self, message: str) -> None:
        if self.no_color:
            print(f"Error: {message}", file=sys.stderr, flush=True)
        else:
            self._stderr.print(f"[bold red]Error:[/bold red] {message}")

    def debug(self, message: str) -> None:
        """Print *message* to stderr when verbose.

        Markup is off: the records are serialised configs whose brackets must
        print as-is.
        """
        if not self.verbose:
            return
        if self.no_color:
            print(f"[debug] {message}", file=sys.stderr, flush=True)
        else:
            self._stderr.print(f"[debug] {message}", style="dim", markup=False)

    def log_handler(self) -> logging.Handler:
        """A stderr handler for the ``connprops`` loggers."""
        return RichHandler(
            console=self._stderr,
            show_time=False,
            show_path=False,
            markup=False,
        )


_console: Optional[SessionConsole] = None
_handler: Optional[logging.Handler] = None


def get_output() -> SessionConsole:
    """Return the process-wide console, creating a default one if needed."""
    global _console
    if _console is None:
        _console = SessionConsole()
    return _console


def set_output(console: SessionConsole) -> None:
    """Install *console* process-wide.

    With ``verbose`` on, records from the ``connprops`` loggers (which
    authentication scheme was chosen, for instance) are shown on stderr too.
    """
    global _console
    _console = console
    _detach_log_handler()
    if console.verbose:
        _attach_log_handler(console.log_handler())


def reset_output() -> None:
    global _console
    _console = None
    _detach_log_handler()


def _attach_log_handler(handler: logging.Handler) -> None:
    global _handler
    pkg_logger = logging.getLogger("connprops")
    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(logging.DEBUG)
    _handler = handler


def _detach_log_handler() -> None:
    global _handler
    if _handler is None:
        return
    pkg_logger = logging.getLogger("connprops")
    pkg_logger.removeHandler(_handler)
    pkg_logger.setLevel(logging.NOTSET)
    _handler = None


def error(message: str) -> None:
    get_output().error(message)
