"""Typer application and CLI entry point for connprops.

The ``connprops resolve`` command takes connection values as options,
resolves them into a session configuration (prompting on the terminal for
anything missing), and prints the result with secrets redacted. It is the
same path a host CLI takes before it constructs its REST session.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app.
Unhandled exceptions are written to a crash log under the data directory.

See Also:
    :mod:`connprops.session.resolver`: The resolution algorithm.
    :mod:`connprops.output`: Console set up in :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from connprops import __version__
from connprops.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="connprops",
    help="Resolve connection and credential properties for REST sessions.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"connprops {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
    no_input: bool = typer.Option(
        False, "--no-input", help="Disable interactive prompts."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the process-wide :class:`~connprops.output.SessionConsole`
    from CLI flags and stores shared options in the Typer context.
    """
    from connprops.output import OutputFormat, SessionConsole, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(SessionConsole(format=fmt, no_color=no_color, verbose=verbose))

    ctx.ensure_object(dict)
    ctx.obj["no_input"] = no_input


@app.command("resolve")
def resolve_command(
    ctx: typer.Context,
    host: Optional[str] = typer.Option(None, "--host", "-H", help="Host name of the service."),
    port: Optional[int] = typer.Option(None, "--port", "-P", help="Port number of the service."),
    user: Optional[str] = typer.Option(None, "--user", "-u", help="User name."),
    password: Optional[str] = typer.Option(None, "--password", help="Password."),
    token_value: Optional[str] = typer.Option(
        None, "--token-value", "--tv", help="Token to present instead of credentials."
    ),
    token_type: Optional[str] = typer.Option(
        None, "--token-type", "--tt", help="Type of the token (e.g. jwtToken, LtpaToken2)."
    ),
    request_token: bool = typer.Option(
        False, "--request-token", help="Use the credentials to obtain a token."
    ),
) -> None:
    """Resolve a session configuration and print it with secrets hidden.

    Missing host, port, user name and password are prompted for unless
    ``--no-input`` is given or ``CONNPROPS_NO_INPUT`` is set.

    Raises:
        typer.Exit: With the error's exit code when settings are invalid, a
            prompt times out, or a prompted port is not a number.

    Example::

        connprops --verbose resolve --host example.com --port 443 --tv abc
    """
    from connprops.config import load_settings
    from connprops.exceptions import ConnPropsError
    from connprops.models import CommandArguments, SessionConfig
    from connprops.output import error, get_output
    from connprops.session import SessionResolver, TerminalPrompter

    no_input = bool(ctx.obj and ctx.obj.get("no_input"))
    supplied = {
        "host": host,
        "port": port,
        "user": user,
        "password": password,
        "token_value": token_value,
        "token_type": token_type,
    }
    cmd_args = CommandArguments(**{k: v for k, v in supplied.items() if v is not None})

    try:
        settings = load_settings()
        options = settings.to_options(request_token=request_token)
        if no_input:
            options.do_prompting = False
        resolver = SessionResolver(
            prompter=TerminalPrompter(timeout=settings.prompt_timeout),
            logger=get_output(),
        )
        sess_cfg = resolver.resolve(SessionConfig(), cmd_args, options)
    except ConnPropsError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    get_output().show_session_config(sess_cfg)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from connprops.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``connprops`` console script.

    Unhandled :class:`~connprops.exceptions.ConnPropsError` instances
    cause a clean exit with the error's ``exit_code``. All other exceptions
    produce a crash log and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from connprops.exceptions import ConnPropsError
        from connprops.output import error

        if isinstance(exc, ConnPropsError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
