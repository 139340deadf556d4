"""Tests for the session console.

Covers:
- format resolution (auto -> rich/plain based on TTY and colour)
- redacted session config on stdout in every format
- errors and verbose-only debug records on stderr
- the connprops log handler installed for verbose consoles
"""

from __future__ import annotations

import json
import logging

import pytest

from connprops.models import AuthType, SessionConfig
from connprops.output import (
    OutputFormat,
    SessionConsole,
    get_output,
    reset_output,
    set_output,
)


@pytest.fixture()
def non_tty(monkeypatch):
    monkeypatch.setattr("connprops.output._stdout_is_terminal", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    monkeypatch.setattr("connprops.output._stdout_is_terminal", lambda: True)


@pytest.fixture()
def resolved() -> SessionConfig:
    return SessionConfig(
        hostname="SomeHost",
        port=443,
        user="FakeUser",
        password="FakePassword",
        type=AuthType.BASIC,
        reject_unauthorized=False,
    )


class TestFormatResolution:
    def test_auto_is_plain_when_piped(self, non_tty):
        assert SessionConsole().format == OutputFormat.PLAIN

    def test_auto_is_rich_on_terminal(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert SessionConsole().format == OutputFormat.RICH

    def test_auto_is_plain_without_colour(self, tty):
        assert SessionConsole(no_color=True).format == OutputFormat.PLAIN

    @pytest.mark.parametrize(("name", "value"), [("NO_COLOR", ""), ("TERM", "dumb")])
    def test_environment_disables_colour(self, tty, monkeypatch, name, value):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv(name, value)
        console = SessionConsole()
        assert console.no_color is True
        assert console.format == OutputFormat.PLAIN

    def test_explicit_format_kept(self, tty):
        assert SessionConsole(format=OutputFormat.JSON).format == OutputFormat.JSON


class TestShowSessionConfig:
    def test_json(self, capsys, resolved):
        SessionConsole(format=OutputFormat.JSON, no_color=True).show_session_config(resolved)

        captured = capsys.readouterr()
        assert json.loads(captured.out) == {
            "hostname": "SomeHost",
            "port": 443,
            "user": "user_is_hidden",
            "password": "password_is_hidden",
            "type": "basic",
            "reject_unauthorized": False,
        }
        assert captured.err == ""

    def test_plain_lines(self, capsys):
        cfg = SessionConfig(hostname="h", token_value="T", type=AuthType.BEARER, base_path=["a"])
        SessionConsole(format=OutputFormat.PLAIN, no_color=True).show_session_config(cfg)

        assert capsys.readouterr().out == (
            "hostname\th\n"
            "tokenValue\ttokenValue_is_hidden\n"
            "type\tbearer\n"
            'base_path\t["a"]\n'
        )

    def test_rich_table_hides_secrets(self, capsys, resolved):
        SessionConsole(format=OutputFormat.RICH, no_color=True).show_session_config(resolved)

        out = capsys.readouterr().out
        assert "SomeHost" in out
        assert "user_is_hidden" in out
        assert "FakePassword" not in out

    def test_accepts_mapping(self, capsys):
        SessionConsole(format=OutputFormat.JSON).show_session_config({"password": "pw"})
        assert json.loads(capsys.readouterr().out) == {"password": "password_is_hidden"}


class TestDiagnostics:
    def test_error_to_stderr(self, capsys):
        SessionConsole(format=OutputFormat.PLAIN, no_color=True).error("boom")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Error: boom" in captured.err

    def test_debug_hidden_without_verbose(self, capsys):
        SessionConsole(format=OutputFormat.PLAIN, no_color=True).debug("props")
        assert capsys.readouterr().err == ""

    def test_debug_shown_with_verbose(self, capsys):
        SessionConsole(format=OutputFormat.PLAIN, no_color=True, verbose=True).debug(
            'props:\n{"user": "user_is_hidden"}'
        )
        err = capsys.readouterr().err
        assert err.startswith("[debug] props:")
        assert "user_is_hidden" in err


class TestGlobalConsole:
    def test_lazy_default(self):
        assert isinstance(get_output(), SessionConsole)

    def test_set_and_reset(self):
        console = SessionConsole(format=OutputFormat.JSON)
        set_output(console)
        assert get_output() is console
        reset_output()
        assert get_output() is not console

    def test_verbose_console_shows_log_records(self, capsys):
        set_output(SessionConsole(format=OutputFormat.PLAIN, no_color=True, verbose=True))
        logging.getLogger("connprops.session.resolver").debug("Using token authentication")
        assert "Using token authentication" in capsys.readouterr().err

    def test_quiet_console_has_no_log_handler(self):
        set_output(SessionConsole(verbose=True))
        set_output(SessionConsole(verbose=False))
        assert logging.getLogger("connprops").handlers == []

    def test_reset_detaches_log_handler(self):
        set_output(SessionConsole(verbose=True))
        reset_output()
        pkg_logger = logging.getLogger("connprops")
        assert pkg_logger.handlers == []
        assert pkg_logger.level == logging.NOTSET
