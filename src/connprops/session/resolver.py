"""Resolution of connection properties for a REST session.

:class:`SessionResolver` completes a caller's
:class:`~connprops.models.SessionConfig` from command-line values, prompts
for whatever required property is still missing, and decides which
authentication scheme the session will use.

Precedence, highest first:

1. values in :class:`~connprops.models.CommandArguments`
2. values already on the caller's session config
3. interactive answers (only when prompting is enabled)

User name and password always beat a token supplied on the command line.
A token is only presented when no credentials are available, and it is
discarded entirely when the caller asked to *request* a new token.

Resolution is transactional: all work happens on a private copy, and the
caller's object is updated only once resolution has succeeded. A prompt
timeout or an invalid answer leaves it exactly as it was passed in.

Example::

    cfg = SessionConfig(reject_unauthorized=True)
    args = CommandArguments(host="example.com", port=443, user="me", password="pw")
    SessionResolver().resolve(cfg, args)
    cfg.type  # AuthType.BASIC
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from connprops.exceptions import TimeoutError_, ValidationError
from connprops.models import (
    AuthType,
    CommandArguments,
    ResolutionOptions,
    SessionConfig,
)
from connprops.session.prompt import Prompter, TerminalPrompter
from connprops.session.redact import DebugLogger, log_session_config

logger = logging.getLogger(__name__)

HOST_PROMPT = "Enter the host name of your service: "
PORT_PROMPT = "Enter the port number for your service: "
USER_PROMPT = "Enter user name: "
PASSWORD_PROMPT = "Enter password : "


def prop_has_value(value: Any) -> bool:
    """Return True if *value* counts as supplied.

    ``None`` and the empty string are missing; everything else, including
    ``0`` and ``False``, is present.
    """
    if value is None:
        return False
    if isinstance(value, str) and len(value) == 0:
        return False
    return True


class SessionResolver:
    """Fill in a session config from arguments and prompts.

    Both collaborators are injectable so tests can substitute fakes.

    Args:
        prompter: Asks the user for missing values. Defaults to a
            :class:`~connprops.session.prompt.TerminalPrompter` created on
            first use.
        logger: Receives the redacted session config. Defaults to the
            process-wide :class:`~connprops.output.SessionConsole`.
    """

    def __init__(
        self,
        prompter: Optional[Prompter] = None,
        logger: Optional[DebugLogger] = None,
    ) -> None:
        self._prompter = prompter
        self._logger = logger

    @property
    def prompter(self) -> Prompter:
        if self._prompter is None:
            self._prompter = TerminalPrompter()
        return self._prompter

    @property
    def logger(self) -> DebugLogger:
        if self._logger is not None:
            return self._logger
        from connprops.output import get_output

        return get_output()

    def resolve(
        self,
        initial_sess_cfg: SessionConfig,
        cmd_args: Union[CommandArguments, Mapping[str, Any]],
        options: Optional[ResolutionOptions] = None,
    ) -> SessionConfig:
        """Complete *initial_sess_cfg* and pick its authentication type.

        Args:
            initial_sess_cfg: The caller's configuration. It is updated in
                place and returned, but only if resolution succeeds.
            cmd_args: Values from the command line (or environment, or
                profile). A plain mapping is accepted and validated into
                :class:`~connprops.models.CommandArguments`.
            options: Switches for token requests, prompting and the default
                token type. Defaults to :class:`ResolutionOptions()`.

        Returns:
            *initial_sess_cfg*, now carrying connection properties and a
            :attr:`~connprops.models.SessionConfig.type`.

        Raises:
            TimeoutError_: A prompt for host name, port number, user name or
                password got no answer in time.
            ValidationError: The port typed at the prompt is not a number.
        """
        opts = options if options is not None else ResolutionOptions()
        if not isinstance(cmd_args, CommandArguments):
            cmd_args = CommandArguments.model_validate(dict(cmd_args))

        sess_cfg = initial_sess_cfg.model_copy(deep=True)

        # Command-line values override what the caller supplied.
        if prop_has_value(cmd_args.host):
            sess_cfg.hostname = cmd_args.host
        if prop_has_value(cmd_args.port):
            sess_cfg.port = cmd_args.port
        if prop_has_value(cmd_args.user):
            sess_cfg.user = cmd_args.user
        if prop_has_value(cmd_args.password):
            sess_cfg.password = cmd_args.password

        if opts.request_token:
            # Basic credentials will be exchanged for a fresh token.
            sess_cfg.token_value = None
        elif (
            not prop_has_value(sess_cfg.user)
            and not prop_has_value(sess_cfg.password)
            and prop_has_value(cmd_args.token_value)
        ):
            sess_cfg.token_value = cmd_args.token_value

        if opts.do_prompting:
            if not prop_has_value(sess_cfg.hostname):
                sess_cfg.hostname = self._prompt_for_text(HOST_PROMPT, "host name")
            if not prop_has_value(sess_cfg.port):
                sess_cfg.port = self._prompt_for_port()

        # A token here means no user or password came from the arguments.
        if prop_has_value(sess_cfg.token_value):
            logger.debug("Using token authentication")
            if prop_has_value(cmd_args.token_type):
                sess_cfg.type = AuthType.TOKEN
                sess_cfg.token_type = cmd_args.token_type
            else:
                sess_cfg.type = AuthType.BEARER
            return self._commit(initial_sess_cfg, sess_cfg)

        if opts.do_prompting:
            if not prop_has_value(sess_cfg.user):
                sess_cfg.user = self._prompt_for_text(USER_PROMPT, "user name")
            if not prop_has_value(sess_cfg.password):
                sess_cfg.password = self._prompt_for_text(
                    PASSWORD_PROMPT, "password", mask=True
                )

        self._set_type_for_basic_creds(sess_cfg, opts, cmd_args.token_type)
        return self._commit(initial_sess_cfg, sess_cfg)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _prompt_for_text(self, text: str, field: str, mask: bool = False) -> str:
        """Prompt until a non-empty answer arrives; ``None`` means timeout."""
        answer: Optional[str] = ""
        while answer == "":
            answer = self.prompter.prompt_with_timeout(text, mask)
            if answer is None:
                raise TimeoutError_(field)
        return answer

    def _prompt_for_port(self) -> int:
        """Prompt for a port number.

        Any numeric answer with an integral value is accepted, so "443",
        "443.0" and "1e3" all work. Fractions, "nan" and "inf" are not ports.
        """
        while True:
            answer = self.prompter.prompt_with_timeout(PORT_PROMPT, False)
            if answer is None:
                raise TimeoutError_("port number")
            answer = answer.strip()
            if answer == "":
                continue
            try:
                number = float(answer)
            except ValueError:
                raise ValidationError("port") from None
            if not number.is_integer():
                raise ValidationError("port")
            return int(number)

    @staticmethod
    def _set_type_for_basic_creds(
        sess_cfg: SessionConfig,
        opts: ResolutionOptions,
        token_type: Optional[str],
    ) -> None:
        if opts.request_token:
            logger.debug("Using basic authentication to get token")
            sess_cfg.type = AuthType.TOKEN
            sess_cfg.token_type = token_type or opts.default_token_type
        else:
            logger.debug("Using basic authentication with no request for token")
            sess_cfg.type = AuthType.BASIC

    def _commit(self, target: SessionConfig, resolved: SessionConfig) -> SessionConfig:
        """Log *resolved* and copy its declared fields onto the caller's object."""
        log_session_config(resolved, self.logger)
        for name in type(target).model_fields:
            setattr(target, name, getattr(resolved, name))
        return target


def add_props_or_prompt(
    initial_sess_cfg: SessionConfig,
    cmd_args: Union[CommandArguments, Mapping[str, Any]],
    options: Optional[ResolutionOptions] = None,
    *,
    prompter: Optional[Prompter] = None,
    logger: Optional[DebugLogger] = None,
) -> SessionConfig:
    """Resolve *initial_sess_cfg* with a one-off :class:`SessionResolver`.

    See :meth:`SessionResolver.resolve` for the arguments, return value and
    errors.
    """
    return SessionResolver(prompter=prompter, logger=logger).resolve(
        initial_sess_cfg, cmd_args, options
    )
