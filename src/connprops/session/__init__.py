"""Session-configuration resolution for REST clients.

The main entry points are:

- :class:`SessionResolver` -- merges command-line values into a
  :class:`~connprops.models.SessionConfig`, prompts for missing properties,
  and decides the authentication type.
- :func:`add_props_or_prompt` -- one-call convenience wrapper.
- :class:`TerminalPrompter` -- the default prompter (30 second timeout).
- :func:`sanitize_session_config` -- redacted copy for logging.

Typical usage::

    from connprops.models import CommandArguments, SessionConfig
    from connprops.session import add_props_or_prompt

    cfg = add_props_or_prompt(SessionConfig(), CommandArguments(host="h", port=1))
"""

from connprops.session.prompt import DEFAULT_PROMPT_TIMEOUT, Prompter, TerminalPrompter
from connprops.session.redact import (
    SECURE_SESSION_PROPS,
    log_session_config,
    sanitize_session_config,
)
from connprops.session.resolver import SessionResolver, add_props_or_prompt, prop_has_value

__all__ = [
    "DEFAULT_PROMPT_TIMEOUT",
    "Prompter",
    "SECURE_SESSION_PROPS",
    "SessionResolver",
    "TerminalPrompter",
    "add_props_or_prompt",
    "log_session_config",
    "prop_has_value",
    "sanitize_session_config",
]
