"""Redaction of secret session properties before they are logged.

Session configurations carry user names, passwords and tokens. Whenever one
is written to a log it first goes through :func:`sanitize_session_config`,
which works on a deep copy and replaces each secret that is present with a
``"<field>_is_hidden"`` placeholder. The caller's object is never touched.
"""

from __future__ import annotations

import copy
import json
from typing import Any, Mapping, Protocol, Union

from connprops.models import SessionConfig

SECURE_SESSION_PROPS: tuple[str, ...] = ("user", "password", "tokenValue")
"""Serialised session properties that must never reach a log in clear text."""


class DebugLogger(Protocol):
    """The one logging call the resolver needs."""

    def debug(self, message: str) -> None: ...


def sanitize_session_config(
    sess_cfg: Union[SessionConfig, Mapping[str, Any]],
) -> dict[str, Any]:
    """Return a redacted, JSON-ready copy of a session configuration.

    :class:`~connprops.models.SessionConfig` instances are dumped with their
    serialisation aliases (``tokenValue``, ``tokenType``) and without unset
    (``None``) fields. Plain mappings are deep-copied as they are.

    Args:
        sess_cfg: The configuration to sanitize.

    Returns:
        A new dict in which every property of :data:`SECURE_SESSION_PROPS`
        that has a non-``None`` value reads ``"<name>_is_hidden"``.
    """
    if isinstance(sess_cfg, SessionConfig):
        sanitized = sess_cfg.model_dump(mode="json", by_alias=True, exclude_none=True)
    else:
        sanitized = copy.deepcopy(dict(sess_cfg))

    for secure_prop in SECURE_SESSION_PROPS:
        if sanitized.get(secure_prop) is not None:
            sanitized[secure_prop] = f"{secure_prop}_is_hidden"
    return sanitized


def log_session_config(
    sess_cfg: Union[SessionConfig, Mapping[str, Any]],
    logger: DebugLogger,
) -> None:
    """Write one debug record describing *sess_cfg* with its secrets hidden.

    Args:
        sess_cfg: The configuration to describe.
        logger: Receives exactly one :meth:`~DebugLogger.debug` call.
    """
    sanitized = sanitize_session_config(sess_cfg)
    logger.debug(
        "Creating a session config with these properties:\n"
        + json.dumps(sanitized, indent=2, default=str)
    )
