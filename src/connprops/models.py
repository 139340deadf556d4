"""Canonical Pydantic models shared across all connprops modules.

This is the single source of truth for data shapes in the project. The
models fall into two groups:

**Session models** -- the inputs and output of credential resolution:
    :class:`AuthType`, :class:`SessionConfig`, :class:`CommandArguments`,
    and :class:`ResolutionOptions`.

**Settings model** -- user preferences persisted in the config directory:
    :class:`ResolverSettings`.

Session models accept both the snake_case field names and the camelCase
aliases used in serialised session configurations (``tokenValue``,
``tokenType``). Models that accept caller extensions use ``extra="allow"``
so that unknown keys are preserved in ``model_extra``.
"""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Token types ---

TOKEN_TYPE_JWT = "jwtToken"
"""JSON Web Token, the token type requested when the caller names none."""

TOKEN_TYPE_LTPA = "LtpaToken2"
"""IBM Lightweight Third-Party Authentication token."""

TOKEN_TYPE_APIML = "apimlAuthenticationToken"
"""Token issued by an API Mediation Layer gateway."""

TOKEN_TYPE_CHOICES = (TOKEN_TYPE_JWT, TOKEN_TYPE_LTPA, TOKEN_TYPE_APIML)


class AuthType(str, enum.Enum):
    """Authentication scheme chosen for a resolved :class:`SessionConfig`.

    * ``BASIC`` -- user name and password are sent on every request.
    * ``TOKEN`` -- a typed token (``token_type``) is presented, or basic
      credentials are exchanged for one.
    * ``BEARER`` -- an untyped token is sent as ``Authorization: Bearer``.
    """

    BASIC = "basic"
    TOKEN = "token"
    BEARER = "bearer"


# --- Session models ---


class SessionConfig(BaseModel):
    """Connection and credential properties for one REST session.

    Owned by the caller. :class:`~connprops.session.resolver.SessionResolver`
    fills in the connection fields, picks :attr:`type`, and returns the same
    instance. Any extra fields the caller sets (``reject_unauthorized``,
    ``base_path``, ...) pass through resolution untouched.

    Example::

        cfg = SessionConfig(hostname="example.com", reject_unauthorized=True)
        cfg.model_extra  # {"reject_unauthorized": True}
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    hostname: Optional[str] = None
    port: Optional[int] = None
    user: Optional[str] = None
    password: Optional[str] = None
    token_value: Optional[str] = Field(default=None, alias="tokenValue")
    token_type: Optional[str] = Field(default=None, alias="tokenType")
    type: Optional[AuthType] = Field(
        default=None, description="Set by the resolver: basic, token, or bearer"
    )


class CommandArguments(BaseModel):
    """Read-only bag of connection values gathered from the command line.

    Produced by whatever layer parses arguments and merges profiles; the
    resolver only reads from it. Unset values stay ``None``. Extra keys are
    tolerated so an argument namespace can be passed through wholesale.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    host: Optional[str] = None
    port: Optional[int] = None
    user: Optional[str] = None
    password: Optional[str] = None
    token_value: Optional[str] = Field(default=None, alias="tokenValue")
    token_type: Optional[str] = Field(default=None, alias="tokenType")


class ResolutionOptions(BaseModel):
    """Caller switches that alter how a session config is resolved."""

    request_token: bool = Field(
        default=False,
        description="Exchange user/password for a token instead of presenting one",
    )
    do_prompting: bool = Field(
        default=True, description="Prompt interactively for missing properties"
    )
    default_token_type: str = Field(
        default=TOKEN_TYPE_JWT,
        description="Token type to request when the arguments name none",
    )


# --- Settings ---


class ResolverSettings(BaseModel):
    """User-wide settings persisted at ``~/.config/connprops/config.json``.

    Loaded by :func:`~connprops.config.load_settings`, which layers
    environment variables over the file and the file over these defaults.
    """

    prompt_timeout: float = Field(
        default=30.0, gt=0, description="Seconds to wait for each prompt answer"
    )
    default_token_type: str = Field(default=TOKEN_TYPE_JWT)
    do_prompting: bool = Field(
        default=True, description="Allow interactive prompts for missing values"
    )

    def to_options(self, request_token: bool = False) -> ResolutionOptions:
        """Build the :class:`ResolutionOptions` these settings imply.

        Args:
            request_token: Whether the caller wants to obtain a token.

        Returns:
            Options carrying this instance's prompting and token-type defaults.
        """
        return ResolutionOptions(
            request_token=request_token,
            do_prompting=self.do_prompting,
            default_token_type=self.default_token_type,
        )
