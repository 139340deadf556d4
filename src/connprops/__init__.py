"""connprops -- Resolve connection and credential properties for REST sessions.

A REST client needs a host, a port and credentials before it can make its
first call. This package merges those values from the caller's own
configuration and the command line, prompts for anything still missing
(with a timeout, so scripts never hang), and decides whether the session
authenticates with basic credentials, a typed token, or a bearer token.
Secrets are always redacted before a session configuration is logged.

Typical workflow::

    connprops resolve --host example.com --port 443 --user me
    # prompts for the password, then prints the redacted result

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models shared across the entire package.
    session: The resolver, the prompter, and redaction helpers.
    config: XDG-aware settings with environment overrides.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
