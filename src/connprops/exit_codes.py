"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~connprops.exceptions.ConnPropsError` subclass.
Scripts that wrap ``connprops resolve`` can inspect the exit code to tell a
prompt timeout apart from bad input without parsing stderr.

Example::

    $ connprops resolve --no-input
    $ echo $?
    0
    $ connprops resolve < /dev/null
    $ echo $?
    8   # EXIT_PROMPT_TIMEOUT -- nobody answered the host name prompt
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_PROMPT_TIMEOUT = 8
"""An interactive prompt for a required connection property got no answer in time."""

EXIT_VALIDATION_ERROR = 9
"""A value typed at a prompt could not be interpreted (e.g. a non-numeric port)."""
