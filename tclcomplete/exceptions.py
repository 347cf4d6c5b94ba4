"""tclcomplete exception hierarchy.

All tclcomplete exceptions inherit from TclCompleteError and support cause chaining.
"""

from __future__ import annotations

from collections.abc import Sequence


class TclCompleteError(Exception):
    """Base exception for all tclcomplete errors.

    Wraps original errors as __cause__ for proper exception chaining.
    """

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause


class InterpreterError(TclCompleteError):
    """Raised when an introspection query fails inside the target interpreter.

    Examples: unknown child interpreter, missing namespace, unset variable
    dereference, an object that does not support the query.
    """

    def __init__(
        self,
        message: str,
        *,
        command: Sequence[str] = (),
        interp: str = "",
        cause: Exception | None = None,
    ):
        super().__init__(message, cause=cause)
        self.command = tuple(command)
        self.interp = interp


class ConfigError(TclCompleteError):
    """Raised when a configuration file is missing, unparsable or invalid."""

    pass
