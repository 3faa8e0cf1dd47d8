"""
Exceptions raised while building SQL.

These are programmer errors: a malformed template, too few parameters, or a
value with no SQL rendering. They are raised immediately and never retried.
Errors coming back from the database live in ``sql_plus.io.connectors.exceptions``.
"""

from typing import Any, Dict


class SqlPlusError(Exception):
    """Base class for every error raised by sql-plus."""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to structured dict for logging."""
        return {
            "error_type": type(self).__name__,
            "message": str(self),
        }


class TemplateError(SqlPlusError, ValueError):
    """A SQL template could not be formatted."""


class NotEnoughParamsError(TemplateError):
    """A positional placeholder had no parameter left to consume."""

    def __init__(self, position: int):
        self.position = position
        super().__init__(f"Not enough params (placeholder #{position + 1})")


class MissingNamedParamError(TemplateError):
    """A named placeholder referenced a key absent from the params mapping."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'"{name}" param not provided')


class MixedParamsError(TemplateError):
    """Positional placeholders were used with a mapping, or named ones with a sequence."""


class UnsupportedKindError(SqlPlusError, TypeError):
    """A value, connection or where-node has no SQL rendering rule."""

    kind = "value"

    def __init__(self, obj: Any, expected: str = ""):
        self.obj_type = type(obj).__name__
        message = f"Unsupported {self.kind} type: {self.obj_type}"
        if expected:
            message += f" (expected {expected})"
        super().__init__(message)


class UnsupportedValueKindError(UnsupportedKindError):
    kind = "value"


class UnsupportedConnectionKindError(UnsupportedKindError):
    kind = "connection"


class UnsupportedWhereKindError(UnsupportedKindError):
    kind = "where clause"
