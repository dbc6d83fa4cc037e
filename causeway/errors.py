# causeway/errors.py
# ------------------------------------------------------------
# Exception taxonomy for the causeway design core.
#
# All calculator errors are raised by local validation BEFORE any
# computation starts, so a caller never sees a partial result.
# Messages are written to be shown to the user as-is.
#
from __future__ import annotations

from typing import Any, Iterable, Optional


class CausewayError(Exception):
    """Base exception for the causeway design core.

    Attributes:
        message: Actionable, user-facing description
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidInputError(CausewayError, ValueError):
    """Raised when a design parameter is out of range (e.g. non-positive length).

    Attributes:
        field: Name of the offending DesignInput field
        value: The rejected value
    """

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(message)
        self.field = field
        self.value = value


class UnknownCategoryError(CausewayError, ValueError):
    """Raised when an enum-like string input is not one of the known keys.

    Attributes:
        category: What kind of key was looked up ("soil type", "region", ...)
        value: The rejected key
        allowed: The accepted keys
    """

    def __init__(self, category: str, value: Any, allowed: Iterable[str]):
        self.category = category
        self.value = value
        self.allowed = tuple(allowed)
        super().__init__(
            f"Unknown {category} '{value}'. Expected one of: {', '.join(self.allowed)}"
        )


class UnknownSoilTypeError(UnknownCategoryError):
    """Raised for an unrecognised soil type under the strict policy."""

    def __init__(self, value: Any, allowed: Iterable[str]):
        super().__init__("soil type", value, allowed)


class InvalidRegionError(UnknownCategoryError):
    """Raised for an unrecognised cost region under the strict policy."""

    def __init__(self, value: Any, allowed: Iterable[str]):
        super().__init__("region", value, allowed)


class SessionNotFoundError(CausewayError, LookupError):
    """Raised when loading, deleting or comparing a session id that is not stored."""

    def __init__(self, session_id: str):
        super().__init__(f"Design session '{session_id}' not found")
        self.session_id = session_id


class ComparisonPrereqError(CausewayError):
    """Raised when a comparison cannot be computed (missing or degenerate baseline)."""
    pass


__all__ = [
    "CausewayError",
    "InvalidInputError",
    "UnknownCategoryError",
    "UnknownSoilTypeError",
    "InvalidRegionError",
    "SessionNotFoundError",
    "ComparisonPrereqError",
]
