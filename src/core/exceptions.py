"""Errors raised by the Voidspinner core and service layer."""

from typing import Optional


class VoidspinnerError(Exception):
    """Base class for all game errors."""


class InvalidInputError(VoidspinnerError, ValueError):
    """A request that can never succeed as given (wrong types, bad ids, too many inputs)."""


class InsufficientFluxError(VoidspinnerError, ValueError):
    """Flux balance is below the cost of the requested action."""

    def __init__(self, required: int, available: int, message: Optional[str] = None):
        self.required = required
        self.available = available
        super().__init__(message or f"Insufficient flux: need {required}, have {available}")


class NotFoundError(VoidspinnerError, LookupError):
    """A referenced game state, fragment or listing does not exist."""
