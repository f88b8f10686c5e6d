"""Exceptions raised by the debt planner."""

from __future__ import annotations

from typing import Optional


class ValidationError(ValueError):
    """Raised when loan or user input is malformed or out of range.

    ``field`` names the offending input (for example
    ``"loans[1].interestRate"``) so callers can point the user at it.
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        self.message = message
        self.field = field
        super().__init__(f"{field}: {message}" if field else message)
