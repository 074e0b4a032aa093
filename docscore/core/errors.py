from __future__ import annotations


class InvalidInputError(ValueError):
    """Raised at the scoring boundary when a caller passes a type-invalid payload."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"invalid input: {field} {message}")
