"""Canonical engine error types.

Invalid inputs fail fast with InvalidInputError. Degenerate inputs (zero
totals, empty plans, short series) are not errors: each calculator returns a
documented fallback value instead.
"""


class InvalidInputError(ValueError):
    """Raised when a calculation receives an argument outside its domain.

    Attributes:
        field: Name of the offending argument (e.g., "lt1", "lt2", "ftp")
        message: Human-readable description of the violation
    """

    def __init__(self, field: str, message: str | None = None):
        self.field = field
        self.message = message or f"Invalid value for {field}"
        super().__init__(f"{field}: {self.message}")
