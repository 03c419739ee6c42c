"""Domain errors raised by the screening engine and intake parser."""


class ScreeningError(ValueError):
    """Base class for screening input errors."""


class IncompleteMedicationHistoryError(ScreeningError):
    """Medication is flagged but a start (or stop) month cannot be built."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


class IntakeValidationError(ScreeningError):
    """An intake form field holds a value that cannot be converted."""

    def __init__(self, field: str, value, reason: str = "invalid value"):
        self.field = field
        self.value = value
        super().__init__(f"{field}: {reason} ({value!r})")
