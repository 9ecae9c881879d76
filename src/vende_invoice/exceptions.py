"""Invoice calculation exceptions."""

from __future__ import annotations

VALIDATION_ERROR = "VALIDATION_ERROR"


class InvoiceValidationError(ValueError):
    """Invalid line item input, with the offending field and line index."""

    def __init__(self, field: str, message: str, *, line_index: int | None = None) -> None:
        self.field = field
        self.message = message
        self.line_index = line_index
        self.code = VALIDATION_ERROR
        where = f"line {line_index}: " if line_index is not None else ""
        super().__init__(f"{where}{message}")

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"
