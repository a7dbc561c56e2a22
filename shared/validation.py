from typing import Any, Optional

from .errors import ValidationError


class Violations:
    """Collects every violated field of an input before failing once."""

    def __init__(self) -> None:
        self.details: dict[str, str] = {}

    def add(self, field: str, message: str) -> None:
        self.details.setdefault(field, message)

    def require(self, field: str, value: Any, message: str) -> None:
        if value is None:
            self.add(field, message)

    def require_text(self, field: str, value: Optional[str], message: str) -> None:
        if value is None or not str(value).strip():
            self.add(field, message)

    def require_non_empty(self, field: str, value, message: str) -> None:
        if not value:
            self.add(field, message)

    def require_positive(self, field: str, value, message: str) -> None:
        if value is not None and value <= 0:
            self.add(field, message)

    def raise_if_any(self, message: str = "Validation failed") -> None:
        if self.details:
            raise ValidationError(message, details=dict(self.details))
