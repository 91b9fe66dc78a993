"""
Discriminated result returned across the slide service boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    INTEGRITY = "integrity"


@dataclass(frozen=True)
class SlideResult(Generic[T]):
    """Either a value or a tagged error, never both."""

    value: Optional[T] = None
    error: Optional[ErrorKind] = None
    message: str = ""
    field: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "SlideResult[T]":
        return cls(value=value)

    @classmethod
    def failure(
        cls, error: ErrorKind, message: str, field: Optional[str] = None
    ) -> "SlideResult[T]":
        return cls(error=error, message=message, field=field)

    def unwrap(self) -> T:
        """Return the value, raising if this is a failure."""
        if self.error is not None:
            raise RuntimeError(f"{self.error.value}: {self.message}")
        return self.value  # type: ignore[return-value]

    def to_dict(self) -> Dict[str, Any]:
        if self.ok:
            return {"success": True, "data": self.value}
        return {
            "success": False,
            "error": self.error.value,
            "message": self.message,
            "field": self.field,
        }
