"""
Domain error taxonomy for slide storage.

Every error carries an ``ErrorKind`` so callers can tell caller mistakes
(validation, not-found) apart from storage corruption or internal bugs
(integrity).
"""

from typing import Optional

from signage.domain_core.value_objects.result import ErrorKind


class DomainError(Exception):
    """Base class for domain-specific errors."""

    kind: ErrorKind = ErrorKind.INTEGRITY

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


class SlideNotFoundError(DomainError):
    """Raised when a slide id has no backing storage."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, slide_id: str):
        self.slide_id = slide_id
        super().__init__(f"Slide {slide_id} not found", "SLIDE_NOT_FOUND")


class SlideValidationError(DomainError, ValueError):
    """Raised when a field value violates a constraint."""

    kind = ErrorKind.VALIDATION

    def __init__(self, field: str, reason: str):
        self.field = field
        super().__init__(reason, "SLIDE_VALIDATION_ERROR")


class SlideIntegrityError(DomainError):
    """Raised when stored slide data is unreadable, malformed or can't be written."""

    kind = ErrorKind.INTEGRITY

    def __init__(self, reason: str, slide_id: Optional[str] = None):
        self.slide_id = slide_id
        if slide_id:
            reason = f"Slide {slide_id}: {reason}"
        super().__init__(reason, "SLIDE_INTEGRITY_ERROR")
