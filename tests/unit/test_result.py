"""
Unit tests for the slide result value object and error taxonomy.
"""

import pytest

from signage.domain_core.exceptions import (
    SlideIntegrityError,
    SlideNotFoundError,
    SlideValidationError,
)
from signage.domain_core.value_objects.result import ErrorKind, SlideResult


class TestSlideResult:
    def test_success(self):
        result = SlideResult.success({"id": "abc"})
        assert result.ok is True
        assert result.error is None
        assert result.unwrap() == {"id": "abc"}

    def test_failure(self):
        result = SlideResult.failure(ErrorKind.VALIDATION, "Invalid chars", "name")
        assert result.ok is False
        assert result.error == ErrorKind.VALIDATION
        assert result.field == "name"

    def test_unwrap_failure_raises(self):
        result = SlideResult.failure(ErrorKind.NOT_FOUND, "Slide x not found")
        with pytest.raises(RuntimeError, match="not_found"):
            result.unwrap()

    def test_to_dict(self):
        assert SlideResult.success([1]).to_dict() == {"success": True, "data": [1]}
        assert SlideResult.failure(ErrorKind.INTEGRITY, "broken").to_dict() == {
            "success": False,
            "error": "integrity",
            "message": "broken",
            "field": None,
        }


class TestErrorKinds:
    def test_errors_carry_their_kind(self):
        """Test each slide error maps to a distinct kind."""
        assert SlideNotFoundError("x").kind == ErrorKind.NOT_FOUND
        assert SlideValidationError("name", "bad").kind == ErrorKind.VALIDATION
        assert SlideIntegrityError("broken").kind == ErrorKind.INTEGRITY

    def test_error_codes_and_messages(self):
        err = SlideNotFoundError("abc")
        assert err.code == "SLIDE_NOT_FOUND"
        assert str(err) == "Slide abc not found"

        err = SlideIntegrityError("Invalid slide config keys", "abc")
        assert err.message == "Slide abc: Invalid slide config keys"
        assert err.slide_id == "abc"

    def test_validation_error_is_value_error(self):
        assert isinstance(SlideValidationError("time", "out of bounds"), ValueError)
