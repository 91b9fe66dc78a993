"""
Domain validators for slide fields.
"""

import re
from typing import Any

from signage.domain_core.exceptions import SlideValidationError
from signage.domain_core.value_objects.slide_limits import SlideLimits


class SlideValidators:
    NAME_INVALID_CHARS = re.compile(r"[^a-zA-Z0-9_-]")

    @staticmethod
    def _require_int(field: str, value: Any) -> None:
        # bool is an int subclass but never a valid number here.
        if isinstance(value, bool) or not isinstance(value, int):
            raise SlideValidationError(field, f"Slide {field} must be an integer")

    @staticmethod
    def _require_str(field: str, value: Any) -> None:
        if not isinstance(value, str):
            raise SlideValidationError(field, f"Slide {field} must be a string")

    @staticmethod
    def validate_name(name: Any, limits: SlideLimits) -> None:
        """Validate slide name characters and length."""
        SlideValidators._require_str("name", name)

        if SlideValidators.NAME_INVALID_CHARS.search(name):
            raise SlideValidationError("name", "Invalid chars in slide name")

        if len(name) > limits.name_max_len:
            raise SlideValidationError(
                "name",
                f"Slide name cannot exceed {limits.name_max_len} characters",
            )

    @staticmethod
    def validate_index(index: Any, limits: SlideLimits) -> None:
        SlideValidators._require_int("index", index)

        if index < 0 or index > limits.max_index:
            raise SlideValidationError("index", f"Slide index {index} out of bounds")

    @staticmethod
    def validate_time(time: Any, limits: SlideLimits) -> None:
        SlideValidators._require_int("time", time)

        if time < limits.min_time or time > limits.max_time:
            raise SlideValidationError(
                "time",
                f"Slide time {time} out of bounds "
                f"({limits.min_time}-{limits.max_time})",
            )

    @staticmethod
    def validate_markup(markup: Any, limits: SlideLimits) -> None:
        """Validate markup length, counted in UTF-8 bytes."""
        SlideValidators._require_str("markup", markup)

        if len(markup.encode("utf-8")) > limits.markup_max_len:
            raise SlideValidationError(
                "markup",
                f"Slide markup cannot exceed {limits.markup_max_len} bytes",
            )

    @staticmethod
    def validate_flag(field: str, value: Any) -> None:
        if not isinstance(value, bool):
            raise SlideValidationError(field, f"Slide {field} must be a boolean")

    @staticmethod
    def validate_expire_t(tstamp: Any) -> None:
        SlideValidators._require_int("expire_t", tstamp)

        if tstamp < 0:
            raise SlideValidationError(
                "expire_t", "Invalid negative expiration timestamp"
            )

    @staticmethod
    def validate_owner_format(owner: Any) -> None:
        SlideValidators._require_str("owner", owner)

        if not owner:
            raise SlideValidationError("owner", "Slide owner cannot be empty")
