from signage.domain_core.value_objects.result import ErrorKind, SlideResult
from signage.domain_core.value_objects.slide_limits import SlideLimits

__all__ = ["ErrorKind", "SlideResult", "SlideLimits"]
