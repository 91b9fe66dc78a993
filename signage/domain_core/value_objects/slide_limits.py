"""
Slide field limits value object.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SlideLimits:
    name_max_len: int = 32
    markup_max_len: int = 2048
    max_index: int = 65536
    min_time: int = 1000
    max_time: int = 20000
    id_max_tries: int = 16

    def __post_init__(self):
        if self.min_time > self.max_time:
            raise ValueError("min_time must not exceed max_time")
        if self.max_index < 0:
            raise ValueError("max_index must be non-negative")
        if self.id_max_tries < 1:
            raise ValueError("id_max_tries must be at least 1")
