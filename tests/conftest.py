"""
Pytest configuration and fixtures.
"""

from typing import Callable

import pytest

from signage.domain_core.entities.slide import Slide
from signage.domain_core.value_objects.slide_limits import SlideLimits
from signage.infra.storage.slide_store import SlideStore
from signage.infra.users.user_directory import InMemoryUserDirectory
from tests._helpers.fakes import FakeClock


@pytest.fixture
def users():
    """User directory with the default signage accounts."""
    return InMemoryUserDirectory(["admin", "user", "display"])


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def limits():
    return SlideLimits()


@pytest.fixture
def store(tmp_path, users, clock, limits):
    """Slide store rooted in a temporary directory."""
    return SlideStore(tmp_path / "slides", users=users, limits=limits, clock=clock)


@pytest.fixture
def sample_slide_data():
    """Valid values for every editable slide field."""
    return {
        "name": "welcome_slide",
        "index": 0,
        "time": 5000,
        "owner": "admin",
        "enabled": True,
        "expires": False,
        "expire_t": 0,
        "markup": "[h1]Welcome[/h1]",
    }


@pytest.fixture
def make_slide(store, sample_slide_data) -> Callable[..., Slide]:
    """Factory that creates, fills and writes a slide."""

    def _make(**overrides) -> Slide:
        data = {**sample_slide_data, **overrides}
        slide = Slide(store).create()
        for field, value in data.items():
            setattr(slide, field, value)
        slide.write()
        return slide

    return _make
