"""
Unit tests for the Slide entity's in-memory behaviour.
"""

import pytest

from signage.domain_core.entities.slide import Slide
from signage.domain_core.exceptions import SlideIntegrityError, SlideValidationError


class TestSlideDefaults:
    def test_new_slide_defaults(self, store):
        """Test a fresh slide has only the flag defaults set."""
        slide = Slide(store)
        assert slide.id is None
        assert slide.name is None
        assert slide.index is None
        assert slide.enabled is False
        assert slide.expires is False
        assert slide.expire_t == 0

    def test_create_assigns_id_and_paths(self, store):
        slide = Slide(store).create()
        assert slide.id
        assert slide.dir_path == store.slides_dir / slide.id
        assert slide.conf_path.name == "conf.json"
        assert slide.markup_path.name == "markup.dat"

    def test_create_does_not_touch_storage(self, store):
        """Test the slide directory only appears on write."""
        slide = Slide(store).create()
        assert not slide.dir_path.exists()
        assert store.list_ids() == []


class TestSlideSetters:
    def test_setters_accept_valid_values(self, store, sample_slide_data):
        slide = Slide(store)
        for field, value in sample_slide_data.items():
            setattr(slide, field, value)
            assert getattr(slide, field) == value

    def test_invalid_name_keeps_previous_value(self, store):
        """Test a rejected name leaves the earlier name in place."""
        slide = Slide(store)
        slide.name = "first"
        with pytest.raises(SlideValidationError, match="Invalid chars") as exc:
            slide.name = "bad name!"
        assert exc.value.field == "name"
        assert slide.name == "first"

    def test_index_out_of_range(self, store):
        slide = Slide(store)
        slide.index = 3
        with pytest.raises(SlideValidationError):
            slide.index = store.limits.max_index + 1
        assert slide.index == 3

    def test_time_uses_store_limits(self, store):
        slide = Slide(store)
        with pytest.raises(SlideValidationError, match="out of bounds"):
            slide.time = store.limits.min_time - 1

    def test_unknown_owner_raises_error(self, store):
        slide = Slide(store)
        with pytest.raises(SlideValidationError, match="User nobody doesn't exist") as exc:
            slide.owner = "nobody"
        assert exc.value.field == "owner"
        assert slide.owner is None

    def test_owner_checked_against_user_directory(self, store, users):
        slide = Slide(store)
        users.add("newcomer")
        slide.owner = "newcomer"
        assert slide.owner == "newcomer"

    def test_markup_too_long(self, store):
        slide = Slide(store)
        with pytest.raises(SlideValidationError, match="markup cannot exceed"):
            slide.markup = "x" * (store.limits.markup_max_len + 1)

    def test_negative_expire_t(self, store):
        slide = Slide(store)
        with pytest.raises(SlideValidationError, match="negative"):
            slide.expire_t = -5
        assert slide.expire_t == 0

    def test_id_cannot_be_set_to_unknown_slide(self, store):
        """Test ids can only be rebound to slides that exist."""
        slide = Slide(store)
        with pytest.raises(SlideValidationError, match="doesn't exist") as exc:
            slide.id = "0123456789abcdef"
        assert exc.value.field == "id"
        assert slide.id is None

    def test_id_rebind_to_existing_slide(self, store, make_slide):
        existing = make_slide()
        slide = Slide(store)
        slide.id = existing.id
        assert slide.id == existing.id
        assert slide.conf_path == existing.conf_path

    def test_hidden_id_rejected(self, store, make_slide):
        make_slide()
        slide = Slide(store)
        with pytest.raises(SlideValidationError):
            slide.id = store.LOCK_FILE


class TestSlideData:
    def test_as_data_snapshot(self, store, sample_slide_data):
        slide = Slide(store).create()
        for field, value in sample_slide_data.items():
            setattr(slide, field, value)

        data = slide.as_data()
        assert data == {"id": slide.id, **sample_slide_data}
        assert list(data) == [
            "id",
            "markup",
            "name",
            "index",
            "time",
            "owner",
            "enabled",
            "expires",
            "expire_t",
        ]

    def test_as_data_is_a_copy(self, store):
        slide = Slide(store)
        slide.name = "a"
        data = slide.as_data()
        data["name"] = "changed"
        assert slide.name == "a"


class TestSlideWriteGuards:
    def test_write_without_id_raises_integrity_error(self, store, sample_slide_data):
        slide = Slide(store)
        for field, value in sample_slide_data.items():
            setattr(slide, field, value)
        with pytest.raises(SlideIntegrityError, match="without an id"):
            slide.write()

    def test_write_with_unset_fields_raises_integrity_error(self, store):
        """Test a slide missing required fields can't be serialized."""
        slide = Slide(store).create()
        slide.markup = ""
        slide.name = "partial"
        with pytest.raises(SlideIntegrityError, match="encoding failed"):
            slide.write()
        assert store.list_ids() == []

    def test_write_without_markup_raises_integrity_error(self, store):
        slide = Slide(store).create()
        with pytest.raises(SlideIntegrityError, match="markup is not set"):
            slide.write()
