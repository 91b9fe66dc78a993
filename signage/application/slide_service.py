"""
Slide service - the object contract handed to an API layer.

Every operation returns a SlideResult instead of raising, so callers have to
handle not-found, validation and integrity failures explicitly. Mutating
operations write the slide and renumber the collection inside one reorder
lock, so no other renumbering pass can interleave with them. Reads take the
same lock, as loading an expired slide writes it back.
"""

from typing import Any, Callable, Dict, List, Mapping, Optional, TypeVar

from signage.domain_core.entities.slide import Slide
from signage.domain_core.exceptions import DomainError, SlideValidationError
from signage.domain_core.services.slide_ordering import reindex
from signage.domain_core.value_objects.result import ErrorKind, SlideResult
from signage.infra.config.logging_config import get_logger, operation_context
from signage.infra.storage.slide_store import SlideStore

T = TypeVar("T")

# Editable fields in the order they are applied.
EDITABLE_FIELDS = (
    "name",
    "index",
    "time",
    "owner",
    "enabled",
    "expires",
    "expire_t",
    "markup",
)
REQUIRED_ON_CREATE = ("name", "index", "time", "owner", "markup")


class SlideService:
    def __init__(self, store: SlideStore):
        self.store = store
        self._log = get_logger("service.slides")

    def get(self, slide_id: str) -> SlideResult[Dict[str, Any]]:
        def _get() -> Dict[str, Any]:
            # Loading may persist an expiry, which must not race a reindex.
            with self.store.reorder_lock():
                return Slide(self.store).load(slide_id).as_data()

        return self._run("get", _get, slide_id=slide_id)

    def list(self) -> SlideResult[List[Dict[str, Any]]]:
        """All slides as data, sorted by index."""

        def _list() -> List[Dict[str, Any]]:
            with self.store.reorder_lock():
                slides = self.store.list_records()
            slides.sort(key=lambda s: s.index)
            return [s.as_data() for s in slides]

        return self._run("list", _list)

    def save(
        self, data: Mapping[str, Any], slide_id: Optional[str] = None
    ) -> SlideResult[Dict[str, Any]]:
        """
        Create a slide (slide_id None) or update an existing one, then
        renumber the collection keeping this slide at its requested index.

        Args:
            data: Field values to set; keys from EDITABLE_FIELDS
            slide_id: Existing slide to update, or None to create one

        Returns:
            SlideResult with the saved slide's data after renumbering
        """

        def _save() -> Dict[str, Any]:
            unknown = sorted(set(data) - set(EDITABLE_FIELDS))
            if unknown:
                raise SlideValidationError(
                    unknown[0], f"Unknown slide field: {unknown[0]}"
                )

            with self.store.reorder_lock():
                slide = Slide(self.store)
                if slide_id is None:
                    missing = [f for f in REQUIRED_ON_CREATE if f not in data]
                    if missing:
                        raise SlideValidationError(
                            missing[0], f"Missing required slide field: {missing[0]}"
                        )
                    slide.create()
                else:
                    slide.load(slide_id)

                for field in EDITABLE_FIELDS:
                    if field in data:
                        setattr(slide, field, data[field])

                slide.write()
                reindex(self.store, slide.id)
                return Slide(self.store).load(slide.id).as_data()

        return self._run("save", _save, slide_id=slide_id or "")

    def move(self, slide_id: str, index: int) -> SlideResult[Dict[str, Any]]:
        return self.save({"index": index}, slide_id)

    def remove(self, slide_id: str) -> SlideResult[None]:
        def _remove() -> None:
            with self.store.reorder_lock():
                Slide(self.store).load(slide_id).remove()
                reindex(self.store)

        return self._run("remove", _remove, slide_id=slide_id)

    def repair(self) -> SlideResult[List[Dict[str, Any]]]:
        """Restore a dense ordering, e.g. after an interrupted pass."""
        return self._run("repair", lambda: [s.as_data() for s in reindex(self.store)])

    def _run(self, operation: str, fn: Callable[[], T], **context) -> SlideResult[T]:
        with operation_context(operation, **context):
            try:
                value = fn()
            except DomainError as e:
                field = getattr(e, "field", None)
                if e.kind == ErrorKind.INTEGRITY:
                    self._log.error("service.integrity_error", error=e.message)
                else:
                    self._log.warning(
                        "service.rejected", kind=e.kind.value, error=e.message, field=field
                    )
                return SlideResult.failure(e.kind, e.message, field)

            self._log.info("service.success")
            return SlideResult.success(value)
