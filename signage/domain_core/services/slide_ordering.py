"""
Slide index ordering rules.

Indices across all slides must stay unique and dense (0..N-1). These
functions renumber slides and write every changed slide back to storage.
Both run inside the store's reorder lock so only one renumbering pass
touches a slide collection at a time.
"""

from __future__ import annotations

from typing import List, TYPE_CHECKING

from signage.domain_core.entities.slide import Slide
from signage.domain_core.exceptions import SlideNotFoundError
from signage.infra.config.logging_config import get_logger

if TYPE_CHECKING:
    from signage.infra.storage.slide_store import SlideStore


_log = get_logger("domain.slide_ordering")


def sort_by_index(slides: List[Slide]) -> None:
    """Sort slides in place by index. Equal indices keep their incoming order."""
    slides.sort(key=lambda s: s.index)


def normalize(store: "SlideStore", slides: List[Slide]) -> List[Slide]:
    """Sort slides by index and renumber them 0..N-1, writing each one."""
    with store.reorder_lock():
        sort_by_index(slides)
        for i, slide in enumerate(slides):
            slide.index = i
            slide.write()
    return slides


def reindex(store: "SlideStore", keep_id: str = "") -> List[Slide]:
    """
    Renumber all slides so no index is unused or duplicated, while the slide
    keep_id stays where the caller put it.

    The kept slide is pulled out, the rest are normalized and then every
    slide at or after the kept slide's index is shifted up by one. If no
    other slide sat at that index the kept slide is appended after the last
    one instead. With an empty keep_id this is a plain normalize of every
    slide in storage.

    Args:
        store: Slide storage to renumber
        keep_id: Id of the slide whose index is preserved, or ""

    Returns:
        List[Slide]: All slides sorted by their new index

    Raises:
        SlideNotFoundError: keep_id is not in storage
    """
    with store.reorder_lock():
        slides = store.list_records()
        keep = None

        if keep_id:
            for k, slide in enumerate(slides):
                if slide.id == keep_id:
                    keep = slides.pop(k)
                    break
            else:
                raise SlideNotFoundError(keep_id)

        normalize(store, slides)

        if keep is not None:
            clash = False
            shifted = 0
            for slide in slides:
                if slide.index == keep.index:
                    clash = True
                if slide.index >= keep.index:
                    slide.index = slide.index + 1
                    slide.write()
                    shifted += 1

            if not clash:
                # The others are dense 0..N-1, so keep goes right after them.
                keep.index = len(slides)
                keep.write()

            slides.append(keep)
            sort_by_index(slides)
            _log.info(
                "reindex.done",
                keep_id=keep_id,
                keep_index=keep.index,
                clash=clash,
                shifted=shifted,
                total=len(slides),
            )
        else:
            _log.info("reindex.done", total=len(slides))

        return slides
