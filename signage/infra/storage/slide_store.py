"""
Slide store - explicit handle for one slides storage root.

Every slide lives in its own directory below ``slides_dir``::

    <slides_dir>/<id>/conf.json
    <slides_dir>/<id>/markup.dat

Hidden (dot-prefixed) entries are internal, e.g. the ``.reorder.lock`` file
that serializes renumbering passes across processes.
"""

from __future__ import annotations

import fcntl
import os
import threading
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Union
from uuid import uuid4

from signage.application.ports import LockedFileStorePort, UserDirectoryPort
from signage.domain_core.entities.slide import Slide
from signage.domain_core.exceptions import SlideIntegrityError, SlideNotFoundError
from signage.domain_core.value_objects.slide_limits import SlideLimits
from signage.infra.config.logging_config import get_logger
from signage.infra.config.settings import Settings, get_settings
from signage.infra.storage.locked_file_store import FlockFileStore
from signage.infra.users.user_directory import DirectoryUserDirectory


def _default_id() -> str:
    return uuid4().hex


class SlideStore:
    """Storage root, collaborators and the collection-level reorder lock."""

    LOCK_FILE = ".reorder.lock"
    CONF_FILE = "conf.json"
    MARKUP_FILE = "markup.dat"

    def __init__(
        self,
        slides_dir: Union[str, Path],
        users: UserDirectoryPort,
        file_store: Optional[LockedFileStorePort] = None,
        limits: Optional[SlideLimits] = None,
        clock: Callable[[], float] = time.time,
        id_factory: Callable[[], str] = _default_id,
    ) -> None:
        self.slides_dir = Path(slides_dir)
        self.slides_dir.mkdir(parents=True, exist_ok=True)
        self.users = users
        self.files = file_store or FlockFileStore()
        self.limits = limits or SlideLimits()
        self.clock = clock
        self.id_factory = id_factory

        self._mutex = threading.RLock()
        self._lock_depth = 0
        self._lock_owner: Optional[int] = None
        self._lock_fd: Optional[int] = None
        self._log = get_logger("storage.slides")

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        users: Optional[UserDirectoryPort] = None,
    ) -> "SlideStore":
        settings = settings or get_settings()
        return cls(
            slides_dir=settings.slides_dir,
            users=users or DirectoryUserDirectory(settings.users_dir),
            limits=settings.slide_limits(),
        )

    # ---------- paths ----------

    def slide_dir(self, slide_id: str) -> Path:
        return self.slides_dir / slide_id

    def conf_path(self, slide_id: str) -> Path:
        return self.slide_dir(slide_id) / self.CONF_FILE

    def markup_path(self, slide_id: str) -> Path:
        return self.slide_dir(slide_id) / self.MARKUP_FILE

    @staticmethod
    def is_valid_id(slide_id: object) -> bool:
        """Ids are plain, non-hidden directory names."""
        return (
            isinstance(slide_id, str)
            and bool(slide_id)
            and not slide_id.startswith(".")
            and "/" not in slide_id
            and os.sep not in slide_id
        )

    def exists(self, slide_id: str) -> bool:
        """True if slide_id is one of list_ids()."""
        return self.is_valid_id(slide_id) and os.path.lexists(self.slide_dir(slide_id))

    def now(self) -> float:
        return self.clock()

    # ---------- directory ----------

    def list_ids(self) -> List[str]:
        """All slide ids in storage, sorted, hidden entries excluded."""
        with os.scandir(self.slides_dir) as entries:
            return sorted(
                entry.name for entry in entries if not entry.name.startswith(".")
            )

    def list_records(self) -> List[Slide]:
        """Load every slide in storage. A single failed load fails the listing.

        An id that list_ids() returned but whose files are missing is
        corrupted storage, so it fails as an integrity error.
        """
        records = []
        for slide_id in self.list_ids():
            try:
                records.append(Slide(self).load(slide_id))
            except SlideNotFoundError as e:
                raise SlideIntegrityError(
                    "Slide listed but its files are missing", slide_id
                ) from e
        return records

    def new_id(self) -> str:
        """Generate an id not used by any existing slide."""
        for _ in range(self.limits.id_max_tries):
            candidate = self.id_factory()
            if self.is_valid_id(candidate) and not self.exists(candidate):
                return candidate
            self._log.warning("slide.id_collision", candidate=candidate)

        raise SlideIntegrityError(
            f"Failed to generate a unique slide id after "
            f"{self.limits.id_max_tries} tries"
        )

    # ---------- collection lock ----------

    @contextmanager
    def reorder_lock(self) -> Iterator["SlideStore"]:
        """Hold the collection-wide lock for a renumbering pass.

        Re-entrant within a thread. Serializes threads through an RLock and
        processes through an exclusive flock on the hidden lock file.
        """
        with self._mutex:
            if self._lock_depth == 0:
                fd = os.open(self.slides_dir / self.LOCK_FILE, os.O_RDWR | os.O_CREAT, 0o644)
                try:
                    fcntl.flock(fd, fcntl.LOCK_EX)
                except OSError:
                    os.close(fd)
                    raise
                self._lock_fd = fd
                self._lock_owner = threading.get_ident()
                self._log.debug("reorder_lock.acquired")
            self._lock_depth += 1
            try:
                yield self
            finally:
                self._lock_depth -= 1
                if self._lock_depth == 0:
                    fcntl.flock(self._lock_fd, fcntl.LOCK_UN)
                    os.close(self._lock_fd)
                    self._lock_fd = None
                    self._lock_owner = None
                    self._log.debug("reorder_lock.released")

    @property
    def is_locked(self) -> bool:
        """True while the calling thread is inside reorder_lock()."""
        return self._lock_depth > 0 and self._lock_owner == threading.get_ident()
