"""
Slide domain entity.

A Slide is the interface between the raw files of one slide and the rest of
the application. Every field is assigned through a validating property
setter, both when a caller edits a slide and when it is loaded from disk.
"""

from __future__ import annotations

import json
import shutil
from pathlib import Path
from typing import Any, Dict, Optional, TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, ValidationError

from signage.domain_core.exceptions import (
    SlideIntegrityError,
    SlideNotFoundError,
    SlideValidationError,
)
from signage.domain_core.validators.slide_validators import SlideValidators
from signage.infra.config.logging_config import get_logger

if TYPE_CHECKING:
    from signage.infra.storage.slide_store import SlideStore


# Required keys of a slide config file, in stored order.
CONF_KEYS = ("name", "index", "time", "owner", "enabled", "expires", "expire_t")


class SlideConfig(BaseModel):
    """On-disk slide config. Types only; value ranges are checked by Slide."""

    model_config = ConfigDict(extra="forbid", strict=True)

    name: str
    index: int
    time: int
    owner: str
    enabled: bool
    expires: bool
    expire_t: int


class Slide:
    def __init__(self, store: "SlideStore"):
        self._store = store
        self._log = get_logger("domain.slide")

        self._id: Optional[str] = None
        self._name: Optional[str] = None
        self._index: Optional[int] = None
        self._time: Optional[int] = None
        self._markup: Optional[str] = None
        self._owner: Optional[str] = None
        self._enabled = False
        self._expires = False
        self._expire_t = 0

    def __repr__(self) -> str:
        return f"Slide(id={self._id!r}, name={self._name!r}, index={self._index!r})"

    # ---------- paths ----------

    @property
    def dir_path(self) -> Optional[Path]:
        return self._store.slide_dir(self._id) if self._id else None

    @property
    def conf_path(self) -> Optional[Path]:
        return self._store.conf_path(self._id) if self._id else None

    @property
    def markup_path(self) -> Optional[Path]:
        return self._store.markup_path(self._id) if self._id else None

    def _paths_exist(self, slide_id: str) -> bool:
        return (
            self._store.slide_dir(slide_id).is_dir()
            and self._store.conf_path(slide_id).is_file()
            and self._store.markup_path(slide_id).is_file()
        )

    # ---------- lifecycle ----------

    def create(self) -> "Slide":
        """Assign a freshly generated, unused slide id."""
        self._id = self._store.new_id()
        self._log.info("slide.created", slide_id=self._id)
        return self

    def load(self, slide_id: str) -> "Slide":
        """Load, validate and expiry-check the slide stored under slide_id.

        Fields are validated on a staging copy and only copied onto this
        slide once every check passed, so a failed load leaves it unchanged.

        Raises:
            SlideNotFoundError: the slide's directory or files are missing.
            SlideIntegrityError: the stored data can't be read or decoded.
            SlideValidationError: a stored value violates a field constraint.
        """
        if not self._store.is_valid_id(slide_id) or not self._paths_exist(slide_id):
            raise SlideNotFoundError(str(slide_id))

        conf = self._read_conf(slide_id, self._store.conf_path(slide_id))
        markup = self._read_markup(slide_id, self._store.markup_path(slide_id))

        staged = Slide(self._store)
        staged.id = slide_id
        staged.markup = markup
        staged.name = conf.name
        staged.index = conf.index
        staged.time = conf.time
        staged.owner = conf.owner
        staged.enabled = conf.enabled
        staged.expires = conf.expires
        staged.expire_t = conf.expire_t

        self._id = staged._id
        self._markup = staged._markup
        self._name = staged._name
        self._index = staged._index
        self._time = staged._time
        self._owner = staged._owner
        self._enabled = staged._enabled
        self._expires = staged._expires
        self._expire_t = staged._expire_t

        self.check_expired()
        return self

    def _read_conf(self, slide_id: str, path: Path) -> SlideConfig:
        raw = self._read(slide_id, path, "config")
        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise SlideIntegrityError(f"Slide config decode error: {e}", slide_id) from e

        if not isinstance(data, dict) or tuple(data.keys()) != CONF_KEYS:
            raise SlideIntegrityError("Invalid slide config keys", slide_id)

        try:
            return SlideConfig.model_validate(data)
        except ValidationError as e:
            raise SlideIntegrityError(f"Invalid slide config: {e}", slide_id) from e

    def _read_markup(self, slide_id: str, path: Path) -> str:
        raw = self._read(slide_id, path, "markup")
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SlideIntegrityError("Slide markup decode error", slide_id) from e

    def _read(self, slide_id: str, path: Path, what: str) -> bytes:
        try:
            raw = self._store.files.locked_read(path)
        except OSError as e:
            raise SlideIntegrityError(f"Slide {what} read error: {e}", slide_id) from e
        if raw is None:
            # Removed between the existence check and the read.
            raise SlideNotFoundError(slide_id)
        return raw

    def check_expired(self) -> bool:
        """Disable and persist the slide if its expiry time has passed.

        The write happens under the store's reorder lock so it can't race a
        renumbering pass and put back a stale index.
        """
        if self._expires and self._enabled and self._store.now() >= self._expire_t:
            self.enabled = False
            with self._store.reorder_lock():
                self.write()
            self._log.info("slide.expired", slide_id=self._id, expire_t=self._expire_t)
            return True
        return False

    def write(self) -> None:
        """Write config and markup to storage, overwriting existing files."""
        if not self._id:
            raise SlideIntegrityError("Cannot write a slide without an id")
        if self._markup is None:
            raise SlideIntegrityError("Slide markup is not set", self._id)

        try:
            conf = SlideConfig(
                name=self._name,
                index=self._index,
                time=self._time,
                owner=self._owner,
                enabled=self._enabled,
                expires=self._expires,
                expire_t=self._expire_t,
            )
        except ValidationError as e:
            raise SlideIntegrityError(f"Slide config encoding failed: {e}", self._id) from e

        new_dir = not self.dir_path.exists()
        try:
            self.dir_path.mkdir(parents=True, exist_ok=True)
            self._store.files.locked_write(
                self.conf_path, conf.model_dump_json().encode("utf-8")
            )
            self._store.files.locked_write(
                self.markup_path, self._markup.encode("utf-8")
            )
        except OSError as e:
            if new_dir:
                # A half-written new slide would break list_records().
                shutil.rmtree(self.dir_path, ignore_errors=True)
            raise SlideIntegrityError(f"Slide write failed: {e}", self._id) from e

        self._log.debug("slide.write", slide_id=self._id, index=self._index)

    def remove(self) -> None:
        """Remove every file of this slide. Removing twice is a no-op."""
        if not self._id:
            return
        try:
            shutil.rmtree(self.dir_path)
        except FileNotFoundError:
            return
        self._log.info("slide.removed", slide_id=self._id)

    def as_data(self) -> Dict[str, Any]:
        return {
            "id": self._id,
            "markup": self._markup,
            "name": self._name,
            "index": self._index,
            "time": self._time,
            "owner": self._owner,
            "enabled": self._enabled,
            "expires": self._expires,
            "expire_t": self._expire_t,
        }

    # ---------- fields ----------

    @property
    def id(self) -> Optional[str]:
        return self._id

    @id.setter
    def id(self, slide_id: str) -> None:
        """Rebind to an existing slide. New ids only come from create()."""
        if not self._store.exists(slide_id):
            raise SlideValidationError("id", f"Slide {slide_id} doesn't exist")
        self._id = slide_id

    @property
    def name(self) -> Optional[str]:
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        SlideValidators.validate_name(name, self._store.limits)
        self._name = name

    @property
    def index(self) -> Optional[int]:
        return self._index

    @index.setter
    def index(self, index: int) -> None:
        SlideValidators.validate_index(index, self._store.limits)
        self._index = index

    @property
    def time(self) -> Optional[int]:
        return self._time

    @time.setter
    def time(self, time: int) -> None:
        SlideValidators.validate_time(time, self._store.limits)
        self._time = time

    @property
    def markup(self) -> Optional[str]:
        return self._markup

    @markup.setter
    def markup(self, markup: str) -> None:
        SlideValidators.validate_markup(markup, self._store.limits)
        self._markup = markup

    @property
    def owner(self) -> Optional[str]:
        return self._owner

    @owner.setter
    def owner(self, owner: str) -> None:
        SlideValidators.validate_owner_format(owner)
        if not self._store.users.user_exists(owner):
            raise SlideValidationError("owner", f"User {owner} doesn't exist")
        self._owner = owner

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, enabled: bool) -> None:
        SlideValidators.validate_flag("enabled", enabled)
        self._enabled = enabled

    @property
    def expires(self) -> bool:
        return self._expires

    @expires.setter
    def expires(self, expires: bool) -> None:
        SlideValidators.validate_flag("expires", expires)
        self._expires = expires

    @property
    def expire_t(self) -> int:
        return self._expire_t

    @expire_t.setter
    def expire_t(self, tstamp: int) -> None:
        SlideValidators.validate_expire_t(tstamp)
        self._expire_t = tstamp
