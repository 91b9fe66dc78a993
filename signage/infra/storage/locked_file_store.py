"""
Exclusive-lock file store backed by flock(2).
"""

import fcntl
import os
from pathlib import Path
from typing import Optional

from signage.application.ports import LockedFileStorePort
from signage.infra.config.logging_config import get_logger


class FlockFileStore(LockedFileStorePort):
    """Reads and writes whole files while holding an exclusive flock.

    Both operations block until the lock can be taken.
    """

    def __init__(self) -> None:
        self._log = get_logger("storage.file")

    def locked_read(self, path: Path) -> Optional[bytes]:
        try:
            f = open(path, "rb")
        except FileNotFoundError:
            return None

        with f:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            try:
                return f.read()
            finally:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)

    def locked_write(self, path: Path, data: bytes) -> None:
        # O_TRUNC would clobber the file before the lock is held.
        fd = os.open(path, os.O_RDWR | os.O_CREAT, 0o644)
        with os.fdopen(fd, "r+b") as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            try:
                f.seek(0)
                f.truncate()
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            finally:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)

        self._log.debug("file.write", path=str(path), size=len(data))
