"""
Application ports - abstract interfaces for external dependencies.

The slide core needs two things from the outside world: a way to check that
a user exists, and exclusive-lock file primitives.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional


class UserDirectoryPort(ABC):
    """Abstract interface for user existence checks."""

    @abstractmethod
    def user_exists(self, user: str) -> bool:
        """Return True if a user with this name exists."""
        pass


class LockedFileStorePort(ABC):
    """Abstract interface for exclusive-lock file access."""

    @abstractmethod
    def locked_read(self, path: Path) -> Optional[bytes]:
        """Read a file under an exclusive lock. Returns None if it doesn't exist."""
        pass

    @abstractmethod
    def locked_write(self, path: Path, data: bytes) -> None:
        """Replace a file's contents under an exclusive lock. Raises OSError on failure."""
        pass
