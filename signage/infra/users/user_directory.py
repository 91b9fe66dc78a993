"""
User directory adapters for slide owner checks.
"""

from pathlib import Path
from typing import Iterable, Union

from signage.application.ports import UserDirectoryPort


class InMemoryUserDirectory(UserDirectoryPort):
    def __init__(self, users: Iterable[str] = ()) -> None:
        self._users = set(users)

    def add(self, user: str) -> None:
        self._users.add(user)

    def discard(self, user: str) -> None:
        self._users.discard(user)

    def user_exists(self, user: str) -> bool:
        return user in self._users


class DirectoryUserDirectory(UserDirectoryPort):
    """Users are the non-hidden subdirectories of users_dir."""

    def __init__(self, users_dir: Union[str, Path]) -> None:
        self.users_dir = Path(users_dir)

    def user_exists(self, user: str) -> bool:
        if not user or user.startswith(".") or "/" in user:
            return False
        return (self.users_dir / user).is_dir()
