"""
Unit tests for user directory adapters.
"""

from signage.infra.users.user_directory import (
    DirectoryUserDirectory,
    InMemoryUserDirectory,
)


class TestInMemoryUserDirectory:
    def test_user_exists(self):
        users = InMemoryUserDirectory(["admin"])
        assert users.user_exists("admin") is True
        assert users.user_exists("user") is False

    def test_add_and_discard(self):
        users = InMemoryUserDirectory()
        users.add("display")
        assert users.user_exists("display")
        users.discard("display")
        assert not users.user_exists("display")


class TestDirectoryUserDirectory:
    def test_user_is_a_subdirectory(self, tmp_path):
        (tmp_path / "admin").mkdir()
        (tmp_path / "notes.txt").write_text("not a user")
        users = DirectoryUserDirectory(tmp_path)

        assert users.user_exists("admin") is True
        assert users.user_exists("notes.txt") is False
        assert users.user_exists("missing") is False

    def test_rejects_hidden_and_path_names(self, tmp_path):
        (tmp_path / ".hidden").mkdir()
        (tmp_path / "admin").mkdir()
        users = DirectoryUserDirectory(tmp_path)

        assert users.user_exists(".hidden") is False
        assert users.user_exists("admin/..") is False
        assert users.user_exists("") is False

    def test_missing_users_dir(self, tmp_path):
        users = DirectoryUserDirectory(tmp_path / "nowhere")
        assert users.user_exists("admin") is False
