"""Tests for linking and copying single entries."""

import os
import stat

import pytest

from simple_worktree.sync import EntryKind, TransferMode, transfer


class TestLink:
    def test_file_link_points_at_absolute_source(self, source_tree, target_tree):
        result = transfer(source_tree / ".env", target_tree / ".env",
                          EntryKind.FILE, TransferMode.LINK, display=".env")
        assert result.performed is True
        assert result.error is None
        assert result.path == ".env"
        link = target_tree / ".env"
        assert link.is_symlink()
        assert os.path.isabs(os.readlink(link))
        assert link.resolve() == (source_tree / ".env").resolve()

    def test_nested_file_link_creates_parents(self, source_tree, target_tree):
        result = transfer(source_tree / "a/b/secrets.env",
                          target_tree / "a/b/secrets.env",
                          EntryKind.FILE, TransferMode.LINK)
        assert result.performed
        assert (target_tree / "a/b/secrets.env").read_text() == "nested secret\n"

    def test_directory_link_is_single_symlink(self, source_tree, target_tree):
        result = transfer(source_tree / ".idea", target_tree / ".idea",
                          EntryKind.DIRECTORY, TransferMode.LINK, display=".idea/")
        assert result.performed
        assert result.path == ".idea/"
        assert (target_tree / ".idea").is_symlink()
        assert sorted(p.name for p in (target_tree / ".idea").iterdir()) == [
            "modules.xml", "workspace.xml",
        ]

    def test_default_display_is_target(self, source_tree, target_tree):
        result = transfer(source_tree / ".env", target_tree / ".env",
                          EntryKind.FILE, TransferMode.LINK)
        assert result.path == str(target_tree / ".env")


class TestCopy:
    def test_file_copy_keeps_content_and_mode(self, source_tree, target_tree):
        src = source_tree / "a" / "notes.txt"
        os.chmod(src, 0o750)
        result = transfer(src, target_tree / "a" / "notes.txt",
                          EntryKind.FILE, TransferMode.COPY)
        assert result.performed
        dst = target_tree / "a" / "notes.txt"
        assert not dst.is_symlink()
        assert dst.read_text() == "notes\n"
        assert stat.S_IMODE(dst.stat().st_mode) == 0o750

    def test_directory_copy_is_recursive(self, source_tree, target_tree):
        result = transfer(source_tree / "a", target_tree / "a",
                          EntryKind.DIRECTORY, TransferMode.COPY)
        assert result.performed
        assert not (target_tree / "a").is_symlink()
        assert (target_tree / "a/b/secrets.env").read_text() == "nested secret\n"
        assert (target_tree / "a/notes.txt").read_text() == "notes\n"

    def test_copy_is_independent_of_source(self, source_tree, target_tree):
        transfer(source_tree / ".env", target_tree / ".env",
                 EntryKind.FILE, TransferMode.COPY)
        (target_tree / ".env").write_text("changed")
        assert (source_tree / ".env").read_text() == "TOKEN=abc\n"

    def test_nested_symlink_copied_as_file(self, source_tree, target_tree):
        os.symlink(source_tree / ".env", source_tree / ".idea" / "env-link")
        transfer(source_tree / ".idea", target_tree / ".idea",
                 EntryKind.DIRECTORY, TransferMode.COPY)
        copied = target_tree / ".idea" / "env-link"
        assert not copied.is_symlink()
        assert copied.read_text() == "TOKEN=abc\n"


class TestExistingTarget:
    @pytest.mark.parametrize("mode", [TransferMode.LINK, TransferMode.COPY])
    def test_existing_file_untouched(self, source_tree, target_tree, mode):
        (target_tree / ".env").write_text("mine")
        result = transfer(source_tree / ".env", target_tree / ".env",
                          EntryKind.FILE, mode)
        assert result.performed is False
        assert result.error is None
        assert (target_tree / ".env").read_text() == "mine"
        assert not (target_tree / ".env").is_symlink()

    def test_existing_directory_untouched(self, source_tree, target_tree):
        (target_tree / ".idea").mkdir()
        result = transfer(source_tree / ".idea", target_tree / ".idea",
                          EntryKind.DIRECTORY, TransferMode.LINK)
        assert result.performed is False
        assert list((target_tree / ".idea").iterdir()) == []

    def test_dangling_symlink_counts_as_existing(self, source_tree, target_tree):
        os.symlink(target_tree / "gone", target_tree / ".env")
        result = transfer(source_tree / ".env", target_tree / ".env",
                          EntryKind.FILE, TransferMode.LINK)
        assert result.performed is False
        assert os.readlink(target_tree / ".env") == str(target_tree / "gone")


class TestFailures:
    def test_missing_source_copy_reports_error(self, source_tree, target_tree):
        result = transfer(source_tree / "missing.txt", target_tree / "missing.txt",
                          EntryKind.FILE, TransferMode.COPY)
        assert result.performed is False
        assert result.error
        assert not (target_tree / "missing.txt").exists()

    def test_parent_is_a_file_reports_error(self, source_tree, target_tree):
        (target_tree / "a").write_text("blocking file")
        result = transfer(source_tree / "a/notes.txt", target_tree / "a/notes.txt",
                          EntryKind.FILE, TransferMode.LINK)
        assert result.performed is False
        assert result.error
        assert (target_tree / "a").read_text() == "blocking file"
