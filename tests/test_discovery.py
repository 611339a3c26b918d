"""Tests for executable discovery."""

import logging
import os

import pytest

from tmenu.allocator import BudgetAllocator
from tmenu.common.errors import AllocationError, ConfigurationError
from tmenu.discovery import ScanOrder, discover, is_executable, split_search_path


class TestSplitSearchPath:
    """Test search-path tokenizing."""

    def test_split_in_order(self):
        assert split_search_path("/a:/b:/c") == ["/a", "/b", "/c"]

    def test_empty_components_dropped(self):
        assert split_search_path("::/a::/b:") == ["/a", "/b"]

    @pytest.mark.parametrize("value", [None, ""])
    def test_unset(self, value):
        assert split_search_path(value) == []


class TestScanOrder:
    """Test ScanOrder lookup."""

    def test_from_name(self):
        assert ScanOrder.from_name("asc") is ScanOrder.ASCENDING
        assert ScanOrder.from_name("DESC") is ScanOrder.DESCENDING

    def test_from_name_invalid(self):
        with pytest.raises(ConfigurationError, match="sideways"):
            ScanOrder.from_name("sideways")


class TestIsExecutable:
    """Test the owner-execute check."""

    def test_owner_execute_bit(self, tmp_path, make_file):
        assert is_executable(str(make_file(tmp_path / "yes", mode=0o700)))
        assert not is_executable(str(make_file(tmp_path / "no", mode=0o644)))

    def test_group_execute_only_is_not_enough(self, tmp_path, make_file):
        assert not is_executable(str(make_file(tmp_path / "group", mode=0o654)))

    def test_follows_symlink(self, tmp_path, make_file):
        target = make_file(tmp_path / "target", mode=0o755)
        link = tmp_path / "link"
        link.symlink_to(target)
        assert is_executable(str(link))

        plain = make_file(tmp_path / "plain", mode=0o644)
        plain_link = tmp_path / "plain_link"
        plain_link.symlink_to(plain)
        assert not is_executable(str(plain_link))

    def test_directory_is_not_executable(self, tmp_path):
        assert not is_executable(str(tmp_path))

    def test_missing_raises(self, tmp_path):
        with pytest.raises(OSError):
            is_executable(str(tmp_path / "missing"))


class TestDiscover:
    """Test the search-path scan."""

    def test_precedence_and_exclusion(self, allocator, search_tree):
        a, b = search_tree
        entries = discover(f"{a}:{b}", allocator)

        assert entries.items() == [("foo", f"{a}/foo"), ("baz", f"{b}/baz")]
        assert "bar" not in entries
        entries.destroy(allocator)
        allocator.check_leaks()

    def test_later_directory_first_wins(self, allocator, search_tree):
        a, b = search_tree
        entries = discover(f"{b}:{a}", allocator)
        assert entries.find("foo").path == f"{b}/foo"
        entries.destroy(allocator)

    def test_shadowed_entries_released(self, allocator, search_tree):
        a, b = search_tree
        entries = discover(f"{a}:{b}", allocator)
        assert allocator.allocations == 3
        assert allocator.live == 2
        entries.destroy(allocator)
        allocator.check_leaks()

    def test_descending_within_directory(self, allocator, tmp_path, make_file):
        for name in ["alpha", "bravo", "charlie"]:
            make_file(tmp_path / "bin" / name)
        make_file(tmp_path / "sbin" / "delta")
        make_file(tmp_path / "sbin" / "echo")

        entries = discover(f"{tmp_path / 'bin'}:{tmp_path / 'sbin'}", allocator)
        assert entries.names() == ["charlie", "bravo", "alpha", "echo", "delta"]
        entries.destroy(allocator)

    def test_ascending_within_directory(self, allocator, tmp_path, make_file):
        for name in ["charlie", "alpha", "bravo"]:
            make_file(tmp_path / "bin" / name)

        entries = discover(str(tmp_path / "bin"), allocator, order=ScanOrder.ASCENDING)
        assert entries.names() == ["alpha", "bravo", "charlie"]
        entries.destroy(allocator)

    @pytest.mark.parametrize("value", [None, ""])
    def test_unset_search_path(self, allocator, caplog, value):
        with caplog.at_level(logging.WARNING, logger="tmenu.discovery"):
            entries = discover(value, allocator)
        assert len(entries) == 0
        assert "not set" in caplog.text

    def test_missing_directory_skipped(self, allocator, tmp_path, search_tree):
        a, b = search_tree
        entries = discover(f"{tmp_path / 'missing'}:{a}:{b}", allocator)
        assert entries.names() == ["foo", "baz"]
        entries.destroy(allocator)

    def test_file_in_search_path_skipped(self, allocator, tmp_path, make_file, search_tree):
        a, _ = search_tree
        not_a_dir = make_file(tmp_path / "file")
        entries = discover(f"{not_a_dir}:{a}", allocator)
        assert entries.names() == ["foo"]
        entries.destroy(allocator)

    def test_subdirectories_ignored(self, allocator, tmp_path, make_file):
        make_file(tmp_path / "bin" / "tool")
        (tmp_path / "bin" / "subdir").mkdir()
        os.chmod(tmp_path / "bin" / "subdir", 0o755)

        entries = discover(str(tmp_path / "bin"), allocator)
        assert entries.names() == ["tool"]
        entries.destroy(allocator)

    def test_symlinks_included(self, allocator, tmp_path, make_file):
        target = make_file(tmp_path / "real" / "python3.12")
        (tmp_path / "bin").mkdir()
        (tmp_path / "bin" / "python3").symlink_to(target)

        entries = discover(str(tmp_path / "bin"), allocator)
        assert entries.items() == [("python3", f"{tmp_path / 'bin'}/python3")]
        entries.destroy(allocator)

    def test_dangling_symlink_skipped(self, allocator, tmp_path, make_file, caplog):
        make_file(tmp_path / "bin" / "ok")
        (tmp_path / "bin" / "broken").symlink_to(tmp_path / "nowhere")

        with caplog.at_level(logging.WARNING, logger="tmenu.discovery"):
            entries = discover(str(tmp_path / "bin"), allocator)
        assert entries.names() == ["ok"]
        assert "broken" in caplog.text
        entries.destroy(allocator)

    def test_symlink_to_directory_skipped(self, allocator, tmp_path, make_file):
        make_file(tmp_path / "bin" / "ok")
        (tmp_path / "other").mkdir()
        (tmp_path / "bin" / "dirlink").symlink_to(tmp_path / "other")

        entries = discover(str(tmp_path / "bin"), allocator)
        assert entries.names() == ["ok"]
        entries.destroy(allocator)

    def test_path_too_long_skipped(self, allocator, tmp_path, make_file, caplog):
        directory = tmp_path / "bin"
        make_file(directory / "ok")
        make_file(directory / ("x" * 60))
        limit = len(os.fsencode(f"{directory}/ok")) + 1

        with caplog.at_level(logging.WARNING, logger="tmenu.discovery"):
            entries = discover(str(directory), allocator, max_path_length=limit)
        assert entries.names() == ["ok"]
        assert "too long" in caplog.text
        entries.destroy(allocator)

    def test_allocation_failure_is_fatal_and_releases(self, tmp_path, make_file):
        for name in ["a", "b", "c"]:
            make_file(tmp_path / "bin" / name)
        one_entry = len(os.fsencode(f"{tmp_path / 'bin'}/a")) + 1
        allocator = BudgetAllocator(budget=one_entry * 2)

        with pytest.raises(AllocationError):
            discover(str(tmp_path / "bin"), allocator)
        assert allocator.allocations == 2
        allocator.check_leaks()
