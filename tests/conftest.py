"""Shared fixtures for tmenu tests."""

import os

import pytest

from tmenu.allocator import TrackingAllocator
from tmenu.entry import Entry, EntryList


@pytest.fixture
def allocator():
    """Tracking allocator so tests can assert that nothing leaks."""
    return TrackingAllocator()


@pytest.fixture
def make_list(allocator):
    """Build an EntryList from paths, in order."""

    def _make(*paths):
        entries = EntryList()
        for path in paths:
            entries.append(Entry.create(allocator, path))
        return entries

    return _make


@pytest.fixture
def make_file():
    """Create a file with the given mode, creating parent directories."""

    def _make(path, mode=0o755, content="#!/bin/sh\n"):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        os.chmod(path, mode)
        return path

    return _make


@pytest.fixture
def search_tree(tmp_path, make_file):
    """Two directories where ``b/foo`` is shadowed by ``a/foo``.

    a/foo (exec), a/bar (not exec), b/foo (exec), b/baz (exec)
    """
    a = tmp_path / "a"
    b = tmp_path / "b"
    make_file(a / "foo", content="#!/bin/sh\necho a\n")
    make_file(a / "bar", mode=0o644)
    make_file(b / "foo", content="#!/bin/sh\necho b\n")
    make_file(b / "baz")
    return a, b
