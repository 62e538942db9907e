"""
Shared fixtures for the mirror tests.

Git itself is replaced by FakeGit, which lays out just enough of a bare
repository on disk for DirectoryStore to recognise it.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from mirror import MirrorEntry, RepositoryRef
from mirror.errors import CloneFailed, UpdateFailed
from mirror.store import DirectoryStore


def make_bare_repo(path: Path) -> Path:
    """Create the skeleton of a bare repository at path."""
    (path / "objects").mkdir(parents=True)
    (path / "refs").mkdir()
    (path / "hooks").mkdir()
    (path / "HEAD").write_text("ref: refs/heads/main\n")
    return path


def ref(name: str, account: str = "octocat") -> RepositoryRef:
    return RepositoryRef(account, name, f"git@github.com:{account}/{name}.git")


class FakeGit:
    """Operator that records calls and fails on demand."""

    def __init__(self, store: DirectoryStore, fail_clone=(), fail_update=()):
        self.store = store
        self.fail_clone = set(fail_clone)
        self.fail_update = set(fail_update)
        self.cloned = []
        self.updated = []

    def clone(self, r: RepositoryRef) -> MirrorEntry:
        if r.name in self.fail_clone:
            raise CloneFailed(r.name, "Connection refused")
        path = self.store.path_for(r)
        make_bare_repo(Path(path))
        self.cloned.append(r.name)
        return MirrorEntry(r.name, path)

    def update(self, entry: MirrorEntry):
        if entry.name in self.fail_update:
            raise UpdateFailed(entry.name, "Could not resolve host: github.com")
        self.updated.append(entry.name)


@pytest.fixture
def store(tmp_path: Path) -> DirectoryStore:
    root = tmp_path / "repos"
    root.mkdir()
    return DirectoryStore(str(root))


@pytest.fixture
def root(store: DirectoryStore) -> Path:
    return Path(store.root)


def is_executable(path) -> bool:
    return os.access(path, os.X_OK)
