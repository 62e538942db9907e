# SPDX-License-Identifier: GPL-3.0-or-later

import os.path
import re
import tempfile
from typing import List, Set

from mirror import MirrorEntry, RepositoryRef
from mirror.errors import InvalidIdentity, StoreUnavailable
from mirror.guard import is_protected

_SUFFIX = '.git'

# Partially cloned repositories live here until they are complete.
# The suffix must not be _SUFFIX, otherwise list() would pick them up.
_STAGING_SUFFIX = '.partial'

_UNSAFE = ('/', '\\', '\0')


def is_bare_repo(path: str) -> bool:
    # Roughly what git itself checks in is_git_directory()
    return os.path.isfile(os.path.join(path, 'HEAD')) \
        and os.path.isdir(os.path.join(path, 'objects')) \
        and os.path.isdir(os.path.join(path, 'refs'))


class Store:
    """The set of mirrors known locally."""

    def list(self) -> Set[MirrorEntry]:
        raise NotImplementedError

    def path_for(self, ref: RepositoryRef) -> str:
        raise NotImplementedError


class DirectoryStore(Store):
    """One bare repository named ``<name>.git`` per mirror, directly in ``root``."""

    def __init__(self, root: str) -> None:
        self.root = root

    def list(self) -> Set[MirrorEntry]:
        try:
            names = os.listdir(self.root)
        except OSError as e:
            raise StoreUnavailable(f"Cannot read repository directory {self.root}: {e}") from e

        entries = set()
        for n in names:
            if not n.endswith(_SUFFIX) or n == _SUFFIX:
                continue

            path = os.path.join(self.root, n)
            if not is_bare_repo(path):
                continue

            entries.add(MirrorEntry(n[:-len(_SUFFIX)], path, is_protected(path)))

        return entries

    def path_for(self, ref: RepositoryRef) -> str:
        name = ref.name

        # Some safety checks for the repository name. Never try to "fix" the
        # name here: two different names must never end up in the same place.
        if not name or name in ('.', '..'):
            raise InvalidIdentity(name, "not a valid directory name")
        if any(c in name for c in _UNSAFE):
            raise InvalidIdentity(name, "name contains a path separator")
        if name.endswith(_SUFFIX):
            raise InvalidIdentity(name, f"name ends with '{_SUFFIX}'")

        return os.path.join(self.root, name + _SUFFIX)

    def staging_path(self, ref: RepositoryRef) -> str:
        self.path_for(ref)
        return tempfile.mkdtemp(prefix=f'.{ref.name}.', suffix=_STAGING_SUFFIX, dir=self.root)

    def stale_staging(self, ref: RepositoryRef) -> List[str]:
        # Only what staging_path() creates for exactly this name:
        # '.a.<random>.partial' must not match the staging directory of 'a.b'
        pattern = re.compile(r'\.' + re.escape(ref.name) + r'\.[a-z0-9_]{8}'
                             + re.escape(_STAGING_SUFFIX))
        try:
            names = os.listdir(self.root)
        except OSError:
            return []
        return sorted(os.path.join(self.root, n) for n in names
                      if pattern.fullmatch(n) and os.path.isdir(os.path.join(self.root, n)))
