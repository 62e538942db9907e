# SPDX-License-Identifier: GPL-3.0-or-later

from typing import Dict, Iterable

from mirror import Clone, MirrorEntry, Plan, RepositoryRef, Update
from mirror.errors import InvalidIdentity
from mirror.store import Store


def plan(remote: Iterable[RepositoryRef], local: Iterable[MirrorEntry], store: Store) -> Plan:
    """
    Decide what to do for each remote repository: update the existing mirror
    or clone a new one. This does not touch the disk.

    Local mirrors without a remote repository (deleted or renamed upstream)
    are left alone, they must be cleaned up manually.
    """
    existing: Dict[str, MirrorEntry] = {e.path: e for e in local}
    claimed: Dict[str, RepositoryRef] = {}
    p = Plan()

    for ref in remote:
        try:
            path = store.path_for(ref)
        except InvalidIdentity as e:
            p.invalid.append(e)
            continue

        other = claimed.get(path)
        if other:
            p.invalid.append(InvalidIdentity(
                ref.name, f"{ref.account}/{ref.name} has the same mirror location as "
                          f"{other.account}/{other.name}"))
            continue
        claimed[path] = ref

        entry = existing.get(path)
        if entry:
            p.actions.append(Update(ref, entry))
        else:
            p.actions.append(Clone(ref))

    return p
