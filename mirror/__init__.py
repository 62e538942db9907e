# SPDX-License-Identifier: GPL-3.0-or-later

from dataclasses import dataclass, field
from typing import List, Optional, Union

from mirror.errors import InvalidIdentity, RepositoryError


@dataclass(frozen=True)
class RepositoryRef:
    account: str
    name: str
    url: str


@dataclass(frozen=True)
class MirrorEntry:
    name: str
    path: str
    hook_installed: bool = False


@dataclass(frozen=True)
class Clone:
    ref: RepositoryRef


@dataclass(frozen=True)
class Update:
    ref: RepositoryRef
    entry: MirrorEntry


Action = Union[Clone, Update]


@dataclass
class Plan:
    actions: List[Action] = field(default_factory=list)
    # Repositories that cannot be mirrored
    invalid: List[InvalidIdentity] = field(default_factory=list)


@dataclass(frozen=True)
class Result:
    name: str
    action: str
    error: Optional[RepositoryError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> str:
        return 'ok' if self.error is None else type(self.error).__name__


@dataclass
class Report:
    results: List[Result] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(r.ok for r in self.results)

    @property
    def failed(self) -> List[Result]:
        return [r for r in self.results if not r.ok]
