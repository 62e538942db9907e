# SPDX-License-Identifier: GPL-3.0-or-later

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from urllib3.exceptions import LocationParseError
from urllib3.util import parse_url

from mirror import RepositoryRef
from mirror.errors import ListingFailed

PROTOCOLS = ('ssh', 'https')


@dataclass(frozen=True)
class Credential:
    token: Optional[str] = field(default=None, repr=False)
    # Self-hosted instance (GitHub Enterprise, GitLab), None for the public one
    url: Optional[str] = None


def instance_url(url: str) -> str:
    try:
        u = parse_url(url)
    except LocationParseError as e:
        raise ListingFailed(f"Invalid instance URL {url}: {e}") from e
    if u.scheme not in ('http', 'https') or not u.host:
        raise ListingFailed(f"Invalid instance URL {url}: expected http(s)://host")
    return u.url.rstrip('/')


def unique(refs: Iterable[RepositoryRef]) -> List[RepositoryRef]:
    seen = {}
    for r in refs:
        if r.name in seen:
            print(f"WARNING: Ignoring duplicate repository name {r.account}/{r.name}")
            continue
        seen[r.name] = r
    return list(seen.values())
