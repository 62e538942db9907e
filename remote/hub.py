# SPDX-License-Identifier: GPL-3.0-or-later

from typing import List

from github3 import GitHub, GitHubEnterprise
from github3.exceptions import AuthenticationFailed, GitHubException

from mirror import RepositoryRef
from mirror.errors import AuthRequired, ListingFailed
from remote import Credential, instance_url, unique


def login(credential: Credential) -> GitHub:
    if not credential.token:
        raise AuthRequired("No GitHub token given (use --token-file or GITHUB_TOKEN)")

    if credential.url:
        gh = GitHubEnterprise(instance_url(credential.url), token=credential.token)
    else:
        gh = GitHub(token=credential.token)

    try:
        me = gh.me()
    except AuthenticationFailed as e:
        raise AuthRequired(f"GitHub rejected the token: {e.msg}") from e
    except GitHubException as e:
        raise ListingFailed(f"Cannot verify GitHub login: {e}") from e

    print(f"Logged in to GitHub as {me.login}")
    return gh


def fetch_repos(account: str, credential: Credential, protocol: str = 'ssh') -> List[RepositoryRef]:
    gh = login(credential)

    print(f"Checking GitHub repositories of {account}")
    repos = []
    try:
        # Same as /users/<account>/repos, i.e. only repositories owned by the account
        for r in gh.repositories_by(account):
            url = r.ssh_url if protocol == 'ssh' else r.clone_url
            repos.append(RepositoryRef(account, r.name, url))
    except AuthenticationFailed as e:
        raise AuthRequired(f"GitHub rejected the token: {e.msg}") from e
    except GitHubException as e:
        raise ListingFailed(f"Failed to list repositories of {account}: {e}") from e

    return unique(repos)
