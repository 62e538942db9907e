# SPDX-License-Identifier: GPL-3.0-or-later

from typing import List

from gitlab import Gitlab
from gitlab.exceptions import GitlabAuthenticationError, GitlabError
from requests.exceptions import RequestException

from mirror import RepositoryRef
from mirror.errors import AuthRequired, ListingFailed
from remote import Credential, instance_url, unique

_GITLAB_URL = 'https://gitlab.com'


def _projects(gl: Gitlab, account: str):
    users = gl.users.list(username=account)
    if users:
        return users[0].projects.list(iterator=True)

    # Not a user, try a group instead. Subgroups are not included,
    # their projects are not owned by the account itself.
    group = gl.groups.get(account, lazy=True)
    return group.projects.list(iterator=True)


def fetch_repos(account: str, credential: Credential, protocol: str = 'ssh') -> List[RepositoryRef]:
    if not credential.token:
        raise AuthRequired("No GitLab token given (use --token-file or GITLAB_TOKEN)")

    url = instance_url(credential.url) if credential.url else _GITLAB_URL
    repos = []

    with Gitlab(url, private_token=credential.token, per_page=100) as gl:
        try:
            gl.auth()
            print(f"Logged in to GitLab as {gl.user.username}")

            print(f"Checking GitLab projects of {account}")
            for gp in _projects(gl, account):
                clone_url = gp.ssh_url_to_repo if protocol == 'ssh' else gp.http_url_to_repo
                repos.append(RepositoryRef(account, gp.path, clone_url))
        except GitlabAuthenticationError as e:
            raise AuthRequired(f"GitLab rejected the token: {e.error_message}") from e
        except GitlabError as e:
            raise ListingFailed(f"Failed to list projects of {account}: {e}") from e
        except RequestException as e:
            raise ListingFailed(f"Cannot reach GitLab at {url}: {e}") from e

    return unique(repos)
