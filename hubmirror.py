#!/usr/bin/env python3
# SPDX-License-Identifier: GPL-3.0-or-later

import argparse
import os
import sys

import remote
import remote.hub
import remote.lab
from mirror.errors import MirrorError
from mirror.git import Git
from mirror.run import print_report, run
from mirror.store import DirectoryStore

_LISTERS = {
    'github': remote.hub.fetch_repos,
    'gitlab': remote.lab.fetch_repos,
}

_TOKEN_ENV = {
    'github': 'GITHUB_TOKEN',
    'gitlab': 'GITLAB_TOKEN',
}


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Keep read-only mirrors of all repositories owned by an account")
    parser.add_argument('account', help="User or organization whose repositories are mirrored")
    parser.add_argument('--host', choices=sorted(_LISTERS), default='github',
                        help="Hosting service of the account (default: github)")
    parser.add_argument('--url', help="URL of a self-hosted GitHub Enterprise/GitLab instance")
    parser.add_argument('--token-file', type=argparse.FileType('r'),
                        help="File containing the API token "
                             "(default: $GITHUB_TOKEN or $GITLAB_TOKEN)")
    parser.add_argument('--repo-dir', default='.',
                        help="Directory to store mirrored repositories in")
    parser.add_argument('--protocol', choices=remote.PROTOCOLS, default='ssh',
                        help="Clone repositories over ssh or https (default: ssh)")
    parser.add_argument('--jobs', '-j', type=int, default=1,
                        help="Number of repositories to clone/update in parallel")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    if args.token_file:
        with args.token_file as f:
            token = f.read().strip()
    else:
        token = os.environ.get(_TOKEN_ENV[args.host])

    credential = remote.Credential(token, args.url)
    store = DirectoryStore(args.repo_dir)

    try:
        # Fail early if the repository directory is not usable
        store.list()
        refs = _LISTERS[args.host](args.account, credential, args.protocol)
        report = run(refs, store, Git(store), jobs=args.jobs)
    except MirrorError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    print_report(report)
    return 0 if report.ok else 1


if __name__ == '__main__':
    sys.exit(main())
