# SPDX-License-Identifier: GPL-3.0-or-later

import os
import stat
import tempfile

from mirror import MirrorEntry
from mirror.errors import HookInstallFailed

HOOK = """#!/bin/sh

echo "Pushing to this repository is forbidden."
echo "This is a read-only mirror. Push to the upstream repository instead."
exit 1
"""

_EXEC = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def _hook_path(repo_dir: str) -> str:
    return os.path.join(repo_dir, 'hooks', 'pre-receive')


def is_protected(repo_dir: str) -> bool:
    hook = _hook_path(repo_dir)
    try:
        with open(hook) as f:
            content = f.read()
    except (OSError, UnicodeDecodeError):
        return False

    return content == HOOK and os.access(hook, os.X_OK)


def ensure_protected(entry: MirrorEntry):
    if is_protected(entry.path):
        return

    print(f"Installing pre-receive hook for {entry.name}")
    hooks_dir = os.path.join(entry.path, 'hooks')
    try:
        os.makedirs(hooks_dir, exist_ok=True)

        # Must be in the same directory as the hook for os.replace() to be atomic
        fd, tmp = tempfile.mkstemp(prefix='.pre-receive.', dir=hooks_dir)
        try:
            with os.fdopen(fd, 'w') as f:
                f.write(HOOK)
            mode = os.stat(tmp).st_mode
            os.chmod(tmp, mode | _EXEC)  # ugo+x
            os.replace(tmp, _hook_path(entry.path))
        except BaseException:
            try:
                os.unlink(tmp)
            except FileNotFoundError:
                pass
            raise
    except OSError as e:
        raise HookInstallFailed(entry.name, f"cannot write hooks/pre-receive: {e}") from e
