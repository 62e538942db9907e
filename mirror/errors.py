# SPDX-License-Identifier: GPL-3.0-or-later


class MirrorError(Exception):
    pass


# Fatal: nothing can be reconciled without these


class AuthRequired(MirrorError):
    pass


class StoreUnavailable(MirrorError):
    pass


class ListingFailed(MirrorError):
    pass


# Per repository: recorded, the run continues with the others


class RepositoryError(MirrorError):
    def __init__(self, name: str, cause: str):
        super().__init__(f"{name}: {cause}")
        self.name = name
        self.cause = cause


class InvalidIdentity(RepositoryError):
    pass


class CloneFailed(RepositoryError):
    pass


class DestinationExists(RepositoryError):
    pass


class UpdateFailed(RepositoryError):
    pass


class HookInstallFailed(RepositoryError):
    pass
