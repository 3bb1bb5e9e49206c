# -*- coding: utf-8 -*-
"""Best effort removal of superseded secret versions after a put."""

from dataclasses import dataclass

from google.api_core import exceptions
from google.cloud import secretmanager_v1


@dataclass
class PruneResult:
    attempted: int = 0
    destroyed: int = 0

    @property
    def failed(self):
        return self.attempted - self.destroyed


def _chain(first, versions):
    if first is not None:
        yield first
    yield from versions


def prune_secret_versions(client, first, versions, log=None):
    """Destroy every enabled version in ``first`` followed by ``versions``.

    Only ENABLED versions are destroyed, disabled or destroyed versions need no
    action and the API rejects destroying a version twice. A failed destroy is
    logged and the next version is still tried. An error while fetching further
    pages of ``versions`` ends pruning. Nothing is ever raised for a remote failure,
    the caller's write already succeeded.

    Args:
        client (SecretClient): client used to issue the destroy requests.
        first (secretmanager_v1.SecretVersion): version already pulled from the
            listing, or None.
        versions (iterator): the remainder of the lazy listing.
        log (callable, optional): ``log(level, msg, *args)`` sink for status lines.

    Returns:
        PruneResult: counts of attempted and successful destroys.
    """
    result = PruneResult()
    iterator = _chain(first, versions)

    while True:
        try:
            version = next(iterator)
        except StopIteration:
            break
        except exceptions.GoogleAPIError as e:
            _log(log, "warning", "Stopped listing secret versions to delete, got error %s", e)
            break

        if version.state != secretmanager_v1.SecretVersion.State.ENABLED:
            continue

        result.attempted += 1
        try:
            client.destroy_secret_version(version.name)
        except exceptions.GoogleAPIError as e:
            _log(log, "warning", "Error deleting secret version: %s, got error %s", version.name, e)
            continue
        result.destroyed += 1
        _log(log, "info", "Deleted secret %s", version.name)

    return result


def _log(log, level, msg, *args):
    if log is not None:
        log(level, msg, *args)
