# -*- coding: utf-8 -*-
"""This module implements a certificate cache stored in GCP Secret Manager

Each cache key (typically a domain name as handed over by an ACME client) is
stored as a secret named ``<prefix><sanitized key>`` in the configured project.
Every put appends a new version, get always reads ``versions/latest``.

Unless keep_old_versions is set, the versions that existed before a put are
destroyed after the new one was added, so at most one enabled version is
normally kept per key. Destroying is best effort, a failure never fails the put.

Concurrent puts for the same key are not coordinated, both may leave an enabled
version behind. Get still returns the most recent one.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from google.api_core import exceptions

from . import naming
from .client import GCPSecretClientFactory
from .exceptions import CacheMiss, ClientSetupError, SecretOperationError
from .pruner import prune_secret_versions

# Only the most recent versions are needed to clean up after a put
LIST_PAGE_SIZE = 10


class CertificateCache(ABC):
    """Storage contract expected by an automatic certificate provisioning client."""

    @abstractmethod
    def get(self, key, timeout=None):
        """
        Return the data stored for ``key``.

        :raises CacheMiss: if there is no data for key
        """

    @abstractmethod
    def put(self, key, data, timeout=None):
        """Store ``data`` under ``key``, a later get must return the same bytes."""

    @abstractmethod
    def delete(self, key, timeout=None):
        """Remove ``key``, deleting a key that does not exist is not an error."""


@dataclass(frozen=True)
class CacheConfig:
    project_id: str
    secret_prefix: str = ""
    keep_old_versions: bool = False
    debug_logging: bool = False


class SecretManagerCache(CertificateCache):
    """Certificate cache persisted as secrets in GCP Secret Manager.

    The only state held is the configuration, one SecretClient is acquired per
    call and released before returning so instances can be shared between threads.

    Args:
        project_id (str): GCP project id the secrets are stored in. Used as is.
        secret_prefix (str, optional): put in front of every secret id, useful to
            group secrets per application and for IAM conditions. Sanitized the
            same way keys are.
        keep_old_versions (bool, optional): if True versions are never destroyed
            after a put. Defaults to False.
        debug_logging (bool, optional): log key and resource names (never data)
            to this module's logger. Defaults to False.
        client_factory (SecretClientFactory, optional): source of clients,
            defaults to a GCPSecretClientFactory using application default credentials.
    """

    def __init__(self,
                 project_id,
                 secret_prefix="",
                 keep_old_versions=False,
                 debug_logging=False,
                 client_factory=None):
        if not project_id:
            raise ValueError("project_id is required")

        self._config = CacheConfig(project_id=project_id,
                                   secret_prefix=naming.sanitize(secret_prefix),
                                   keep_old_versions=keep_old_versions,
                                   debug_logging=debug_logging)
        if client_factory is None:
            client_factory = GCPSecretClientFactory()
        self._client_factory = client_factory

    @property
    def config(self):
        return self._config

    def _logf(self, level, msg, *args):
        if self._config.debug_logging:
            getattr(logging.getLogger(__name__), level)(msg, *args)

    def _new_client(self, timeout):
        try:
            return self._client_factory.new_client(timeout=timeout)
        except Exception as e:
            raise ClientSetupError(e) from e

    def _secret_path(self, key):
        return naming.secret_path(self._config.project_id, self._config.secret_prefix, key)

    def get(self, key, timeout=None):
        key = naming.sanitize(key)
        self._logf("info", "Get called for: [%s]", key)

        with self._new_client(timeout) as client:
            name = naming.secret_version_path(self._config.project_id,
                                              self._config.secret_prefix,
                                              key)
            self._logf("info", "GET name: %s", name)

            try:
                data = client.access_secret_version(name)
            except exceptions.NotFound:
                raise CacheMiss(key, name) from None
            except exceptions.GoogleAPIError as e:
                raise SecretOperationError("access", name, e) from e

        self._logf("info", "GET: Got result for %s", name)
        return data

    def put(self, key, data, timeout=None):
        data = _to_bytes(data)
        key = naming.sanitize(key)
        self._logf("info", "Put called for: [%s]", key)

        with self._new_client(timeout) as client:
            parent = self._secret_path(key)

            # Listing first is the only way to tell a first write from an update.
            # NotFound means the secret itself has to be created, any versions
            # listed are deleted once the new one is in place.
            first = None
            try:
                versions = client.list_secret_versions(parent, page_size=LIST_PAGE_SIZE)
                first = next(versions, None)
            except exceptions.NotFound:
                versions = iter(())
                self._create_secret(client, key)

            self._add_secret_version(client, parent, data)

            if not self._config.keep_old_versions:
                result = prune_secret_versions(client, first, versions, log=self._logf)
                self._logf("info", "Pruned %s: destroyed %d of %d versions",
                           parent, result.destroyed, result.attempted)

    def _create_secret(self, client, key):
        parent = naming.project_path(self._config.project_id)
        secret_id = naming.secret_id(self._config.secret_prefix, key)
        self._logf("info", "Creating secret %s in %s", secret_id, parent)
        try:
            client.create_secret(parent, secret_id)
        except exceptions.GoogleAPIError as e:
            raise SecretOperationError("create", f"{parent}/secrets/{secret_id}", e) from e

    def _add_secret_version(self, client, parent, data):
        try:
            version = client.add_secret_version(parent, data)
        except exceptions.GoogleAPIError as e:
            raise SecretOperationError("add_version", parent, e) from e
        self._logf("info", "Added secret version %s", getattr(version, "name", parent))

    def delete(self, key, timeout=None):
        key = naming.sanitize(key)
        self._logf("info", "Delete called for: [%s]", key)

        with self._new_client(timeout) as client:
            name = self._secret_path(key)
            try:
                client.delete_secret(name)
            except exceptions.NotFound:
                # No such key
                self._logf("info", "Delete: %s did not exist", name)
            except exceptions.GoogleAPIError as e:
                raise SecretOperationError("delete", name, e) from e


def _to_bytes(data):
    if isinstance(data, bytes):
        return data
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    if isinstance(data, str):
        return data.encode("utf8")
    raise TypeError(f"Cache data must be bytes or str not {type(data).__name__}")
