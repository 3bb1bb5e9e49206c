# -*- coding: utf-8 -*-
"""
Thin wrapper around the Secret Manager API calls the cache needs.

The cache only ever talks to a SecretClient obtained from a SecretClientFactory,
one client per cache call. This keeps the cache logic independent of the gRPC
client so it can be driven by an in memory implementation in tests.
"""

import logging
import threading
from abc import ABC, abstractmethod

import google.auth
import google_crc32c
from google.api_core import exceptions
from google.cloud import secretmanager, secretmanager_v1


class SecretClient(ABC):
    """The subset of Secret Manager operations used by the cache.

    A client is acquired for the duration of a single get, put or delete and
    closed afterwards, use it as a context manager::

        with factory.new_client() as client:
            client.access_secret_version(name)
    """

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        # a failed close must not replace the outcome of the operation
        try:
            self.close()
        except (exceptions.GoogleAPIError, OSError) as e:
            logging.getLogger(__name__).warning(f"Error closing secret manager client {e}")
        return False

    @abstractmethod
    def access_secret_version(self, name):
        """Return the payload bytes of the secret version ``name``."""

    @abstractmethod
    def list_secret_versions(self, parent, page_size):
        """
        Lazily list the versions of the secret ``parent``.

        Returns an iterator of secretmanager_v1.SecretVersion. Further pages are
        only requested as the iterator is advanced. If the secret does not exist
        google.api_core.exceptions.NotFound is raised either by this call or by
        the first advance of the iterator.
        """

    @abstractmethod
    def destroy_secret_version(self, name):
        pass

    @abstractmethod
    def create_secret(self, parent, secret_id):
        """Create an empty secret ``secret_id`` under ``parent`` with automatic replication."""

    @abstractmethod
    def add_secret_version(self, parent, data):
        """Append a new version holding ``data`` to the secret ``parent``."""

    @abstractmethod
    def delete_secret(self, name):
        """Delete the secret ``name`` along with all of its versions."""

    def close(self):
        pass


class SecretClientFactory(ABC):

    @abstractmethod
    def new_client(self, timeout=None):
        """
        Create a client scoped to one cache operation.

        :type timeout: float
        :param timeout: deadline in seconds applied to every remote call made by the client,
                        None leaves the API defaults in place
        :return: SecretClient
        """


class GCPSecretClient(SecretClient):
    """SecretClient backed by the google-cloud-secret-manager gRPC client."""

    def __init__(self, client, timeout=None):
        self._client = client
        self._call_kwargs = {}
        if timeout is not None:
            self._call_kwargs["timeout"] = timeout

    def access_secret_version(self, name):
        request = secretmanager_v1.AccessSecretVersionRequest(
            name=name
        )
        response = self._client.access_secret_version(request=request, **self._call_kwargs)
        return response.payload.data

    def list_secret_versions(self, parent, page_size):
        request = secretmanager_v1.ListSecretVersionsRequest(
            parent=parent,
            page_size=page_size
        )
        # the pager requests further pages only when iteration reaches them
        return iter(self._client.list_secret_versions(request=request, **self._call_kwargs))

    def destroy_secret_version(self, name):
        request = secretmanager_v1.DestroySecretVersionRequest(
            name=name
        )
        return self._client.destroy_secret_version(request=request, **self._call_kwargs)

    def create_secret(self, parent, secret_id):
        return self._client.create_secret(
            request={
                "parent": parent,
                "secret_id": secret_id,
                "secret": {"replication": {"automatic": {}}},
            },
            **self._call_kwargs
        )

    def add_secret_version(self, parent, data):
        # Passing a checksum in add-version request is optional but lets the
        # service reject a payload corrupted in transit.
        crc32c = google_crc32c.Checksum()
        crc32c.update(data)

        return self._client.add_secret_version(
            request={
                "parent": parent,
                "payload": {"data": data, "data_crc32c": int(crc32c.hexdigest(), 16)},
            },
            **self._call_kwargs
        )

    def delete_secret(self, name):
        request = secretmanager_v1.DeleteSecretRequest(
            name=name
        )
        self._client.delete_secret(request=request, **self._call_kwargs)

    def close(self):
        self._client.transport.close()


class GCPSecretClientFactory(SecretClientFactory):
    """Builds a GCPSecretClient per cache call.

    Credentials are resolved once per thread, either from ``google.auth.default()``
    or from ``_credentials_callback`` which must return a tuple of
    (credentials, project_id).
    """

    def __init__(self, _credentials_callback=None):
        self._credentials_callback = _credentials_callback
        self.ns = threading.local()

    @property
    def credentials(self):
        if not hasattr(self.ns, "_credentials"):
            if self._credentials_callback is not None:
                _credentials, _project_id = self._credentials_callback()
            else:
                _credentials, _project_id = google.auth.default()
            self.ns._credentials = _credentials
        return self.ns._credentials

    def new_client(self, timeout=None):
        client = secretmanager.SecretManagerServiceClient(credentials=self.credentials)
        return GCPSecretClient(client, timeout=timeout)
