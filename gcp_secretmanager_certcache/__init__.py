# -*- coding: utf-8 -*-
"""gcp_secretmanager_certcache

A certificate cache for automatic certificate provisioning clients that keeps
certificates and keys in GCP Secret Manager, so they survive restarts and can
be shared by every instance of a server.

"""

from gcp_secretmanager_certcache.cache import CertificateCache, \
    CacheConfig, \
    SecretManagerCache, \
    LIST_PAGE_SIZE
from gcp_secretmanager_certcache.client import SecretClient, \
    SecretClientFactory, \
    GCPSecretClient, \
    GCPSecretClientFactory
from gcp_secretmanager_certcache.exceptions import SecretCacheError, \
    CacheMiss, \
    ClientSetupError, \
    SecretOperationError
from gcp_secretmanager_certcache.naming import sanitize
from gcp_secretmanager_certcache.pruner import PruneResult, prune_secret_versions
from ._version import __version__

__all__ = ["__version__",
           "CertificateCache",
           "CacheConfig",
           "SecretManagerCache",
           "LIST_PAGE_SIZE",
           "SecretClient",
           "SecretClientFactory",
           "GCPSecretClient",
           "GCPSecretClientFactory",
           "SecretCacheError",
           "CacheMiss",
           "ClientSetupError",
           "SecretOperationError",
           "sanitize",
           "PruneResult",
           "prune_secret_versions"]
