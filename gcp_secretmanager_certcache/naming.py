# -*- coding: utf-8 -*-
"""Resource names used for cache entries in Secret Manager.

Secret Manager resource ids are restricted to ``[A-Za-z0-9-_]``. Keys handed
to the cache are typically DNS names (``www.example.com``, ``example.com+rsa``)
so every other character is replaced with ``_``.

NOTE: changing the sanitization rule changes the secret id of every entry
already stored, existing certificates would no longer be found.
Two keys that differ only in disallowed characters map to the same secret.
"""

import re

_DISALLOWED_CHARACTERS = re.compile(r"[^a-zA-Z0-9\-_]")

LATEST_VERSION = "latest"


def sanitize(value):
    """Replace any character not allowed in a secret id with an underscore."""
    if not value:
        return ""
    return _DISALLOWED_CHARACTERS.sub("_", value)


def project_path(project_id):
    return f"projects/{project_id}"


def secret_id(prefix, key):
    return f"{prefix}{key}"


def secret_path(project_id, prefix, key):
    return f"{project_path(project_id)}/secrets/{secret_id(prefix, key)}"


def secret_version_path(project_id, prefix, key, version=LATEST_VERSION):
    return f"{secret_path(project_id, prefix, key)}/versions/{version}"
