# SPDX-FileCopyrightText: 2026 The Cloudlog Authors
# SPDX-License-Identifier: Apache-2.0

"""Platform signal sources.

Each source exposes one narrow capability, ``get(key) -> Optional[str]``,
so detection and label resolution can run against canned values in tests.

- :class:`EnvironmentSource`: process environment variables
- :class:`AppEngineSource`: App Engine application id
- :class:`MetadataServerSource`: GCE metadata server (instance id, zone, cluster name)

Sources degrade to ``None``; they never raise into the caller.
"""

from __future__ import annotations

import logging
import os
import threading
import urllib.request
from typing import Dict, Mapping, Optional, Protocol

logger = logging.getLogger(__name__)

# Environment variables
GAE_INSTANCE_ENV = "GAE_INSTANCE"
GAE_SERVICE_ENV = "GAE_SERVICE"
GAE_VERSION_ENV = "GAE_VERSION"
GAE_APPLICATION_ENV = "GAE_APPLICATION"
KUBERNETES_SERVICE_HOST_ENV = "KUBERNETES_SERVICE_HOST"

# App Engine source keys
APP_ID_KEY = "app_id"

# Metadata server keys (paths under /computeMetadata/v1/)
INSTANCE_ID_KEY = "instance/id"
ZONE_KEY = "instance/zone"
CLUSTER_NAME_KEY = "instance/attributes/cluster-name"

DEFAULT_METADATA_HOST = "metadata.google.internal"
DEFAULT_METADATA_TIMEOUT = 0.5


class MetadataSource(Protocol):
    """Anything that can answer ``get(key)`` with a string or ``None``."""

    def get(self, key: str) -> Optional[str]: ...


class EnvironmentSource:
    """Reads process environment variables.

    An empty variable is returned as ``""`` so callers can tell "set" from
    "unset"; label resolution treats empty as absent.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self._environ = environ

    def get(self, key: str) -> Optional[str]:
        environ = os.environ if self._environ is None else self._environ
        return environ.get(key)


class AppEngineSource:
    """Answers ``app_id`` from ``GAE_APPLICATION``.

    App Engine prefixes the id with a partition (``s~my-app``, ``e~my-app``);
    the prefix is stripped.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self._env = EnvironmentSource(environ)

    def get(self, key: str) -> Optional[str]:
        if key != APP_ID_KEY:
            return None
        value = self._env.get(GAE_APPLICATION_ENV)
        if not value:
            return None
        _, sep, app_id = value.partition("~")
        return app_id if sep else value


class MetadataServerSource:
    """Reads instance attributes from the GCE metadata server.

    Each key is fetched at most once per instance.  Any failure (no
    metadata server, timeout, HTTP error) is cached as ``None``.
    """

    def __init__(
        self,
        host: Optional[str] = None,
        timeout: float = DEFAULT_METADATA_TIMEOUT,
    ) -> None:
        self._host = host or os.environ.get("GCE_METADATA_HOST") or DEFAULT_METADATA_HOST
        self._timeout = timeout
        self._cache: Dict[str, Optional[str]] = {}
        self._lock = threading.Lock()

    @property
    def base_url(self) -> str:
        return f"http://{self._host}/computeMetadata/v1/"

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            if key in self._cache:
                return self._cache[key]

        value = self._fetch(key)
        if value is not None and key == ZONE_KEY:
            # projects/123456/zones/us-central1-a -> us-central1-a
            value = value.rsplit("/", 1)[-1]

        with self._lock:
            self._cache[key] = value
        return value

    def _fetch(self, key: str) -> Optional[str]:
        req = urllib.request.Request(
            self.base_url + key,
            headers={"Metadata-Flavor": "Google"},
        )
        try:
            with urllib.request.urlopen(req, timeout=self._timeout) as resp:  # noqa: S310
                if resp.headers.get("Metadata-Flavor") != "Google":
                    return None
                value = resp.read().decode("utf-8").strip()
        except Exception:
            logger.debug("Metadata server lookup failed for %s", key, exc_info=True)
            return None
        return value or None


__all__ = [
    "APP_ID_KEY",
    "AppEngineSource",
    "CLUSTER_NAME_KEY",
    "EnvironmentSource",
    "INSTANCE_ID_KEY",
    "MetadataServerSource",
    "MetadataSource",
    "ZONE_KEY",
]
