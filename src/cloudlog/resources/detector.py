# SPDX-FileCopyrightText: 2026 The Cloudlog Authors
# SPDX-License-Identifier: Apache-2.0

"""Platform detection and resource label resolution.

Classifies the current host into exactly one :class:`PlatformKind`:

- App Engine flex (``GAE_INSTANCE`` set)
- Kubernetes container (``KUBERNETES_SERVICE_HOST`` set)
- App Engine standard (application id available)
- GCE instance (metadata server reports an instance id)
- Global (anything else)

The checks run in that order and the first match wins.  Flex instances
also run in containers and standard apps also expose an instance id, so
the order is the tie-break.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional, Tuple

from cloudlog.models.resource import Label, PlatformKind
from cloudlog.resources.sources import (
    APP_ID_KEY,
    CLUSTER_NAME_KEY,
    GAE_INSTANCE_ENV,
    GAE_SERVICE_ENV,
    GAE_VERSION_ENV,
    INSTANCE_ID_KEY,
    KUBERNETES_SERVICE_HOST_ENV,
    ZONE_KEY,
    AppEngineSource,
    EnvironmentSource,
    MetadataServerSource,
    MetadataSource,
)

logger = logging.getLogger(__name__)


# =========================================================================
# Resource Label Table
# =========================================================================

# Labels each platform supports beyond the implicit project_id.
# Kinds missing from the table (global) carry no extra labels.
RESOURCE_LABELS: Mapping[PlatformKind, Tuple[Label, ...]] = MappingProxyType(
    {
        PlatformKind.GAE_APP_FLEX: (Label.MODULE_ID, Label.VERSION_ID, Label.ZONE),
        PlatformKind.GAE_APP_STANDARD: (Label.MODULE_ID, Label.VERSION_ID),
        PlatformKind.CONTAINER: (Label.CLUSTER_NAME, Label.ZONE),
        PlatformKind.GCE_INSTANCE: (Label.INSTANCE_ID, Label.ZONE),
    }
)


def _safe_get(source: MetadataSource, key: str) -> Optional[str]:
    try:
        return source.get(key)
    except Exception:
        # A raising source reads as absent.
        logger.debug("Source %s failed for key %s", type(source).__name__, key, exc_info=True)
        return None


# =========================================================================
# Label Resolution
# =========================================================================


class LabelResolver:
    """Resolves a single label's value from the platform sources.

    ``project_id`` is supplied by the caller and never resolved here.
    """

    def __init__(
        self,
        environ: Optional[MetadataSource] = None,
        app_engine: Optional[MetadataSource] = None,
        metadata: Optional[MetadataSource] = None,
    ) -> None:
        self.environ = environ if environ is not None else EnvironmentSource()
        self.app_engine = app_engine if app_engine is not None else AppEngineSource()
        self.metadata = metadata if metadata is not None else MetadataServerSource()
        self._rules: Dict[Label, Callable[[], Optional[str]]] = {
            Label.APP_ID: lambda: _safe_get(self.app_engine, APP_ID_KEY),
            Label.CLUSTER_NAME: lambda: _safe_get(self.metadata, CLUSTER_NAME_KEY),
            Label.INSTANCE_ID: lambda: _safe_get(self.metadata, INSTANCE_ID_KEY),
            Label.ZONE: lambda: _safe_get(self.metadata, ZONE_KEY),
            Label.INSTANCE_NAME: lambda: _safe_get(self.environ, GAE_INSTANCE_ENV),
            Label.MODULE_ID: lambda: _safe_get(self.environ, GAE_SERVICE_ENV),
            Label.VERSION_ID: lambda: _safe_get(self.environ, GAE_VERSION_ENV),
        }

    def resolve(self, label: Label) -> Optional[str]:
        """Return the label's current value, or ``None`` when unavailable."""
        rule = self._rules.get(label)
        if rule is None:
            return None
        return rule() or None


# =========================================================================
# Platform Detection
# =========================================================================


class PlatformDetector:
    """Detects the platform kind of the current process."""

    def __init__(self, resolver: Optional[LabelResolver] = None) -> None:
        self.resolver = resolver if resolver is not None else LabelResolver()

    def detect(self) -> PlatformKind:
        kind = self._detect()
        logger.debug("Detected platform kind: %s", kind.value)
        return kind

    def _detect(self) -> PlatformKind:
        environ = self.resolver.environ
        if _safe_get(environ, GAE_INSTANCE_ENV) is not None:
            return PlatformKind.GAE_APP_FLEX
        if _safe_get(environ, KUBERNETES_SERVICE_HOST_ENV) is not None:
            return PlatformKind.CONTAINER
        if self.resolver.resolve(Label.APP_ID) is not None:
            return PlatformKind.GAE_APP_STANDARD
        if self.resolver.resolve(Label.INSTANCE_ID) is not None:
            return PlatformKind.GCE_INSTANCE
        return PlatformKind.GLOBAL


def detect_platform() -> PlatformKind:
    """Detect the platform kind using the default sources."""
    return PlatformDetector().detect()


__all__ = ["LabelResolver", "PlatformDetector", "RESOURCE_LABELS", "detect_platform"]
