# SPDX-FileCopyrightText: 2026 The Cloudlog Authors
# SPDX-License-Identifier: Apache-2.0

"""Platform detection and monitored resource construction.

The pieces, leaves first:

- :mod:`~cloudlog.resources.sources`: ``get(key)`` readers for env vars,
  App Engine and the GCE metadata server
- :class:`LabelResolver`: one resolution rule per :class:`~cloudlog.models.Label`
- :class:`PlatformDetector`: ordered platform classification
- :data:`RESOURCE_LABELS`: labels each platform supports
- :class:`ResourceBuilder`: project id + platform + labels -> resource
"""

from __future__ import annotations

from cloudlog.resources.builder import ResourceBuilder, canonical_resource_name, get_resource
from cloudlog.resources.detector import RESOURCE_LABELS, LabelResolver, PlatformDetector, detect_platform
from cloudlog.resources.sources import AppEngineSource, EnvironmentSource, MetadataServerSource, MetadataSource

__all__ = [
    "AppEngineSource",
    "EnvironmentSource",
    "LabelResolver",
    "MetadataServerSource",
    "MetadataSource",
    "PlatformDetector",
    "RESOURCE_LABELS",
    "ResourceBuilder",
    "canonical_resource_name",
    "detect_platform",
    "get_resource",
]
