# SPDX-FileCopyrightText: 2026 The Cloudlog Authors
# SPDX-License-Identifier: Apache-2.0

"""Monitored resource construction.

Usage::

    from cloudlog.resources import LabelResolver, get_resource

    resource = get_resource("my-project")          # auto-detect
    resource = get_resource("my-project", "global")  # explicit type

    resolver = LabelResolver()  # share lookups with get_resource_enhancers
    resource = get_resource("my-project", resolver=resolver)
"""

from __future__ import annotations

import logging
from typing import Optional

from cloudlog.models.resource import Label, MonitoredResource, PlatformKind
from cloudlog.resources.detector import RESOURCE_LABELS, LabelResolver, PlatformDetector

logger = logging.getLogger(__name__)

GAE_APP_RESOURCE = "gae_app"


def canonical_resource_name(resource_type: str) -> str:
    """Return the wire name for an internal resource type.

    The wire schema knows a single ``gae_app`` type; flex and standard are
    told apart only by their label sets.
    """
    return GAE_APP_RESOURCE if resource_type.startswith(GAE_APP_RESOURCE) else resource_type


def _as_platform_kind(resource_type: str) -> Optional[PlatformKind]:
    try:
        return PlatformKind(resource_type)
    except ValueError:
        return None


class ResourceBuilder:
    """Builds a :class:`MonitoredResource` for the current platform."""

    def __init__(
        self,
        resolver: Optional[LabelResolver] = None,
        detector: Optional[PlatformDetector] = None,
    ) -> None:
        self.resolver = resolver if resolver is not None else LabelResolver()
        self.detector = detector if detector is not None else PlatformDetector(self.resolver)

    def build(self, project_id: str, resource_type: Optional[str] = None) -> MonitoredResource:
        """Build the resource.

        Args:
            project_id: Always set as the ``project_id`` label.
            resource_type: Explicit resource type.  When empty the platform
                is detected.  Unknown types are used verbatim with no
                labels beyond ``project_id``.
        """
        if not resource_type:
            resource_type = self.detector.detect().value

        builder = MonitoredResource.builder(canonical_resource_name(resource_type))
        builder.add_label(Label.PROJECT_ID.key, project_id)

        kind = _as_platform_kind(resource_type)
        for label in RESOURCE_LABELS.get(kind, ()):
            value = self.resolver.resolve(label)
            if value:
                builder.add_label(label.key, value)
            else:
                logger.debug("Label %s unavailable for %s", label.key, resource_type)

        return builder.build()


def get_resource(
    project_id: str,
    resource_type: Optional[str] = None,
    resolver: Optional[LabelResolver] = None,
) -> MonitoredResource:
    """Return a self-configured monitored resource.

    Pass the same *resolver* to
    :func:`~cloudlog.processors.enhancers.get_resource_enhancers` to share
    its metadata server lookups instead of repeating them.
    """
    return ResourceBuilder(resolver).build(project_id, resource_type)


__all__ = ["GAE_APP_RESOURCE", "ResourceBuilder", "canonical_resource_name", "get_resource"]
