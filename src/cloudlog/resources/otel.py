# SPDX-FileCopyrightText: 2026 The Cloudlog Authors
# SPDX-License-Identifier: Apache-2.0

"""OpenTelemetry resource detector backed by the monitored resource builder.

Plugs into ``Resource.create`` / ``get_aggregated_resources`` so traces and
metrics carry the same platform identity as log entries::

    from opentelemetry.sdk.resources import get_aggregated_resources
    from cloudlog.resources.otel import MonitoredResourceDetector

    resource = get_aggregated_resources([MonitoredResourceDetector("my-project")])
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from opentelemetry.sdk.resources import Resource, ResourceDetector

from cloudlog.models.resource import MonitoredResource
from cloudlog.resources.builder import ResourceBuilder

logger = logging.getLogger(__name__)

RESOURCE_TYPE_ATTR = "gcp.resource_type"
RESOURCE_LABEL_ATTR_PREFIX = "gcp.resource."


def to_otel_attributes(resource: MonitoredResource) -> Dict[str, str]:
    """Flatten a monitored resource into OTel resource attributes."""
    attrs: Dict[str, str] = {
        "cloud.provider": "gcp",
        RESOURCE_TYPE_ATTR: resource.type,
    }
    for key, value in resource.labels.items():
        attrs[f"{RESOURCE_LABEL_ATTR_PREFIX}{key}"] = value
    return attrs


class MonitoredResourceDetector(ResourceDetector):
    """Detects the monitored resource and exposes it as an OTel ``Resource``."""

    def __init__(
        self,
        project_id: str,
        resource_type: Optional[str] = None,
        builder: Optional[ResourceBuilder] = None,
        raise_on_error: bool = False,
    ) -> None:
        super().__init__(raise_on_error=raise_on_error)
        self._project_id = project_id
        self._resource_type = resource_type
        self._builder = builder if builder is not None else ResourceBuilder()

    def detect(self) -> Resource:
        monitored = self._builder.build(self._project_id, self._resource_type)
        logger.debug("Monitored resource for OTel: %s", monitored.to_dict())
        return Resource(to_otel_attributes(monitored))


__all__ = ["MonitoredResourceDetector", "to_otel_attributes"]
