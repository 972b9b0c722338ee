# SPDX-FileCopyrightText: 2026 The Cloudlog Authors
# SPDX-License-Identifier: Apache-2.0

"""Monitored resource model.

A monitored resource names the platform a log entry came from:

- ``type``: the wire resource type (``gae_app``, ``container``, ``gce_instance``, ``global``)
- ``labels``: identity of the concrete resource (``project_id``, ``zone``, ...)

Invariant: ``project_id`` is always present on a resource built by
:class:`~cloudlog.resources.builder.ResourceBuilder`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping


class Label(str, Enum):
    """Resource and log-entry label, valued by its wire key."""

    APP_ID = "app_id"
    CLUSTER_NAME = "cluster_name"
    INSTANCE_ID = "instance_id"
    INSTANCE_NAME = "instance_name"
    MODULE_ID = "module_id"
    PROJECT_ID = "project_id"
    VERSION_ID = "version_id"
    ZONE = "zone"

    @property
    def key(self) -> str:
        return self.value


class PlatformKind(str, Enum):
    """Execution platform, valued by its internal resource type key.

    App Engine flex and standard are kept apart here because they carry
    different label sets; both report as ``gae_app`` on the wire.
    """

    CONTAINER = "container"
    GAE_APP_FLEX = "gae_app_flex"
    GAE_APP_STANDARD = "gae_app_standard"
    GCE_INSTANCE = "gce_instance"
    GLOBAL = "global"

    @property
    def key(self) -> str:
        return self.value


@dataclass(frozen=True)
class MonitoredResource:
    """Resource descriptor attached to log entries."""

    type: str
    labels: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def builder(cls, resource_type: str) -> MonitoredResourceBuilder:
        return MonitoredResourceBuilder(resource_type)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "labels": dict(self.labels)}


class MonitoredResourceBuilder:
    """Accumulates labels for a :class:`MonitoredResource`."""

    def __init__(self, resource_type: str) -> None:
        self._type = resource_type
        self._labels: Dict[str, str] = {}

    def add_label(self, key: str, value: str) -> MonitoredResourceBuilder:
        self._labels[key] = value
        return self

    def build(self) -> MonitoredResource:
        return MonitoredResource(type=self._type, labels=MappingProxyType(dict(self._labels)))
