# SPDX-FileCopyrightText: 2026 The Cloudlog Authors
# SPDX-License-Identifier: Apache-2.0

"""Log entry model and its mutable builder.

Enhancers only ever see a :class:`LogEntryBuilder` and call
:meth:`LogEntryBuilder.add_label` on it.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from cloudlog.models.resource import MonitoredResource


@dataclass(frozen=True)
class LogEntry:
    """Immutable log entry."""

    payload: Any
    severity: str = "DEFAULT"
    log_name: Optional[str] = None
    resource: Optional[MonitoredResource] = None
    labels: Mapping[str, str] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def builder(cls, payload: Any = None) -> LogEntryBuilder:
        return LogEntryBuilder(payload)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "payload": self.payload,
            "severity": self.severity,
            "timestamp": self.timestamp.isoformat(),
            "labels": dict(self.labels),
        }
        if self.log_name:
            data["log_name"] = self.log_name
        if self.resource is not None:
            data["resource"] = self.resource.to_dict()
        return data


class LogEntryBuilder:
    """Mutable builder for :class:`LogEntry`.

    ``add_label`` may be called from several threads at once.
    """

    def __init__(self, payload: Any = None) -> None:
        self._payload = payload
        self._severity = "DEFAULT"
        self._log_name: Optional[str] = None
        self._resource: Optional[MonitoredResource] = None
        self._labels: Dict[str, str] = {}
        self._lock = threading.Lock()

    def add_label(self, key: str, value: str) -> LogEntryBuilder:
        with self._lock:
            self._labels[key] = value
        return self

    def set_labels(self, labels: Mapping[str, str]) -> LogEntryBuilder:
        with self._lock:
            self._labels = dict(labels)
        return self

    def set_severity(self, severity: str) -> LogEntryBuilder:
        self._severity = severity
        return self

    def set_log_name(self, log_name: Optional[str]) -> LogEntryBuilder:
        self._log_name = log_name
        return self

    def set_resource(self, resource: Optional[MonitoredResource]) -> LogEntryBuilder:
        self._resource = resource
        return self

    @property
    def labels(self) -> Dict[str, str]:
        """Snapshot of the labels added so far."""
        with self._lock:
            return dict(self._labels)

    def build(self) -> LogEntry:
        return LogEntry(
            payload=self._payload,
            severity=self._severity,
            log_name=self._log_name,
            resource=self._resource,
            labels=MappingProxyType(self.labels),
        )
