# SPDX-FileCopyrightText: 2026 The Cloudlog Authors
# SPDX-License-Identifier: Apache-2.0

"""Cloudlog data models."""

from __future__ import annotations

from cloudlog.models.log_entry import LogEntry, LogEntryBuilder
from cloudlog.models.resource import Label, MonitoredResource, MonitoredResourceBuilder, PlatformKind

__all__ = [
    "Label",
    "LogEntry",
    "LogEntryBuilder",
    "MonitoredResource",
    "MonitoredResourceBuilder",
    "PlatformKind",
]
