# SPDX-FileCopyrightText: 2026 The Cloudlog Authors
# SPDX-License-Identifier: Apache-2.0

"""Cloudlog - platform detection and monitored resource labels for log entries.

Quick Start::

    import logging
    from cloudlog import enable

    enable(project_id="my-project")  # or set GOOGLE_CLOUD_PROJECT

    logging.getLogger(__name__).info("hello")  # record.resource, record.labels set

Lower level::

    from cloudlog import get_resource, get_resource_enhancers
    from cloudlog.resources import LabelResolver

    resolver = LabelResolver()
    resource = get_resource("my-project", resolver=resolver)
    enhancers = get_resource_enhancers(resolver)
"""

from __future__ import annotations

from cloudlog._version import __version__

# Models
from cloudlog.models.log_entry import LogEntry, LogEntryBuilder
from cloudlog.models.resource import Label, MonitoredResource, PlatformKind

# Enhancers
from cloudlog.processors.enhancers import (
    LabelLoggingEnhancer,
    LoggingEnhancer,
    TraceLoggingEnhancer,
    create_enhancers,
    get_resource_enhancers,
)

# Detection and resources
from cloudlog.resources.builder import ResourceBuilder, get_resource
from cloudlog.resources.detector import LabelResolver, PlatformDetector, detect_platform

# Bootstrap
from cloudlog.sdk.bootstrap import disable, enable, is_enabled

# Configuration
from cloudlog.sdk.config import CloudlogConfig

# Logging adapter
from cloudlog.sdk.logging_filter import MonitoredResourceFilter

__all__ = [
    "__version__",
    # Bootstrap
    "enable",
    "disable",
    "is_enabled",
    # Configuration
    "CloudlogConfig",
    # Detection
    "PlatformDetector",
    "LabelResolver",
    "ResourceBuilder",
    "detect_platform",
    "get_resource",
    # Enhancers
    "LoggingEnhancer",
    "LabelLoggingEnhancer",
    "TraceLoggingEnhancer",
    "create_enhancers",
    "get_resource_enhancers",
    "MonitoredResourceFilter",
    # Models
    "Label",
    "PlatformKind",
    "MonitoredResource",
    "LogEntry",
    "LogEntryBuilder",
]
