# SPDX-FileCopyrightText: 2026 The Cloudlog Authors
# SPDX-License-Identifier: Apache-2.0

"""Cloudlog configuration, bootstrap and logging adapter."""

from __future__ import annotations

from cloudlog.sdk.bootstrap import disable, enable, get_config, get_enhancers, get_resource, is_enabled
from cloudlog.sdk.config import CloudlogConfig
from cloudlog.sdk.logging_filter import MonitoredResourceFilter, to_log_entry

__all__ = [
    "CloudlogConfig",
    "MonitoredResourceFilter",
    "disable",
    "enable",
    "get_config",
    "get_enhancers",
    "get_resource",
    "is_enabled",
    "to_log_entry",
]
