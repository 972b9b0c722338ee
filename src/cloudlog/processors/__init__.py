# SPDX-FileCopyrightText: 2026 The Cloudlog Authors
# SPDX-License-Identifier: Apache-2.0

"""Cloudlog enhancers and span processors."""

from cloudlog.processors.enhancers import (
    APPENGINE_LABEL_PREFIX,
    LabelLoggingEnhancer,
    LoggingEnhancer,
    TraceLoggingEnhancer,
    create_enhancers,
    get_resource_enhancers,
)
from cloudlog.processors.enricher import ResourceLabelSpanEnricher

__all__ = [
    "APPENGINE_LABEL_PREFIX",
    "LabelLoggingEnhancer",
    "LoggingEnhancer",
    "ResourceLabelSpanEnricher",
    "TraceLoggingEnhancer",
    "create_enhancers",
    "get_resource_enhancers",
]
