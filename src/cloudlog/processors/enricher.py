# SPDX-FileCopyrightText: 2026 The Cloudlog Authors
# SPDX-License-Identifier: Apache-2.0

"""Platform labels on spans.

Runs the same enhancers used for log entries against each span as it
starts, so spans and log lines from one process carry the same platform
identity (instance name, trace id) under the same keys.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from opentelemetry import context, trace
from opentelemetry.sdk.trace import ReadableSpan, SpanProcessor
from opentelemetry.trace import Span

from cloudlog.processors.enhancers import LoggingEnhancer

logger = logging.getLogger(__name__)


class _SpanLabelSink:
    """Writes enhancer labels as span attributes, keeping existing ones."""

    def __init__(self, span: Span) -> None:
        self._span = span
        self._existing = getattr(span, "attributes", None) or {}

    def add_label(self, key: str, value: str) -> None:
        if key not in self._existing:
            self._span.set_attribute(key, value)


class ResourceLabelSpanEnricher(SpanProcessor):
    """Applies log entry enhancers to every span at start."""

    def __init__(self, enhancers: Sequence[LoggingEnhancer]) -> None:
        self._enhancers: List[LoggingEnhancer] = list(enhancers)

    @property
    def enhancers(self) -> List[LoggingEnhancer]:
        return list(self._enhancers)

    def set_enhancers(self, enhancers: Sequence[LoggingEnhancer]) -> None:
        self._enhancers = list(enhancers)

    def on_start(
        self,
        span: Span,
        parent_context: Optional[context.Context] = None,
    ) -> None:
        """Called when a span starts; enrich with platform labels."""
        sink = _SpanLabelSink(span)
        # The tracer only makes the span current after on_start returns.
        with trace.use_span(span, end_on_exit=False):
            for enhancer in self._enhancers:
                enhancer.enhance(sink)

    def on_end(self, span: ReadableSpan) -> None:
        pass

    def shutdown(self) -> None:
        pass

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        return True
