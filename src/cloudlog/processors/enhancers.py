# SPDX-FileCopyrightText: 2026 The Cloudlog Authors
# SPDX-License-Identifier: Apache-2.0

"""Log entry enhancers.

An enhancer adds labels to a log entry builder right before the entry is
built.  Which enhancers apply depends on the platform:

- App Engine flex: instance name label, then trace id
- App Engine standard: trace id
- everything else: none

Trace correlation only makes sense where the platform injects trace
headers, and the instance name is only exposed on flex.
"""

from __future__ import annotations

import abc
import logging
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Protocol

from opentelemetry import trace

from cloudlog.models.resource import Label, PlatformKind
from cloudlog.resources.detector import LabelResolver, PlatformDetector

logger = logging.getLogger(__name__)

APPENGINE_LABEL_PREFIX = "appengine.googleapis.com/"
TRACE_ID_LABEL = "trace_id"


class LabelSink(Protocol):
    """Anything enhancers can write labels into (usually a LogEntryBuilder)."""

    def add_label(self, key: str, value: str) -> object: ...


class LoggingEnhancer(abc.ABC):
    """Adds labels to a log entry builder."""

    @abc.abstractmethod
    def enhance(self, builder: LabelSink) -> None:
        """Add this enhancer's labels to *builder*."""


class LabelLoggingEnhancer(LoggingEnhancer):
    """Injects a fixed set of resource labels into every log entry.

    Label values are resolved once, at construction.  Labels that resolve
    to nothing are dropped and never written.
    """

    def __init__(
        self,
        prefix: Optional[str],
        labels: Optional[Iterable[Label]],
        resolver: Optional[LabelResolver] = None,
    ) -> None:
        resolver = resolver if resolver is not None else LabelResolver()
        resolved = {}
        for label in labels or ():
            value = resolver.resolve(label)
            if value:
                full_key = f"{prefix}{label.key}" if prefix is not None else label.key
                resolved[full_key] = value
        self._labels: Mapping[str, str] = MappingProxyType(resolved)

    @property
    def labels(self) -> Mapping[str, str]:
        return self._labels

    def enhance(self, builder: LabelSink) -> None:
        for key, value in self._labels.items():
            builder.add_label(key, value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self._labels)!r})"


class TraceLoggingEnhancer(LoggingEnhancer):
    """Adds the active OpenTelemetry trace id as ``<prefix>trace_id``."""

    def __init__(self, prefix: Optional[str] = None) -> None:
        self._key = f"{prefix or ''}{TRACE_ID_LABEL}"

    @property
    def key(self) -> str:
        return self._key

    def enhance(self, builder: LabelSink) -> None:
        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            builder.add_label(self._key, trace.format_trace_id(span_context.trace_id))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._key!r})"


def create_enhancers(
    kind: PlatformKind,
    resolver: Optional[LabelResolver] = None,
) -> List[LoggingEnhancer]:
    """Return the enhancers for *kind*, in application order (may be empty)."""
    enhancers: List[LoggingEnhancer] = []
    if kind == PlatformKind.GAE_APP_FLEX:
        enhancers.append(LabelLoggingEnhancer(APPENGINE_LABEL_PREFIX, [Label.INSTANCE_NAME], resolver))
        enhancers.append(TraceLoggingEnhancer(APPENGINE_LABEL_PREFIX))
    elif kind == PlatformKind.GAE_APP_STANDARD:
        enhancers.append(TraceLoggingEnhancer(APPENGINE_LABEL_PREFIX))
    return enhancers


def get_resource_enhancers(resolver: Optional[LabelResolver] = None) -> List[LoggingEnhancer]:
    """Detect the platform and return its enhancers.

    Pass the resolver used for :func:`~cloudlog.resources.get_resource` to
    avoid querying the metadata server twice.
    """
    resolver = resolver if resolver is not None else LabelResolver()
    kind = PlatformDetector(resolver).detect()
    enhancers = create_enhancers(kind, resolver)
    if enhancers:
        logger.debug("Log enhancers for %s: %s", kind.value, enhancers)
    return enhancers


__all__ = [
    "APPENGINE_LABEL_PREFIX",
    "LabelLoggingEnhancer",
    "LabelSink",
    "LoggingEnhancer",
    "TraceLoggingEnhancer",
    "create_enhancers",
    "get_resource_enhancers",
]
