# SPDX-FileCopyrightText: 2026 The Cloudlog Authors
# SPDX-License-Identifier: Apache-2.0

"""Standard library logging adapter.

:class:`MonitoredResourceFilter` stamps each ``LogRecord`` with the
monitored resource and the labels produced by the platform enhancers::

    handler = logging.StreamHandler()
    handler.addFilter(MonitoredResourceFilter(resource, enhancers))

Handlers and formatters can then read ``record.resource`` and
``record.labels``, or call :func:`to_log_entry`.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Sequence

from cloudlog.models.log_entry import LogEntry, LogEntryBuilder
from cloudlog.models.resource import MonitoredResource
from cloudlog.processors.enhancers import LoggingEnhancer


class MonitoredResourceFilter(logging.Filter):
    """Adds ``resource`` and ``labels`` attributes to every record.

    Labels passed through ``extra={"labels": {...}}`` are kept and win over
    enhancer labels with the same key.  Records are never dropped.
    """

    def __init__(
        self,
        resource: Optional[MonitoredResource],
        enhancers: Sequence[LoggingEnhancer] = (),
        name: str = "",
    ) -> None:
        super().__init__(name)
        self.resource = resource
        self.enhancers = list(enhancers)

    def filter(self, record: logging.LogRecord) -> bool:
        builder = LogEntryBuilder()
        for enhancer in self.enhancers:
            enhancer.enhance(builder)

        labels: Dict[str, str] = builder.labels
        user_labels = getattr(record, "labels", None)
        if isinstance(user_labels, dict):
            labels.update(user_labels)

        record.labels = labels
        if getattr(record, "resource", None) is None:
            record.resource = self.resource
        return True


def to_log_entry(record: logging.LogRecord) -> LogEntry:
    """Convert a (filtered) log record into a :class:`LogEntry`."""
    builder = (
        LogEntry.builder(record.getMessage())
        .set_severity(record.levelname)
        .set_log_name(record.name)
        .set_resource(getattr(record, "resource", None))
    )
    labels = getattr(record, "labels", None)
    if isinstance(labels, dict):
        builder.set_labels(labels)
    return builder.build()


__all__ = ["MonitoredResourceFilter", "to_log_entry"]
