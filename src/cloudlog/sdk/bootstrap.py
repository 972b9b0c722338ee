# SPDX-FileCopyrightText: 2026 The Cloudlog Authors
# SPDX-License-Identifier: Apache-2.0

"""One-switch platform enrichment for logging.

``enable()``:

1. Loads :class:`~cloudlog.sdk.config.CloudlogConfig`
2. Detects the platform and builds the monitored resource
3. Creates the platform's log enhancers
4. Attaches a :class:`~cloudlog.sdk.logging_filter.MonitoredResourceFilter`
   to the target logger's handlers, installing a ``StreamHandler`` when it
   has none
5. Registers :class:`~cloudlog.processors.enricher.ResourceLabelSpanEnricher`
   on an installed SDK ``TracerProvider`` (when ``enrich_spans`` is set)

Usage::

    from cloudlog import enable
    enable()  # reads GOOGLE_CLOUD_PROJECT, CLOUDLOG_RESOURCE_TYPE from env
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, List, Optional, Tuple

if TYPE_CHECKING:
    from cloudlog.models.resource import MonitoredResource
    from cloudlog.processors.enhancers import LoggingEnhancer
    from cloudlog.processors.enricher import ResourceLabelSpanEnricher
    from cloudlog.sdk.config import CloudlogConfig
    from cloudlog.sdk.logging_filter import MonitoredResourceFilter

logger = logging.getLogger(__name__)

_lock = threading.RLock()
_initialized = False
_current_config: Optional[CloudlogConfig] = None
_current_resource: Optional[MonitoredResource] = None
_current_enhancers: List[LoggingEnhancer] = []
_filter: Optional[MonitoredResourceFilter] = None
_filtered: List[logging.Handler] = []
_installed_handler: Optional[Tuple[logging.Logger, logging.Handler]] = None
_span_enricher: Optional[ResourceLabelSpanEnricher] = None


def enable(
    project_id: Optional[str] = None,
    resource_type: Optional[str] = None,
    config: Optional[CloudlogConfig] = None,
    config_file: Optional[str] = None,
    target_logger: Optional[logging.Logger] = None,
    log_level: Optional[str] = None,
) -> bool:
    """Enable platform enrichment for standard library logging.

    Args:
        project_id: Project id for the ``project_id`` resource label.
        resource_type: Explicit resource type (skips detection).
        config: Full :class:`CloudlogConfig` (overrides file/env loading).
        config_file: Path to YAML config file.
        target_logger: Logger whose handlers get the filter (default: root).
            A logger without handlers gets a ``StreamHandler`` first.
        log_level: If given, ``logging.basicConfig`` is called with it.

    Returns:
        ``True`` if successfully initialized, ``False`` if already
        initialized or initialization failed.
    """
    global _initialized, _current_config, _current_resource, _current_enhancers
    global _filter, _filtered, _installed_handler, _span_enricher

    with _lock:
        if _initialized:
            logger.warning("Cloudlog already initialized")
            return False

        if log_level is not None:
            logging.basicConfig(level=getattr(logging, log_level.upper()))

        from cloudlog.sdk.config import CloudlogConfig as ConfigClass

        if config is not None:
            cfg = config
        elif config_file is not None:
            cfg = ConfigClass.from_yaml(config_file)
        else:
            cfg = ConfigClass.from_file_or_env()

        if project_id is not None:
            cfg.project_id = project_id
        if resource_type is not None:
            cfg.resource_type = resource_type

        if not cfg.project_id:
            logger.error("Cloudlog needs a project id. Set GOOGLE_CLOUD_PROJECT or pass project_id.")
            return False

        try:
            from cloudlog.processors.enhancers import create_enhancers
            from cloudlog.resources.builder import ResourceBuilder
            from cloudlog.resources.detector import LabelResolver, PlatformDetector
            from cloudlog.resources.sources import MetadataServerSource
            from cloudlog.sdk.logging_filter import MonitoredResourceFilter

            resolver = LabelResolver(
                metadata=MetadataServerSource(cfg.metadata_host, cfg.metadata_timeout_seconds),
            )
            detector = PlatformDetector(resolver)
            kind = detector.detect()

            explicit_type = cfg.effective_resource_type
            resource = ResourceBuilder(resolver, detector).build(cfg.project_id, explicit_type)
            enhancers = create_enhancers(kind, resolver)

            logger.info(
                "Initializing Cloudlog: project=%s, platform=%s, resource=%s",
                cfg.project_id,
                kind.value,
                resource.type,
            )

            log_filter = MonitoredResourceFilter(resource, enhancers)
            target = target_logger if target_logger is not None else logging.getLogger()
            installed: Optional[logging.Handler] = None
            if not target.handlers:
                # Logger filters never see records propagated from child
                # loggers; the filter has to sit on a handler.
                installed = logging.StreamHandler()
                installed.setFormatter(logging.Formatter(logging.BASIC_FORMAT))
                target.addHandler(installed)
            filtered: List[logging.Handler] = list(target.handlers)
            for item in filtered:
                item.addFilter(log_filter)

            if cfg.enrich_spans and enhancers:
                _span_enricher = _register_span_enricher(enhancers)

            _current_config = cfg
            _current_resource = resource
            _current_enhancers = enhancers
            _filter = log_filter
            _filtered = filtered
            _installed_handler = (target, installed) if installed is not None else None
            _initialized = True
            return True

        except Exception as exc:
            logger.error("Failed to initialize Cloudlog: %s", exc, exc_info=True)
            return False


def _register_span_enricher(enhancers: List[LoggingEnhancer]) -> Optional[ResourceLabelSpanEnricher]:
    """Add the span enricher to the global SDK TracerProvider, if there is one."""
    from opentelemetry import trace
    from opentelemetry.sdk.trace import TracerProvider

    from cloudlog.processors.enricher import ResourceLabelSpanEnricher

    if _span_enricher is not None:
        # Span processors cannot be removed; reuse the registered one.
        _span_enricher.set_enhancers(enhancers)
        return _span_enricher

    provider = trace.get_tracer_provider()
    if not isinstance(provider, TracerProvider):
        logger.debug("No SDK TracerProvider installed, span enrichment skipped")
        return None

    enricher = ResourceLabelSpanEnricher(enhancers)
    provider.add_span_processor(enricher)
    logger.info("Cloudlog span enrichment registered")
    return enricher


def is_enabled() -> bool:
    """Check if Cloudlog is initialized."""
    return _initialized


def get_config() -> Optional[CloudlogConfig]:
    """Get the current Cloudlog configuration."""
    return _current_config


def get_resource() -> Optional[MonitoredResource]:
    """Get the monitored resource built by :func:`enable`."""
    return _current_resource


def get_enhancers() -> List[LoggingEnhancer]:
    """Get the log enhancers created by :func:`enable`."""
    return list(_current_enhancers)


def disable() -> None:
    """Detach the logging filter and reset state."""
    global _initialized, _current_config, _current_resource, _current_enhancers
    global _filter, _filtered, _installed_handler

    with _lock:
        if not _initialized:
            return

        for item in _filtered:
            item.removeFilter(_filter)
        if _installed_handler is not None:
            owner, handler = _installed_handler
            owner.removeHandler(handler)
        if _span_enricher is not None:
            _span_enricher.set_enhancers([])

        _initialized = False
        _current_config = None
        _current_resource = None
        _current_enhancers = []
        _filter = None
        _filtered = []
        _installed_handler = None
        logger.info("Cloudlog disabled")
