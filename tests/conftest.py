# SPDX-FileCopyrightText: 2026 The Cloudlog Authors
# SPDX-License-Identifier: Apache-2.0

"""Shared test fixtures for Cloudlog tests."""

from __future__ import annotations

from typing import Dict, List, Optional

import pytest
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.sdk.trace.sampling import ALWAYS_ON

from cloudlog.resources.detector import LabelResolver

# Module-level provider and exporter to avoid "cannot override" warnings
_provider: TracerProvider = None
_exporter: InMemorySpanExporter = None


class FakeSource:
    """Dict-backed source with canned values; records every key asked for."""

    def __init__(self, values: Optional[Dict[str, str]] = None) -> None:
        self.values = dict(values or {})
        self.calls: List[str] = []

    def get(self, key: str) -> Optional[str]:
        self.calls.append(key)
        return self.values.get(key)


class BrokenSource:
    """Source that violates the contract by raising."""

    def get(self, key: str) -> Optional[str]:
        raise RuntimeError(f"boom: {key}")


def make_resolver(
    environ: Optional[Dict[str, str]] = None,
    app_engine: Optional[Dict[str, str]] = None,
    metadata: Optional[Dict[str, str]] = None,
) -> LabelResolver:
    return LabelResolver(
        environ=FakeSource(environ),
        app_engine=FakeSource(app_engine),
        metadata=FakeSource(metadata),
    )


def _get_or_create_provider() -> tuple[TracerProvider, InMemorySpanExporter]:
    """Get or create the global test provider."""
    global _provider, _exporter

    if _provider is None:
        _provider = TracerProvider(sampler=ALWAYS_ON)
        _exporter = InMemorySpanExporter()
        _provider.add_span_processor(SimpleSpanProcessor(_exporter))
        trace.set_tracer_provider(_provider)

    return _provider, _exporter


@pytest.fixture(autouse=True)
def reset_tracing():
    """Reset tracing state before each test."""
    _, exporter = _get_or_create_provider()
    exporter.clear()
    yield
    exporter.clear()


@pytest.fixture
def tracer_provider():
    """Get the test TracerProvider."""
    provider, _ = _get_or_create_provider()
    return provider


@pytest.fixture
def memory_exporter():
    """Get the in-memory span exporter for testing."""
    _, exporter = _get_or_create_provider()
    return exporter


@pytest.fixture
def tracer(tracer_provider):
    """Get a tracer instance."""
    return trace.get_tracer("test-tracer")


@pytest.fixture
def fake_source():
    """Factory for dict-backed sources."""
    return FakeSource


@pytest.fixture
def broken_source():
    """A source that raises on every read."""
    return BrokenSource()


@pytest.fixture
def resolver_factory():
    """Factory for LabelResolvers over fake sources."""
    return make_resolver
