# SPDX-FileCopyrightText: 2026 The Cloudlog Authors
# SPDX-License-Identifier: Apache-2.0

"""Tests for enable(), disable() and the bootstrap state accessors."""

from __future__ import annotations

import logging
import os
from unittest import mock

import pytest

from cloudlog.processors.enhancers import LabelLoggingEnhancer, TraceLoggingEnhancer
from cloudlog.sdk import bootstrap
from cloudlog.sdk.config import CloudlogConfig
from cloudlog.sdk.logging_filter import MonitoredResourceFilter


def no_metadata():
    return mock.patch("urllib.request.urlopen", side_effect=OSError("unreachable"))


@pytest.fixture(autouse=True)
def reset_bootstrap():
    bootstrap.disable()
    yield
    bootstrap.disable()


@pytest.fixture
def target_logger():
    test_logger = logging.getLogger("cloudlog.tests.bootstrap")
    handler = logging.NullHandler()
    test_logger.addHandler(handler)
    yield test_logger
    test_logger.removeHandler(handler)


def _filters(test_logger):
    return [f for h in test_logger.handlers for f in h.filters if isinstance(f, MonitoredResourceFilter)]


class _RecordingHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


class TestEnable:
    """Tests for enable()."""

    def test_global_resource(self, target_logger):
        with mock.patch.dict(os.environ, {}, clear=True), no_metadata():
            assert bootstrap.enable(project_id="proj", target_logger=target_logger) is True

        assert bootstrap.is_enabled()
        resource = bootstrap.get_resource()
        assert resource.type == "global"
        assert dict(resource.labels) == {"project_id": "proj"}
        assert bootstrap.get_enhancers() == []
        assert len(_filters(target_logger)) == 1

    def test_gae_flex_enhancers(self, target_logger):
        env = {"GAE_INSTANCE": "aef-1", "GAE_SERVICE": "default", "GAE_VERSION": "v1"}
        with mock.patch.dict(os.environ, env, clear=True), no_metadata():
            assert bootstrap.enable(project_id="proj", target_logger=target_logger)

        assert bootstrap.get_resource().type == "gae_app"
        enhancers = bootstrap.get_enhancers()
        assert [type(e) for e in enhancers] == [LabelLoggingEnhancer, TraceLoggingEnhancer]
        assert _filters(target_logger)[0].enhancers == enhancers

    def test_explicit_resource_type(self, target_logger):
        with mock.patch.dict(os.environ, {"KUBERNETES_SERVICE_HOST": "10.0.0.1"}, clear=True), no_metadata():
            bootstrap.enable(project_id="proj", resource_type="global", target_logger=target_logger)

        assert bootstrap.get_resource().type == "global"

    def test_auto_detect_off_gives_global(self, target_logger):
        config = CloudlogConfig(project_id="proj", auto_detect_resources=False)
        with mock.patch.dict(os.environ, {"KUBERNETES_SERVICE_HOST": "10.0.0.1"}, clear=True), no_metadata():
            bootstrap.enable(config=config, target_logger=target_logger)

        assert bootstrap.get_resource().type == "global"
        assert bootstrap.get_config() is config

    def test_project_from_env(self, target_logger):
        with mock.patch.dict(os.environ, {"GOOGLE_CLOUD_PROJECT": "env-proj"}, clear=True), no_metadata():
            assert bootstrap.enable(target_logger=target_logger)

        assert bootstrap.get_resource().labels["project_id"] == "env-proj"

    def test_missing_project_fails(self, target_logger, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with mock.patch.dict(os.environ, {}, clear=True):
            assert bootstrap.enable(target_logger=target_logger) is False
        assert not bootstrap.is_enabled()

    def test_second_enable_returns_false(self, target_logger):
        with mock.patch.dict(os.environ, {}, clear=True), no_metadata():
            assert bootstrap.enable(project_id="proj", target_logger=target_logger) is True
            assert bootstrap.enable(project_id="proj", target_logger=target_logger) is False
        assert len(_filters(target_logger)) == 1

    def test_logger_without_handlers_gets_stream_handler(self):
        bare = logging.getLogger("cloudlog.tests.bare")
        with mock.patch.dict(os.environ, {}, clear=True), no_metadata():
            bootstrap.enable(project_id="proj", target_logger=bare)

        assert len(bare.handlers) == 1
        assert isinstance(bare.handlers[0], logging.StreamHandler)
        assert len(_filters(bare)) == 1
        bootstrap.disable()
        assert bare.handlers == []

    def test_child_logger_records_are_stamped(self):
        parent = logging.getLogger("cloudlog.tests.parent")
        parent.propagate = False
        env = {"GAE_INSTANCE": "aef-1", "GAE_SERVICE": "default", "GAE_VERSION": "v1"}
        with mock.patch.dict(os.environ, env, clear=True), no_metadata():
            bootstrap.enable(project_id="proj", target_logger=parent)

        recorder = _RecordingHandler()
        parent.addHandler(recorder)
        try:
            logging.getLogger("cloudlog.tests.parent.child").warning("hello")
        finally:
            parent.removeHandler(recorder)
            parent.propagate = True

        (record,) = recorder.records
        assert record.resource is bootstrap.get_resource()
        assert record.labels == {"appengine.googleapis.com/instance_name": "aef-1"}

    def test_root_handlers_stamp_child_records(self, caplog):
        env = {"GAE_INSTANCE": "aef-1"}
        with mock.patch.dict(os.environ, env, clear=True), no_metadata():
            bootstrap.enable(project_id="proj")

        logging.getLogger("cloudlog.tests.root.child").warning("hello")

        record = caplog.records[-1]
        assert record.resource.type == "gae_app"
        assert record.labels["appengine.googleapis.com/instance_name"] == "aef-1"

    def test_handlerless_root_stamps_child_records(self):
        root = logging.getLogger()
        recorder = _RecordingHandler()
        env = {"GAE_INSTANCE": "aef-1"}
        with mock.patch.object(root, "handlers", []):
            with mock.patch.dict(os.environ, env, clear=True), no_metadata():
                assert bootstrap.enable(project_id="proj")
            root.addHandler(recorder)
            logging.getLogger("app.module").warning("hello")
            bootstrap.disable()
            assert root.handlers == [recorder]

        (record,) = recorder.records
        assert record.resource.type == "gae_app"
        assert record.labels == {"appengine.googleapis.com/instance_name": "aef-1"}

    def test_config_file(self, tmp_path, target_logger):
        yaml_file = tmp_path / "cloudlog.yaml"
        yaml_file.write_text("project:\n  id: file-proj\nresource:\n  type: global\n")

        with mock.patch.dict(os.environ, {}, clear=True), no_metadata():
            bootstrap.enable(config_file=str(yaml_file), target_logger=target_logger)

        assert bootstrap.get_resource().labels["project_id"] == "file-proj"


class TestSpanEnrichment:
    """Tests for span enricher registration."""

    def test_registers_on_sdk_provider(self, target_logger, tracer, memory_exporter):
        env = {"GAE_INSTANCE": "aef-1"}
        with mock.patch.dict(os.environ, env, clear=True), no_metadata():
            bootstrap.enable(project_id="proj", target_logger=target_logger)

        with tracer.start_as_current_span("request"):
            pass

        attrs = dict(memory_exporter.get_finished_spans()[0].attributes)
        assert attrs["appengine.googleapis.com/instance_name"] == "aef-1"

    def test_disable_stops_span_labels(self, target_logger, tracer, memory_exporter):
        with mock.patch.dict(os.environ, {"GAE_INSTANCE": "aef-1"}, clear=True), no_metadata():
            bootstrap.enable(project_id="proj", target_logger=target_logger)
        bootstrap.disable()

        with tracer.start_as_current_span("request"):
            pass

        attrs = dict(memory_exporter.get_finished_spans()[0].attributes or {})
        assert "appengine.googleapis.com/instance_name" not in attrs

    def test_enrich_spans_off(self, target_logger, tracer, memory_exporter):
        config = CloudlogConfig(project_id="proj", enrich_spans=False)
        with mock.patch.dict(os.environ, {"GAE_INSTANCE": "aef-2"}, clear=True), no_metadata():
            bootstrap.enable(config=config, target_logger=target_logger)

        with tracer.start_as_current_span("request"):
            pass

        attrs = dict(memory_exporter.get_finished_spans()[0].attributes or {})
        assert attrs.get("appengine.googleapis.com/instance_name") != "aef-2"


class TestDisable:
    """Tests for disable()."""

    def test_removes_filter_and_state(self, target_logger):
        with mock.patch.dict(os.environ, {}, clear=True), no_metadata():
            bootstrap.enable(project_id="proj", target_logger=target_logger)
        bootstrap.disable()

        assert not bootstrap.is_enabled()
        assert bootstrap.get_config() is None
        assert bootstrap.get_resource() is None
        assert bootstrap.get_enhancers() == []
        assert _filters(target_logger) == []

    def test_disable_when_not_enabled(self):
        bootstrap.disable()
        assert not bootstrap.is_enabled()
