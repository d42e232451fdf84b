"""Unit tests for tracing setup and recovery spans."""

from __future__ import annotations

from typing import Any, Iterator

import pytest
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode

from xa_xid.adapters.outbound import DBAPIPreparedXactSource
from xa_xid.domain.services import RecoveryService
from xa_xid.infrastructure import tracing
from xa_xid.infrastructure.config import ObservabilityConfig
from xa_xid.infrastructure.metrics import XidMetrics
from xa_xid.infrastructure.tracing import get_tracer, setup_tracing, trace_span
from xa_xid.ports.outbound import PREPARED_XACTS_QUERY, ResourceError


@pytest.fixture
def exporter(monkeypatch: pytest.MonkeyPatch) -> Iterator[InMemorySpanExporter]:
    """Route spans to memory and restore the module tracer afterwards."""
    monkeypatch.setattr(tracing, "_tracer", None)
    span_exporter = InMemorySpanExporter()
    setup_tracing(ObservabilityConfig(otel_service_name="xa-xid-tests"), exporter=span_exporter)
    yield span_exporter
    span_exporter.clear()


class FailingSource:
    def fetch_prepared(self, statement: str = PREPARED_XACTS_QUERY) -> list[Any]:
        raise ResourceError("connection lost")


@pytest.mark.unit
class TestSetupTracing:
    """Tests for setup_tracing()."""

    def test_returns_module_tracer(self, exporter: InMemorySpanExporter) -> None:
        """The configured tracer becomes the one get_tracer() hands out."""
        assert tracing._tracer is not None
        assert get_tracer() is tracing._tracer

    def test_service_resource(self, exporter: InMemorySpanExporter) -> None:
        """Spans carry the configured service name."""
        with trace_span("work"):
            pass

        [span] = exporter.get_finished_spans()
        assert span.resource.attributes["service.name"] == "xa-xid-tests"

    def test_trace_span_attributes(self, exporter: InMemorySpanExporter) -> None:
        """trace_span() names the span and sets the given attributes."""
        with trace_span("xid.decode", {"xid.tid": "5_Zw==_Yg=="}):
            pass

        [span] = exporter.get_finished_spans()
        assert span.name == "xid.decode"
        assert span.attributes["xid.tid"] == "5_Zw==_Yg=="


@pytest.mark.unit
class TestRecoverySpan:
    """Tests for the span emitted by RecoveryService.recover()."""

    def test_recover_span(
        self, exporter: InMemorySpanExporter, fake_connection: Any, metrics: XidMetrics
    ) -> None:
        """A recovery round trip records the statement and id counts."""
        RecoveryService(DBAPIPreparedXactSource(fake_connection), metrics=metrics).recover()

        [span] = exporter.get_finished_spans()
        assert span.name == "xid.recover"
        assert span.attributes["db.statement"] == PREPARED_XACTS_QUERY
        assert span.attributes["xid.count"] == 3
        assert span.attributes["xid.unparsed"] == 1

    def test_failed_recover_span(
        self, exporter: InMemorySpanExporter, metrics: XidMetrics
    ) -> None:
        """A failed round trip marks the span as an error without counts."""
        with pytest.raises(ResourceError):
            RecoveryService(FailingSource(), metrics=metrics).recover()

        [span] = exporter.get_finished_spans()
        assert span.status.status_code == StatusCode.ERROR
        assert "xid.count" not in span.attributes
