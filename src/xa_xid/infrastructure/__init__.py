"""Infrastructure layer - cross-cutting concerns."""

from xa_xid.infrastructure.config import Config, get_config
from xa_xid.infrastructure.logging import get_logger, setup_logging
from xa_xid.infrastructure.metrics import XidMetrics, get_metrics, setup_metrics
from xa_xid.infrastructure.tracing import get_tracer, setup_tracing, trace_span

__all__ = [
    "Config",
    "get_config",
    "setup_logging",
    "get_logger",
    "setup_metrics",
    "get_metrics",
    "XidMetrics",
    "setup_tracing",
    "get_tracer",
    "trace_span",
]
