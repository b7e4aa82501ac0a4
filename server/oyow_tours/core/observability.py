"""Observability setup for OpenTelemetry, metrics, and structured logging."""

import logging
import sys

import structlog
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.pymongo import PymongoInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, generate_latest

from .config import settings

SERVICE_NAME = "oyow-tours-api"

# Prometheus metrics
REGISTRY = CollectorRegistry()

REQUEST_COUNT = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status_code'],
    registry=REGISTRY
)

REQUEST_DURATION = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    registry=REGISTRY
)

# Business metrics
CATALOG_FALLBACKS = Counter(
    'tour_catalog_fallbacks_total',
    'Tour listings served from the static catalog',
    ['reason'],
    registry=REGISTRY
)

BOOKINGS_CREATED = Counter(
    'bookings_created_total',
    'Bookings accepted, split by whether they reached the store',
    ['saved'],
    registry=REGISTRY
)

CONTACT_SUBMISSIONS = Counter(
    'contact_submissions_total',
    'Contact submissions accepted, split by whether they reached the store',
    ['saved'],
    registry=REGISTRY
)

SOS_ALERTS = Counter(
    'sos_alerts_total',
    'SOS events received',
    ['channel'],
    registry=REGISTRY
)

RELAY_CONNECTIONS = Gauge(
    'relay_connections_active',
    'Currently connected realtime relay clients',
    registry=REGISTRY
)


def _add_trace_context(logger, method_name, event_dict):
    """Add trace context to log events."""
    span = trace.get_current_span()
    if span and span.is_recording():
        ctx = span.get_span_context()
        event_dict['trace_id'] = format(ctx.trace_id, '032x')
        event_dict['span_id'] = format(ctx.span_id, '016x')
    return event_dict


def _add_extra_fields(logger, method_name, event_dict):
    """Lift ``extra={...}`` attributes of stdlib records into the event."""
    record = event_dict.get("_record")
    if record is not None:
        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_ATTRS and not key.startswith("_"):
                event_dict.setdefault(key, value)
    return event_dict


_RESERVED_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime", "color_message"}


def setup_structured_logging(log_level: str = settings.log_level) -> None:
    """
    Configure structlog and route stdlib logging through it.

    Modules log with ``logging.getLogger(__name__)`` and ``extra={...}``;
    the extra attributes end up as keys of the rendered event.
    """
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        _add_trace_context,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    renderer = structlog.dev.ConsoleRenderer() if settings.debug else structlog.processors.JSONRenderer()

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level)
        ),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors + [_add_extra_fields],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(log_level)


def setup_tracing(app_name: str = SERVICE_NAME):
    """Setup OpenTelemetry tracing."""
    resource = Resource.create({
        "service.name": app_name,
        "service.version": "1.0.0",
        "environment": settings.environment,
    })

    provider = TracerProvider(resource=resource)
    if settings.otlp_endpoint:
        provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.otlp_endpoint)))
    trace.set_tracer_provider(provider)

    return trace.get_tracer(__name__)


def instrument_fastapi(app):
    """Instrument FastAPI with OpenTelemetry."""
    FastAPIInstrumentor.instrument_app(app, excluded_urls="metrics")


def instrument_pymongo():
    """Instrument PyMongo (and motor, which drives it) with OpenTelemetry."""
    instrumentor = PymongoInstrumentor()
    if not instrumentor.is_instrumented_by_opentelemetry:
        instrumentor.instrument()


class MetricsCollector:
    """Collector for business metrics."""

    @staticmethod
    def record_catalog_fallback(reason: str):
        """Record a tour listing served from the static catalog."""
        CATALOG_FALLBACKS.labels(reason=reason).inc()

    @staticmethod
    def record_booking(saved: bool):
        """Record an accepted booking."""
        BOOKINGS_CREATED.labels(saved=str(saved).lower()).inc()

    @staticmethod
    def record_contact(saved: bool):
        """Record an accepted contact submission."""
        CONTACT_SUBMISSIONS.labels(saved=str(saved).lower()).inc()

    @staticmethod
    def record_sos(channel: str):
        """Record an SOS event from the given channel (http or relay)."""
        SOS_ALERTS.labels(channel=channel).inc()

    @staticmethod
    def set_relay_connections(count: int):
        """Set the number of connected relay clients."""
        RELAY_CONNECTIONS.set(count)

    @staticmethod
    def record_request(method: str, endpoint: str, status_code: int, duration_seconds: float):
        """Record a completed HTTP request."""
        REQUEST_COUNT.labels(method=method, endpoint=endpoint, status_code=str(status_code)).inc()
        REQUEST_DURATION.labels(method=method, endpoint=endpoint).observe(duration_seconds)


def get_prometheus_metrics():
    """Get Prometheus metrics for the /metrics endpoint."""
    return generate_latest(REGISTRY)


# Global metrics collector instance
metrics_collector = MetricsCollector()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger bound to ``name``."""
    return structlog.get_logger(name)
