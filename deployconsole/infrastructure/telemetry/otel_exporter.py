"""
OpenTelemetry Exporter for the deployment console

Architectural Intent:
- Exports client request telemetry to OTLP-compatible backends
- One span and one counter sample per orchestration API operation
- Without a configured endpoint the API-level no-op providers are used and
  only the most recent samples are kept locally

Security:
- Endpoint defaults to empty string (must be explicitly configured)
- Non-localhost http:// endpoints rejected unless insecure=True
- Validation in __post_init__ prevents accidental plaintext export
"""

from __future__ import annotations
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, UTC
from typing import Any, Iterator, Optional
from urllib.parse import urlparse
import logging

from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Status, StatusCode

logger = logging.getLogger(__name__)

REQUESTS_METRIC = "deployconsole.client.requests"
BUFFER_LIMIT = 256


@dataclass
class OTELConfig:
    endpoint: str = ""
    service_name: str = "deployconsole"
    environment: str = "development"
    insecure: bool = False

    def __post_init__(self) -> None:
        if self.endpoint:
            parsed = urlparse(self.endpoint)
            is_localhost = parsed.hostname in ("localhost", "127.0.0.1", "::1")
            if parsed.scheme == "http" and not is_localhost and not self.insecure:
                raise ValueError(
                    f"Non-localhost HTTP endpoint '{self.endpoint}' requires "
                    "insecure=True or use https://. "
                    "Set insecure=True to explicitly allow plaintext export."
                )


class OTELExporter:
    """
    OpenTelemetry exporter for orchestration API calls.

    Supports:
    - OTLP gRPC trace export
    - OTLP gRPC metric export
    """

    def __init__(
        self, config: Optional[OTELConfig] = None, buffer_limit: int = BUFFER_LIMIT
    ):
        self.config = config or OTELConfig()
        self._initialized = False
        # Most recent samples only; the OTel counter carries the totals.
        self._metrics_buffer: deque[dict[str, Any]] = deque(maxlen=buffer_limit)
        self._tracer_provider: Optional[TracerProvider] = None
        self._meter_provider: Optional[MeterProvider] = None
        self._tracer = trace.get_tracer(__name__)
        self._counter = metrics.get_meter(__name__).create_counter(
            REQUESTS_METRIC, unit="1", description="Orchestration API requests"
        )

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        """Set up SDK providers and OTLP exporters when an endpoint is configured."""
        if not self.config.endpoint:
            logger.info("OTEL endpoint not configured, telemetry disabled")
            return

        resource = Resource(
            attributes={
                SERVICE_NAME: self.config.service_name,
                "environment": self.config.environment,
            }
        )

        self._tracer_provider = TracerProvider(resource=resource)
        self._tracer_provider.add_span_processor(
            BatchSpanProcessor(
                OTLPSpanExporter(
                    endpoint=self.config.endpoint, insecure=self.config.insecure
                )
            )
        )
        metric_reader = PeriodicExportingMetricReader(
            OTLPMetricExporter(
                endpoint=self.config.endpoint, insecure=self.config.insecure
            )
        )
        self._meter_provider = MeterProvider(
            resource=resource, metric_readers=[metric_reader]
        )

        self._tracer = self._tracer_provider.get_tracer(__name__)
        self._counter = self._meter_provider.get_meter(__name__).create_counter(
            REQUESTS_METRIC, unit="1", description="Orchestration API requests"
        )
        self._initialized = True
        logger.info("OTEL export enabled to %s", self.config.endpoint)

    @property
    def buffered(self) -> list[dict[str, Any]]:
        return list(self._metrics_buffer)

    def record_request(self, operation: str, outcome: str, namespace: str = "") -> None:
        """Record one orchestration API request."""
        attributes = {"operation": operation, "outcome": outcome}
        if namespace:
            attributes["namespace"] = namespace
        self._metrics_buffer.append(
            {
                "name": REQUESTS_METRIC,
                "value": 1,
                "attributes": attributes,
                "timestamp": datetime.now(UTC).isoformat(),
            }
        )
        self._counter.add(1, attributes=attributes)

    @contextmanager
    def span(
        self, name: str, attributes: Optional[dict[str, Any]] = None
    ) -> Iterator[Any]:
        """Wrap a request in a tracing span."""
        with self._tracer.start_as_current_span(name, attributes=attributes or {}) as span:
            yield span

    @staticmethod
    def mark_failed(span: Any, reason: str) -> None:
        span.set_status(Status(StatusCode.ERROR, reason))

    def shutdown(self) -> None:
        """Flush and shut down SDK providers."""
        if self._tracer_provider is not None:
            self._tracer_provider.shutdown()
        if self._meter_provider is not None:
            self._meter_provider.shutdown()
        exported = len(self._metrics_buffer)
        self._metrics_buffer.clear()
        if exported:
            logger.debug("Flushed %d buffered metrics", exported)
        self._initialized = False


def create_exporter(
    endpoint: Optional[str] = None,
    insecure: bool = False,
    service_name: str = "deployconsole",
) -> OTELExporter:
    """Factory function to create OTEL exporter."""
    config = OTELConfig(
        endpoint=endpoint or "",
        service_name=service_name,
        insecure=insecure,
    )
    exporter = OTELExporter(config)
    exporter.initialize()
    return exporter
