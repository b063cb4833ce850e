"""
Console Telemetry Infrastructure

Architectural Intent:
- OpenTelemetry integration for observability
- Request traces and counters for the orchestration API client
"""

from deployconsole.infrastructure.telemetry.otel_exporter import (
    OTELExporter,
    OTELConfig,
    create_exporter,
)

__all__ = [
    "OTELExporter",
    "OTELConfig",
    "create_exporter",
]
