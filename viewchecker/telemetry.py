"""
Azure Application Insights telemetry via OpenTelemetry.

Only aggregate numbers leave the process: never page content,
never the list of exceptions, never operator reasons.
"""
import logging
from typing import Optional

from azure.monitor.opentelemetry import configure_azure_monitor
from opentelemetry.trace import get_current_span

from viewchecker.config import load_settings

logger = logging.getLogger("viewchecker.telemetry")

VIEWPORTS = ("desktop", "tablet", "mobile")


def init_telemetry(connection_string: Optional[str] = None) -> bool:
    """
    Configures the Azure Monitor exporter. Returns False (telemetry
    disabled) when no connection string is configured, e.g. locally and in tests.
    """
    connection_string = connection_string or load_settings().telemetry_connection_string
    if not connection_string:
        return False

    configure_azure_monitor(connection_string=connection_string)
    logger.info("Azure Monitor telemetry configured")
    return True


def emit_analysis_telemetry(
    analysis_latency_ms: int,
    overall_score: int,
    viewport: str,
    exceptions_applied: bool,
):
    """Emits the single analysis event on the current span, if any."""
    assert isinstance(analysis_latency_ms, int), "analysis_latency_ms must be int"
    assert isinstance(overall_score, int), "overall_score must be int"
    assert viewport in VIEWPORTS, f"viewport must be one of {VIEWPORTS}, got {viewport}"
    assert isinstance(exceptions_applied, bool), "exceptions_applied must be bool"

    span = get_current_span()
    if not span:
        return

    span.add_event(
        name="viewchecker.analysis",
        attributes={
            "analysis_latency_ms": analysis_latency_ms,
            "overall_score": overall_score,
            "viewport": viewport,
            "exceptions_applied": exceptions_applied,
        },
    )


def emit_exception_telemetry(exception: Exception):
    """Only the exception class name is recorded."""
    span = get_current_span()
    if not span:
        return

    span.add_event(
        name="viewchecker.exception",
        attributes={"exception_type": type(exception).__name__},
    )
