"""遥测事件上报。"""

from .base import TelemetryEvent, TelemetrySink
from .client import TelemetryClient
from .sinks import HttpTelemetrySink, LoggingTelemetrySink, MemoryTelemetrySink, NullTelemetrySink

__all__ = [
    "HttpTelemetrySink",
    "LoggingTelemetrySink",
    "MemoryTelemetrySink",
    "NullTelemetrySink",
    "TelemetryClient",
    "TelemetryEvent",
    "TelemetrySink",
]
