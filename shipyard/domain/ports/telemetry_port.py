"""
Telemetry Port

Architectural Intent:
- Port interface for recording lifecycle operation traces and timings
- Implemented by the OpenTelemetry exporter
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class TelemetryPort(ABC):
    @abstractmethod
    def start_span(
        self, name: str, attributes: Optional[dict[str, str]] = None
    ) -> Optional[Any]:
        pass

    @abstractmethod
    def end_span(self, span: Any) -> None:
        pass

    @abstractmethod
    def record_operation(
        self, operation: str, address: str, success: bool, duration_ms: float
    ) -> None:
        pass
