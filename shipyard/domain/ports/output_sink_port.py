"""
Output Sink Port

Architectural Intent:
- Capability supplied by the caller to receive operation output
- `stdout` is the human-facing stream, `preview` the raw command transcript
- Fire-and-forget: implementations must never raise
"""

from abc import ABC, abstractmethod


class OutputSink(ABC):
    @abstractmethod
    def stdout(self, line: str) -> None:
        pass

    @abstractmethod
    def preview(self, output: str) -> None:
        pass
