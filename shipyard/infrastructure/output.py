"""
Console Output Sink

Architectural Intent:
- OutputSink used by the CLI
- stdout lines always print; raw command transcripts only when verbose
"""

import sys
from typing import Optional, TextIO
from shipyard.domain.ports.output_sink_port import OutputSink


class ConsoleOutputSink(OutputSink):
    def __init__(self, stream: Optional[TextIO] = None, show_preview: bool = False):
        self.stream = stream or sys.stdout
        self.show_preview = show_preview

    def _write(self, text: str) -> None:
        try:
            self.stream.write(text if text.endswith("\n") else f"{text}\n")
            self.stream.flush()
        except (OSError, ValueError):
            # Closed or broken stream; output is best effort
            pass

    def stdout(self, line: str) -> None:
        self._write(f"[*] {line}")

    def preview(self, output: str) -> None:
        if self.show_preview and output:
            self._write(output)
