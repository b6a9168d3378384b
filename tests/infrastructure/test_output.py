"""Tests for ConsoleOutputSink."""

import io
from shipyard.infrastructure.output import ConsoleOutputSink


class TestConsoleOutputSink:
    def test_stdout_prefixed(self):
        stream = io.StringIO()
        ConsoleOutputSink(stream).stdout("deploying")
        assert stream.getvalue() == "[*] deploying\n"

    def test_preview_hidden_by_default(self):
        stream = io.StringIO()
        ConsoleOutputSink(stream).preview("sudo docker images\n")
        assert stream.getvalue() == ""

    def test_preview_shown_when_enabled(self):
        stream = io.StringIO()
        sink = ConsoleOutputSink(stream, show_preview=True)
        sink.preview("sudo docker images\n")
        sink.preview("")
        assert stream.getvalue() == "sudo docker images\n"

    def test_closed_stream_ignored(self):
        stream = io.StringIO()
        stream.close()
        ConsoleOutputSink(stream).stdout("deploying")
