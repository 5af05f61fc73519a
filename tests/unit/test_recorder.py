import logging
from datetime import datetime

from delegate_proxy.demo import IndexPath
from delegate_proxy.recorder import (
    CallbackRecorder,
    CallRecord,
    FanoutRecorder,
    LoggingRecorder,
    MemoryRecorder,
    NoopRecorder,
    format_arguments,
    format_value,
)


class Unprintable:
    def __repr__(self):
        raise RuntimeError("no repr for you")


class TestFormatValue:
    def test_index_path_prints_as_pair(self):
        assert format_value(IndexPath(3, 7)) == "{3, 7}"

    def test_integers_print_plainly(self):
        assert format_value(12) == "12"
        assert format_value(-1) == "-1"

    def test_bools_and_strings_use_repr(self):
        assert format_value(True) == "True"
        assert format_value("title") == "'title'"
        assert format_value(None) == "None"

    def test_failing_repr_falls_back(self):
        assert format_value(Unprintable()) == "<unprintable Unprintable>"

    def test_max_length_truncates(self):
        assert format_value("x" * 20, max_length=5) == "'xxxx..."
        assert format_value(123, max_length=5) == "123"


class TestFormatArguments:
    def test_positional_and_keyword(self):
        assert format_arguments((1, IndexPath(0, 2)), {"animated": False}) == "(1, {0, 2}, animated=False)"

    def test_skip_drops_leading_arguments(self):
        sender = object()
        assert format_arguments((sender, 4), skip=1) == "(4)"
        assert format_arguments((sender,), skip=1) == "()"

    def test_empty(self):
        assert format_arguments(()) == "()"


class TestCallRecord:
    def test_capture_snapshots_call(self):
        target = object()
        record = CallRecord.capture("number_of_rows", ["table", 2], None, target=target, skip=1)
        assert record.method == "number_of_rows"
        assert record.args == ("table", 2)
        assert record.kwargs == {}
        assert record.arguments == "(2)"
        assert record.target == "object"
        assert isinstance(record.timestamp, datetime)
        assert record.describe() == "number_of_rows(2)"

    def test_timestamp_is_optional(self):
        record = CallRecord.capture("f", (), {}, target=1, timestamp=False)
        assert record.timestamp is None


class TestRecorders:
    def _record(self, method="cell_for_row"):
        return CallRecord.capture(method, (IndexPath(0, 1),), {}, target=None, timestamp=False)

    def test_logging_recorder_writes_method_and_arguments(self, caplog):
        recorder = LoggingRecorder(logging.getLogger("tests.recorder"))
        with caplog.at_level(logging.INFO, logger="tests.recorder"):
            recorder.record(self._record())
        assert caplog.messages == ["cell_for_row({0, 1})"]

    def test_logging_recorder_level(self, caplog):
        recorder = LoggingRecorder(logging.getLogger("tests.recorder"), level=logging.DEBUG)
        with caplog.at_level(logging.DEBUG, logger="tests.recorder"):
            recorder.record(self._record())
        assert caplog.records[0].levelno == logging.DEBUG

    def test_memory_recorder(self):
        recorder = MemoryRecorder()
        recorder.record(self._record("a"))
        recorder.record(self._record("b"))
        assert recorder.methods() == ["a", "b"]
        assert len(recorder) == 2
        recorder.clear()
        assert recorder.records == []

    def test_fanout_preserves_order(self):
        first, second = MemoryRecorder(), MemoryRecorder()
        fanout = FanoutRecorder(first, second)
        fanout.record(self._record("a"))
        fanout.record(self._record("b"))
        assert first.methods() == ["a", "b"]
        assert second.methods() == ["a", "b"]

    def test_callback_recorder(self):
        seen = []
        CallbackRecorder(seen.append).record(self._record("a"))
        assert [record.method for record in seen] == ["a"]

    def test_noop_recorder_discards(self):
        assert NoopRecorder().record(self._record()) is None
