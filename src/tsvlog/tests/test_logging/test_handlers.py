# src/tsvlog/tests/test_logging/test_handlers.py
import io
import multiprocessing
import threading

import pytest

from tsvlog.core.logging import handlers
from tsvlog.core.logging.formatters import JsonFormatter
from tsvlog.core.logging.handlers import EchoHandler, StreamHandler
from tsvlog.core.logging.locking import FileLockError
from tsvlog.core.logging.levels import Severity
from tsvlog.exceptions import DestinationError, LogWriteError
from tsvlog.tests.test_fixtures.workers import append_lines


def read_lines(path):
    data = path.read_bytes()
    assert data.endswith(b"\n")
    return data.decode("utf-8").split("\n")[:-1]


def assert_well_formed(lines):
    for line in lines:
        fields = line.split("\t")
        assert len(fields) == 7, line
        assert fields[1] == "[INFO]"
        assert fields[3].startswith("[pid:")


def test_stream_handler_appends_to_path(log_path, make_entry):
    log_path.write_text("existing\n", encoding="utf-8")
    with StreamHandler(str(log_path)) as handler:
        handler.handle(make_entry(message="first"))
        handler.handle(make_entry(message="second"))

    lines = read_lines(log_path)
    assert lines[0] == "existing"
    assert [line.split("\t")[4] for line in lines[1:]] == ["first", "second"]


def test_stream_handler_creates_file_from_pathlike(log_path, make_entry):
    with StreamHandler(log_path) as handler:
        handler.handle(make_entry())
    assert len(read_lines(log_path)) == 1


def test_stream_handler_accepts_file_url(log_path, make_entry):
    with StreamHandler(f"file://{log_path}") as handler:
        handler.handle(make_entry())
    assert len(read_lines(log_path)) == 1


@pytest.mark.parametrize("destination", ["http://example.com/log", "", 42, None, object()])
def test_stream_handler_rejects_bad_destinations(destination):
    with pytest.raises(DestinationError):
        StreamHandler(destination)


def test_stream_handler_rejects_unopenable_path(tmp_path):
    # a directory cannot be opened for appending
    with pytest.raises(DestinationError) as excinfo:
        StreamHandler(tmp_path)
    assert isinstance(excinfo.value.__cause__, OSError)


def test_stream_handler_rejects_closed_stream():
    stream = io.StringIO()
    stream.close()
    with pytest.raises(DestinationError):
        StreamHandler(stream)


def test_external_stream_is_written_but_not_closed(make_entry):
    stream = io.StringIO()
    handler = StreamHandler(stream)
    handler.handle(make_entry(message="in memory"))
    handler.close()

    assert not stream.closed
    assert stream.getvalue().split("\t")[4] == "in memory"


def test_close_is_idempotent_and_later_writes_are_noops(log_path, make_entry):
    handler = StreamHandler(log_path)
    handler.handle(make_entry(message="before"))
    handler.close()
    handler.close()
    handler.handle(make_entry(message="after"))

    assert handler.closed
    assert [line.split("\t")[4] for line in read_lines(log_path)] == ["before"]


def test_handler_level_gate(make_entry):
    stream = io.StringIO()
    handler = StreamHandler(stream, level="error")
    handler.handle(make_entry(level=Severity.WARNING))
    handler.handle(make_entry(level=Severity.CRITICAL))

    assert stream.getvalue().count("\n") == 1
    assert "[CRITICAL]" in stream.getvalue()


def test_set_formatter_applies_to_next_write(make_entry):
    stream = io.StringIO()
    handler = StreamHandler(stream)
    handler.handle(make_entry())
    assert handler.set_formatter(JsonFormatter()) is handler
    handler.handle(make_entry())

    first, second = stream.getvalue().splitlines()
    assert first.startswith("2025-09-26 11:08:38.680075\t")
    assert second.startswith("{")
    assert isinstance(handler.get_formatter(), JsonFormatter)


def test_write_failure_raises_log_write_error(make_entry):
    class BrokenStream:
        name = "broken"

        def write(self, text):
            raise OSError(28, "No space left on device")

        def flush(self):
            pass

    handler = StreamHandler(BrokenStream())
    entry = make_entry(message="lost?")
    with pytest.raises(LogWriteError) as excinfo:
        handler.handle(entry)

    error = excinfo.value
    assert isinstance(error, IOError)
    assert error.entry is entry
    assert isinstance(error.__cause__, OSError)
    assert "broken" in error.message


def test_unlock_failure_does_not_replace_write_error(monkeypatch, make_entry):
    class BrokenFile:
        name = "broken"

        def fileno(self):
            return 99

        def write(self, text):
            raise OSError(28, "No space left on device")

        def flush(self):
            pass

    def failing_unlock(stream):
        raise FileLockError("unlock failed")

    monkeypatch.setattr(handlers, "acquire_lock", lambda stream: None)
    monkeypatch.setattr(handlers, "release_lock", failing_unlock)

    with pytest.raises(LogWriteError) as excinfo:
        StreamHandler(BrokenFile()).handle(make_entry())

    cause = excinfo.value.__cause__
    assert not isinstance(cause, FileLockError)
    assert cause.errno == 28


def test_unlock_failure_after_successful_write_is_logged(monkeypatch, log_path, make_entry, caplog):
    def failing_unlock(stream):
        raise FileLockError("unlock failed")

    monkeypatch.setattr(handlers, "release_lock", failing_unlock)

    with StreamHandler(log_path) as handler:
        handler.handle(make_entry(message="kept"))

    assert "kept" in log_path.read_text(encoding="utf-8")
    assert "Could not unlock" in caplog.text


def test_echo_handler_writes_to_stdout(capsys, make_entry):
    EchoHandler().handle(make_entry(message="to stdout"))
    out = capsys.readouterr().out
    assert out.count("\n") == 1
    assert out.split("\t")[4] == "to stdout"


def test_concurrent_threads_do_not_interleave(log_path):
    threads = [
        threading.Thread(target=append_lines, args=(str(log_path), f"t{n}", 25, 2048))
        for n in range(8)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    lines = read_lines(log_path)
    assert len(lines) == 8 * 25
    assert_well_formed(lines)


def test_shared_handler_across_threads(log_path, make_entry):
    handler = StreamHandler(log_path)

    def work():
        for _ in range(50):
            handler.handle(make_entry(message="y" * 4096))

    threads = [threading.Thread(target=work) for _ in range(6)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    handler.close()

    lines = read_lines(log_path)
    assert len(lines) == 6 * 50
    assert_well_formed(lines)


def test_concurrent_processes_do_not_interleave(log_path):
    processes = [
        multiprocessing.Process(target=append_lines, args=(str(log_path), f"p{n}", 50, 8192))
        for n in range(4)
    ]
    for process in processes:
        process.start()
    for process in processes:
        process.join(timeout=60)
        assert process.exitcode == 0

    lines = read_lines(log_path)
    assert len(lines) == 4 * 50
    assert_well_formed(lines)
