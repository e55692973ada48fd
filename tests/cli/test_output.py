"""Tests for CLI output helpers and logging setup."""

import io
import logging

import pytest

from sellercsv.cli.output import ProgressIndicator, configure_logging, handle_error
from sellercsv.core.exceptions import ReaderError


class FakeTTY(io.StringIO):
    def isatty(self) -> bool:
        return True


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestProgressIndicator:
    def test_disabled_when_not_a_tty(self, capsys) -> None:
        stream = io.StringIO()
        progress = ProgressIndicator(stream=stream)

        progress.start("Processing")
        progress.update(0.5)
        progress.success("Done")

        assert stream.getvalue() == ""
        assert capsys.readouterr().out == "Done\n"

    def test_tty_output(self, capsys) -> None:
        stream = FakeTTY()
        progress = ProgressIndicator(stream=stream)

        progress.start("Processing acos.csv")
        progress.update(0.25)
        progress.success("Done")

        assert stream.getvalue() == (
            "Processing acos.csv... \rProcessing acos.csv...  25.0% ✓\n"
        )

    def test_quiet(self) -> None:
        stream = FakeTTY()
        progress = ProgressIndicator(enabled=False, stream=stream)
        progress.start("Processing")
        assert stream.getvalue() == ""

    def test_error(self, capsys) -> None:
        ProgressIndicator(stream=io.StringIO()).error("boom")
        assert capsys.readouterr().err == "Error: boom\n"


class TestHandleError:
    def test_error_code_and_context(self, capsys) -> None:
        handle_error(ReaderError("Input file not found", file_path="a.csv"))

        err = capsys.readouterr().err
        assert "Error [READ_001]: Input file not found" in err
        assert "  file_path: a.csv" in err
        assert "Stack trace" not in err

    def test_plain_exception(self, capsys) -> None:
        handle_error(RuntimeError("unexpected"), verbose=True)
        err = capsys.readouterr().err
        assert err.startswith("Error: unexpected")
        assert "Stack trace" in err


class TestConfigureLogging:
    @pytest.mark.parametrize("level", ["debug", "INFO", "warning", "error"])
    def test_levels(self, level) -> None:
        configure_logging(level)
        assert logging.getLogger().level == getattr(logging, level.upper())

    def test_invalid_level(self) -> None:
        with pytest.raises(ValueError, match="Invalid log level"):
            configure_logging("verbose")

    def test_log_file(self, tmp_path) -> None:
        log_file = tmp_path / "nested" / "sellercsv.log"
        configure_logging("info", log_file)

        logging.getLogger("sellercsv.test").info("hello from the test")
        for handler in logging.getLogger().handlers:
            handler.flush()

        content = log_file.read_text()
        assert "INFO sellercsv.test: hello from the test" in content
