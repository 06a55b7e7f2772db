import sys
from unittest.mock import MagicMock, patch

from loguru import logger as loguru_logger

from fileops.logger import configure_logging, logger


def test_logger_depth_attribution():
    """
    Verify that SystemLogger attributes the record to the caller rather than
    the internal helper.
    """
    received_records = []

    def sink(message):
        received_records.append(message.record)

    handler_id = loguru_logger.add(sink, format="{message}")
    try:
        logger.info("Verifying depth")

        assert len(received_records) > 0
        record = received_records[0]
        assert "test_logger" in record["name"]
        assert record["function"] == "test_logger_depth_attribution"
        assert record["message"] == "Verifying depth"
    finally:
        loguru_logger.remove(handler_id)


def test_error_detail_is_appended():
    with patch("fileops.logger.loguru_logger.opt") as mock_opt:
        mock_logger = MagicMock()
        mock_opt.return_value = mock_logger

        logger.error("write_file failed for /x.txt", "disk on fire")

        mock_logger.log.assert_called_once_with("ERROR", "write_file failed for /x.txt - disk on fire")


def test_quiet_mode_suppresses_console(monkeypatch):
    monkeypatch.setenv("FILEOPS_QUIET", "true")
    with patch("fileops.logger.console") as mock_console:
        logger.warning("quiet please")
        logger.info("to the cli", to_cli=True)
    mock_console.print.assert_not_called()


def test_console_output_when_not_quiet(monkeypatch):
    monkeypatch.setenv("FILEOPS_QUIET", "false")
    with patch("fileops.logger.console") as mock_console:
        logger.info("file only")
        mock_console.print.assert_not_called()
        logger.warning("shown")
    mock_console.print.assert_called_once()


def test_configure_logging_writes_file(tmp_path):
    log_file = tmp_path / "fileops.log"
    configure_logging("INFO", str(log_file))
    try:
        logger.info("persisted line")
        logger.debug("filtered line")
        loguru_logger.complete()
        text = log_file.read_text()
    finally:
        loguru_logger.remove()
        loguru_logger.add(sys.stderr)

    assert "persisted line" in text
    assert "filtered line" not in text
