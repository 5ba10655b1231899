"""Tests for the log file sink."""

from loguru import logger

from couple_journal.utils.logging_setup import setup_logging


def test_setup_logging_writes_to_file(tmp_path):
    log_file = setup_logging(tmp_path / "logs", level="INFO")
    logger.info("journal ready")
    logger.remove()

    assert log_file.parent == tmp_path / "logs"
    assert "journal ready" in log_file.read_text(encoding="utf-8")
