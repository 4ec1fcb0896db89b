"""Unit tests for CLI session logging."""

from datetime import datetime
from pathlib import Path

import pytest
from loguru import logger

from atscore import __version__
from atscore.utils.logger import environment_settings, session_log_dir, setup_logger


@pytest.fixture
def clean_sinks():
    yield
    logger.remove()


@pytest.mark.unit
class TestSessionLogDir:
    def test_named_by_command_and_time(self):
        path = session_log_dir("improve", Path("logs"), now=datetime(2025, 11, 14, 9, 5, 0))

        assert path == Path("logs/improve_20251114_090500")


@pytest.mark.unit
class TestSetupLogger:
    """Test sink installation and the provenance header."""

    def test_log_file_created_in_session_dir(self, tmp_path, clean_sinks):
        log_file = setup_logger("analyze", tmp_path / "session")

        assert log_file == tmp_path / "session" / "analyze.log"
        assert log_file.exists()

    def test_provenance_header(self, tmp_path, monkeypatch, clean_sinks):
        monkeypatch.setenv("ATSCORE_CACHE_TTL_SECONDS", "60")

        log_file = setup_logger("compare", tmp_path, extra_provenance={"Job": "job.txt"})
        content = log_file.read_text()

        assert f"atscore {__version__}: compare" in content
        assert "ATSCORE_CACHE_TTL_SECONDS=60" in content
        assert "Job: job.txt" in content

    def test_debug_records_reach_file(self, tmp_path, clean_sinks):
        log_file = setup_logger("keywords", tmp_path)

        logger.debug("[target] matched 3/5 job keywords")

        assert "[target] matched 3/5 job keywords" in log_file.read_text()


@pytest.mark.unit
def test_environment_settings_filtered(monkeypatch):
    monkeypatch.setenv("ATSCORE_LOG_DIR", "/tmp/ats-logs")
    monkeypatch.setenv("UNRELATED_SETTING", "x")

    settings = environment_settings()

    assert settings["ATSCORE_LOG_DIR"] == "/tmp/ats-logs"
    assert "UNRELATED_SETTING" not in settings
