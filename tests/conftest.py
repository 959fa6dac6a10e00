import pytest

from negative_cycles import logger


@pytest.fixture(autouse=True)
def _log_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(logger, "_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setattr(logger, "_STREAM", "stdout")
