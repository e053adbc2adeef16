import pytest

from mazechase.config import Config


@pytest.fixture(autouse=True)
def default_output_settings(monkeypatch):
    """Keep console assertions independent of the caller's environment."""
    monkeypatch.setattr(Config, "LOG_LEVEL", "INFO")
    monkeypatch.setattr(Config, "DEBUG", False)
