"""Shared fixtures for pinentry-menu tests."""
import pytest

from pinentry_menu.logger import Logger


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests with no external programs")


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep config and log files out of the real home directory."""
    home = tmp_path / "pinentry-menu"
    monkeypatch.setenv("PINENTRY_MENU_HOME", str(home))
    monkeypatch.delenv("PINENTRY_DEBUG", raising=False)
    monkeypatch.delenv("PINENTRY_MENU_LOG_LEVEL", raising=False)
    monkeypatch.delenv("PINENTRY_USER_DATA", raising=False)
    
    # Reset singleton
    Logger._instance = None
    Logger._log_file = None
    Logger._log_level = None
    yield home
    Logger._instance = None
