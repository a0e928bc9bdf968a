import sys
import pytest

from semrange.settings import SETTINGS_ENV_VAR, loadSettings



def pytest_configure(config: pytest.Config) -> None:
    if sys.flags.optimize:
        raise RuntimeError("Assertions are disabled (optimize > 0)")



@pytest.fixture(autouse=True)
def isolatedSettings(tmp_path, monkeypatch):
    """Point settings at an empty per-test location so ~/.semrange never leaks in."""
    monkeypatch.setenv(SETTINGS_ENV_VAR, str(tmp_path / "semrange.json5"))
    loadSettings.cache_clear()
    yield
    loadSettings.cache_clear()
