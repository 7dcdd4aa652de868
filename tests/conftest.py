import pytest

from odesim.core.settings import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached per process; tests that set ODESIM_* env vars need a clean read."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
