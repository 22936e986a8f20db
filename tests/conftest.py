"""
Presenter Test Configuration and Fixtures
"""
import pytest
from faker import Faker

from presenter import FlashStore, MemorySessionStore, ViewRenderer


PRESENTER_ENV = [
    "PRESENTER_FLASH_KEY",
    "PRESENTER_TEMPLATE_DIR",
    "PRESENTER_COMPILE_DIR",
    "PRESENTER_CONFIG_DIR",
    "PRESENTER_FORCE_COMPILE",
    "PRESENTER_AUTO_ESCAPE",
    "PRESENTER_JSON_INDENT",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep host environment variables out of the tests."""
    for name in PRESENTER_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def faker():
    """Faker instance for generating test data."""
    return Faker()


@pytest.fixture
def session():
    """Plain dict standing in for a host session."""
    return {}


@pytest.fixture
def flash(session):
    """Flash store over the session fixture."""
    return FlashStore(session)


@pytest.fixture
def session_store():
    """In-memory session store."""
    return MemorySessionStore()


@pytest.fixture
def template_dir(tmp_path):
    """Directory holding test templates."""
    path = tmp_path / "templates"
    path.mkdir()
    return path


@pytest.fixture
def renderer(template_dir):
    """Renderer pointed at the template directory."""
    return ViewRenderer(
        request={"HTTP_HOST": "example.com"},
        engine_options={"template_dir": str(template_dir)},
    )


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
