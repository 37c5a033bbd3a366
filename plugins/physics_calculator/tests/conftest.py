import pytest

from app import create_app
from plugins.physics_calculator.core import get_session_store


@pytest.fixture(autouse=True)
def _reset_sessions():
    get_session_store().clear()
    yield
    get_session_store().clear()


@pytest.fixture
def app():
    return create_app("TestingConfig")


@pytest.fixture
def client(app):
    return app.test_client()
