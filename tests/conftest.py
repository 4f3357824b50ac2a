# tests\conftest.py
import pytest
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from userdemo.core.domain.models import User
from userdemo.core.services.calculator import Calculator
from userdemo.core.services.user_service import UserService
from userdemo.main import create_app
from userdemo.shared.container import container as app_container


@pytest.fixture(scope="function")
def mock_user_service():
    """Returns a strict-signature mock of the UserService."""
    return MagicMock(spec=UserService)


@pytest.fixture(scope="function")
def calculator_spy():
    """Returns a spy: a mock that delegates to a real Calculator unless stubbed."""
    return MagicMock(spec=Calculator, wraps=Calculator())


@pytest.fixture(scope="function")
def container(mock_user_service, calculator_spy):
    """
    The application container with the services replaced by the mocks above.
    Overrides are dropped after each test.
    """
    app_container.user_service.override(mock_user_service)
    app_container.calculator.override(calculator_spy)

    yield app_container

    app_container.user_service.reset_override()
    app_container.calculator.reset_override()


@pytest.fixture
def client(container):
    """
    Returns a FastAPI TestClient wired against the mocked container.
    """
    app = create_app()
    with TestClient(app) as c:
        yield c


@pytest.fixture
def real_client():
    """
    Returns a TestClient backed by the real services (no overrides).
    """
    app_container.user_service.reset_override()
    app_container.calculator.reset_override()
    app = create_app()
    with TestClient(app) as c:
        yield c


@pytest.fixture
def sample_user():
    return User(id=1, name="User1")
