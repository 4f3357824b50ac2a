# userdemo\shared\container.py
from dependency_injector import containers, providers

from userdemo.adapters.api.user_controller import UserController
from userdemo.core.services.calculator import Calculator
from userdemo.core.services.user_service import UserService
from userdemo.shared.config import settings


class Container(containers.DeclarativeContainer):
    """
    Dependency Injection Container.

    Tests swap any provider for a mock with ``container.<provider>.override(...)``.
    """

    config = providers.Configuration(pydantic_settings=[settings])

    # Stateless services, one instance per process
    calculator = providers.Singleton(Calculator)
    user_service = providers.Singleton(UserService)

    # New controller per request, with the (possibly overridden) services injected
    user_controller = providers.Factory(
        UserController,
        user_service=user_service,
        calculator=calculator,
    )


container = Container()
