# userdemo\adapters\api\dependencies.py
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from userdemo.adapters.api.user_controller import UserController
from userdemo.core.ports.calculator import ICalculator
from userdemo.core.ports.user_service import IUserService
from userdemo.shared.container import Container


@inject
def get_user_controller(
    controller: UserController = Depends(Provide[Container.user_controller]),
) -> UserController:
    """Dependency to inject a request-scoped UserController (container-managed)."""
    return controller


@inject
def get_calculator(
    calculator: ICalculator = Depends(Provide[Container.calculator]),
) -> ICalculator:
    return calculator


@inject
def get_user_service(
    user_service: IUserService = Depends(Provide[Container.user_service]),
) -> IUserService:
    return user_service


@inject
def get_service_name(
    name: str = Depends(Provide[Container.config.APP_NAME]),
) -> str:
    return name
