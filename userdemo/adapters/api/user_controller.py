# userdemo\adapters\api\user_controller.py
import structlog

from userdemo.core.domain.models import User
from userdemo.core.ports.calculator import ICalculator
from userdemo.core.ports.user_service import IUserService
from userdemo.shared.telemetry import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)


class UserController:
    """
    Controller behind ``GET /users/{id}``.

    Touches the calculator first and then delegates to the user service.
    The order of these two calls is part of the contract the mocking
    examples verify.
    """

    def __init__(self, user_service: IUserService, calculator: ICalculator):
        self.user_service = user_service
        self.calculator = calculator

    def get_user_by_id(self, user_id: int) -> User:
        with tracer.start_as_current_span("controller.get_user_by_id") as span:
            span.set_attribute("app.user_id", user_id)

            probe = self.calculator.add(user_id, 1)
            logger.debug("calculator_probe", user_id=user_id, result=probe)

            return self.user_service.get_user_by_id(user_id)
