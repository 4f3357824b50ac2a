# userdemo\core\services\user_service.py
import structlog

from userdemo.core.domain.models import User

logger = structlog.get_logger()

NAME_PREFIX = "User"


class UserService:
    """
    Service: resolves a user by id.

    There is no backing store. The user is synthesized from the id
    (``User(id=7, name="User7")``) on every call.
    """

    def get_user_by_id(self, user_id: int) -> User:
        logger.info("user_lookup", user_id=user_id)
        return User(id=user_id, name=f"{NAME_PREFIX}{user_id}")
