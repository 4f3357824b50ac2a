# userdemo\core\ports\user_service.py
from typing import Protocol

from userdemo.core.domain.models import User


class IUserService(Protocol):
    """
    Port for user lookups.
    Implementations:
    - UserService (synthesizes the user from its id, no storage)
    """

    def get_user_by_id(self, user_id: int) -> User:
        """
        Returns the user identified by ``user_id``.

        Args:
            user_id: Numeric identifier taken from the request path.

        Returns:
            A freshly built User.
        """
        ...
