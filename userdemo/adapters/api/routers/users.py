# userdemo\adapters\api\routers\users.py
from fastapi import APIRouter, Depends, Path, status

from userdemo.adapters.api.dependencies import get_user_controller
from userdemo.adapters.api.user_controller import UserController
from userdemo.core.domain.models import User

router = APIRouter(prefix="/users", tags=["Users"])


@router.get(
    "/{user_id}",
    response_model=User,
    status_code=status.HTTP_200_OK,
    summary="Get a user by id",
)
def get_user_by_id(
    user_id: int = Path(..., description="Numeric user identifier"),
    controller: UserController = Depends(get_user_controller),
) -> User:
    """
    Returns the user as JSON: `{"id": 1, "name": "User1"}`.

    A non-numeric id is rejected by request validation (422).
    """
    return controller.get_user_by_id(user_id)
