# userdemo\core\domain\models.py
from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """
    A user as returned by the service layer.

    Immutable value object: it has no identity beyond its two fields and is
    created fresh for every lookup.
    """
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Numeric user identifier")
    name: str = Field(..., description="Display name")
