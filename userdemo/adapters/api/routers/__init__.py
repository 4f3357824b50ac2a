# userdemo\adapters\api\routers\__init__.py
"""
API Route Definitions.

- `users`: user lookup (`GET /users/{id}`).
- `health`: liveness and readiness probes.
"""

from .health import router as health_router
from .users import router as users_router

__all__ = [
    "health_router",
    "users_router",
]
