# userdemo\adapters\api\__init__.py
"""
REST API Adapter.

HTTP entry point built on FastAPI:
- It depends on `userdemo.core` (Services & Models).
- It receives its collaborators from `userdemo.shared.container`.
- It does NOT contain business logic.
"""

from .user_controller import UserController

__all__ = ["UserController"]
