# userdemo\core\services\__init__.py
"""
Core Services.

Concrete implementations of the Ports in ``userdemo.core.ports``.
"""

from .calculator import Calculator
from .user_service import UserService

__all__ = [
    "Calculator",
    "UserService",
]
