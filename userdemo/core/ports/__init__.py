# userdemo\core\ports\__init__.py
"""
Core Ports (Interfaces).

Protocols the API adapter talks to. Tests substitute them with mocks built
from the concrete services.
"""

from .calculator import ICalculator
from .user_service import IUserService

__all__ = [
    "ICalculator",
    "IUserService",
]
