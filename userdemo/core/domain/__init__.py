# userdemo\core\domain\__init__.py
"""
Domain Entities and Value Objects.
"""

from .models import User

__all__ = ["User"]
