# userdemo\__init__.py
"""
User Service Demo.

A deliberately small three-layer web service (Calculator, UserService,
UserController) laid out as Ports & Adapters. It mainly serves as the
fixture for the mocking examples in ``tests/mocking``.
"""

__version__ = "0.0.1"
