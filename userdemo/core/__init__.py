# userdemo\core\__init__.py
"""
Core Domain Layer.

Business entities, services and the Ports (Protocols) the adapters depend on.
Nothing in here imports FastAPI or any other infrastructure.
"""
