# userdemo\adapters\__init__.py
"""
Infrastructure Adapters.
"""
