"""User API service.

A FastAPI service exposing CRUD endpoints for the User resource, backed by a
SQLModel repository and configured through config.yaml.
"""

__version__ = "0.1.0"
