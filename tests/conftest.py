"""Test configuration and fixtures for the User API."""

import os
from pathlib import Path

# Must run before the application configuration is first loaded
os.environ["APP_ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CONFIG_FILE"] = str(Path(__file__).resolve().parent.parent / "config.yaml")
os.environ.pop("LOG_FILE", None)

from tests.fixtures import *  # noqa: E402,F401,F403
