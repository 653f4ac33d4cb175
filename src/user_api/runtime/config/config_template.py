"""Configuration template substitution utilities."""

import os
import re
from pathlib import Path

import yaml
from loguru import logger
from pydantic_core import ValidationError

from src.user_api.runtime.config.config_data import ConfigData
from src.user_api.runtime.config.settings import EnvironmentVariables


_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")
# A YAML comment starts at '#' at line start or after whitespace
_COMMENT = re.compile(r"(?:^|(?<=\s))#")


def _resolve_placeholder(match: re.Match) -> str:
    var_expr = match.group(1)

    # ${VAR:-default}
    if ":-" in var_expr:
        var_name, default = var_expr.split(":-", 1)
        return os.getenv(var_name, default)

    # ${VAR:?message}
    if ":?" in var_expr:
        var_name, error_msg = var_expr.split(":?", 1)
        value = os.getenv(var_name)
        if value is None:
            raise ValueError(f"Required environment variable {var_name}: {error_msg}")
        return value

    value = os.getenv(var_expr)
    if value is None:
        raise ValueError(f"Required environment variable {var_expr} not set")
    return value


def substitute_env_vars(text: str) -> str:
    """
    Substitute environment variable placeholders in YAML text.

    Supports formats:
    - ${VAR_NAME} - required variable (raises error if missing)
    - ${VAR_NAME:-default} - optional with default value
    - ${VAR_NAME:?error_message} - required with custom error message

    Placeholders inside YAML comments are left as written.
    """
    lines = []
    for line in text.splitlines(keepends=True):
        comment = _COMMENT.search(line)
        if comment is None:
            lines.append(_PLACEHOLDER.sub(_resolve_placeholder, line))
        else:
            head, tail = line[: comment.start()], line[comment.start():]
            lines.append(_PLACEHOLDER.sub(_resolve_placeholder, head) + tail)
    return "".join(lines)


def apply_environment_overrides(env_vars: EnvironmentVariables) -> list[str]:
    """Copy ``<ENV>_NAME`` variables to ``NAME`` for the active environment.

    Returns the names of the variables that were set.
    """
    prefix = env_vars.env_prefix
    applied = []
    for var_name, var_value in list(os.environ.items()):
        if not var_name.startswith(prefix) or var_name == prefix:
            continue
        new_var_name = var_name[len(prefix):]
        os.environ[new_var_name] = var_value
        applied.append(new_var_name)
        logger.debug("Set environment variable {} from {}", new_var_name, var_name)
    return applied


def load_templated_yaml(
    file_path: Path, env_vars: EnvironmentVariables | None = None
) -> ConfigData:
    """
    Load a YAML file with environment variable substitution.

    Args:
        file_path: Path to the YAML file
        env_vars: Environment settings; read from the process environment if omitted

    Returns:
        Parsed YAML with environment variables substituted

    Raises:
        ValueError: If required environment variables are missing
        FileNotFoundError: If the YAML file doesn't exist
    """
    env_vars = env_vars or EnvironmentVariables()

    with open(file_path) as f:
        content = f.read()

    logger.info("Loading configuration for environment: {}", env_vars.environment)
    applied = apply_environment_overrides(env_vars)
    if applied:
        logger.info("Applied environment-specific overrides: {}", applied)

    # Substitute environment variables
    substituted_content = substitute_env_vars(content)

    # Parse YAML
    try:
        loaded = yaml.safe_load(substituted_content)
        if not loaded:
            raise ValueError("Failed to parse YAML")
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e

    # Validate and return as ConfigData
    try:
        # Extract the 'config' section from the YAML structure
        config_data = loaded.get("config", {}) or {}
        config = ConfigData(**config_data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e

    return config
