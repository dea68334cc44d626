"""Configuration utilities for filepane."""

import os
from pathlib import Path
from typing import Optional, Tuple

from .constants import ENV_VAR_DEFINITIONS, FILEPANE_CONFIG_DIR, STORE_FILE_NAME


def get_config_dir() -> Path:
    """Get the config directory, respecting FILEPANE_CONFIG_DIR.

    Tests set FILEPANE_CONFIG_DIR to a temp directory so they never touch
    the real selection store.
    """
    override = os.environ.get("FILEPANE_CONFIG_DIR")
    config_dir = Path(override) if override else FILEPANE_CONFIG_DIR
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_store_path() -> Path:
    """Get the path of the JSON file backing the selection store."""
    return get_config_dir() / STORE_FILE_NAME


def validate_env_var(name: str, value: Optional[str]) -> Tuple[bool, Optional[str]]:
    """Validate a single environment variable value.

    Args:
        name: The environment variable name.
        value: The current value (or None if not set).

    Returns:
        Tuple of (is_valid, error_message).
    """
    if name not in ENV_VAR_DEFINITIONS:
        return True, None  # Unknown vars are always valid

    valid_values = ENV_VAR_DEFINITIONS[name].get("valid_values")

    if value is None or valid_values is None:
        return True, None

    if value.lower() not in [v.lower() for v in valid_values]:
        return False, f"Invalid value '{value}' for {name}. Valid values: {valid_values}"

    return True, None


def get_env_var(name: str, validate: bool = True) -> Optional[str]:
    """Get an environment variable with optional validation.

    Args:
        name: The environment variable name.
        validate: Whether to validate the value against known definitions.

    Returns:
        The environment variable value, its default, or None.

    Raises:
        ConfigurationError: If validate=True and the value is invalid.
    """
    from filepane.exceptions import ConfigurationError

    value = os.environ.get(name)

    if validate and value is not None:
        is_valid, error = validate_env_var(name, value)
        if not is_valid:
            raise ConfigurationError(error or "Invalid value", setting=name)

    if value is None and name in ENV_VAR_DEFINITIONS:
        return ENV_VAR_DEFINITIONS[name].get("default")

    return value
