from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from services.ecs.task_runner.errors import InputError

logger = logging.getLogger("ecs_task_runner")

# Load environment variables from .env file next to this module; real environment wins
_env_path = Path(__file__).parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path, override=False)
    logger.debug("Loaded environment from %s", _env_path)


def get_env_int(key: str, default: int) -> int:
    """
    Get environment variable as integer.

    Args:
        key: Environment variable name.
        default: Default value if variable is not set or invalid.

    Returns:
        Integer value from environment or default.
    """
    try:
        value = os.environ.get(key)
        return int(value) if value else default
    except ValueError:
        logger.warning("Invalid int value for %s, using default: %s", key, default)
        return default


def input_env_name(name: str) -> str:
    return f"INPUT_{name.replace(' ', '_').upper()}"


def get_input(name: str, required: bool = False) -> str:
    """
    Read a step input the way the Actions runner exposes it.

    Args:
        name: Input name as declared in action.yml (e.g. "task-definition-arn").
        required: Raise if the input is missing or blank.

    Returns:
        The trimmed input value, or "" when unset.

    Raises:
        InputError: If a required input is not supplied.
    """
    value = os.environ.get(input_env_name(name), "").strip()
    if required and not value:
        raise InputError(f"Input required and not supplied: {name}")
    return value
