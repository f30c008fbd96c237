# -*- coding: utf-8 -*-
from os import getenv
from typing import List

from loguru import logger


def getenv_or_action(env_name: str, *, action: str = "raise", default: str = None) -> str:
    """
    Reads an environment variable, taking an action if it's not set.

    Args:
        env_name (str): The environment variable name.
        action (str, optional): What to do when the variable is missing. One of "raise",
            "warn" or "ignore". Defaults to "raise".
        default (str, optional): The value used when the variable is missing. When set, no
            action is taken.

    Returns:
        str: The value, the default or an empty string.
    """
    if action not in ("raise", "warn", "ignore"):
        raise ValueError("action must be one of 'raise', 'warn' or 'ignore'")

    value = getenv(env_name, default)
    if value is None:
        if action == "raise":
            raise EnvironmentError(f"Environment variable {env_name} is not set.")
        if action == "warn":
            logger.warning(f"Environment variable {env_name} is not set.")
        return ""
    return value


def getenv_list_or_action(
    env_name: str, *, action: str = "raise", default: str = None
) -> List[str]:
    value = getenv_or_action(env_name, action=action, default=default)
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


if getenv("ENVIRONMENT", "prod") == "test":
    from app.config.test import *  # noqa: F401, F403, E402
else:
    from app.config.prod import *  # noqa: F401, F403, E402
