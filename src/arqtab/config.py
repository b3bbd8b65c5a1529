"""Default settings loaded from environment variables."""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("table", "json")
HTTP_METHODS = ("GET", "POST")


def env_choice(name: str, choices: tuple[str, ...], default: str) -> str:
    """Read ``name`` from the environment, falling back to ``default``.

    Values are matched case-insensitively against ``choices``; anything
    else is logged and replaced by ``default``.
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    for choice in choices:
        if raw.strip().lower() == choice.lower():
            return choice
    logger.warning(f"Ignoring {name}={raw!r}; expected one of {', '.join(choices)}")
    return default


class Config:
    """Defaults for the command line interface."""

    # Remote endpoint defaults
    SPARQL_TIMEOUT = int(os.getenv("ARQTAB_SPARQL_TIMEOUT", "30"))
    SPARQL_MAX_RETRIES = int(os.getenv("ARQTAB_SPARQL_MAX_RETRIES", "3"))
    SPARQL_METHOD = env_choice("ARQTAB_SPARQL_METHOD", HTTP_METHODS, "GET")

    OUTPUT_FORMAT = env_choice("ARQTAB_OUTPUT_FORMAT", OUTPUT_FORMATS, "table")
