#!/usr/bin/env python3
"""
Configuration from the environment.

Environment variables:
- $MDTASKS_DATA: Tasks folder holding the status files (required when no
  folder is passed explicitly)
- $MDTASKS_LOG_LEVEL: Log level for configure_logging (default INFO)
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

DATA_ENV_VAR = "MDTASKS_DATA"
LOG_LEVEL_ENV_VAR = "MDTASKS_LOG_LEVEL"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def get_tasks_folder() -> Path:
    """
    Get the tasks folder.

    The folder does not have to exist yet; it is created on first use.

    Returns:
        Path: Absolute path to the tasks folder ($MDTASKS_DATA)

    Raises:
        RuntimeError: If MDTASKS_DATA environment variable not set
    """
    data = os.environ.get(DATA_ENV_VAR)
    if not data:
        raise RuntimeError(
            f"{DATA_ENV_VAR} environment variable not set.\n"
            "Add to ~/.bashrc or ~/.zshrc:\n"
            f"  export {DATA_ENV_VAR}='$HOME/notes/tasks'"
        )
    return Path(data).expanduser().resolve()


def get_log_level() -> int:
    """Get the log level from $MDTASKS_LOG_LEVEL, falling back to INFO."""
    name = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO").upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        logger.warning("Unknown log level %r in %s, using INFO", name, LOG_LEVEL_ENV_VAR)
        return logging.INFO
    return level


def configure_logging(level: int | None = None) -> None:
    """Configure root logging for an entry point. Libraries never call this."""
    logging.basicConfig(
        level=level if level is not None else get_log_level(),
        format=LOG_FORMAT,
    )
