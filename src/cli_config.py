"""CLI configuration overrides for runtime settings.

Keeps the entrypoint slim. Precedence, lowest to highest: built-in
Constants defaults, YAML config file, environment variables, CLI flags.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from constants import Constants, _load_yaml_config

logger = logging.getLogger(__name__)


def apply_cli_overrides(args) -> Optional[str]:
    """Load the YAML config and push CLI flags into the environment and Constants.

    Returns:
        The config file path that was applied, or None.
    """
    applied = _load_yaml_config(getattr(args, "CONFIG", None))
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    if applied:
        logger.debug("Configuration loaded from %s", applied)
    return applied


def catalog_path(args=None) -> str:
    """Catalog location: --catalog, then INITFORGE_CATALOG, then the configured default."""
    if args is not None and getattr(args, "CATALOG", None):
        return args.CATALOG
    return os.environ.get(Constants.ENV_CATALOG) or Constants.DEFAULT_CATALOG_PATH


def add_log_file_handler(path: str) -> logging.Handler:
    """Attach a file handler for --logfile to the root logger."""
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(Constants.LOG_FILE_FORMAT))
    logging.getLogger().addHandler(handler)
    return handler
