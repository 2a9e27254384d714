#!/usr/bin/env python
"""Uvicorn server for the price matching API.

Settings come from the environment:
    API_HOST, API_PORT, API_RELOAD and API_LOG_LEVEL (DEBUG, INFO, WARNING,
    ERROR or NONE).
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict

import uvicorn

from .main import setup_logging

PACKAGE_DIR = Path(__file__).parent

UVICORN_LOG_LEVELS = {
    "DEBUG": "debug",
    "INFO": "info",
    "WARNING": "warning",
    "ERROR": "error",
    "NONE": "critical",
}


def get_server_settings() -> Dict[str, Any]:
    """Read uvicorn settings from API_* environment variables.

    Raises:
        ValueError: If API_PORT is not a number or API_LOG_LEVEL is unknown
    """
    log_level = os.getenv("API_LOG_LEVEL", "INFO").upper()
    if log_level not in UVICORN_LOG_LEVELS:
        raise ValueError(f"Unknown API_LOG_LEVEL '{log_level}'")

    reload = os.getenv("API_RELOAD", "false").lower() in ("1", "true", "yes")

    settings: Dict[str, Any] = {
        "host": os.getenv("API_HOST", "0.0.0.0"),
        "port": int(os.getenv("API_PORT", "7777")),
        "reload": reload,
        "log_level": UVICORN_LOG_LEVELS[log_level],
        "access_log": log_level in ("DEBUG", "INFO"),
    }
    if reload:
        # Watch only this package, not the working directory
        settings["reload_dirs"] = [str(PACKAGE_DIR)]
    return settings


def main():
    """Run the FastAPI application with uvicorn."""
    settings = get_server_settings()
    setup_logging(os.getenv("API_LOG_LEVEL", "INFO"))

    logger = logging.getLogger(__name__)
    logger.info(f"Starting Dealer Price Match API server on {settings['host']}:{settings['port']}...")

    uvicorn.run("price_match.api.app:app", **settings)


if __name__ == "__main__":
    main()
