# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""Package logger shared by every module."""

import logging
import os
import pathlib
import platform
import sys

PACKAGE_NAME = "meta-marketing-mcp"
LOGGER_NAME = "meta_marketing_mcp"


def _resolve_log_file() -> pathlib.Path:
    """Return a writable per-user log file path across OSes."""
    system_name = platform.system().lower()
    if system_name == "windows":
        root = pathlib.Path(os.environ.get("APPDATA", pathlib.Path.home()))
    elif system_name == "darwin":
        root = pathlib.Path.home() / "Library" / "Application Support"
    else:
        root = pathlib.Path.home() / ".config"

    log_dir = root / PACKAGE_NAME
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / "server.log"


def _build_handler() -> logging.Handler:
    # stdout carries the MCP stdio stream, so never log there.
    try:
        return logging.FileHandler(_resolve_log_file(), encoding="utf-8")
    except OSError:
        return logging.StreamHandler(sys.stderr)


def _create_logger() -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger

    level_name = os.environ.get("META_MCP_LOG_LEVEL", "INFO").upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    handler = _build_handler()
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False

    logger.info("logger_initialized")
    return logger


logger = _create_logger()
