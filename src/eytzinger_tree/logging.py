# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Logging for the eytzinger_tree package.

All loggers hang below the ``eytzinger_tree`` package logger. That logger gets
a single stream handler the first time any module asks for a logger; its
level, and the level of every logger handed out here, follows
``RuntimeConfig.log_level``. Records still propagate, so applications (and
pytest's ``caplog``) see them through their own handlers as well.
"""

from __future__ import annotations

import logging
from typing import Optional

from . import config as et_config

PACKAGE_LOGGER = "eytzinger_tree"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_package_logger(level: str) -> logging.Logger:
    """Set the package logger's level, installing its handler once."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    handlers = [h for h in logger.handlers if getattr(h, "_eytzinger_tree", False)]
    if not handlers:
        handler = logging.StreamHandler()
        handler._eytzinger_tree = True
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        handlers = [handler]
    for handler in handlers:
        handler.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return ``eytzinger_tree`` or ``eytzinger_tree.<name>`` at the configured level."""
    level = et_config.runtime_config().log_level
    configure_package_logger(level)
    if name is None:
        return logging.getLogger(PACKAGE_LOGGER)
    logger = logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
    logger.setLevel(level)
    return logger
