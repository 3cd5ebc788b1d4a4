# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Process-wide runtime configuration read from the environment.

Variables:
    EYTZINGER_TREE_GROWTH: ``exact`` (default) or ``doubling`` slot growth.
    EYTZINGER_TREE_LOG_LEVEL: level of the ``eytzinger_tree`` loggers.

The values are read once and cached; call ``reset_runtime_config_cache`` after
changing the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

_SUPPORTED_GROWTH = {"exact", "doubling"}
_SUPPORTED_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _normalise_growth(value: str | None) -> str:
    if value is None or value.strip() == "":
        return "exact"
    value = value.strip().lower()
    if value not in _SUPPORTED_GROWTH:
        raise ValueError(f"Unsupported growth policy '{value}'. Expected one of {_SUPPORTED_GROWTH}.")
    return value


def _normalise_log_level(value: str | None) -> str:
    if value is None or value.strip() == "":
        return "WARNING"
    value = value.strip().upper()
    if value not in _SUPPORTED_LEVELS:
        raise ValueError(f"Unsupported log level '{value}'. Expected one of {_SUPPORTED_LEVELS}.")
    return value


@dataclass(frozen=True)
class RuntimeConfig:
    growth: str
    log_level: str

    @property
    def doubles_capacity(self) -> bool:
        return self.growth == "doubling"


@lru_cache(maxsize=None)
def runtime_config() -> RuntimeConfig:
    return RuntimeConfig(
        growth=_normalise_growth(os.getenv("EYTZINGER_TREE_GROWTH")),
        log_level=_normalise_log_level(os.getenv("EYTZINGER_TREE_LOG_LEVEL")),
    )


def reset_runtime_config_cache() -> None:
    runtime_config.cache_clear()
