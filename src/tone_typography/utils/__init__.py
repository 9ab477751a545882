# tone_typography/utils/__init__.py
"""

Does: Provide config loading and lightweight debug logging utilities.
Returns: Public API via load_config/clear_config_cache and debug/reload_topics.
Used by: Heuristic marker loading, style pools, the demo CLI, and tests.
"""

from __future__ import annotations

from .load_config import (
    ConfigFileNotFound,
    ConfigParseError,
    ConfigTypeError,
    DataDirNotFound,
    clear_config_cache,
    data_dir,
    load_config,
)
from .log import (
    debug,
    enabled,
    reload_topics,
)

__all__ = [
    # Config loading
    "load_config",
    "clear_config_cache",
    "data_dir",
    "DataDirNotFound",
    "ConfigFileNotFound",
    "ConfigParseError",
    "ConfigTypeError",
    # Logging helpers
    "debug",
    "enabled",
    "reload_topics",
]
