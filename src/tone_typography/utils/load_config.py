# src/tone_typography/utils/load_config.py

"""Read the packaged JSON vocabularies (marker sets, style pools) from data/.

Modes:
- "set"             -> frozenset[str] from a JSON list of scalars (marker files)
- "validated_dict"  -> dict from a JSON object, passed through a validator (style pools)

Set-mode results are cached per file mtime; validated loads are re-run each time
because the validator owns the output shape.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any, Literal

Mode = Literal["set", "validated_dict"]
__all__ = [
    "Mode",
    "load_config",
    "clear_config_cache",
    "data_dir",
    "DataDirNotFound",
    "ConfigFileNotFound",
    "ConfigParseError",
    "ConfigTypeError",
]


# ── Exceptions ───────────────────────────────────────────────────────────────
class DataDirNotFound(FileNotFoundError):
    """No data/ directory next to the package (or at TONE_TYPOGRAPHY_DATA_DIR)."""


class ConfigFileNotFound(FileNotFoundError):
    """The named vocabulary file is missing or outside the data directory."""


class ConfigParseError(ValueError):
    """The file is not valid JSON, or its validator rejected it."""


class ConfigTypeError(TypeError):
    """The JSON shape does not fit the requested mode."""


log = logging.getLogger(__name__)
_LOCK = threading.RLock()
_SET_CACHE: dict[tuple[Path, float], frozenset[str]] = {}


def clear_config_cache() -> None:
    with _LOCK:
        _SET_CACHE.clear()


def data_dir() -> Path:
    """TONE_TYPOGRAPHY_DATA_DIR if set, else the package's own data/ folder."""
    override = os.environ.get("TONE_TYPOGRAPHY_DATA_DIR")
    path = Path(os.path.expanduser(override)) if override else Path(__file__).parents[1] / "data"
    path = path.resolve()
    if not path.is_dir():
        raise DataDirNotFound(f"Data directory not found: {path}")
    return path


def _resolve(name: str, base_dir: Path | None) -> Path:
    base = (base_dir or data_dir()).resolve()
    file_name = name if name.endswith(".json") else f"{name}.json"
    path = (base / file_name).resolve()
    if base not in path.parents:
        raise ConfigFileNotFound(f"Refusing to read {path} outside data dir {base}")
    if not path.is_file():
        raise ConfigFileNotFound(f"Config file not found: {path}")
    return path


def _read_json(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise ConfigFileNotFound(f"Cannot read {path}: {e}") from e


def _as_marker_set(path: Path, data: Any) -> frozenset[str]:
    if not isinstance(data, list):
        raise ConfigTypeError(f"{path.name}: expected a JSON list, got {type(data).__name__}")
    bad = [type(x).__name__ for x in data if isinstance(x, (list, dict))]
    if bad:
        raise ConfigTypeError(f"{path.name}: list items must be scalars (got {', '.join(bad[:3])})")
    return frozenset(str(x) for x in data if x is not None)


def load_config(
    name: str,
    mode: Mode = "set",
    *,
    base_dir: Path | None = None,
    validator: Callable[[dict[str, Any]], dict[str, Any]] | None = None,
) -> Any:
    """Load data/<name>.json as a string set or a validated dict."""
    path = _resolve(name, base_dir)

    if mode == "set":
        key = (path, path.stat().st_mtime)
        with _LOCK:
            cached = _SET_CACHE.get(key)
        if cached is not None:
            return cached
        result = _as_marker_set(path, _read_json(path))
        with _LOCK:
            _SET_CACHE[key] = result
        log.debug("Loaded %d entries from %s", len(result), path.name)
        return result

    if mode == "validated_dict":
        data = _read_json(path)
        if not isinstance(data, dict):
            raise ConfigTypeError(f"{path.name}: expected a JSON object, got {type(data).__name__}")
        if validator is None:
            return data
        try:
            return validator(data)
        except Exception as e:
            raise ConfigParseError(f"{path.name}: validator failed: {e}") from e

    raise ValueError(f"Unknown mode '{mode}'")
