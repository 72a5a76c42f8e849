#!/usr/bin/env python3
import os, json, pathlib
from typing import Any, Dict, Optional

# ====== Package directories ======
HOME    = pathlib.Path.home()
CFG_DIR = pathlib.Path(os.environ.get("FILER_CONFIG_DIR", str(HOME / ".config" / "filer"))).expanduser()
LOGS    = pathlib.Path(os.environ.get("FILER_LOG_DIR", str(CFG_DIR / "logs"))).expanduser()


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    if raw.strip() not in ("0", "1"):
        raise ValueError(f"{name} must be 0 or 1, got {raw!r}")
    return raw.strip() == "1"


# ====== Environment / runtime ======
EVENT_LOG       = _env_flag("FILER_EVENT_LOG")
DRY_RUN         = _env_flag("FILER_DRY_RUN")
DEFAULT_FORMAT  = os.environ.get("FILER_DEFAULT_FORMAT", "table")
DEFAULT_SORT    = os.environ.get("FILER_DEFAULT_SORT", "name")
STATS_TOP       = _env_int("FILER_STATS_TOP", 10)

OUTPUT_FORMATS = ("table", "json", "csv")


def _load_json(path: pathlib.Path, default: Any) -> Any:
    if not path.exists():
        return default
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON in {path}: {exc}") from exc


def load_config(name: str, default: Any, cfg_dir: Optional[pathlib.Path] = None) -> Any:
    """Load user config from *.local.json, falling back to the provided default."""
    local_path = (cfg_dir or CFG_DIR) / f"{name}.local.json"
    data = _load_json(local_path, None)
    if data is not None:
        return data
    return default


def category_overrides(cfg_dir: Optional[pathlib.Path] = None) -> Optional[Dict[str, str]]:
    """Return the user's extension -> category table, or None when not configured."""
    data = load_config("categories", None, cfg_dir)
    if data is None:
        return None
    if not isinstance(data, dict):
        raise ValueError("categories.local.json must hold an object of extension -> category")
    return {str(k): str(v) for k, v in data.items()}
