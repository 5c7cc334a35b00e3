# poolpass/config.py
"""
Settings persistence for PoolPass generation defaults.
Settings saved as JSON in %APPDATA%/PoolPass/config.json (Windows) or ~/.poolpass/config.json (fallback).
POOLPASS_CONFIG points at an explicit file instead.
"""

import os
import json
from typing import Dict, Any

from loguru import logger

from .charsets import Category, category_names, parse_categories
from .generator import DEFAULT_LENGTH, GeneratorConfig

DEFAULTS: Dict[str, Any] = {
    "length": DEFAULT_LENGTH,
    "categories": category_names(Category.ALL),
    "exclude_ambiguous": False,
    "unbiased": False,
    "log_level": "WARNING",
}

def _valid_value(key: str, value: Any) -> bool:
    if key == "length":
        return isinstance(value, int) and not isinstance(value, bool)
    if key == "categories":
        return isinstance(value, str) or (
            isinstance(value, list) and all(isinstance(v, str) for v in value)
        )
    if key in ("exclude_ambiguous", "unbiased"):
        return isinstance(value, bool)
    if key == "log_level":
        return isinstance(value, str)
    return True

def _appdata_dir() -> str:
    appdata = os.getenv("APPDATA")
    if appdata:
        return os.path.join(appdata, "PoolPass")
    return os.path.join(os.path.expanduser("~"), ".poolpass")

def config_path() -> str:
    explicit = os.getenv("POOLPASS_CONFIG")
    if explicit:
        return explicit
    return os.path.join(_appdata_dir(), "config.json")

def load_config() -> Dict[str, Any]:
    p = config_path()
    if not os.path.exists(p):
        return DEFAULTS.copy()
    try:
        with open(p, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config file {}: {}", p, e)
        return DEFAULTS.copy()
    if not isinstance(data, dict):
        logger.warning("Ignoring config file {}: expected a JSON object", p)
        return DEFAULTS.copy()
    # merge defaults, dropping values of the wrong type
    out = DEFAULTS.copy()
    for key, value in data.items():
        if key in DEFAULTS and not _valid_value(key, value):
            logger.warning("Ignoring config value {}={!r} in {}: using default", key, value, p)
            continue
        out[key] = value
    return out

def save_config(cfg: Dict[str, Any]) -> None:
    p = config_path()
    d = os.path.dirname(p)
    if d:
        os.makedirs(d, exist_ok=True)
    with open(p, "w", encoding="utf-8") as f:
        json.dump(cfg, f, ensure_ascii=False, indent=2)
    logger.debug("Saved config to {}", p)

def config_to_generator(cfg: Dict[str, Any], **overrides: Any) -> GeneratorConfig:
    """
    Build a GeneratorConfig from settings; keyword overrides win when not None.
    """
    try:
        length = int(cfg.get("length", DEFAULT_LENGTH))
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid length setting: {cfg.get('length')!r}") from e
    values = {
        "categories": parse_categories(cfg.get("categories", DEFAULTS["categories"])),
        "exclude_ambiguous": bool(cfg.get("exclude_ambiguous", False)),
        "length": length,
    }
    for key, value in overrides.items():
        if value is not None:
            values[key] = value
    return GeneratorConfig(**values)
