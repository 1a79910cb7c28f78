# pathdemo/config.py
from __future__ import annotations
import json, logging, math, os
from typing import Optional

logger = logging.getLogger(__name__)

# Window
WINDOW_WIDTH  = 800
WINDOW_HEIGHT = 600
APP_TITLE     = "Path Following Demo"

# Colors (RGB)
BG_COLOR         = (255, 255, 255)
POSE_COLOR       = (0, 0, 0)
CONTROL_COLOR    = (0, 121, 241)
GOAL_LINE_COLOR  = (0, 228, 48)
TRAJECTORY_COLOR = (255, 109, 194)
TEXT_COLOR       = (80, 80, 80)

POSE_RADIUS_PX       = 2
CONTROL_RADIUS_PX    = 8
TRAJECTORY_RADIUS_PX = 1

# Core defaults
POSE_INTERPOLATE_DISTANCE = 10.0
LOOKAHEAD_MARGIN          = 20.0
PURSUIT_GAIN              = 0.01
MAX_ITERATIONS            = 10000
MIN_LOOKAHEAD_PX          = 1.0

CONFIG_FILENAME = "config.json"

DEFAULT_CONFIG = {
    "path_config": {
        "interpolate_distance_px": {"value": POSE_INTERPOLATE_DISTANCE},
    },
    "pursuit": {
        "lookahead_px":   {"value": LOOKAHEAD_MARGIN + POSE_INTERPOLATE_DISTANCE},
        "gain":           {"value": PURSUIT_GAIN},
        "max_iterations": {"value": MAX_ITERATIONS},
    },
    "ui": {
        "fps":             {"value": 60},
        "show_goal_lines": {"value": 1},
        "show_trajectory": {"value": 1},
    },
    "logging": {
        "level":    {"value": "INFO"},
        "log_file": {"value": ""},
    },
}

def default_config_path() -> str:
    """config.json next to the repository root."""
    here = os.path.dirname(__file__)
    return os.path.normpath(os.path.join(here, os.pardir, CONFIG_FILENAME))

def _flatten(section: dict) -> dict:
    """Extract 'value' from nested dict structure."""
    flat = {}
    for k, v in section.items():
        flat[k] = v.get("value", v) if isinstance(v, dict) and "value" in v else v
    return flat

def _load_json(path: str) -> Optional[dict]:
    """Load JSON file, return None on failure."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.debug("Could not read %s: %s", path, e)
        return None
    return data if isinstance(data, dict) else None

def _save_json(path: str, data: dict) -> None:
    """Save JSON file, creating the parent directory."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)

def _merge_defaults(data: dict, defaults: dict) -> dict:
    """Fill keys missing from data with the default entries."""
    merged = {}
    for k, dv in defaults.items():
        v = data.get(k)
        if isinstance(dv, dict) and "value" not in dv:
            merged[k] = _merge_defaults(v if isinstance(v, dict) else {}, dv)
        elif isinstance(v, dict) and "value" in v:
            merged[k] = v
        else:
            merged[k] = dict(dv)
    for k, v in data.items():
        merged.setdefault(k, v)
    return merged

def load_config(path: Optional[str] = None) -> dict:
    """Load config, writing the defaults out if no file exists yet."""
    path = path or default_config_path()
    data = _load_json(path)
    if data is None:
        data = json.loads(json.dumps(DEFAULT_CONFIG))
        if not os.path.exists(path):
            try:
                _save_json(path, data)
            except OSError as e:
                logger.warning("Could not write default config to %s: %s", path, e)
        return data
    return _merge_defaults(data, DEFAULT_CONFIG)

def save_config(cfg_dict: dict, path: Optional[str] = None) -> bool:
    """Save a flattened config dictionary back in the nested layout."""
    path = path or default_config_path()
    try:
        def wrap(v): return {"value": v}
        raw = {
            "path_config": {k: wrap(float(v)) for k, v in cfg_dict.get("path_config", {}).items()},
            "pursuit": {
                k: wrap(int(v) if k == "max_iterations" else float(v))
                for k, v in cfg_dict.get("pursuit", {}).items()
            },
            "ui": {k: wrap(int(v)) for k, v in cfg_dict.get("ui", {}).items()},
            "logging": {k: wrap(str(v)) for k, v in cfg_dict.get("logging", {}).items()},
        }
        _save_json(path, _merge_defaults(raw, DEFAULT_CONFIG))
    except (OSError, TypeError, ValueError) as e:
        logger.error("Failed to save config: %s", e)
        return False
    logger.info("Config saved to %s", path)
    return True

def _positive(section: str, key: str, val, cast=float):
    """Coerce a numeric setting, falling back to the default when invalid."""
    default = DEFAULT_CONFIG[section][key]["value"]
    try:
        num = cast(val)
    except (TypeError, ValueError, OverflowError):
        logger.warning("Invalid %s.%s=%r, using %r", section, key, val, default)
        return default
    if not math.isfinite(num) or num <= 0:
        logger.warning("Non-positive %s.%s=%r, using %r", section, key, val, default)
        return default
    return num

def path_flat(cfg: dict) -> dict:
    """Flatten path_config section."""
    flat = _flatten(cfg.get("path_config", {}))
    flat["interpolate_distance_px"] = _positive(
        "path_config", "interpolate_distance_px", flat.get("interpolate_distance_px"))
    return flat

def pursuit_flat(cfg: dict) -> dict:
    """Flatten pursuit section."""
    flat = _flatten(cfg.get("pursuit", {}))
    flat["lookahead_px"] = _positive("pursuit", "lookahead_px", flat.get("lookahead_px"))
    flat["gain"] = _positive("pursuit", "gain", flat.get("gain"))
    flat["max_iterations"] = _positive("pursuit", "max_iterations", flat.get("max_iterations"), int)
    return flat

def ui_flat(cfg: dict) -> dict:
    """Flatten ui section."""
    flat = _flatten(cfg.get("ui", {}))
    flat["fps"] = _positive("ui", "fps", flat.get("fps"), int)
    flat["show_goal_lines"] = int(bool(flat.get("show_goal_lines", 1)))
    flat["show_trajectory"] = int(bool(flat.get("show_trajectory", 1)))
    return flat

def logging_flat(cfg: dict) -> dict:
    """Flatten logging section."""
    flat = _flatten(cfg.get("logging", {}))
    flat["level"] = str(flat.get("level") or "INFO").upper()
    flat["log_file"] = str(flat.get("log_file") or "")
    return flat
