"""
Configuration for the falling balls simulation.

Defaults live as module constants; ``SimulationConfig`` collects them into
one record that can be overridden from a JSON file (``falling_balls.json``)
or from the command line.
"""

import dataclasses
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

logger = logging.getLogger("falling_balls.config")

# Balls -------------------------------------------------------------
BALL_COUNT = 30
BALL_MIN_RADIUS = 5.0
BALL_MAX_RADIUS = 25.0
BALL_MIN_SPEED = 1.0  # pixels per frame
BALL_MAX_SPEED = 4.0

# Smallest radius and fall speed accepted from a config file
MIN_RADIUS_FLOOR = 0.5
MIN_SPEED_FLOOR = 0.1

# Window ------------------------------------------------------------
FPS = 60
BACKGROUND = (255, 255, 255)
TITLE = "Falling Balls"

# Search history ----------------------------------------------------
HISTORY_FILE = "search_history.json"
HISTORY_LIMIT = 20

CONFIG_FILE = "falling_balls.json"


class ConfigError(ValueError):
    """Raised when a config value has the wrong type."""


@dataclass
class SimulationConfig:
    ball_count: int = BALL_COUNT
    min_radius: float = BALL_MIN_RADIUS
    max_radius: float = BALL_MAX_RADIUS
    min_speed: float = BALL_MIN_SPEED
    max_speed: float = BALL_MAX_SPEED
    width: Optional[int] = None  # None: use the display size at startup
    height: Optional[int] = None
    fps: int = FPS
    background: Tuple[int, int, int] = BACKGROUND
    title: str = TITLE
    seed: Optional[int] = None
    history_path: str = HISTORY_FILE
    history_limit: int = HISTORY_LIMIT
    show_history: bool = True

    def __post_init__(self):
        if self.min_radius > self.max_radius:
            logger.warning("min_radius %s > max_radius %s, swapping",
                           self.min_radius, self.max_radius)
            self.min_radius, self.max_radius = self.max_radius, self.min_radius
        if self.min_radius < MIN_RADIUS_FLOOR:
            logger.warning("min_radius %s too small, using %s", self.min_radius, MIN_RADIUS_FLOOR)
            self.min_radius = MIN_RADIUS_FLOOR
            self.max_radius = max(self.max_radius, MIN_RADIUS_FLOOR)
        if self.min_speed > self.max_speed:
            logger.warning("min_speed %s > max_speed %s, swapping",
                           self.min_speed, self.max_speed)
            self.min_speed, self.max_speed = self.max_speed, self.min_speed
        if self.min_speed < MIN_SPEED_FLOOR:
            logger.warning("min_speed %s too small, using %s", self.min_speed, MIN_SPEED_FLOOR)
            self.min_speed = MIN_SPEED_FLOOR
            self.max_speed = max(self.max_speed, MIN_SPEED_FLOOR)
        if self.fps <= 0:
            logger.warning("fps %s is not positive, using %s", self.fps, FPS)
            self.fps = FPS

    @property
    def radius_range(self):
        return self.min_radius, self.max_radius

    @property
    def speed_range(self):
        return self.min_speed, self.max_speed

    @classmethod
    def from_dict(cls, data: dict) -> "SimulationConfig":
        """Build a config from a parsed JSON object, converting each value."""
        converters = {
            'ball_count': int,
            'min_radius': float,
            'max_radius': float,
            'min_speed': float,
            'max_speed': float,
            'width': _optional_int,
            'height': _optional_int,
            'fps': int,
            'background': _rgb,
            'title': str,
            'seed': _optional_int,
            'history_path': str,
            'history_limit': int,
            'show_history': _flag,
        }
        kwargs = {}
        for key, value in data.items():
            convert = converters.get(key)
            if convert is None:
                logger.warning("Ignoring unknown config key %r", key)
                continue
            try:
                kwargs[key] = convert(value)
            except (TypeError, ValueError) as exc:
                raise ConfigError(f"Invalid value for {key!r}: {value!r}") from exc
        return cls(**kwargs)

    def replace(self, **changes) -> "SimulationConfig":
        return dataclasses.replace(self, **changes)


def _optional_int(value):
    return None if value is None else int(value)


def _flag(value):
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ('true', 'false'):
        return value.lower() == 'true'
    raise ValueError(value)


def _rgb(value):
    r, g, b = value
    return (int(max(0, min(255, r))),
            int(max(0, min(255, g))),
            int(max(0, min(255, b))))


def _default_config_path() -> Optional[Path]:
    cfg_path = Path(__file__).resolve().parent / CONFIG_FILE
    if cfg_path.exists():
        return cfg_path
    alt = Path.cwd() / CONFIG_FILE
    if alt.exists():
        return alt
    return None


def load_config(path: Union[str, Path, None] = None) -> SimulationConfig:
    """Load the config from ``path`` or the default locations.

    A missing file gives the defaults. An unreadable or malformed file is
    logged and also gives the defaults; only wrongly typed values raise.
    """
    cfg_path = Path(path) if path is not None else _default_config_path()
    if cfg_path is None or not cfg_path.exists():
        if path is not None:
            logger.warning("Config file %s not found, using defaults", cfg_path)
        return SimulationConfig()

    try:
        with cfg_path.open('r', encoding='utf-8') as fh:
            data = json.load(fh)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("Could not read config %s (%s), using defaults", cfg_path, exc)
        return SimulationConfig()

    if not isinstance(data, dict):
        logger.warning("Config %s is not a JSON object, using defaults", cfg_path)
        return SimulationConfig()

    logger.info("Loaded config from %s", cfg_path)
    return SimulationConfig.from_dict(data)
