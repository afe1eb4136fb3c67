from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from importlib.resources import files as resource_files
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from .rng import RNGManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DungeonConfig:
    """Map size and room placement bounds.

    Construction validates the bounds, so a generator built from a config can
    always place its first room.
    """

    map_width: int = 80
    map_height: int = 45
    max_rooms: int = 30
    room_min_size: int = 6
    room_max_size: int = 10

    def __post_init__(self) -> None:
        if self.map_width <= 0 or self.map_height <= 0:
            raise ValueError("map_width/map_height must be > 0")
        if self.max_rooms < 1:
            raise ValueError("max_rooms must be >= 1")
        if self.room_min_size < 2:
            # a room needs at least one interior cell around its centre
            raise ValueError("room_min_size must be >= 2")
        if self.room_min_size > self.room_max_size:
            raise ValueError("room_min_size must be <= room_max_size")
        if self.room_max_size >= self.map_width or self.room_max_size >= self.map_height:
            raise ValueError("room_max_size must be smaller than both map dimensions")


@dataclass(frozen=True)
class FovConfig:
    torch_radius: int = 10
    light_walls: bool = True

    def __post_init__(self) -> None:
        if self.torch_radius < 0:
            raise ValueError("torch_radius must be >= 0")


@dataclass(frozen=True)
class DisplayConfig:
    """Window settings consumed only by the presentation shell."""

    screen_width: int = 80
    screen_height: int = 50
    fps: int = 20
    tile_px: int = 12
    fullscreen: bool = False

    def __post_init__(self) -> None:
        if self.screen_width <= 0 or self.screen_height <= 0:
            raise ValueError("screen_width/screen_height must be > 0")
        if self.fps <= 0:
            raise ValueError("fps must be > 0")
        if self.tile_px <= 0:
            raise ValueError("tile_px must be > 0")


@dataclass(frozen=True)
class Settings:
    dungeon: DungeonConfig = field(default_factory=DungeonConfig)
    fov: FovConfig = field(default_factory=FovConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    seed: Optional[Union[int, str]] = None

    def __post_init__(self) -> None:
        if self.seed is not None:
            try:
                RNGManager._canonicalize_seed(self.seed)
            except TypeError as exc:
                raise ValueError(f"seed must be an int >= 0 or a string, got {self.seed!r}") from exc

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "dungeon": _section_to_dict(self.dungeon),
            "fov": _section_to_dict(self.fov),
            "display": _section_to_dict(self.display),
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Settings":
        """Build settings from a plain mapping. Missing keys fall back to defaults."""
        for key in raw:
            if key not in ("seed", "dungeon", "fov", "display"):
                logger.warning("Ignoring unknown settings section '%s'", key)
        return cls(
            dungeon=_build_section(DungeonConfig, raw.get("dungeon")),
            fov=_build_section(FovConfig, raw.get("fov")),
            display=_build_section(DisplayConfig, raw.get("display")),
            seed=raw.get("seed"),
        )


def _section_to_dict(section: Any) -> Dict[str, Any]:
    return {f.name: getattr(section, f.name) for f in fields(section)}


def _build_section(cls: Any, raw: Optional[Mapping[str, Any]]) -> Any:
    if raw is None:
        return cls()
    if not isinstance(raw, Mapping):
        raise ValueError(f"{cls.__name__} section must be a mapping, got {type(raw).__name__}")
    known = {f.name for f in fields(cls)}
    kwargs: Dict[str, Any] = {}
    for key, value in raw.items():
        if key not in known:
            logger.warning("Ignoring unknown %s key '%s'", cls.__name__, key)
            continue
        if isinstance(getattr(cls, key), bool):
            kwargs[key] = _as_bool(cls.__name__, key, value)
        else:
            kwargs[key] = _as_int(cls.__name__, key, value)
    return cls(**kwargs)


_TRUE = ("true", "yes", "on", "1")
_FALSE = ("false", "no", "off", "0")


def _as_bool(section: str, key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str) and value.strip().lower() in _TRUE + _FALSE:
        return value.strip().lower() in _TRUE
    raise ValueError(f"{section}.{key} must be a boolean, got {value!r}")


def _as_int(section: str, key: str, value: Any) -> int:
    if isinstance(value, bool) or value is None or isinstance(value, float):
        raise ValueError(f"{section}.{key} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{section}.{key} must be an integer, got {value!r}") from exc


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """Load settings from YAML.

    If path is None, loads the embedded default resource at
    delve/data/default_settings.yaml.
    """
    if path is None:
        data = resource_files("delve.data").joinpath("default_settings.yaml").read_text(encoding="utf-8")
        logger.debug("Loaded embedded default settings resource")
    else:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Settings file not found: {path}")
        data = path.read_text(encoding="utf-8")
        logger.debug("Loaded settings from path: %s", path)

    raw = yaml.safe_load(data) or {}
    if not isinstance(raw, dict):
        raise ValueError("Settings file must contain a mapping at the top level")
    settings = Settings.from_dict(raw)
    logger.info(
        "Settings: map %dx%d, max_rooms=%d, rooms %d..%d, torch_radius=%d",
        settings.dungeon.map_width,
        settings.dungeon.map_height,
        settings.dungeon.max_rooms,
        settings.dungeon.room_min_size,
        settings.dungeon.room_max_size,
        settings.fov.torch_radius,
    )
    return settings
