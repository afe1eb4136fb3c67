import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from delve.config import DungeonConfig, FovConfig, Settings  # noqa: E402


@pytest.fixture
def small_settings() -> Settings:
    return Settings(
        dungeon=DungeonConfig(map_width=40, map_height=30, max_rooms=12, room_min_size=4, room_max_size=8),
        fov=FovConfig(torch_radius=6),
        seed="test-seed",
    )
