from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Mapping, Optional, Tuple

from .enums import (
    CollisionDirs,
    Creature,
    DifficultySetting,
    ItemType,
    MapScreenSubScreen,
    RandomizerDifficultySetting,
)


@dataclass(frozen=True)
class Point:
    x: int
    y: int


@dataclass(frozen=True)
class Vector2:
    x: int
    y: int


@dataclass(frozen=True)
class ItemRecord:
    """One entry of the player's item log.

    Items flagged ``excluded_from_count`` never count toward a 100% tally.
    """

    name: str
    type: ItemType
    consumable: bool
    excluded_from_count: bool
    required_item: Optional[str] = None


@dataclass(frozen=True)
class AreaSaveData:
    area_name: str
    seed: int
    screen_count: int
    x: float
    y: float
    items: Optional[FrozenSet[str]] = None


@dataclass(frozen=True)
class AutoMapDoor:
    x: int
    y: int
    wall: CollisionDirs


@dataclass(frozen=True)
class AutoMapRoom:
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class AutoMapData:
    """Explored map state for one area.

    ``csv_data`` is the raw screen grid as the game stores it; ``data`` holds
    the decoded cells when the game chose to write them out.
    """

    area_name: str
    width_screens: int
    height_screens: int
    screen_count: int
    csv_data: str
    reminders: Tuple[Point, ...]
    data: Optional[Tuple[int, ...]] = None
    entrances: Optional[Tuple[AutoMapDoor, ...]] = None
    doors: Optional[Tuple[AutoMapDoor, ...]] = None
    rooms: Optional[Tuple[AutoMapRoom, ...]] = None

    def grid(self) -> Tuple[Tuple[str, ...], ...]:
        """Split ``csv_data`` into rows of cells."""
        rows = [r.strip() for r in self.csv_data.strip().splitlines()]
        return tuple(tuple(c.strip() for c in r.rstrip(",").split(",")) for r in rows if r)


@dataclass(frozen=True)
class PasswordSaveEntry:
    password: str
    enabled: bool


@dataclass(frozen=True)
class SecretWorldSaveData:
    area_name: str
    secret_world_name: str
    primary_item: str
    secondary_item: str


@dataclass(frozen=True)
class SpeedrunCheckpoint:
    name: str
    frames: int


@dataclass(frozen=True)
class SaveData:
    """A fully decoded save file.

    Optional fields are ``None`` when the element was absent from the file,
    which means the feature was unused this playthrough. Built once by the
    decoder and never modified.
    """

    screen_size: int
    player_name: str
    difficulty: DifficultySetting
    current_weapon: str
    save_area: str
    save_room: str
    save_room_pos: Vector2
    total_frames: int
    effective_frames: float
    screen_count: int
    total_screen_count: int
    num_deaths: int
    red_goo_destroyed: int
    bricks_destroyed: int
    is_speed_run: bool
    use_real_timers: bool
    last_map_sub_screen: MapScreenSubScreen
    base_seed: int
    bioflux_visions: bool
    hallucination_amount: float
    translate_primordial: bool
    translate_vykhya: bool
    justin_bailey: bool
    has_drone: bool
    cheats_used: bool
    weapon_quick_select: Tuple[str, ...]
    items: Tuple[ItemRecord, ...]
    key_points_completed: Tuple[str, ...]
    passwords: Tuple[PasswordSaveEntry, ...]
    area_save_data: Tuple[AreaSaveData, ...]
    auto_maps: Tuple[AutoMapData, ...]
    randomizer_difficulty: Optional[RandomizerDifficultySetting] = None
    previous_weapon: Optional[str] = None
    current_tool: Optional[str] = None
    is_randomizer: Optional[bool] = None
    random_item: Optional[Mapping[str, str]] = None
    randomizer_seed: Optional[str] = None
    trace_blues: Optional[bool] = None
    trace_black: Optional[bool] = None
    trace_yellow: Optional[bool] = None
    secret_window: Optional[bool] = None
    secret_world_save_data: Optional[Tuple[SecretWorldSaveData, ...]] = None
    speedrun_checkpoints: Optional[Tuple[SpeedrunCheckpoint, ...]] = None
    creatures_glitched: Optional[Tuple[Creature, ...]] = None
