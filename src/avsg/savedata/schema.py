"""Field to XML tag table for the save data records.

The game writes its fields under the names it uses internally (mostly
``m``-prefixed CamelCase), which are not the names used on the Python side.
This table is the single place that pairs them up, and it has to match the
game's output exactly.

Each record class maps to a tuple of :class:`Field` entries. A field is one
of three kinds:

- ``scalar``: element text (or attribute value) converted by ``parse``
- ``record``: a nested element decoded with the table entry for ``target``
- ``mapping``: an element whose children become ``{tag: text}``

``repeated`` fields collect every child element with the tag, in document
order. ``optional`` fields are ``None`` when absent; required repeated fields
must occur at least once.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple, Type

from .enums import (
    CollisionDirs,
    Creature,
    DifficultySetting,
    ItemType,
    MapScreenSubScreen,
    RandomizerDifficultySetting,
)
from .models import (
    AreaSaveData,
    AutoMapData,
    AutoMapDoor,
    AutoMapRoom,
    ItemRecord,
    PasswordSaveEntry,
    Point,
    SaveData,
    SecretWorldSaveData,
    SpeedrunCheckpoint,
    Vector2,
)

SCALAR = "scalar"
RECORD = "record"
MAPPING = "mapping"

_MISSING = object()

_TRUE = {"true", "1"}
_FALSE = {"false", "0"}


def parse_bool(text: str) -> bool:
    value = text.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"not a boolean: {text!r}")


def parse_int(text: str) -> int:
    return int(text.strip())


def parse_uint(text: str) -> int:
    value = int(text.strip())
    if value < 0:
        raise ValueError(f"not an unsigned integer: {text!r}")
    return value


def parse_float(text: str) -> float:
    return float(text.strip())


def parse_text(text: str) -> str:
    return text


def parse_enum(enum_cls: Type[Enum]) -> Callable[[str], Enum]:
    def _parse(text: str) -> Enum:
        return enum_cls(text.strip())

    _parse.__name__ = f"parse_{enum_cls.__name__}"
    return _parse


@dataclass(frozen=True)
class Field:
    attr: str
    tag: str
    kind: str = SCALAR
    parse: Optional[Callable[[str], Any]] = None
    target: Optional[type] = None
    optional: bool = False
    repeated: bool = False
    collection: Callable[[Any], Any] = tuple
    default: Any = _MISSING

    @property
    def has_default(self) -> bool:
        return self.default is not _MISSING


def scalar(attr: str, tag: str, parse: Callable[[str], Any], **kw: Any) -> Field:
    return Field(attr, tag, SCALAR, parse=parse, **kw)


def record(attr: str, tag: str, target: type, **kw: Any) -> Field:
    return Field(attr, tag, RECORD, target=target, **kw)


def mapping(attr: str, tag: str, **kw: Any) -> Field:
    return Field(attr, tag, MAPPING, **kw)


SCHEMA: Dict[type, Tuple[Field, ...]] = {
    Point: (
        scalar("x", "X", parse_int),
        scalar("y", "Y", parse_int),
    ),
    Vector2: (
        scalar("x", "X", parse_int),
        scalar("y", "Y", parse_int),
    ),
    ItemRecord: (
        scalar("name", "mName", parse_text),
        scalar("type", "mType", parse_enum(ItemType), default=ItemType.default()),
        scalar("consumable", "mConsumable", parse_bool),
        scalar("excluded_from_count", "mExcludedFromCount", parse_bool),
        scalar("required_item", "mRequiredItem", parse_text, optional=True),
    ),
    AreaSaveData: (
        scalar("area_name", "mAreaName", parse_text),
        scalar("seed", "mSeed", parse_int),
        scalar("screen_count", "mScreenCount", parse_int),
        scalar("x", "mX", parse_float),
        scalar("y", "mY", parse_float),
        scalar("items", "mItem", parse_text, optional=True, repeated=True, collection=frozenset),
    ),
    AutoMapDoor: (
        scalar("x", "mX", parse_int),
        scalar("y", "mY", parse_int),
        scalar("wall", "mWall", parse_enum(CollisionDirs)),
    ),
    AutoMapRoom: (
        scalar("x", "mX", parse_int),
        scalar("y", "mY", parse_int),
        scalar("width", "mWidth", parse_int),
        scalar("height", "mHeight", parse_int),
    ),
    AutoMapData: (
        scalar("area_name", "mAreaName", parse_text),
        scalar("width_screens", "mWidthScreens", parse_int),
        scalar("height_screens", "mHeightScreens", parse_int),
        scalar("screen_count", "mScreenCount", parse_int),
        scalar("csv_data", "mCSVData", parse_text),
        scalar("data", "mData", parse_uint, optional=True, repeated=True),
        record("entrances", "Entrance", AutoMapDoor, optional=True, repeated=True),
        record("doors", "Door", AutoMapDoor, optional=True, repeated=True),
        record("rooms", "Room", AutoMapRoom, optional=True, repeated=True),
        record("reminders", "Reminder", Point, repeated=True),
    ),
    PasswordSaveEntry: (
        scalar("password", "mPassword", parse_text),
        scalar("enabled", "mEnabled", parse_bool),
    ),
    SecretWorldSaveData: (
        scalar("area_name", "mAreaName", parse_text),
        scalar("secret_world_name", "mSecretWorldName", parse_text),
        scalar("primary_item", "mPrimaryItem", parse_text),
        scalar("secondary_item", "mSecondaryItem", parse_text),
    ),
    SpeedrunCheckpoint: (
        scalar("name", "mName", parse_text),
        scalar("frames", "mFrames", parse_int),
    ),
    SaveData: (
        scalar("screen_size", "mScreenSize", parse_int),
        scalar("player_name", "mPlayerName", parse_text),
        scalar("difficulty", "mDifficulty", parse_enum(DifficultySetting)),
        scalar(
            "randomizer_difficulty",
            "mRandomizerDifficulty",
            parse_enum(RandomizerDifficultySetting),
            optional=True,
        ),
        scalar("current_weapon", "mCurrentWeapon", parse_text),
        scalar("previous_weapon", "mPreviousWeapon", parse_text, optional=True),
        scalar("current_tool", "mCurrentTool", parse_text, optional=True),
        scalar("save_area", "mSaveArea", parse_text),
        scalar("save_room", "mSaveRoom", parse_text),
        record("save_room_pos", "mSaveRoomPos", Vector2),
        scalar("total_frames", "mTotalFrames", parse_int),
        scalar("effective_frames", "mEffectiveFrames", parse_float),
        scalar("screen_count", "mScreenCount", parse_int),
        scalar("total_screen_count", "mTotalScreenCount", parse_int),
        scalar("num_deaths", "mNumDeaths", parse_int),
        scalar("red_goo_destroyed", "mRedGooDestroyed", parse_int),
        scalar("bricks_destroyed", "mBricksDestroyed", parse_int),
        scalar("is_speed_run", "mIsSpeedRun", parse_bool),
        scalar("is_randomizer", "mIsRandomizer", parse_bool, optional=True),
        mapping("random_item", "mRandomItem", optional=True),
        scalar("use_real_timers", "mUseRealTimers", parse_bool),
        scalar("last_map_sub_screen", "mLastMapSubScreen", parse_enum(MapScreenSubScreen)),
        scalar("base_seed", "mBaseSeed", parse_int),
        scalar("randomizer_seed", "mRandomizerSeed", parse_text, optional=True),
        scalar("bioflux_visions", "mBiofluxVisions", parse_bool),
        scalar("hallucination_amount", "mHallucinationAmount", parse_float),
        scalar("translate_primordial", "mTranslatePrimordial", parse_bool),
        scalar("translate_vykhya", "mTranslateVykhya", parse_bool),
        scalar("justin_bailey", "mJustinBailey", parse_bool),
        scalar("trace_blues", "mTraceBlues", parse_bool, optional=True),
        scalar("trace_black", "mTraceBlack", parse_bool, optional=True),
        scalar("trace_yellow", "mTraceYellow", parse_bool, optional=True),
        scalar("secret_window", "mSecretWindow", parse_bool, optional=True),
        scalar("has_drone", "mHasDrone", parse_bool),
        scalar("cheats_used", "mCheatsUsed", parse_bool),
        scalar("weapon_quick_select", "QuickSelectWeapon", parse_text, repeated=True),
        record("items", "THItemRecord", ItemRecord, repeated=True),
        scalar("key_points_completed", "KeyPoint", parse_text, repeated=True),
        record("passwords", "PasswordEntry", PasswordSaveEntry, repeated=True),
        record("area_save_data", "AreaSaveData", AreaSaveData, repeated=True),
        record(
            "secret_world_save_data",
            "SecretWorldSaveData",
            SecretWorldSaveData,
            optional=True,
            repeated=True,
        ),
        record("auto_maps", "AutoMap", AutoMapData, repeated=True),
        record("speedrun_checkpoints", "SpeedrunCheckpoint", SpeedrunCheckpoint, optional=True, repeated=True),
        scalar("creatures_glitched", "CreatureGlitched", parse_enum(Creature), optional=True, repeated=True),
    ),
}


def fields_for(cls: type) -> Tuple[Field, ...]:
    try:
        return SCHEMA[cls]
    except KeyError:
        raise KeyError(f"No schema registered for {cls.__name__}") from None


def tag_table(cls: type) -> Dict[str, str]:
    """Return ``{attr: tag}`` for ``cls``; handy for inspection and tests."""
    return {f.attr: f.tag for f in fields_for(cls)}
