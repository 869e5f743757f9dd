"""Typed model of an Axiom Verge save file and its XML decoder."""
from .decoder import decode
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
from .schema import SCHEMA, Field, tag_table

__all__ = [
    "decode",
    "CollisionDirs",
    "Creature",
    "DifficultySetting",
    "ItemType",
    "MapScreenSubScreen",
    "RandomizerDifficultySetting",
    "AreaSaveData",
    "AutoMapData",
    "AutoMapDoor",
    "AutoMapRoom",
    "ItemRecord",
    "PasswordSaveEntry",
    "Point",
    "SaveData",
    "SecretWorldSaveData",
    "SpeedrunCheckpoint",
    "Vector2",
    "SCHEMA",
    "Field",
    "tag_table",
]
