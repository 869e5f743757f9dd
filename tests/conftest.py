import sys
from pathlib import Path
from typing import Dict, Iterable, Optional, Sequence, Tuple

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from avsg.savedata import (  # noqa: E402
    AreaSaveData,
    AutoMapData,
    DifficultySetting,
    ItemRecord,
    ItemType,
    MapScreenSubScreen,
    PasswordSaveEntry,
    Point,
    SaveData,
    Vector2,
)
from avsg.settings import Settings  # noqa: E402


BASE_FIELDS: Dict[str, str] = {
    "mScreenSize": "2",
    "mPlayerName": "Trace",
    "mDifficulty": "NORMAL",
    "mCurrentWeapon": "Axiom Disruptor",
    "mSaveArea": "Eribu",
    "mSaveRoom": "SaveRoom1",
    "mTotalFrames": "123456",
    "mEffectiveFrames": "123000.5",
    "mScreenCount": "10",
    "mTotalScreenCount": "20",
    "mNumDeaths": "0",
    "mRedGooDestroyed": "0",
    "mBricksDestroyed": "0",
    "mIsSpeedRun": "false",
    "mUseRealTimers": "false",
    "mLastMapSubScreen": "MAP",
    "mBaseSeed": "42",
    "mBiofluxVisions": "false",
    "mHallucinationAmount": "0",
    "mTranslatePrimordial": "false",
    "mTranslateVykhya": "false",
    "mJustinBailey": "false",
    "mHasDrone": "false",
    "mCheatsUsed": "false",
}

FIXED_BLOCKS = """
  <mSaveRoomPos><X>3</X><Y>4</Y></mSaveRoomPos>
  <QuickSelectWeapon>Axiom Disruptor</QuickSelectWeapon>
  <KeyPoint>Start</KeyPoint>
  <PasswordEntry><mPassword>JUSTIN BAILEY</mPassword><mEnabled>false</mEnabled></PasswordEntry>
  <AreaSaveData>
    <mAreaName>Eribu</mAreaName><mSeed>7</mSeed><mScreenCount>12</mScreenCount>
    <mX>1.5</mX><mY>2.25</mY>
  </AreaSaveData>
  <AutoMap>
    <mAreaName>Eribu</mAreaName><mWidthScreens>3</mWidthScreens><mHeightScreens>2</mHeightScreens>
    <mScreenCount>4</mScreenCount><mCSVData>1,0,1,
0,1,1</mCSVData>
    <Reminder><X>0</X><Y>0</Y></Reminder>
  </AutoMap>
"""

DEFAULT_ITEMS: Sequence[Tuple[str, Optional[str], bool]] = (("Axiom Disruptor", "WEAPON", False),)


def item_xml(name: str, item_type: Optional[str], excluded: bool = False) -> str:
    type_xml = f"<mType>{item_type}</mType>" if item_type is not None else ""
    return (
        f"<THItemRecord><mName>{name}</mName>{type_xml}"
        f"<mConsumable>false</mConsumable>"
        f"<mExcludedFromCount>{'true' if excluded else 'false'}</mExcludedFromCount>"
        f"</THItemRecord>"
    )


def build_save_xml(
    fields: Optional[Dict[str, Optional[str]]] = None,
    items: Iterable[Tuple[str, Optional[str], bool]] = DEFAULT_ITEMS,
    extra: str = "",
    fixed: str = FIXED_BLOCKS,
) -> str:
    """Build a minimal valid save document.

    ``fields`` overrides scalar elements; a value of None drops the element.
    ``extra`` is raw XML appended inside the root element.
    """
    values = dict(BASE_FIELDS)
    values.update(fields or {})
    scalars = "".join(f"  <{tag}>{value}</{tag}>\n" for tag, value in values.items() if value is not None)
    items_xml = "".join(item_xml(*item) for item in items)
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<THSaveData xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" '
        'xmlns:xsd="http://www.w3.org/2001/XMLSchema">\n'
        f"{scalars}{fixed}{items_xml}{extra}\n"
        "</THSaveData>\n"
    )


@pytest.fixture
def save_xml():
    return build_save_xml


def make_savedata(**overrides) -> SaveData:
    base = dict(
        screen_size=2,
        player_name="Trace",
        difficulty=DifficultySetting.NORMAL,
        current_weapon="Axiom Disruptor",
        save_area="Eribu",
        save_room="SaveRoom1",
        save_room_pos=Vector2(3, 4),
        total_frames=0,
        effective_frames=0.0,
        screen_count=0,
        total_screen_count=100,
        num_deaths=0,
        red_goo_destroyed=0,
        bricks_destroyed=0,
        is_speed_run=False,
        use_real_timers=False,
        last_map_sub_screen=MapScreenSubScreen.MAP,
        base_seed=0,
        bioflux_visions=False,
        hallucination_amount=0.0,
        translate_primordial=False,
        translate_vykhya=False,
        justin_bailey=False,
        has_drone=False,
        cheats_used=False,
        weapon_quick_select=(),
        items=(),
        key_points_completed=(),
        passwords=(PasswordSaveEntry("JUSTIN BAILEY", False),),
        area_save_data=(AreaSaveData("Eribu", 7, 12, 1.5, 2.25),),
        auto_maps=(AutoMapData("Eribu", 3, 2, 4, "1,0,1", (Point(0, 0),)),),
    )
    base.update(overrides)
    return SaveData(**base)


def items_of(item_type: ItemType, count: int, *, excluded: bool = False) -> Tuple[ItemRecord, ...]:
    return tuple(
        ItemRecord(f"{item_type.value}-{i}", item_type, False, excluded) for i in range(count)
    )


@pytest.fixture
def savedata_factory():
    return make_savedata


@pytest.fixture(autouse=True)
def isolated_user_settings(monkeypatch, tmp_path):
    # Never pick up a settings file from the developer's real config directory.
    missing = tmp_path / "user-config" / "settings.yaml"
    monkeypatch.setattr(Settings, "default_user_path", staticmethod(lambda: missing))
    monkeypatch.delenv("AVSG_LOG_LEVEL", raising=False)
    return missing


@pytest.fixture
def item_factory():
    return items_of
