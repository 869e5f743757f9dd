"""Closed enumerations used by the save file.

Every enum here is keyed by its serialized token: ``ItemType("TOOL")`` is the
lookup, ``member.value`` is the canonical token written by the game. Tokens
that are not members raise ``ValueError``; the decoder turns that into a
``DecodeError``.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional


class DifficultySetting(Enum):
    NORMAL = "NORMAL"
    HARD = "HARD"


class RandomizerDifficultySetting(Enum):
    DEFAULT = "DEFAULT"
    ADVANCED = "ADVANCED"
    MASOCHIST = "MASOCHIST"
    EASY = "EASY"
    NORMAL = "NORMAL"
    HARD = "HARD"


class CollisionDirs(Enum):
    NONE = "None"
    BOTTOM = "Bottom"
    LEFT = "Left"
    TOP = "Top"
    RIGHT = "Right"


class MapScreenSubScreen(Enum):
    MAP = "MAP"
    START = "START"
    INVENTORY = "INVENTORY"
    NOTES = "NOTES"
    PASSWORD = "PASSWORD"
    CONSOLE = "CONSOLE"
    COUNT = "COUNT"


class ItemType(Enum):
    """Category of an item record, used to bucket items for the 100% achievements."""

    GLITCH_BOMB_DROP = "GLITCH_BOMB_DROP"
    HEALTH_NODE = "HEALTH_NODE"
    HEALTH_NODE_FRAGMENT = "HEALTH_NODE_FRAGMENT"
    HEALTH_DROP = "HEALTH_DROP"
    LORE = "LORE"
    PERMANENT_UPGRADE = "PERMANENT_UPGRADE"
    POWER_NODE = "POWER_NODE"
    POWER_NODE_FRAGMENT = "POWER_NODE_FRAGMENT"
    RANGE_NODE = "RANGE_NODE"
    SIZE_NODE = "SIZE_NODE"
    TOOL = "TOOL"
    WEAPON = "WEAPON"

    @classmethod
    def default(cls) -> "ItemType":
        # Records without an mType come out as weapons. This mirrors how the
        # game's own deserializer behaves and changes the weapon count, so it
        # must not be "fixed" here.
        return cls.WEAPON


class Creature(Enum):
    """Creatures that can be glitched with the Address Disruptor.

    Each member carries its serialized token as ``value``, the bestiary name
    as ``display_name`` and whether it counts toward the Hacker achievement.
    Alternate tokens the game has used for a creature are listed in
    ``_ALIASES`` and resolve to the same member.
    """

    # Fauna
    ARACHNOPTOPUS = ("Arachnoptopus", "Hopping Spider")
    ARTICHOKER = ("Artichoker", "Hopping Shrubback")
    BLITE = ("Blite", "Red Wasp")
    BLURST = ("Blurst", "Slug")
    BLURST_SPAWN = ("BlurstSpawn", "Slug Swarm")
    BUOYG = ("Buoyg", "Green Glider")
    DROMETON = ("Drometon", "Drometon")
    EYE_COPTER = ("EyeCopter", "Firefly")
    FLYNN_STONE = ("FlynnStone", "Cyberdog")
    FUNGINE = ("Fungine", "Jellyfish")
    FURGLOT = ("Furglot", "Parasitic Shrub")
    GILL = ("Gill", "Laser Sea Urchin")
    GLUGG = ("Glugg", "Giant Boulderback")
    HOOKFISH = ("Hookfish", "Ancient Tunnel Hopper")
    JORM = ("Jorm", "Giant Greenworm")
    JORMITE = ("Jormite", "Baby Giant Greenworm", False)
    LOOP_DIATOM = ("LoopDiatom", "Pink Giant Diatom")
    LOOP_DIATOM_VIOLET = ("LoopDiatom_Violet", "Purple Giant Diatom")
    MOGRA = ("Mogra", "Mothmite")
    MUTANT = ("Mutant", "Brown Ghoul")
    MUTANT_STRONG = ("Mutant_Strong", "Gray Ghoul")
    PLIAA = ("Pliaa", "Red Flying Krill")
    POTATO = ("Potato", "Pillbug")
    PRONGFISH = ("Prongfish", "Tunnel Hopper")
    QUADROPUS = ("Quadropus", "Sudran Squid")
    RUGG = ("Rugg", "Green Roller")
    RUGG_META = ("Rugg_Meta", "Magenta Roller")
    SCORPIANT = ("Scorpiant", "Scorpiant")
    SEAMK = ("Seamk", "Purple Flying Krill")
    SMALL_MOGRA = ("SmallMogra", "Baby Mothmite")
    SNAILBORG = ("Snailborg", "Red Nautilus")
    SNAILBORG_META = ("Snailborg_Meta", "Blue Nautilus")
    SPACE_BAT = ("SpaceBat", "Space Bat")
    SPIDLER = ("Spidler", "Carnivorous Silk Bug")
    SPIRU = ("Spiru", "Spiru")
    SPIT_BUG = ("SpitBug", "Purple Wasp")
    SPIT_BUG_BOSS_SPAWN = ("SpitBugBossSpawn", "Ukhu Spawn")
    SWARMILY_CHILD = ("SwarmilyChild", "Small Butterfly")
    SWARMILY_PARENT = ("SwarmilyParent", "Large Butterfly")
    TRAP_CLAW = ("TrapClaw", "Purple Scissorbeak")
    TRAP_CLAW_GAMMA = ("TrapClaw_Gamma", "Cyan Scissorbeak")
    TRAP_CLAW_META = ("TrapClaw_Meta", "Red Scissorbeak")
    TUBE_PUFF = ("TubePuff", "Green Sea Sponge")
    TUBE_WORM = ("TubeWorm", "Yellow Sea Sponge")
    VOLG = ("Volg", "Green Gilk Pupae")
    YORCHUG = ("Yorchug", "Green Cephalopod")

    # Flora
    GOOLUMN = ("Goolumn", "Orb Wall")
    HOVERLING = ("Hoverling", "Blade Vine")
    MUSHROOM_POOF = ("MushroomPoof", "Walking Shrub")
    SPUNGUS_SPORE = ("SpungusSpore", "Mushroom Spores")
    TENTACLE_GRASS = ("TentacleGrass", "Poison Grate Plant", False)
    WILL_O_WISP = ("WillOWisp", "Will o Wisp")

    # Mechanized
    ANNIHIWAITER = ("Annihiwaiter", "Annihiwaiter")
    DISKKO = ("Diskko", "Omni-Sentry")
    DONAUGHT = ("Donaught", "Beholder Sentry")
    HOVERBUG = ("Hoverbug", "Ancient Sentry")
    REPAIR_DRONE = ("RepairDrone", "Repair Drone", False)
    SENTRY_BOT = ("SentryBot", "Silver Sentry")
    SENTRY_BOT_META = ("SentryBot_Meta", "Purple Sentry")
    TIE_FLIGHTER = ("TieFlighter", "T-Type Sentry")

    # Other
    NROK = ("Nrok", "Boulder")
    SPITBUG_NEST = ("SpitbugNest", "Hive")

    def __new__(cls, token: str, display_name: str, hacker: bool = True) -> "Creature":
        obj = object.__new__(cls)
        obj._value_ = token
        obj.display_name = display_name
        obj.hacker = hacker
        return obj

    @classmethod
    def _missing_(cls, value: object) -> Optional["Creature"]:
        name = _ALIASES.get(value) if isinstance(value, str) else None
        return cls[name] if name else None

    @property
    def token(self) -> str:
        return self._value_

    def __str__(self) -> str:
        return self.display_name

    @classmethod
    def aliases(cls) -> Dict[str, "Creature"]:
        return {alias: cls[name] for alias, name in _ALIASES.items()}

    @classmethod
    def hacker_list(cls) -> List["Creature"]:
        """Creatures required for the Hacker achievement, in declaration order."""
        return [c for c in cls if c.hacker]


# Alternate token -> member name. TubePuff is known by two names.
_ALIASES: Dict[str, str] = {
    "TubeWorm_Meta": "TUBE_PUFF",
}
