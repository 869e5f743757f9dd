"""Achievement progress computed from a decoded save file.

Everything here is read-only over :class:`~avsg.savedata.SaveData`. Results
are plain values; :mod:`avsg.report` turns them into text.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple, Union

from .savedata import Creature, ItemType, SaveData

logger = logging.getLogger(__name__)

# Achievement requirements
ACHIEVEMENT_ALL_HEALTH = 13
ACHIEVEMENT_ALL_NOTES = 28
ACHIEVEMENT_ALL_POWER = 9
ACHIEVEMENT_ALL_RANGE = 4
ACHIEVEMENT_ALL_SIZE = 4
ACHIEVEMENT_ALL_TOOLS = 16
ACHIEVEMENT_ALL_WEAPONS = 20
ACHIEVEMENT_ALL_ITEMS = (
    ACHIEVEMENT_ALL_HEALTH
    + ACHIEVEMENT_ALL_NOTES
    + ACHIEVEMENT_ALL_POWER
    + ACHIEVEMENT_ALL_RANGE
    + ACHIEVEMENT_ALL_SIZE
    + ACHIEVEMENT_ALL_TOOLS
    + ACHIEVEMENT_ALL_WEAPONS
)
ACHIEVEMENT_BRICK_BREAKER = 2_000
ACHIEVEMENT_BUBBLE_BREAKER = 2_000
ACHIEVEMENT_HACK = 1
FRAGMENTS_PER_NODE = 5
LOW_PERCENT_MAXIMUM = 40.0
MOSTLY_INVINCIBLE_MAXIMUM = 1
PACIFIST_BOSS = "Clone"

# Bosses that can be checked in the save file. Athetos is missing because the
# game does not save after he is defeated.
BOSSES: Tuple[str, ...] = (
    "Xedur",
    "Telal",
    "Uruku",
    "Gir-Tab",
    "Vision",
    "Clone",
    "Ukhu",
    "Sentinel",
)

# The achievement for Vision is called Hallucination.
BOSS_DISPLAY_NAMES = {
    "Vision": "Hallucination",
}


class BossState(Enum):
    ALIVE = "Alive"
    DEAD = "Dead"

    @classmethod
    def from_dead(cls, dead: bool) -> "BossState":
        return cls.DEAD if dead else cls.ALIVE

    def __str__(self) -> str:
        return self.value


class Status(Enum):
    OK = "OK"
    FAILED = "Failed"

    def __str__(self) -> str:
        return self.value


class Progress(NamedTuple):
    current: int
    needed: int
    percent: float


def progress(current: int, needed: int) -> Progress:
    percent = current / needed * 100.0 if needed else 0.0
    return Progress(current, needed, percent)


def boss_display_name(boss: str) -> str:
    return BOSS_DISPLAY_NAMES.get(boss, boss)


class LowPercent(NamedTuple):
    progress: Progress
    status: Status


class DeathCount(NamedTuple):
    current: int
    maximum: int
    status: Status


class Pacifist(NamedTuple):
    boss: str
    state: BossState
    status: Status


@dataclass(frozen=True)
class Result:
    """One line of the achievement report."""

    name: str
    value: Union[Progress, LowPercent, DeathCount, Pacifist, BossState]


class Achievements:
    """Achievement calculations for a single decoded save."""

    def __init__(self, savedata: SaveData) -> None:
        self.savedata = savedata

    # Helpers

    def boss_state(self, boss: str) -> BossState:
        # Boss kills are recorded as speedrun checkpoints even when the run
        # is not a speedrun. No checkpoint log at all means nothing is dead.
        checkpoints = self.savedata.speedrun_checkpoints or ()
        return BossState.from_dead(any(c.name == boss for c in checkpoints))

    def item_type_count(self, item_type: ItemType) -> int:
        return sum(
            1
            for item in self.savedata.items
            if item.type is item_type and not item.excluded_from_count
        )

    def _nodes_with_fragments(self, nodes: ItemType, fragments: ItemType) -> int:
        # Fragments only count in whole groups; leftovers are dropped.
        return self.item_type_count(nodes) + self.item_type_count(fragments) // FRAGMENTS_PER_NODE

    def item_counts(self) -> Progress:
        current = (
            self._nodes_with_fragments(ItemType.HEALTH_NODE, ItemType.HEALTH_NODE_FRAGMENT)
            + self.item_type_count(ItemType.LORE)
            + self._nodes_with_fragments(ItemType.POWER_NODE, ItemType.POWER_NODE_FRAGMENT)
            + self.item_type_count(ItemType.RANGE_NODE)
            + self.item_type_count(ItemType.SIZE_NODE)
            + self.item_type_count(ItemType.TOOL)
            + self.item_type_count(ItemType.PERMANENT_UPGRADE)
            + self.item_type_count(ItemType.WEAPON)
        )
        return progress(current, ACHIEVEMENT_ALL_ITEMS)

    def _glitched_count(self) -> int:
        return len(self.savedata.creatures_glitched or ())

    # Achievements

    def all_health(self) -> Progress:
        current = self._nodes_with_fragments(ItemType.HEALTH_NODE, ItemType.HEALTH_NODE_FRAGMENT)
        return progress(current, ACHIEVEMENT_ALL_HEALTH)

    def all_items(self) -> Progress:
        return self.item_counts()

    def all_map(self) -> Progress:
        return progress(self.savedata.screen_count, self.savedata.total_screen_count)

    def all_notes(self) -> Progress:
        return progress(self.item_type_count(ItemType.LORE), ACHIEVEMENT_ALL_NOTES)

    def all_power(self) -> Progress:
        current = self._nodes_with_fragments(ItemType.POWER_NODE, ItemType.POWER_NODE_FRAGMENT)
        return progress(current, ACHIEVEMENT_ALL_POWER)

    def all_tools(self) -> Progress:
        current = self.item_type_count(ItemType.TOOL) + self.item_type_count(ItemType.PERMANENT_UPGRADE)
        return progress(current, ACHIEVEMENT_ALL_TOOLS)

    def all_weapons(self) -> Progress:
        return progress(self.item_type_count(ItemType.WEAPON), ACHIEVEMENT_ALL_WEAPONS)

    def brick_breaker(self) -> Progress:
        current = min(max(self.savedata.bricks_destroyed, 0), ACHIEVEMENT_BRICK_BREAKER)
        return progress(current, ACHIEVEMENT_BRICK_BREAKER)

    def bubble_breaker(self) -> Progress:
        current = min(max(self.savedata.red_goo_destroyed, 0), ACHIEVEMENT_BUBBLE_BREAKER)
        return progress(current, ACHIEVEMENT_BUBBLE_BREAKER)

    def hack(self) -> Progress:
        return progress(min(self._glitched_count(), ACHIEVEMENT_HACK), ACHIEVEMENT_HACK)

    def hacker(self) -> Progress:
        return progress(self._glitched_count(), len(Creature.hacker_list()))

    def low_percent(self) -> LowPercent:
        items = self.item_counts()
        status = Status.FAILED if items.percent >= LOW_PERCENT_MAXIMUM else Status.OK
        return LowPercent(items, status)

    def mostly_invincible(self) -> DeathCount:
        deaths = self.savedata.num_deaths
        status = Status.FAILED if deaths > MOSTLY_INVINCIBLE_MAXIMUM else Status.OK
        return DeathCount(deaths, MOSTLY_INVINCIBLE_MAXIMUM, status)

    def pacifist(self) -> Pacifist:
        state = self.boss_state(PACIFIST_BOSS)
        status = Status.FAILED if state is BossState.DEAD else Status.OK
        return Pacifist(PACIFIST_BOSS, state, status)

    def bosses(self) -> List[Tuple[str, BossState]]:
        """Kill state of every trackable boss, labelled for display."""
        return [(boss_display_name(b), self.boss_state(b)) for b in BOSSES]

    def hacker_requires(self) -> Optional[List[Creature]]:
        """Creatures still to glitch for Hacker, in bestiary order.

        Returns ``None`` when the save has no glitch log at all, which the
        game writes only once the first creature has been glitched.
        """
        glitched = self.savedata.creatures_glitched
        if glitched is None:
            return None
        done = set(glitched)
        return [c for c in Creature.hacker_list() if c not in done]

    def progress(self) -> List[Result]:
        """All achievement results in report order."""
        results = [
            Result("100% Health", self.all_health()),
            Result("100% Items", self.all_items()),
            Result("100% Map", self.all_map()),
            Result("100% Notes", self.all_notes()),
            Result("100% Power", self.all_power()),
            Result("100% Tools", self.all_tools()),
            Result("100% Weapons", self.all_weapons()),
            Result("Brick Breaker", self.brick_breaker()),
            Result("Bubble Breaker", self.bubble_breaker()),
            Result("Hack", self.hack()),
            Result("Hacker", self.hacker()),
            Result("Low %", self.low_percent()),
            Result("Mostly Invincible", self.mostly_invincible()),
            Result("Pacifist", self.pacifist()),
        ]
        results.extend(Result(name, state) for name, state in self.bosses())
        logger.debug("Computed %d achievement results", len(results))
        return results
