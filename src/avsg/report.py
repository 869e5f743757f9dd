from __future__ import annotations

from typing import Iterable, List, Optional

from .achievements import BossState, DeathCount, LowPercent, Pacifist, Progress, Result
from .savedata import Creature

HEADER = "Achievement Progress:"
MAP_RESULT = "100% Map"


def format_progress(p: Progress, unit: str = "") -> str:
    unit = f" {unit}" if unit else ""
    return f"{p.current}/{p.needed}{unit} ({p.percent:.2f}%)"


def format_result(result: Result) -> str:
    value = result.value
    if isinstance(value, LowPercent):
        body = f"{format_progress(value.progress)} ({value.status})"
    elif isinstance(value, DeathCount):
        word = "death" if value.current == 1 else "deaths"
        body = f"{value.current}/{value.maximum} {word} ({value.status})"
    elif isinstance(value, Pacifist):
        body = f"{value.boss} {value.state} ({value.status})"
    elif isinstance(value, BossState):
        body = str(value)
    elif isinstance(value, Progress):
        body = format_progress(value, "screens" if result.name == MAP_RESULT else "")
    else:
        raise TypeError(f"Unsupported result value: {value!r}")
    return f"  - {result.name}: {body}"


def render_progress(results: Iterable[Result]) -> List[str]:
    return [HEADER] + [format_result(r) for r in results]


def render_hacker(remaining: Optional[List[Creature]]) -> List[str]:
    """Lines for the ``hacker`` command.

    ``None`` means the save has no glitch log, so every creature is still
    required; that is reported as a single line rather than the full list.
    """
    if remaining is None:
        return ["Hacker Achievement requires:", "  - All creatures required"]
    word = "creature" if len(remaining) == 1 else "creatures"
    lines = [f"Hacker Achievement requires {len(remaining)} more {word}:"]
    lines.extend(f"  - {c.display_name} ({c.token})" for c in remaining)
    return lines
