"""Deterministic domain model: the musical knowledge behind the scorers.

Lookup tables plus the small derivations a profile repository needs to
assemble a match profile.  No I/O.  The tables are the customisation
surface: swap in a larger instrument vocabulary without touching the
scorers.  Matching against them is exact and case-insensitive.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Iterable

from bandmatch.models import InstrumentSkill

# ---------------------------------------------------------------------------
# Instrument roles
# ---------------------------------------------------------------------------

RHYTHM = "rhythm"
HARMONY = "harmony"
MELODY = "melody"
SUPPORT = "support"

INSTRUMENT_ROLES: dict[str, str] = {
    # rhythm section
    "drums": RHYTHM,
    "percussion": RHYTHM,
    "bass": RHYTHM,
    # harmonic
    "guitar": HARMONY,
    "electric guitar": HARMONY,
    "acoustic guitar": HARMONY,
    "keyboard": HARMONY,
    "piano": HARMONY,
    # melodic
    "vocals": MELODY,
    "violin": MELODY,
    "saxophone": MELODY,
    "trumpet": MELODY,
    "flute": MELODY,
    # special cases
    "lead guitar": MELODY,
    "rhythm guitar": SUPPORT,
}

# Pairs that complement each other even when they share a role.
COMPLEMENTARY_SAME_ROLE: tuple[frozenset[str], ...] = (
    frozenset({"lead guitar", "rhythm guitar"}),
    frozenset({"vocals", "backing vocals"}),
    frozenset({"keyboard", "piano"}),
    frozenset({"drums", "bass"}),
)

RHYTHM_SECTION: frozenset[str] = frozenset({"drums", "bass"})


def instrument_role(
    name: str, roles: dict[str, str] | None = None,
) -> str | None:
    table = INSTRUMENT_ROLES if roles is None else roles
    return table.get(name.lower())


def are_complementary(
    first: str,
    second: str,
    roles: dict[str, str] | None = None,
    same_role_pairs: Iterable[frozenset[str]] | None = None,
) -> bool:
    """True when two instruments fill different roles in an ensemble.

    Both names need a known role.  Same-role instruments only complement
    each other when listed in ``COMPLEMENTARY_SAME_ROLE``.
    """
    role_a = instrument_role(first, roles)
    role_b = instrument_role(second, roles)
    if role_a is None or role_b is None:
        return False
    if role_a != role_b:
        return True

    a, b = first.lower(), second.lower()
    pairs = COMPLEMENTARY_SAME_ROLE if same_role_pairs is None else same_role_pairs
    return any(a in pair and b in pair for pair in pairs)


# ---------------------------------------------------------------------------
# Skill levels
# ---------------------------------------------------------------------------

SKILL_LEVELS: dict[str, int] = {
    "beginner": 1,
    "intermediate": 2,
    "advanced": 3,
    "expert": 4,
}

_DEFAULT_SKILL = 2


def skill_level_to_number(level: str) -> int:
    return SKILL_LEVELS.get(level, _DEFAULT_SKILL)


def skill_level_average(instruments: list[InstrumentSkill]) -> float:
    """Mean numeric skill across all instruments; 2.0 when there are none."""
    if not instruments:
        return float(_DEFAULT_SKILL)
    total = sum(skill_level_to_number(i.skill_level) for i in instruments)
    return total / len(instruments)


# ---------------------------------------------------------------------------
# Activity
# ---------------------------------------------------------------------------

def days_since(last_active: datetime, now: datetime | None = None) -> int:
    """Whole days elapsed, floored.  ``now`` defaults to the current time."""
    if now is None:
        now = datetime.now(tz=last_active.tzinfo)
    return (now - last_active).days


def activity_score(last_active: datetime, now: datetime | None = None) -> int:
    days = days_since(last_active, now)
    if days <= 1:
        return 100
    if days <= 7:
        return 80
    if days <= 30:
        return 60
    if days <= 90:
        return 40
    return 20


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
