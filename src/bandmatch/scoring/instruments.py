"""Factor 3: Instrument Compatibility Score (25% default weight).

Heuristic over each musician's primary instruments, starting from 50:
  - +20 per complementary (user, candidate) pair
  - +15 when drums and bass are both present (rhythm section)
  - +10 when at least two distinct roles are present (harmonic balance)
  - -15 per user instrument the candidate also plays
  - +10 / +5 when average skill levels sit within 1 / 1.5 of each other
Clamped to [0, 100].
"""

from __future__ import annotations

import logging

from bandmatch.domain_model import (
    RHYTHM_SECTION,
    are_complementary,
    instrument_role,
    round_half_up,
    skill_level_to_number,
)
from bandmatch.models import InstrumentResult, InstrumentSkill

logger = logging.getLogger(__name__)

BASE_SCORE = 50
COMPLEMENT_BONUS = 20
RHYTHM_SECTION_BONUS = 15
HARMONIC_BALANCE_BONUS = 10
OVERLAP_PENALTY = 15
FALLBACK_PRIMARY_COUNT = 2


def primary_instruments(instruments: list[InstrumentSkill]) -> list[InstrumentSkill]:
    """Instruments flagged primary, else the two with the most experience."""
    flagged = [i for i in instruments if i.is_primary]
    if flagged:
        return flagged
    ranked = sorted(instruments, key=lambda i: i.years_of_experience, reverse=True)
    return ranked[:FALLBACK_PRIMARY_COUNT]


def _complementary_pairs(
    user_primary: list[InstrumentSkill],
    candidate_primary: list[InstrumentSkill],
) -> list[tuple[str, str]]:
    pairs = []
    for ui in user_primary:
        for ci in candidate_primary:
            if are_complementary(ui.name, ci.name):
                pairs.append((ui.name, ci.name))
    return pairs


def _exact_overlaps(
    user_primary: list[InstrumentSkill],
    candidate_primary: list[InstrumentSkill],
) -> list[InstrumentSkill]:
    candidate_names = {ci.name.lower() for ci in candidate_primary}
    return [ui for ui in user_primary if ui.name.lower() in candidate_names]


def _has_rhythm_section(instruments: list[InstrumentSkill]) -> bool:
    names = {i.name.lower() for i in instruments}
    return RHYTHM_SECTION <= names


def _has_harmonic_balance(instruments: list[InstrumentSkill]) -> bool:
    roles = {instrument_role(i.name) for i in instruments}
    roles.discard(None)
    return len(roles) >= 2


def _average_skill(instruments: list[InstrumentSkill]) -> float:
    return sum(skill_level_to_number(i.skill_level) for i in instruments) / len(
        instruments
    )


def _skill_bonus(
    user_instruments: list[InstrumentSkill],
    candidate_instruments: list[InstrumentSkill],
) -> int:
    # Averages span every instrument, not just primaries.
    gap = abs(_average_skill(user_instruments) - _average_skill(candidate_instruments))
    if gap <= 1:
        return 10
    if gap <= 1.5:
        return 5
    return 0


def calculate(
    user_instruments: list[InstrumentSkill],
    candidate_instruments: list[InstrumentSkill],
) -> InstrumentResult:
    if not user_instruments or not candidate_instruments:
        return InstrumentResult(score=0, explanation=["No instruments specified"])

    user_primary = primary_instruments(user_instruments)
    candidate_primary = primary_instruments(candidate_instruments)
    combined = user_primary + candidate_primary

    overlaps = _exact_overlaps(user_primary, candidate_primary)
    pairs = _complementary_pairs(user_primary, candidate_primary)
    rhythm_section = _has_rhythm_section(combined)
    harmonic_balance = _has_harmonic_balance(combined)
    skill_bonus = _skill_bonus(user_instruments, candidate_instruments)

    raw = BASE_SCORE + COMPLEMENT_BONUS * len(pairs)
    if rhythm_section:
        raw += RHYTHM_SECTION_BONUS
    if harmonic_balance:
        raw += HARMONIC_BALANCE_BONUS
    raw -= OVERLAP_PENALTY * len(overlaps)
    raw += skill_bonus
    score = round_half_up(max(0, min(100, raw)))

    explanation = []
    if pairs:
        explanation.append(
            f"Great musical chemistry with {len(pairs)} complementary instruments"
        )
    if overlaps:
        explanation.append(
            f"Some overlap in {', '.join(i.name for i in overlaps)}"
        )
    if rhythm_section:
        explanation.append("Forms a solid rhythm section together")

    logger.debug(
        "Instruments: pairs=%d overlaps=%d rhythm=%s balance=%s skill=+%d "
        "raw=%d -> %d",
        len(pairs), len(overlaps), rhythm_section, harmonic_balance,
        skill_bonus, raw, score,
    )
    return InstrumentResult(
        score=score,
        complementarity=[f"{user} complements {cand}" for user, cand in pairs],
        explanation=explanation,
    )
