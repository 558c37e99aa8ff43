"""Composite scorer: weighted sum of all factor scores.

Location, genre and instrument factors are delegated to their scorers;
experience and activity are computed here.  Weights are applied as given,
so weights summing past 1.0 yield an overall score past 100.
"""

from __future__ import annotations

import logging
from datetime import datetime

from bandmatch.config import DEFAULT_CONFIG, ScoringConfig
from bandmatch.domain_model import days_since, round_half_up
from bandmatch.models import MatchFactors, MatchScore, UserMatchProfile
from bandmatch.scoring import genres, instruments, location

logger = logging.getLogger(__name__)

BASE_CONFIDENCE = 0.5


def experience_score(
    current_user: UserMatchProfile,
    candidate: UserMatchProfile,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> int:
    gap = abs(current_user.skill_level_average - candidate.skill_level_average)
    tolerance = config.skill_level_tolerance
    if gap <= tolerance:
        return 100
    if gap <= tolerance * 1.5:
        return 75
    if gap <= tolerance * 2:
        return 50
    return 25


def activity_score(candidate: UserMatchProfile, now: datetime | None = None) -> int:
    """Recency of the candidate only; the current user's activity is ignored."""
    days = days_since(candidate.last_active, now)
    if days <= 1:
        return 100
    if days <= 7:
        return 80
    if days <= 30:
        return 60
    return 30


def confidence(current_user: UserMatchProfile, candidate: UserMatchProfile) -> float:
    value = BASE_CONFIDENCE
    if len(current_user.genres) >= 3 and len(candidate.genres) >= 3:
        value += 0.2
    if current_user.instruments and candidate.instruments:
        value += 0.2
    if current_user.location and candidate.location:
        value += 0.1
    return min(1.0, value)


def calculate(
    current_user: UserMatchProfile,
    candidate: UserMatchProfile,
    config: ScoringConfig | None = None,
    now: datetime | None = None,
) -> MatchScore:
    """Score ``candidate`` from ``current_user``'s perspective."""
    config = config or DEFAULT_CONFIG
    w = config.weights

    loc = location.calculate(
        current_user.location,
        candidate.location,
        config.max_distance,
        config.location_decay_distance,
    )
    genre = genres.calculate(current_user.genres, candidate.genres)
    instrument = instruments.calculate(current_user.instruments, candidate.instruments)

    factors = MatchFactors(
        location=loc.score,
        genres=genre.score,
        instruments=instrument.score,
        experience=experience_score(current_user, candidate, config),
        activity=activity_score(candidate, now),
    )
    weighted = (
        factors.location * w.location
        + factors.genres * w.genres
        + factors.instruments * w.instruments
        + factors.experience * w.experience
        + factors.activity * w.activity
    )

    km = round_half_up(loc.distance)
    if loc.distance <= config.location_decay_distance:
        explanation = [f"Close proximity ({km}km away)"]
    else:
        explanation = [f"{km}km away"]
    explanation.extend(genre.explanation)
    explanation.extend(instrument.explanation)

    result = MatchScore(
        overall=round_half_up(weighted),
        factors=factors,
        explanation=explanation,
        confidence=confidence(current_user, candidate),
    )
    logger.debug(
        "Composite %s->%s: loc=%d genres=%d instr=%d exp=%d act=%d -> %d "
        "(confidence=%.2f)",
        current_user.user_id, candidate.user_id, factors.location,
        factors.genres, factors.instruments, factors.experience,
        factors.activity, result.overall, result.confidence,
    )
    return result


calculate_match_score = calculate
