"""Top-level orchestrator: scores one musician against many.

Pipeline:
  1. Receive / load match profiles
  2. Skip the current user and inactive candidates
  3. Drop candidates outside the distance cut-off
  4. Score the rest with the composite scorer         (deterministic)
  5. Drop weak matches, rank by overall score, truncate
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

from bandmatch import domain_model
from bandmatch.config import DEFAULT_CONFIG, ScoringConfig, settings
from bandmatch.models import (
    GenrePreference,
    InstrumentSkill,
    Location,
    MatchCandidate,
    UserMatchProfile,
)
from bandmatch.scoring import composite
from bandmatch.scoring.location import haversine_distance

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent.parent.parent / "data"


def load_profiles_from_json(data: list[dict]) -> list[UserMatchProfile]:
    return [UserMatchProfile(**p) for p in data]


def load_sample_profiles() -> list[UserMatchProfile]:
    path = DATA_DIR / "sample_profiles.json"
    with open(path) as f:
        raw = json.load(f)
    return load_profiles_from_json(raw)


def build_profile(
    profile_id: str,
    user_id: str,
    location: Location,
    genres: list[GenrePreference],
    instruments: list[InstrumentSkill],
    last_active: datetime,
    now: datetime | None = None,
    **extra,
) -> UserMatchProfile:
    """Assemble a profile, deriving skill average and activity score."""
    return UserMatchProfile(
        id=profile_id,
        user_id=user_id,
        location=location,
        genres=genres,
        instruments=instruments,
        skill_level_average=domain_model.skill_level_average(instruments),
        activity_score=domain_model.activity_score(last_active, now),
        last_active=last_active,
        **extra,
    )


def _cutoff(current_user: UserMatchProfile, max_distance: float | None) -> float:
    # Only filters; candidates are still scored against config.max_distance.
    if max_distance is not None:
        return max_distance
    return current_user.search_radius


def rank_candidates(
    current_user: UserMatchProfile,
    candidates: list[UserMatchProfile],
    config: ScoringConfig | None = None,
    *,
    min_score: int | None = None,
    top_k: int | None = None,
    max_distance: float | None = None,
    now: datetime | None = None,
) -> list[MatchCandidate]:
    config = config or DEFAULT_CONFIG
    threshold = settings.min_score if min_score is None else min_score
    k = settings.top_k if top_k is None else top_k
    cutoff = _cutoff(current_user, max_distance)

    ranked: list[MatchCandidate] = []
    skipped = too_far = too_weak = 0

    for candidate in candidates:
        if candidate.user_id == current_user.user_id or not candidate.is_active:
            skipped += 1
            continue

        distance = haversine_distance(
            current_user.location, candidate.location,
        )
        if distance > cutoff:
            logger.debug(
                "Filtering out %s: %dkm > %dkm",
                candidate.user_id,
                domain_model.round_half_up(distance),
                domain_model.round_half_up(cutoff),
            )
            too_far += 1
            continue

        match = composite.calculate(current_user, candidate, config, now)
        if match.overall < threshold:
            logger.debug(
                "Filtering out %s: match score %d < %d",
                candidate.user_id, match.overall, threshold,
            )
            too_weak += 1
            continue

        ranked.append(MatchCandidate(profile=candidate, score=match, distance=distance))

    ranked.sort(key=lambda mc: mc.score.overall, reverse=True)
    if k is not None:
        ranked = ranked[:k]

    logger.info(
        "Ranked %d candidates for %s: %d kept, %d skipped, %d too far, "
        "%d below %d",
        len(candidates), current_user.user_id, len(ranked), skipped,
        too_far, too_weak, threshold,
    )
    return ranked
