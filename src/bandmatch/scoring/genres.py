"""Factor 2: Genre Compatibility Score (30% default weight).

Preference-weighted Jaccard similarity over genre ids: the sum of
per-genre minimum preferences over the sum of per-genre maximums.
Each genre both musicians rate 4 or higher adds a 10% boost.
"""

from __future__ import annotations

import logging

from bandmatch.domain_model import round_half_up
from bandmatch.models import GenrePreference, GenreResult

logger = logging.getLogger(__name__)

HIGH_PREFERENCE = 4
HIGH_PREFERENCE_BOOST = 0.1


def _preference_map(genres: list[GenrePreference]) -> dict[str, int]:
    # Later duplicates of an id win.
    return {g.id: g.preference for g in genres}


def _genre_name(
    genre_id: str,
    user_genres: list[GenrePreference],
    candidate_genres: list[GenrePreference],
) -> str:
    for g in user_genres:
        if g.id == genre_id:
            return g.name
    for g in candidate_genres:
        if g.id == genre_id:
            return g.name
    return "Unknown"


def calculate(
    user_genres: list[GenrePreference],
    candidate_genres: list[GenrePreference],
) -> GenreResult:
    if not user_genres or not candidate_genres:
        return GenreResult(score=0, explanation=["No genre preferences set"])

    user_prefs = _preference_map(user_genres)
    candidate_prefs = _preference_map(candidate_genres)

    common_ids = [gid for gid in user_prefs if gid in candidate_prefs]
    if not common_ids:
        return GenreResult(score=0, explanation=["No common musical genres"])

    intersection = sum(
        min(user_prefs[gid], candidate_prefs[gid]) for gid in common_ids
    )
    all_ids = set(user_prefs) | set(candidate_prefs)
    union = sum(
        max(user_prefs.get(gid, 0), candidate_prefs.get(gid, 0))
        for gid in all_ids
    )

    # Every preference zero: nothing to weigh.
    jaccard = intersection / union if union > 0 else 0.0

    high_pref = [
        gid for gid in common_ids
        if user_prefs[gid] >= HIGH_PREFERENCE
        and candidate_prefs[gid] >= HIGH_PREFERENCE
    ]
    boost = 1 + HIGH_PREFERENCE_BOOST * len(high_pref)
    score = min(100, round_half_up(jaccard * 100 * boost))

    common_genres = [
        _genre_name(gid, user_genres, candidate_genres) for gid in common_ids
    ]
    explanation = [f"{len(common_genres)} shared musical interests"]
    if high_pref:
        explanation.append(f"Strong alignment in {len(high_pref)} favorite genres")

    logger.debug(
        "Genres: common=%d inter=%d union=%d jaccard=%.3f boost=%.1f -> %d",
        len(common_ids), intersection, union, jaccard, boost, score,
    )
    return GenreResult(
        score=score, common_genres=common_genres, explanation=explanation,
    )
