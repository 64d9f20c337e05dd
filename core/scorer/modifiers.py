#!/usr/bin/env python3
"""
Point Modifiers - Additive adjustments on top of the weighted sub-scores.

Includes:
- Age score (explicit preferred range) or age-gap banding (no range)
- Distance modifier from haversine distance
- Perfect-match bonus for near-identical attribute profiles
- Country modifier and per-pair score ceiling
"""

from typing import Optional, Tuple

from core.models import UserProfile
from core.scorer.geo import distance_km

AGE_SCORE_MAX = 15
AGE_CONTRIBUTION_MAX = 5

# (max distance km, points), nearest first
DISTANCE_BANDS: Tuple[Tuple[float, int], ...] = (
    (10, 3),
    (50, 2),
    (200, 1),
    (1000, 0),
    (5000, -2),
)
DISTANCE_FAR_MODIFIER = -4

# (max age gap in years, points)
AGE_GAP_BANDS: Tuple[Tuple[int, int], ...] = (
    (2, 2),
    (5, 1),
    (9, 0),
    (14, -2),
)
AGE_GAP_FAR_MODIFIER = -5

PERFECT_MATCH_ATTRIBUTES: Tuple[str, ...] = (
    'religion_id',
    'marital_status_id',
    'relationship_type',
    'smoking_preference_id',
    'drinking_preference_id',
    'exercise_habits_id',
    'lifestyle_id',
    'education_id',
    'occupation_category_id',
)
PERFECT_MATCH_THRESHOLD = 8
PERFECT_MATCH_BONUS_SAME_COUNTRY = 7
PERFECT_MATCH_BONUS_OTHER_COUNTRY = 4

MAX_SCORE_SAME_COUNTRY = 95
MAX_SCORE_OTHER_COUNTRY = 92
SAME_COUNTRY_MODIFIER = 3


def calculate_age_score(
    user_age: int,
    match_age: int,
    pref_min: Optional[int],
    pref_max: Optional[int]
) -> float:
    """
    Age score (0-15): one point lost per year of difference.

    Halved (exactly, no flooring) when the match falls outside the preferred
    range. The range only applies when both bounds are set.
    """
    diff = abs(user_age - match_age)
    score = float(max(AGE_SCORE_MAX - diff, 0))

    if pref_min is not None and pref_max is not None:
        if match_age < pref_min or match_age > pref_max:
            score = score / 2
    return score


def age_gap_modifier(age_diff: int) -> int:
    for max_gap, points in AGE_GAP_BANDS:
        if age_diff <= max_gap:
            return points
    return AGE_GAP_FAR_MODIFIER


def age_contribution(requester: UserProfile, candidate: UserProfile) -> float:
    """Points contributed by age, 0 when either age is unknown."""
    requester_age = requester.effective_age
    candidate_age = candidate.effective_age
    if requester_age is None or candidate_age is None:
        return 0.0

    if requester.has_age_preference:
        age_score = calculate_age_score(
            requester_age,
            candidate_age,
            requester.age_pref_min,
            requester.age_pref_max
        )
        return (age_score / AGE_SCORE_MAX) * AGE_CONTRIBUTION_MAX

    return float(age_gap_modifier(abs(requester_age - candidate_age)))


def distance_modifier(km: Optional[float]) -> int:
    if km is None:
        return 0
    for max_km, points in DISTANCE_BANDS:
        if km <= max_km:
            return points
    return DISTANCE_FAR_MODIFIER


def pair_distance_modifier(requester: UserProfile, candidate: UserProfile) -> Tuple[int, Optional[float]]:
    """Distance modifier for two profiles; (0, None) unless both have coordinates."""
    if not (requester.has_coordinates and candidate.has_coordinates):
        return 0, None
    km = distance_km(requester.latitude, requester.longitude, candidate.latitude, candidate.longitude)
    return distance_modifier(km), km


def same_country(requester: UserProfile, candidate: UserProfile) -> bool:
    return bool(requester.country_id and candidate.country_id and requester.country_id == candidate.country_id)


def max_score_for_pair(requester: UserProfile, candidate: UserProfile) -> int:
    return MAX_SCORE_SAME_COUNTRY if same_country(requester, candidate) else MAX_SCORE_OTHER_COUNTRY


def perfect_match_count(requester: UserProfile, candidate: UserProfile) -> int:
    count = 0
    for attr in PERFECT_MATCH_ATTRIBUTES:
        left = getattr(requester, attr)
        right = getattr(candidate, attr)
        if left and right and left == right:
            count += 1
    return count


def perfect_match_bonus(requester: UserProfile, candidate: UserProfile) -> int:
    if perfect_match_count(requester, candidate) < PERFECT_MATCH_THRESHOLD:
        return 0
    if same_country(requester, candidate):
        return PERFECT_MATCH_BONUS_SAME_COUNTRY
    return PERFECT_MATCH_BONUS_OTHER_COUNTRY


def country_modifier(requester: UserProfile, candidate: UserProfile) -> int:
    return SAME_COUNTRY_MODIFIER if same_country(requester, candidate) else 0
