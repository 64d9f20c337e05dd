#!/usr/bin/env python3
"""
Compatibility Scoring Service - Rule-based pairwise compatibility score.

Combines five weighted sub-scores (97% of the scale, headroom reserved for
modifiers) with additive point modifiers:
- Preference-match bonus (0-5)
- Age contribution (explicit range) or age-gap banding
- Distance modifier (both sides need coordinates)
- Perfect-match bonus (8+ of 9 identical attributes)
- Country modifier, applied after the floor/ceiling clamp

Anti-gaming: the total is clamped to [30, max_score] when the pair has any
profile data ([0, max_score] otherwise), where max_score is 95 for a shared
country and 92 otherwise. Scores are directional: score(A, B) uses A's
preferences and may differ from score(B, A).

Pure and side-effect free, so it is safe to call from scoring threads.
"""

import logging

from core.models import UserProfile
from core.utils import round_half_up
from core.scorer import components
from core.scorer import modifiers
from core.scorer.models import ScoreBreakdown
from core.scorer.preferences import calculate_preference_bonus

logger = logging.getLogger(__name__)

DATA_FLOOR = 30

_HAS_DATA_ATTRIBUTES = (
    'religion_id',
    'marital_status_id',
    'relationship_type',
    'smoking_preference_id',
    'drinking_preference_id',
    'exercise_habits_id',
    'living_situation_id',
    'lifestyle_id',
    'education_id',
    'occupation_category_id',
)


def has_data(a: UserProfile, b: UserProfile) -> bool:
    """True if either side supplied anything the sub-scores can use."""
    if a.interests or b.interests or a.hobbies or b.hobbies:
        return True
    return any(getattr(a, attr) or getattr(b, attr) for attr in _HAS_DATA_ATTRIBUTES)


class CompatibilityScorer:
    """
    Scores a requester against a candidate.

    Stateless; one instance can be shared across requests and threads.
    """

    def breakdown(self, requester: UserProfile, candidate: UserProfile) -> ScoreBreakdown:
        """Calculate the score and every component that produced it."""
        result = ScoreBreakdown(
            interests=components.interest_score(requester, candidate),
            values=components.values_score(requester, candidate),
            intent=components.intent_score(requester, candidate),
            lifestyle=components.lifestyle_score(requester, candidate),
            personality=components.personality_score(requester, candidate),
        )

        total = (
            result.values * components.WEIGHT_VALUES
            + result.intent * components.WEIGHT_INTENT
            + result.lifestyle * components.WEIGHT_LIFESTYLE
            + result.personality * components.WEIGHT_PERSONALITY
            + result.interests * components.WEIGHT_INTERESTS
        )

        result.preference_bonus, result.preference_details = calculate_preference_bonus(requester, candidate)
        total += result.preference_bonus

        result.age_contribution = modifiers.age_contribution(requester, candidate)
        total += result.age_contribution

        result.distance_modifier, result.distance_km = modifiers.pair_distance_modifier(requester, candidate)
        total += result.distance_modifier

        result.weighted_total = total
        result.perfect_match_bonus = modifiers.perfect_match_bonus(requester, candidate)
        result.max_score = modifiers.max_score_for_pair(requester, candidate)
        result.has_data = has_data(requester, candidate)

        floor = DATA_FLOOR if result.has_data else 0
        final = round_half_up(total + result.perfect_match_bonus)
        final = max(floor, min(result.max_score, final))

        # Country modifier goes on after the clamp so it stays visible at the floor
        result.country_modifier = modifiers.country_modifier(requester, candidate)
        final = min(result.max_score, final + result.country_modifier)

        result.final_score = final

        logger.debug(
            f"Compatibility {requester.id}->{candidate.id}: total={total:.2f}, "
            f"perfect_bonus={result.perfect_match_bonus}, country={result.country_modifier}, "
            f"final={final}"
        )
        return result

    def score(self, requester: UserProfile, candidate: UserProfile) -> int:
        return self.breakdown(requester, candidate).final_score
