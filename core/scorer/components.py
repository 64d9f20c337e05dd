#!/usr/bin/env python3
"""
Component Scores - The five weighted sub-scores of a compatibility score.

Each function returns a value in [0, 1]:
- Interests (12%): overlap of interest sets, dampened for interest-stuffing
- Values (32%): religion, children status, marital status
- Intent (18%): relationship type
- Lifestyle (18%): smoking, drinking, exercise, living situation, lifestyle
- Personality (17%): education level, occupation, hobby overlap

Checks only count when both sides supplied the attribute; a missing
attribute is never treated as a mismatch.
"""

from typing import AbstractSet, Any, Iterable, Tuple

from core.models import UserProfile
from core.utils import is_truthy_flag

WEIGHT_VALUES = 32
WEIGHT_INTENT = 18
WEIGHT_LIFESTYLE = 18
WEIGHT_PERSONALITY = 17
WEIGHT_INTERESTS = 12

# Anti-gaming: profiles listing many interests get a dampened overlap ratio
INTEREST_STUFFING_THRESHOLD = 10
INTEREST_STUFFING_FACTOR = 0.85
NEUTRAL_INTEREST_SCORE = 0.5

RELIGION_PARTIAL = 0.3
CHILDREN_PARTIAL = 0.5
MARITAL_PARTIAL = 0.4

# (attribute, partial credit on mismatch)
LIFESTYLE_CHECKS: Tuple[Tuple[str, float], ...] = (
    ('smoking_preference_id', 0.3),
    ('drinking_preference_id', 0.4),
    ('exercise_habits_id', 0.5),
    ('living_situation_id', 0.4),
    ('lifestyle_id', 0.3),
)

OCCUPATION_PARTIAL = 0.3
EDUCATION_STEP_PENALTY = 0.2

INTENT_EXACT = 1.0
INTENT_MISMATCH = 0.2
INTENT_ONE_SIDED = 0.5


def _present(value: Any) -> bool:
    return bool(value)


def overlap_ratio(a: AbstractSet[int], b: AbstractSet[int]) -> float:
    """Shared items divided by the size of the larger set."""
    larger = max(len(a), len(b), 1)
    return len(a & b) / larger


def _average(partials: Iterable[float]) -> float:
    values = list(partials)
    if not values:
        return 0.0
    return sum(values) / len(values)


def _exact_or_partial(a: UserProfile, b: UserProfile, attr: str, partial: float):
    left = getattr(a, attr)
    right = getattr(b, attr)
    if not (_present(left) and _present(right)):
        return None
    return 1.0 if left == right else partial


def interest_score(a: UserProfile, b: UserProfile) -> float:
    if not a.interests and not b.interests:
        # Don't penalize users who haven't set interests yet
        return NEUTRAL_INTEREST_SCORE

    score = overlap_ratio(a.interests, b.interests)
    if len(a.interests) > INTEREST_STUFFING_THRESHOLD or len(b.interests) > INTEREST_STUFFING_THRESHOLD:
        score *= INTEREST_STUFFING_FACTOR
    return score


def values_score(a: UserProfile, b: UserProfile) -> float:
    partials = []

    religion = _exact_or_partial(a, b, 'religion_id', RELIGION_PARTIAL)
    if religion is not None:
        partials.append(religion)

    if _present(a.have_children) and _present(b.have_children):
        same = is_truthy_flag(a.have_children) == is_truthy_flag(b.have_children)
        partials.append(1.0 if same else CHILDREN_PARTIAL)

    marital = _exact_or_partial(a, b, 'marital_status_id', MARITAL_PARTIAL)
    if marital is not None:
        partials.append(marital)

    return _average(partials)


def intent_score(a: UserProfile, b: UserProfile) -> float:
    if a.relationship_type and b.relationship_type:
        return INTENT_EXACT if a.relationship_type == b.relationship_type else INTENT_MISMATCH
    if a.relationship_type or b.relationship_type:
        return INTENT_ONE_SIDED
    return 0.0


def lifestyle_score(a: UserProfile, b: UserProfile) -> float:
    partials = []
    for attr, partial in LIFESTYLE_CHECKS:
        result = _exact_or_partial(a, b, attr, partial)
        if result is not None:
            partials.append(result)
    return _average(partials)


def personality_score(a: UserProfile, b: UserProfile) -> float:
    partials = []

    if _present(a.education_id) and _present(b.education_id):
        if a.education_id == b.education_id:
            partials.append(1.0)
        else:
            # Education ids are ordered levels; closer levels score higher
            level_diff = abs(int(a.education_id) - int(b.education_id))
            partials.append(max(0.0, 1 - level_diff * EDUCATION_STEP_PENALTY))

    occupation = _exact_or_partial(a, b, 'occupation_category_id', OCCUPATION_PARTIAL)
    if occupation is not None:
        partials.append(occupation)

    if a.hobbies or b.hobbies:
        partials.append(overlap_ratio(a.hobbies, b.hobbies))

    return _average(partials)
