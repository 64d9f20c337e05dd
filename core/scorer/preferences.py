#!/usr/bin/env python3
"""
Preferences Bonus - Explicit stated preferences vs. the other side's attributes.

Compares requester preferences against candidate attributes and the reverse
(bidirectional), awarding up to PREFERENCE_BONUS_MAX points by match rate.
Unset values (None, 0, empty) are excluded from the attempt count, so a
sparse profile is neither rewarded nor punished.
"""

from typing import Any, Callable, Dict, Tuple
import logging

from core.models import UserProfile
from core.utils import is_truthy_flag, is_unset

logger = logging.getLogger(__name__)

PREFERENCE_BONUS_MAX = 5.0

# Height/weight tolerance: 5% of the preferred value, at least 2 units
NUMERIC_TOLERANCE_FRACTION = 0.05
NUMERIC_TOLERANCE_MIN = 2.0


def matches_id(pref: Any, attr: Any) -> bool:
    return str(pref).strip() == str(attr).strip()


def matches_numeric(pref: Any, attr: Any) -> bool:
    try:
        pref_num = float(pref)
        attr_num = float(attr)
    except (TypeError, ValueError):
        return False
    tolerance = max(pref_num * NUMERIC_TOLERANCE_FRACTION, NUMERIC_TOLERANCE_MIN)
    return abs(pref_num - attr_num) <= tolerance


def matches_children(pref: Any, attr: Any) -> bool:
    return is_truthy_flag(pref) == is_truthy_flag(attr)


def _is_blank(value: Any) -> bool:
    # Children flags are yes/no text where "0" is a real answer
    return value is None or str(value).strip() == ''


# (preference field, attribute field, comparator)
PREFERENCE_PAIRS: Tuple[Tuple[str, str, Callable[[Any, Any], bool]], ...] = (
    ('preferred_height', 'height_cm', matches_numeric),
    ('preferred_weight', 'weight_kg', matches_numeric),
    ('preferred_exercise', 'exercise_habits_id', matches_id),
    ('preferred_body_type', 'body_type_id', matches_id),
    ('preferred_lifestyle', 'lifestyle_id', matches_id),
    ('preferred_body_art', 'body_art_id', matches_id),
    ('preferred_education', 'education_id', matches_id),
    ('preferred_occupation', 'occupation_category_id', matches_id),
    ('preferred_income', 'income_id', matches_id),
    ('preferred_religion', 'religion_id', matches_id),
    ('preferred_smoking', 'smoking_preference_id', matches_id),
    ('preferred_drinking', 'drinking_preference_id', matches_id),
    ('preferred_number_of_children', 'number_of_children_id', matches_id),
    ('preferred_marital_status', 'marital_status_id', matches_id),
    ('preferred_ethnicity', 'ethnicity_id', matches_id),
    ('preferred_eye_color', 'eye_color_id', matches_id),
    ('preferred_hair_color', 'hair_color_id', matches_id),
    ('preferred_english_ability', 'english_ability_id', matches_id),
    ('preferred_children', 'have_children', matches_children),
)


def _count_matches(seeker: UserProfile, other: UserProfile) -> Tuple[int, int]:
    matched = 0
    attempted = 0
    for pref_field, attr_field, compare in PREFERENCE_PAIRS:
        pref = getattr(seeker, pref_field)
        attr = getattr(other, attr_field)
        unset = _is_blank if compare is matches_children else is_unset
        if unset(pref) or unset(attr):
            continue
        attempted += 1
        if compare(pref, attr):
            matched += 1
    return matched, attempted


def calculate_preference_bonus(
    requester: UserProfile,
    candidate: UserProfile
) -> Tuple[float, Dict[str, Any]]:
    """
    Calculate the preference-match bonus (0-5 points).

    Returns: (bonus, details)
    """
    forward_matched, forward_attempted = _count_matches(requester, candidate)
    reverse_matched, reverse_attempted = _count_matches(candidate, requester)

    matched = forward_matched + reverse_matched
    attempted = forward_attempted + reverse_attempted

    bonus = (matched / attempted) * PREFERENCE_BONUS_MAX if attempted else 0.0

    details = {
        'matched': matched,
        'attempted': attempted,
        'requester_to_candidate': (forward_matched, forward_attempted),
        'candidate_to_requester': (reverse_matched, reverse_attempted),
        'bonus': bonus,
    }
    return bonus, details
