"""Data Transfer Objects shared by the scorer, cache and matcher.

DTOs are used to transfer data outside of the Unit of Work context,
allowing ORM rows to be converted to plain Python objects that can be
safely used (and shared across scoring threads) after the database
session is closed.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import FrozenSet, List, Optional, Dict, Tuple

from core.utils import calculate_age


@dataclass(frozen=True)
class UserProfile:
    """Read-only per-request snapshot of a user's scoring inputs."""
    id: int

    # Demographics
    age: Optional[int] = None
    birthdate: Optional[date] = None
    gender: Optional[str] = None
    country_id: Optional[int] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    # Attributes (categorical ids unless noted)
    religion_id: Optional[int] = None
    have_children: Optional[str] = None  # free-form yes/no column
    marital_status_id: Optional[int] = None
    smoking_preference_id: Optional[int] = None
    drinking_preference_id: Optional[int] = None
    exercise_habits_id: Optional[int] = None
    living_situation_id: Optional[int] = None
    lifestyle_id: Optional[int] = None
    education_id: Optional[int] = None
    occupation_category_id: Optional[int] = None
    height_cm: Optional[float] = None
    weight_kg: Optional[float] = None
    body_type_id: Optional[int] = None
    ethnicity_id: Optional[int] = None
    eye_color_id: Optional[int] = None
    hair_color_id: Optional[int] = None
    body_art_id: Optional[int] = None
    english_ability_id: Optional[int] = None
    number_of_children_id: Optional[int] = None
    income_id: Optional[int] = None

    # Preferences (what the user is looking for)
    relationship_type: Optional[str] = None
    preferred_gender: Optional[str] = None
    age_pref_min: Optional[int] = None
    age_pref_max: Optional[int] = None
    preferred_height: Optional[float] = None
    preferred_weight: Optional[float] = None
    preferred_exercise: Optional[int] = None
    preferred_body_type: Optional[int] = None
    preferred_lifestyle: Optional[int] = None
    preferred_body_art: Optional[int] = None
    preferred_education: Optional[int] = None
    preferred_occupation: Optional[int] = None
    preferred_income: Optional[int] = None
    preferred_religion: Optional[int] = None
    preferred_smoking: Optional[int] = None
    preferred_drinking: Optional[int] = None
    preferred_children: Optional[str] = None
    preferred_number_of_children: Optional[int] = None
    preferred_marital_status: Optional[int] = None
    preferred_ethnicity: Optional[int] = None
    preferred_eye_color: Optional[int] = None
    preferred_hair_color: Optional[int] = None
    preferred_english_ability: Optional[int] = None

    interests: FrozenSet[int] = field(default_factory=frozenset)
    hobbies: FrozenSet[int] = field(default_factory=frozenset)

    @property
    def effective_age(self) -> Optional[int]:
        if self.age is not None:
            return self.age
        return calculate_age(self.birthdate)

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def has_age_preference(self) -> bool:
        return self.age_pref_min is not None or self.age_pref_max is not None


@dataclass(frozen=True)
class EligibilityCriteria:
    """
    Requester-derived inputs to the candidate query.

    Gender values are already normalized; None disables the matching filter.
    """
    requester_id: int
    online_cutoff: datetime
    preferred_gender: Optional[str] = None
    preferred_country_ids: Tuple[int, ...] = ()
    requester_age: Optional[int] = None
    requester_country_id: Optional[int] = None
    requester_gender: Optional[str] = None
    requester_has_photo: bool = False


@dataclass(frozen=True)
class Badge:
    """Human-readable tier derived from a score."""
    label: str
    tier: str
    color: str
    icon: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            'label': self.label,
            'tier': self.tier,
            'color': self.color,
            'icon': self.icon,
        }


@dataclass
class MatchCandidate:
    """
    Ephemeral per-request candidate.

    Created by the eligibility filter as a skeleton (score fields unset),
    completed by the ranker.
    """
    user_id: int
    display_name: str
    age: Optional[int] = None
    birthdate: Optional[date] = None
    gender: Optional[str] = None
    country_id: Optional[int] = None
    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    profile_image: Optional[str] = None
    match_date: Optional[datetime] = None

    is_online: bool = False
    liked_by_candidate: bool = False
    requester_liked_candidate: bool = False
    is_mutual_like: bool = False

    cached_score: Optional[int] = None
    score: Optional[int] = None
    badge: Optional[Badge] = None
    used_fallback: bool = False

    @property
    def has_any_like(self) -> bool:
        return self.liked_by_candidate or self.requester_liked_candidate


@dataclass
class MatchListing:
    """Result of one ranked listing request."""
    candidates: List[MatchCandidate]
    min_score_preference: int
    page: int
    limit: int
    total: Optional[int] = None
