import logging
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import select, func

from core.models import UserProfile
from core.utils import calculate_age
from database.models import (
    User, UserAttributes, UserPreferences, UserPreferredCountry,
    UserInterest, UserHobby, UserImage, UserProfileSettings, City, Country
)
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

DEFAULT_MIN_SCORE_PREFERENCE = 1

ATTRIBUTE_FIELDS: Tuple[str, ...] = (
    'religion_id',
    'have_children',
    'marital_status_id',
    'smoking_preference_id',
    'drinking_preference_id',
    'exercise_habits_id',
    'living_situation_id',
    'lifestyle_id',
    'education_id',
    'occupation_category_id',
    'height_cm',
    'weight_kg',
    'body_type_id',
    'ethnicity_id',
    'eye_color_id',
    'hair_color_id',
    'body_art_id',
    'english_ability_id',
    'number_of_children_id',
    'income_id',
)

PREFERENCE_FIELDS: Tuple[str, ...] = (
    'relationship_type',
    'preferred_gender',
    'preferred_height',
    'preferred_weight',
    'preferred_exercise',
    'preferred_body_type',
    'preferred_lifestyle',
    'preferred_body_art',
    'preferred_education',
    'preferred_occupation',
    'preferred_income',
    'preferred_religion',
    'preferred_smoking',
    'preferred_drinking',
    'preferred_children',
    'preferred_number_of_children',
    'preferred_marital_status',
    'preferred_ethnicity',
    'preferred_eye_color',
    'preferred_hair_color',
    'preferred_english_ability',
)


def _age_range(user_id: int, prefs: Optional[UserPreferences]) -> Tuple[Optional[int], Optional[int]]:
    if prefs is None:
        return None, None
    age_min, age_max = prefs.age_min, prefs.age_max
    if age_min is not None and age_max is not None and age_min > age_max:
        logger.warning(
            f"User {user_id} has invalid age range: min={age_min}, max={age_max}. Ignoring age preference."
        )
        return None, None
    return age_min, age_max


class ProfileRepository(BaseRepository):
    """Reads per-user scoring inputs and writes profile settings."""

    def get_user(self, user_id: int) -> Optional[User]:
        stmt = select(User).where(User.id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_profile(self, user_id: int) -> Optional[UserProfile]:
        return self.get_profiles([user_id]).get(user_id)

    def get_profiles(self, user_ids: Iterable[int]) -> Dict[int, UserProfile]:
        """
        Load scoring snapshots for several users in three queries.

        Coordinates prefer the city and fall back to the country. Users
        that do not exist are absent from the result.
        """
        ids = list(dict.fromkeys(user_ids))
        if not ids:
            return {}

        stmt = (
            select(
                User,
                UserAttributes,
                UserPreferences,
                func.coalesce(City.latitude, Country.latitude).label('latitude'),
                func.coalesce(City.longitude, Country.longitude).label('longitude'),
            )
            .outerjoin(UserAttributes, UserAttributes.user_id == User.id)
            .outerjoin(UserPreferences, UserPreferences.user_id == User.id)
            .outerjoin(City, User.city_id == City.id)
            .outerjoin(Country, User.country_id == Country.id)
            .where(User.id.in_(ids))
        )
        rows = self.db.execute(stmt).all()

        interests = self._id_sets(UserInterest.user_id, UserInterest.interest_id, ids)
        hobbies = self._id_sets(UserHobby.user_id, UserHobby.hobby_id, ids)

        profiles = {}
        for user, attrs, prefs, latitude, longitude in rows:
            profiles[user.id] = self._to_profile(
                user, attrs, prefs, latitude, longitude,
                interests.get(user.id, frozenset()),
                hobbies.get(user.id, frozenset()),
            )
        return profiles

    def _id_sets(self, owner_col, value_col, user_ids: List[int]) -> Dict[int, frozenset]:
        stmt = select(owner_col, value_col).where(owner_col.in_(user_ids))
        grouped: Dict[int, set] = {}
        for owner_id, value in self.db.execute(stmt).all():
            grouped.setdefault(owner_id, set()).add(value)
        return {owner_id: frozenset(values) for owner_id, values in grouped.items()}

    @staticmethod
    def _to_profile(
        user: User,
        attrs: Optional[UserAttributes],
        prefs: Optional[UserPreferences],
        latitude: Optional[float],
        longitude: Optional[float],
        interests: frozenset,
        hobbies: frozenset
    ) -> UserProfile:
        values = {name: getattr(attrs, name) if attrs is not None else None for name in ATTRIBUTE_FIELDS}
        values.update({name: getattr(prefs, name) if prefs is not None else None for name in PREFERENCE_FIELDS})
        age_pref_min, age_pref_max = _age_range(user.id, prefs)

        # Partial coordinates are treated as none
        if latitude is None or longitude is None:
            latitude = longitude = None

        return UserProfile(
            id=user.id,
            age=calculate_age(user.birthdate),
            birthdate=user.birthdate,
            gender=user.gender,
            country_id=user.country_id,
            latitude=float(latitude) if latitude is not None else None,
            longitude=float(longitude) if longitude is not None else None,
            age_pref_min=age_pref_min,
            age_pref_max=age_pref_max,
            interests=interests,
            hobbies=hobbies,
            **values
        )

    def get_preferred_country_ids(self, user_id: int) -> Tuple[int, ...]:
        stmt = (
            select(UserPreferredCountry.country_id)
            .where(UserPreferredCountry.user_id == user_id)
            .order_by(UserPreferredCountry.country_id)
        )
        return tuple(self.db.execute(stmt).scalars().all())

    def has_profile_photo(self, user_id: int) -> bool:
        stmt = select(UserImage.id).where(
            UserImage.user_id == user_id,
            UserImage.is_profile == 1
        ).limit(1)
        return self.db.execute(stmt).first() is not None

    def get_min_score_preference(self, user_id: int) -> int:
        stmt = select(UserProfileSettings.match_score).where(UserProfileSettings.user_id == user_id)
        value = self.db.execute(stmt).scalar_one_or_none()
        if value is None or not 1 <= value <= 100:
            return DEFAULT_MIN_SCORE_PREFERENCE
        return value

    def save_min_score_preference(self, user_id: int, value: int) -> int:
        settings = self.db.get(UserProfileSettings, user_id)
        if settings is None:
            settings = UserProfileSettings(user_id=user_id, match_score=value)
            self.db.add(settings)
        else:
            settings.match_score = value
        self.flush()
        logger.info(f"Saved minimum score preference {value} for user {user_id}")
        return value
