#!/usr/bin/env python3
"""
Shared builders for matching tests.

Profile builders return plain UserProfile DTOs; the ``add_*`` helpers
insert ORM rows into a session and flush.
"""
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Optional

from core.models import MatchCandidate, UserProfile
from database.models import (
    User, UserAttributes, UserPreferences, UserPreferredCountry, UserInterest,
    UserHobby, UserImage, UserProfileSettings, UserContactCountry, UserBlock,
    UserLike, UserMatch, UserMessage, UserSession, Country, City,
    CompatibilityCacheEntry
)


def birthdate_for_age(age: int, today: date = None) -> date:
    today = today or date.today()
    # Jan 1 birthday has always passed by today
    return date(today.year - age, 1, 1)


def make_profile(user_id: int = 1, **overrides) -> UserProfile:
    return UserProfile(id=user_id, **overrides)


def rich_profile(user_id: int, **overrides) -> UserProfile:
    """A profile with every scoring attribute populated."""
    values = dict(
        age=30,
        gender='female',
        country_id=1,
        religion_id=2,
        have_children='no',
        marital_status_id=1,
        relationship_type='long_term',
        smoking_preference_id=1,
        drinking_preference_id=2,
        exercise_habits_id=3,
        living_situation_id=1,
        lifestyle_id=2,
        education_id=4,
        occupation_category_id=5,
        interests=frozenset({1, 2, 3}),
        hobbies=frozenset({10, 11}),
    )
    values.update(overrides)
    return UserProfile(id=user_id, **values)


def make_candidate(user_id: int, **overrides) -> MatchCandidate:
    values = dict(display_name=f"user{user_id}", country_id=1)
    values.update(overrides)
    return MatchCandidate(user_id=user_id, **values)


# --- ORM seeding helpers ---

def add_country(session, country_id: int, name: str = "Country", latitude=None, longitude=None) -> Country:
    country = Country(id=country_id, name=name, latitude=latitude, longitude=longitude)
    session.add(country)
    session.flush()
    return country


def add_city(session, city_id: int, country_id: int, name: str = "City", latitude=None, longitude=None) -> City:
    city = City(id=city_id, country_id=country_id, name=name, latitude=latitude, longitude=longitude)
    session.add(city)
    session.flush()
    return city


def add_user(
    session,
    user_id: int,
    real_name: Optional[str] = "Member",
    age: Optional[int] = 30,
    gender: Optional[str] = "female",
    country_id: Optional[int] = None,
    city_id: Optional[int] = None,
    is_banned: bool = False,
    date_joined: Optional[datetime] = None,
    attributes: Optional[dict] = None,
    preferences: Optional[dict] = None
) -> User:
    user = User(
        id=user_id,
        email=f"user{user_id}@example.com",
        real_name=real_name,
        birthdate=birthdate_for_age(age) if age is not None else None,
        gender=gender,
        country_id=country_id,
        city_id=city_id,
        is_banned=is_banned,
        date_joined=date_joined or datetime(2025, 1, 1, tzinfo=timezone.utc) + timedelta(days=user_id),
    )
    session.add(user)
    session.flush()
    if attributes is not None:
        session.add(UserAttributes(user_id=user_id, **attributes))
    if preferences is not None:
        session.add(UserPreferences(user_id=user_id, **preferences))
    session.flush()
    return user


def add_interests(session, user_id: int, interest_ids: Iterable[int]):
    for interest_id in interest_ids:
        session.add(UserInterest(user_id=user_id, interest_id=interest_id))
    session.flush()


def add_hobbies(session, user_id: int, hobby_ids: Iterable[int]):
    for hobby_id in hobby_ids:
        session.add(UserHobby(user_id=user_id, hobby_id=hobby_id))
    session.flush()


def add_preferred_countries(session, user_id: int, country_ids: Iterable[int]):
    for country_id in country_ids:
        session.add(UserPreferredCountry(user_id=user_id, country_id=country_id))
    session.flush()


def add_settings(session, user_id: int, **values) -> UserProfileSettings:
    settings = UserProfileSettings(user_id=user_id, **values)
    session.add(settings)
    session.flush()
    return settings


def add_contact_country(session, user_id: int, country_id: Optional[int] = None, is_all_countries: bool = False):
    session.add(UserContactCountry(user_id=user_id, country_id=country_id, is_all_countries=is_all_countries))
    session.flush()


def add_profile_image(session, user_id: int, file_name: str = "photo.jpg", is_profile: int = 1):
    session.add(UserImage(user_id=user_id, file_name=file_name, is_profile=is_profile))
    session.flush()


def add_block(session, blocker_id: int, blocked_id: int):
    session.add(UserBlock(blocker_id=blocker_id, blocked_id=blocked_id))
    session.flush()


def add_like(session, liked_by: int, liked_user_id: int, created_at: Optional[datetime] = None):
    like = UserLike(liked_by=liked_by, liked_user_id=liked_user_id)
    if created_at is not None:
        like.created_at = created_at
    session.add(like)
    session.flush()


def add_match(session, user1_id: int, user2_id: int, status: Optional[str] = 'active', match_date: Optional[datetime] = None):
    match = UserMatch(user1_id=user1_id, user2_id=user2_id, status=status)
    if match_date is not None:
        match.match_date = match_date
    session.add(match)
    session.flush()
    return match


def add_message(session, sender_id: int, receiver_id: int, **values):
    session.add(UserMessage(sender_id=sender_id, receiver_id=receiver_id, **values))
    session.flush()


def add_session(session, user_id: int, last_activity: datetime, is_active: bool = True):
    session.add(UserSession(user_id=user_id, last_activity=last_activity, is_active=is_active))
    session.flush()


def add_cached_score(session, user_id: int, target_user_id: int, score: int):
    session.add(CompatibilityCacheEntry(user_id=user_id, target_user_id=target_user_id, score=score))
    session.flush()
