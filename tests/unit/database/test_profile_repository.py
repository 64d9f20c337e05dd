#!/usr/bin/env python3
"""
Unit tests for ProfileRepository.

Tests the scoring snapshot loader and the minimum-score preference:
- get_profiles()
- get_preferred_country_ids() / has_profile_photo()
- get/save_min_score_preference()
"""

import pytest

from database.repositories.profile import ProfileRepository
from database.models import UserProfileSettings
from tests.fixtures.matching_fixtures import (
    add_country, add_city, add_user, add_interests, add_hobbies,
    add_preferred_countries, add_profile_image, add_settings
)

pytestmark = pytest.mark.db


@pytest.fixture
def repo(db_session):
    add_country(db_session, 1, "Japan", latitude=36.2, longitude=138.25)
    add_country(db_session, 2, "Nowhere")
    add_city(db_session, 10, 1, "Osaka", latitude=34.69, longitude=135.5)
    add_city(db_session, 11, 1, "Village")
    return ProfileRepository(db_session)


class TestGetProfiles:

    def test_attributes_preferences_and_sets(self, repo, db_session):
        add_user(
            db_session, 1, age=34, gender="female", country_id=1, city_id=10,
            attributes=dict(religion_id=2, have_children="no", smoking_preference_id=1, height_cm=165.0),
            preferences=dict(age_min=30, age_max=40, preferred_gender="male", relationship_type="long_term",
                             preferred_religion=2)
        )
        add_interests(db_session, 1, [1, 2, 3])
        add_hobbies(db_session, 1, [7])

        profile = repo.get_profile(1)

        assert profile.age == 34
        assert profile.gender == "female"
        assert profile.religion_id == 2
        assert profile.have_children == "no"
        assert profile.height_cm == 165.0
        assert profile.relationship_type == "long_term"
        assert profile.preferred_gender == "male"
        assert profile.preferred_religion == 2
        assert (profile.age_pref_min, profile.age_pref_max) == (30, 40)
        assert profile.interests == frozenset({1, 2, 3})
        assert profile.hobbies == frozenset({7})
        assert (profile.latitude, profile.longitude) == (34.69, 135.5)

    def test_user_without_attribute_rows(self, repo, db_session):
        add_user(db_session, 1, age=None)
        profile = repo.get_profile(1)

        assert profile.age is None
        assert profile.religion_id is None
        assert profile.relationship_type is None
        assert profile.interests == frozenset()
        assert not profile.has_age_preference

    def test_coordinates_fall_back_to_country(self, repo, db_session):
        add_user(db_session, 1, country_id=1, city_id=11)
        add_user(db_session, 2, country_id=2)
        add_user(db_session, 3)

        profiles = repo.get_profiles([1, 2, 3])

        assert (profiles[1].latitude, profiles[1].longitude) == (36.2, 138.25)
        assert not profiles[2].has_coordinates
        assert not profiles[3].has_coordinates

    def test_invalid_age_range_is_ignored(self, repo, db_session):
        add_user(db_session, 1, preferences=dict(age_min=40, age_max=30))
        profile = repo.get_profile(1)
        assert profile.age_pref_min is None
        assert profile.age_pref_max is None

    def test_single_bound_is_kept(self, repo, db_session):
        add_user(db_session, 1, preferences=dict(age_min=25))
        profile = repo.get_profile(1)
        assert profile.age_pref_min == 25
        assert profile.age_pref_max is None
        assert profile.has_age_preference

    def test_unknown_users_are_absent(self, repo, db_session):
        add_user(db_session, 1)
        assert set(repo.get_profiles([1, 99, 1])) == {1}
        assert repo.get_profile(99) is None
        assert repo.get_profiles([]) == {}


class TestLookups:

    def test_preferred_country_ids(self, repo, db_session):
        add_user(db_session, 1)
        add_preferred_countries(db_session, 1, [2, 1])
        assert repo.get_preferred_country_ids(1) == (1, 2)
        assert repo.get_preferred_country_ids(5) == ()

    def test_has_profile_photo(self, repo, db_session):
        add_user(db_session, 1)
        add_user(db_session, 2)
        add_profile_image(db_session, 1)
        add_profile_image(db_session, 2, is_profile=0)
        assert repo.has_profile_photo(1) is True
        assert repo.has_profile_photo(2) is False

    def test_get_user(self, repo, db_session):
        add_user(db_session, 1, real_name="Mika")
        assert repo.get_user(1).real_name == "Mika"
        assert repo.get_user(2) is None


class TestMinScorePreference:

    def test_default_is_one(self, repo, db_session):
        add_user(db_session, 1)
        assert repo.get_min_score_preference(1) == 1

        add_settings(db_session, 1)
        assert repo.get_min_score_preference(1) == 1

    def test_save_creates_settings_row(self, repo, db_session):
        add_user(db_session, 1)
        assert repo.save_min_score_preference(1, 75) == 75
        assert repo.get_min_score_preference(1) == 75
        assert db_session.get(UserProfileSettings, 1).match_score == 75

    def test_save_updates_existing_row(self, repo, db_session):
        add_user(db_session, 1)
        add_settings(db_session, 1, require_photos=True, match_score=40)

        repo.save_min_score_preference(1, 90)

        settings = db_session.get(UserProfileSettings, 1)
        assert settings.match_score == 90
        assert settings.require_photos is True
