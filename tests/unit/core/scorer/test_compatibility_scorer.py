#!/usr/bin/env python3
"""
Unit tests for CompatibilityScorer.

Covers the weighted total, clamping (data floor, per-pair ceiling),
the post-clamp country modifier and directionality.
"""

import unittest

from core.scorer import CompatibilityScorer, badge_for_score
from core.scorer.service import has_data
from tests.fixtures.matching_fixtures import make_profile, rich_profile


def _partial_match(user_id: int, **overrides):
    """Shares most attributes with rich_profile(), but not all."""
    values = dict(
        religion_id=3,
        smoking_preference_id=2,
        occupation_category_id=6,
        interests=frozenset({1, 2, 4}),
        hobbies=frozenset({10}),
    )
    values.update(overrides)
    return rich_profile(user_id, **values)


class TestCompatibilityScorer(unittest.TestCase):

    def setUp(self):
        self.scorer = CompatibilityScorer()

    def test_realistic_pair(self):
        """Mostly aligned profiles land in the Strong tier."""
        score = self.scorer.score(rich_profile(1), _partial_match(2))
        print(f"✅ Realistic pair scored {score}")
        self.assertEqual(score, 81)
        self.assertEqual(badge_for_score(score).tier, "strong")

    def test_preferred_age_same_country_scenario(self):
        """Candidate inside the preferred age range, half the interests shared."""
        requester = rich_profile(
            1, age=30, gender="male", preferred_gender="female",
            age_pref_min=25, age_pref_max=35, interests=frozenset({1, 2, 3, 4})
        )
        candidate = rich_profile(
            2, age=32, gender="female", interests=frozenset({1, 2, 5, 6}),
            smoking_preference_id=2, drinking_preference_id=1, exercise_habits_id=4,
            occupation_category_id=6
        )
        result = self.scorer.breakdown(requester, candidate)

        self.assertEqual(result.interests, 0.5)
        self.assertEqual(result.values, 1.0)
        self.assertEqual(result.perfect_match_bonus, 0)
        self.assertEqual(result.final_score, 88)
        self.assertEqual(badge_for_score(result.final_score).tier, "strong")

    def test_identical_profiles_hit_same_country_ceiling(self):
        result = self.scorer.breakdown(rich_profile(1), rich_profile(2))
        self.assertEqual(result.perfect_match_bonus, 7)
        self.assertEqual(result.max_score, 95)
        self.assertEqual(result.final_score, 95)

    def test_identical_profiles_other_country_ceiling(self):
        result = self.scorer.breakdown(rich_profile(1), rich_profile(2, country_id=2))
        self.assertEqual(result.max_score, 92)
        self.assertEqual(result.country_modifier, 0)
        self.assertEqual(result.final_score, 92)

    def test_floor_applies_when_pair_has_data(self):
        a = make_profile(1, religion_id=1)
        b = make_profile(2, religion_id=2)
        result = self.scorer.breakdown(a, b)
        self.assertTrue(result.has_data)
        self.assertLess(result.weighted_total, 30)
        self.assertEqual(result.final_score, 30)

    def test_country_modifier_applies_after_floor(self):
        a = make_profile(1, religion_id=1, country_id=7)
        b = make_profile(2, religion_id=2, country_id=7)
        self.assertEqual(self.scorer.score(a, b), 33)

    def test_no_data_skips_floor(self):
        result = self.scorer.breakdown(make_profile(1), make_profile(2))
        self.assertFalse(result.has_data)
        # Only the neutral interest score contributes
        self.assertEqual(result.final_score, 6)

    def test_scores_are_directional(self):
        requester = rich_profile(1, age=30, age_pref_min=25, age_pref_max=28)
        candidate = _partial_match(2, age=40)

        forward = self.scorer.score(requester, candidate)
        reverse = self.scorer.score(candidate, requester)

        self.assertEqual(forward, 80)
        self.assertEqual(reverse, 77)

    def test_deterministic(self):
        a = rich_profile(1, latitude=51.5, longitude=-0.12)
        b = _partial_match(2, latitude=48.85, longitude=2.35)
        scores = {self.scorer.score(a, b) for _ in range(5)}
        self.assertEqual(len(scores), 1)

    def test_score_always_within_bounds(self):
        pairs = [
            (make_profile(1), make_profile(2)),
            (rich_profile(1), rich_profile(2)),
            (rich_profile(1, age=20), _partial_match(2, age=70, country_id=3)),
            (make_profile(1, hobbies=frozenset({1})), make_profile(2, country_id=1)),
        ]
        for a, b in pairs:
            with self.subTest(a=a.id, b=b.id):
                score = self.scorer.score(a, b)
                self.assertGreaterEqual(score, 0)
                self.assertLessEqual(score, 95)

    def test_breakdown_serializes(self):
        data = self.scorer.breakdown(rich_profile(1), _partial_match(2)).to_dict()
        self.assertEqual(
            set(data["components"]),
            {"interests", "values", "intent", "lifestyle", "personality"}
        )
        self.assertEqual(data["final_score"], 81)


class TestHasData(unittest.TestCase):

    def test_empty_profiles(self):
        self.assertFalse(has_data(make_profile(1), make_profile(2)))

    def test_one_side_is_enough(self):
        self.assertTrue(has_data(make_profile(1, hobbies=frozenset({3})), make_profile(2)))
        self.assertTrue(has_data(make_profile(1), make_profile(2, relationship_type="casual")))


if __name__ == '__main__':
    unittest.main()
