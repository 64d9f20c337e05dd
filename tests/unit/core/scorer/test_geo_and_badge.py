#!/usr/bin/env python3
"""
Unit tests for haversine distance and badge tiers.
"""

import unittest

from core.scorer import badge_for_score, distance_km


class TestDistanceKm(unittest.TestCase):

    def test_same_point(self):
        self.assertAlmostEqual(distance_km(35.68, 139.69, 35.68, 139.69), 0.0)

    def test_london_to_paris(self):
        km = distance_km(51.5074, -0.1278, 48.8566, 2.3522)
        self.assertAlmostEqual(km, 343.5, delta=5)

    def test_symmetric(self):
        self.assertAlmostEqual(
            distance_km(40.71, -74.00, 34.05, -118.24),
            distance_km(34.05, -118.24, 40.71, -74.00)
        )

    def test_missing_coordinate(self):
        self.assertIsNone(distance_km(None, 0.0, 1.0, 1.0))
        self.assertIsNone(distance_km(1.0, 1.0, 1.0, None))


class TestBadgeForScore(unittest.TestCase):

    def test_tier_edges(self):
        cases = [
            (100, "exceptional"), (90, "exceptional"),
            (89, "strong"), (80, "strong"),
            (79, "good"), (65, "good"),
            (64, "low"), (0, "low"),
        ]
        for score, tier in cases:
            with self.subTest(score=score):
                self.assertEqual(badge_for_score(score).tier, tier)

    def test_badge_serializes(self):
        badge = badge_for_score(92).to_dict()
        self.assertEqual(badge["label"], "Exceptional Match")
        self.assertEqual(set(badge), {"label", "tier", "color", "icon"})


if __name__ == '__main__':
    unittest.main()
