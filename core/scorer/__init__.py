#!/usr/bin/env python3
"""
Scoring Module - Rule-based compatibility scoring.

Public API:
- CompatibilityScorer: pairwise score calculator
- ScoreBreakdown: dataclass with every score component
- badge_for_score: score -> Badge tier
- distance_km: haversine distance

The scoring module is split into focused, single-responsibility modules:

- components.py: The five weighted sub-scores (values, intent, lifestyle, personality, interests)
- preferences.py: Bidirectional preference-match bonus
- modifiers.py: Age, distance, perfect-match and country point modifiers
- geo.py: Great-circle distance
- badge.py: Badge tiers
- models.py: Data structures (ScoreBreakdown)
- service.py: CompatibilityScorer orchestrator
"""

from core.scorer.models import ScoreBreakdown
from core.scorer.service import CompatibilityScorer
from core.scorer.badge import badge_for_score
from core.scorer.geo import distance_km

__all__ = ['CompatibilityScorer', 'ScoreBreakdown', 'badge_for_score', 'distance_km']
