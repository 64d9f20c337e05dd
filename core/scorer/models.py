#!/usr/bin/env python3
"""
Scoring Models - Data structures for scoring results.
"""

from typing import Dict, Any, Optional
from dataclasses import dataclass, field


@dataclass
class ScoreBreakdown:
    """Every component of a compatibility score, for logging and explainability."""
    interests: float = 0.0
    values: float = 0.0
    intent: float = 0.0
    lifestyle: float = 0.0
    personality: float = 0.0

    preference_bonus: float = 0.0
    preference_details: Dict[str, Any] = field(default_factory=dict)
    age_contribution: float = 0.0
    distance_modifier: int = 0
    distance_km: Optional[float] = None
    perfect_match_bonus: int = 0
    country_modifier: int = 0

    weighted_total: float = 0.0
    has_data: bool = False
    max_score: int = 0
    final_score: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'components': {
                'interests': self.interests,
                'values': self.values,
                'intent': self.intent,
                'lifestyle': self.lifestyle,
                'personality': self.personality,
            },
            'modifiers': {
                'preference_bonus': self.preference_bonus,
                'age_contribution': self.age_contribution,
                'distance_modifier': self.distance_modifier,
                'distance_km': self.distance_km,
                'perfect_match_bonus': self.perfect_match_bonus,
                'country_modifier': self.country_modifier,
            },
            'weighted_total': self.weighted_total,
            'has_data': self.has_data,
            'max_score': self.max_score,
            'final_score': self.final_score,
        }
