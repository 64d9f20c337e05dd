"""Matcher Module - Candidate eligibility and ranking."""
from core.matcher.eligibility import EligibilityFilter
from core.matcher.ranker import MatchRanker

__all__ = ['EligibilityFilter', 'MatchRanker']
