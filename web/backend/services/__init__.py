"""Business logic services."""

from .match_service import MatchService
from .stats_service import StatsService
