#!/usr/bin/env python3
"""
Stats endpoints - platform counters.
"""

from fastapi import APIRouter, Depends

from core.cache import ScoreCache
from ..dependencies import get_stats_service, get_cache
from ..services.stats_service import StatsService
from ..models.responses import CountResponse, CacheStatsResponse

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("/total-users", response_model=CountResponse)
def get_total_users(service: StatsService = Depends(get_stats_service)):
    """Count of non-banned users with a display name."""
    return CountResponse(success=True, count=service.total_users())


@router.get("/matches-today", response_model=CountResponse)
def get_matches_today(service: StatsService = Depends(get_stats_service)):
    """Count of active matches created today (UTC)."""
    return CountResponse(success=True, count=service.matches_today())


@router.get("/online-now", response_model=CountResponse)
def get_online_now(service: StatsService = Depends(get_stats_service)):
    """Count of users with an active session inside the online window."""
    return CountResponse(success=True, count=service.online_now())


@router.get("/score-cache", response_model=CacheStatsResponse)
def get_score_cache_stats(cache: ScoreCache = Depends(get_cache)):
    """Fast-tier availability and key count."""
    return CacheStatsResponse(success=True, cache=cache.stats())
