#!/usr/bin/env python3
"""
Match endpoints - ranked candidates and match management.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..dependencies import get_match_service
from ..services.match_service import MatchService
from ..models.requests import MatchScorePreferenceRequest
from ..models.responses import (
    MatchesResponse,
    UnmatchResponse,
    ScorePreferenceResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/matches", tags=["matches"])


@router.get("/{user_id}", response_model=MatchesResponse)
def get_matches(
    user_id: str,
    page: int = Query(default=1, description="1-based page number"),
    limit: Optional[int] = Query(default=None, description="Page size (clamped to configured bounds)"),
    include_total: bool = Query(default=False, description="Include total eligible count"),
    service: MatchService = Depends(get_match_service)
):
    """
    Get ranked potential matches for a user.

    Ordered by mutual like, like received, like sent, online status,
    cached compatibility and recency. The saved minimum score is returned
    for display and is not applied as a filter.
    """
    return service.list_matches(user_id, page=page, limit=limit, include_total=include_total)


@router.delete("/{user_id}/unmatch", response_model=UnmatchResponse)
def unmatch_user(
    user_id: str,
    other_user_id: str = Query(..., alias="user_id", description="User to unmatch"),
    service: MatchService = Depends(get_match_service)
):
    """
    Remove a match and any likes between two users (both directions).
    """
    return service.unmatch(user_id, other_user_id)


@router.post("/{user_id}/match-score-preference", response_model=ScorePreferenceResponse)
def save_match_score_preference(
    user_id: str,
    request: Optional[MatchScorePreferenceRequest] = None,
    service: MatchService = Depends(get_match_service)
):
    """
    Save the user's minimum compatibility score preference (1-100).

    Invalid or missing values are stored as 1.
    """
    value = request.min_compatibility_score if request is not None else None
    return service.save_min_score_preference(user_id, value)
