#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional


class BadgeInfo(BaseModel):
    """Compatibility badge derived from the final score."""
    label: str
    tier: str
    color: str
    icon: str = ""


class MatchSummary(BaseModel):
    """One ranked candidate."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "user_id": 42,
                "name": "Alex",
                "age": 31,
                "gender": "female",
                "location": "Lisbon, Portugal",
                "profile_image": "/uploads/profile_images/42_profile.jpg",
                "match_date": "2026-02-01T12:00:00",
                "is_online": True,
                "liked_by_user": False,
                "user_liked_them": True,
                "is_mutual_like": False,
                "compatibility_score": 84,
                "compatibility_badge": {
                    "label": "Strong Match",
                    "tier": "strong",
                    "color": "#667eea",
                    "icon": "✨"
                }
            }
        }
    )

    user_id: int
    name: str
    age: Optional[int] = None
    birthdate: Optional[str] = None
    gender: Optional[str] = None
    location: Optional[str] = None
    profile_image: Optional[str] = None
    match_date: Optional[str] = None

    is_online: bool = False
    liked_by_user: bool = False
    user_liked_them: bool = False
    is_mutual_like: bool = False

    compatibility_score: int = Field(ge=0, le=100)
    compatibility_badge: BadgeInfo


class PaginationInfo(BaseModel):
    page: int
    limit: int
    count: int
    total: Optional[int] = None
    total_pages: Optional[int] = None


class MatchesResponse(BaseModel):
    """Response for the ranked match listing."""
    success: bool
    matches: List[MatchSummary]
    min_compatibility_score: int = Field(ge=1, le=100)
    pagination: PaginationInfo


class UnmatchResponse(BaseModel):
    success: bool
    message: str


class ScorePreferenceResponse(BaseModel):
    success: bool
    message: str
    min_compatibility_score: int = Field(ge=1, le=100)


class CountResponse(BaseModel):
    """Single-number statistic."""
    success: bool
    count: int = Field(ge=0)


class CacheStatsResponse(BaseModel):
    success: bool
    cache: Dict[str, Any]
