#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Union


class MatchScorePreferenceRequest(BaseModel):
    """
    Saved minimum compatibility score (1-100).

    Accepts numbers or numeric strings; anything missing or out of range
    is stored as 1 ("show all matches").
    """
    model_config = ConfigDict(populate_by_name=True)

    min_compatibility_score: Optional[Union[int, str, float]] = Field(
        default=None,
        alias="minCompatibilityScore",
        description="Minimum compatibility score (1-100)"
    )
