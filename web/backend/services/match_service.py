#!/usr/bin/env python3
"""
Match service - business logic for ranked match listings.
"""

import contextlib
import logging
from typing import Any, Optional

from sqlalchemy.exc import DBAPIError, TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session

from core.cache import ScoreCache
from core.config_loader import MatchingConfig
from core.matcher import MatchRanker
from core.models import MatchCandidate
from database.repository import MatchingRepository
from ..models.responses import (
    BadgeInfo,
    MatchSummary,
    MatchesResponse,
    PaginationInfo,
    UnmatchResponse,
    ScorePreferenceResponse
)
from ..utils import safe_int, safe_datetime_iso, format_profile_image
from ..exceptions import (
    InvalidRequestException,
    UserNotFoundException,
    DependencyUnavailableException
)

logger = logging.getLogger(__name__)

MIN_SCORE_PREFERENCE = 1
MAX_SCORE_PREFERENCE = 100


def validate_user_id(value: Any, label: str = "user ID") -> int:
    user_id = safe_int(value, default=0)
    if user_id <= 0 or str(value).strip() != str(user_id):
        raise InvalidRequestException(f"Invalid {label}: {value}")
    return user_id


def parse_score_preference(value: Any) -> int:
    """1-100; anything missing, non-numeric or out of range becomes 1."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return MIN_SCORE_PREFERENCE
    try:
        parsed = int(float(value))
    except (ValueError, TypeError):
        return MIN_SCORE_PREFERENCE
    if MIN_SCORE_PREFERENCE <= parsed <= MAX_SCORE_PREFERENCE:
        return parsed
    return MIN_SCORE_PREFERENCE


@contextlib.contextmanager
def database_guard(operation: str):
    """Translate connectivity/timeout failures into a retryable 503."""
    try:
        yield
    except (DBAPIError, PoolTimeoutError) as e:
        logger.error(f"Database unavailable during {operation}: {e}")
        raise DependencyUnavailableException(f"Database unavailable, failed to {operation}") from e


class MatchService:
    """Service for ranked matches and match management."""

    def __init__(self, db: Session, score_cache: ScoreCache, config: MatchingConfig):
        self.db = db
        self.repo = MatchingRepository(db)
        self.config = config
        self.ranker = MatchRanker(score_cache, config)

    def list_matches(
        self,
        user_id: Any,
        page: int = 1,
        limit: Optional[int] = None,
        include_total: bool = False
    ) -> MatchesResponse:
        """
        Ranked, paginated candidates for a user.

        Args:
            user_id: Requesting user.
            page: 1-based page number.
            limit: Page size, clamped to the configured bounds.
            include_total: Also count all eligible candidates.

        Returns:
            MatchesResponse with the advisory minimum-score preference.
        """
        requester_id = validate_user_id(user_id)
        if page is None or page < 1:
            raise InvalidRequestException(f"Invalid page: {page}")

        with database_guard("get matches"):
            requester = self.repo.get_profile(requester_id)
            if requester is None:
                raise UserNotFoundException(f"User {requester_id} not found")
            listing = self.ranker.list_matches(self.repo, requester, page, limit, include_total)

        matches = [self._to_summary(c) for c in listing.candidates]

        total_pages = None
        if listing.total is not None:
            total_pages = -(-listing.total // listing.limit)

        return MatchesResponse(
            success=True,
            matches=matches,
            min_compatibility_score=listing.min_score_preference,
            pagination=PaginationInfo(
                page=listing.page,
                limit=listing.limit,
                count=len(matches),
                total=listing.total,
                total_pages=total_pages
            )
        )

    def unmatch(self, user_id: Any, other_id: Any) -> UnmatchResponse:
        """Remove the match and likes between two users, both directions."""
        requester_id = validate_user_id(user_id)
        target_id = validate_user_id(other_id, label="user ID to unmatch")
        if requester_id == target_id:
            raise InvalidRequestException("Cannot unmatch yourself")

        with database_guard("unmatch user"):
            self.repo.unmatch(requester_id, target_id)
            self.repo.commit()

        return UnmatchResponse(success=True, message="User unmatched successfully")

    def save_min_score_preference(self, user_id: Any, value: Any) -> ScorePreferenceResponse:
        """Persist the advisory minimum score. Never used to filter results."""
        requester_id = validate_user_id(user_id)
        min_score = parse_score_preference(value)

        with database_guard("save match score preference"):
            if self.repo.get_user(requester_id) is None:
                raise UserNotFoundException(f"User {requester_id} not found")
            self.repo.save_min_score_preference(requester_id, min_score)
            self.repo.commit()

        return ScorePreferenceResponse(
            success=True,
            message="Match score preference saved successfully",
            min_compatibility_score=min_score
        )

    @staticmethod
    def _to_summary(candidate: MatchCandidate) -> MatchSummary:
        badge = candidate.badge
        return MatchSummary(
            user_id=candidate.user_id,
            name=candidate.display_name,
            age=candidate.age,
            birthdate=safe_datetime_iso(candidate.birthdate),
            gender=candidate.gender,
            location=candidate.location,
            profile_image=format_profile_image(candidate.profile_image),
            match_date=safe_datetime_iso(candidate.match_date),
            is_online=candidate.is_online,
            liked_by_user=candidate.liked_by_candidate,
            user_liked_them=candidate.requester_liked_candidate,
            is_mutual_like=candidate.is_mutual_like,
            compatibility_score=candidate.score,
            compatibility_badge=BadgeInfo(**badge.to_dict())
        )
