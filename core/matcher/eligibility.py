#!/usr/bin/env python3
"""
Eligibility Filter - Builds the candidate set for one requester.

Rules (compiled to a single query by the candidate repository):
- Block in either direction, banned users, nameless users and self are excluded
- Requester's preferred gender and preferred countries restrict candidates
- Candidate's contact settings must admit the requester (age range,
  contact countries, photo requirement, same-gender opt-out)
- Users already in contact or with an active match are excluded

Age preferences are not a filter; they only affect the score.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, List, Optional
import logging

from core.config_loader import MatchingConfig
from core.models import EligibilityCriteria, MatchCandidate, UserProfile
from core.utils import calculate_age, normalize_gender
from database.repository import MatchingRepository

logger = logging.getLogger(__name__)


class EligibilityFilter:
    def __init__(self, repo: MatchingRepository, config: MatchingConfig):
        self.repo = repo
        self.config = config

    def clamp_page_size(self, page_size: Optional[int]) -> int:
        pagination = self.config.pagination
        if not page_size:
            return pagination.default_limit
        return max(pagination.min_limit, min(pagination.max_limit, page_size))

    def online_cutoff(self, now: Optional[datetime] = None) -> datetime:
        now = now or datetime.now(timezone.utc)
        return now - timedelta(minutes=self.config.online_status.interval_minutes)

    def build_criteria(
        self,
        requester_id: int,
        requester_profile: UserProfile,
        now: Optional[datetime] = None
    ) -> EligibilityCriteria:
        return EligibilityCriteria(
            requester_id=requester_id,
            online_cutoff=self.online_cutoff(now),
            preferred_gender=normalize_gender(requester_profile.preferred_gender),
            preferred_country_ids=self.repo.get_preferred_country_ids(requester_id),
            requester_age=requester_profile.effective_age,
            requester_country_id=requester_profile.country_id,
            requester_gender=normalize_gender(requester_profile.gender),
            requester_has_photo=self.repo.has_profile_photo(requester_id),
        )

    def find_candidates(
        self,
        requester_id: int,
        requester_profile: UserProfile,
        page: int = 1,
        page_size: Optional[int] = None
    ) -> List[MatchCandidate]:
        """
        Ordered page of candidate skeletons (score not yet attached).
        """
        limit = self.clamp_page_size(page_size)
        offset = (max(page, 1) - 1) * limit
        criteria = self.build_criteria(requester_id, requester_profile)

        rows = self.repo.query_eligible_candidates(requester_id, criteria, limit, offset)
        candidates = [self._to_candidate(row) for row in rows]

        logger.info(f"Found {len(candidates)} eligible candidates for user {requester_id} (page={page}, limit={limit})")
        return candidates

    def count_candidates(self, requester_id: int, requester_profile: UserProfile) -> int:
        criteria = self.build_criteria(requester_id, requester_profile)
        return self.repo.count_eligible_candidates(criteria)

    @staticmethod
    def _to_candidate(row: Any) -> MatchCandidate:
        liked_by_candidate = bool(row.liked_by_candidate)
        requester_liked_candidate = bool(row.requester_liked_candidate)
        latitude, longitude = row.latitude, row.longitude
        if latitude is None or longitude is None:
            latitude = longitude = None

        return MatchCandidate(
            user_id=row.user_id,
            display_name=row.real_name,
            age=calculate_age(row.birthdate),
            birthdate=row.birthdate,
            gender=row.gender,
            country_id=row.country_id,
            location=row.location,
            latitude=float(latitude) if latitude is not None else None,
            longitude=float(longitude) if longitude is not None else None,
            profile_image=row.profile_image,
            match_date=row.match_date,
            is_online=bool(row.is_online),
            liked_by_candidate=liked_by_candidate,
            requester_liked_candidate=requester_liked_candidate,
            is_mutual_like=liked_by_candidate and requester_liked_candidate,
            cached_score=row.cached_score,
        )
