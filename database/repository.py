import logging
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple
from datetime import datetime

from sqlalchemy.orm import Session

from core.models import EligibilityCriteria, UserProfile
from database.models import User
from database.repositories import (
    ProfileRepository, CandidateRepository, MatchRepository, CompatibilityRepository
)

logger = logging.getLogger(__name__)


class MatchingRepository:
    """
    Facade over the matching repositories, bound to one Session.

    Exposes the operations the matcher and the web services consume so
    callers depend on a single object per unit of work.
    """

    def __init__(self, db: Session):
        self.db = db
        self.profiles = ProfileRepository(db)
        self.candidates = CandidateRepository(db)
        self.matches = MatchRepository(db)
        self.compatibility = CompatibilityRepository(db)

    # --- Profiles ---

    def get_user(self, user_id: int) -> Optional[User]:
        return self.profiles.get_user(user_id)

    def get_profile(self, user_id: int) -> Optional[UserProfile]:
        return self.profiles.get_profile(user_id)

    def get_profiles(self, user_ids: Iterable[int]) -> Dict[int, UserProfile]:
        return self.profiles.get_profiles(user_ids)

    def get_preferred_country_ids(self, user_id: int) -> Tuple[int, ...]:
        return self.profiles.get_preferred_country_ids(user_id)

    def has_profile_photo(self, user_id: int) -> bool:
        return self.profiles.has_profile_photo(user_id)

    def get_min_score_preference(self, user_id: int) -> int:
        return self.profiles.get_min_score_preference(user_id)

    def save_min_score_preference(self, user_id: int, value: int) -> int:
        return self.profiles.save_min_score_preference(user_id, value)

    # --- Candidates ---

    def query_eligible_candidates(
        self,
        requester_id: int,
        criteria: EligibilityCriteria,
        limit: int,
        offset: int
    ) -> Sequence[Any]:
        return self.candidates.query_eligible_candidates(requester_id, criteria, limit, offset)

    def count_eligible_candidates(self, criteria: EligibilityCriteria) -> int:
        return self.candidates.count_eligible_candidates(criteria)

    # --- Matches and stats ---

    def unmatch(self, user_id: int, other_id: int) -> int:
        return self.matches.unmatch(user_id, other_id)

    def count_active_users(self) -> int:
        return self.matches.count_active_users()

    def count_matches_between(self, start: datetime, end: datetime) -> int:
        return self.matches.count_matches_between(start, end)

    def count_online_users(self, cutoff: datetime) -> int:
        return self.matches.count_online_users(cutoff)

    # --- Durable score tier ---

    def get_cached_score(self, user_id: int, target_user_id: int) -> Optional[int]:
        return self.compatibility.get_score(user_id, target_user_id)

    def save_cached_score(self, user_id: int, target_user_id: int, score: int) -> None:
        self.compatibility.upsert_score(user_id, target_user_id, score)

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
