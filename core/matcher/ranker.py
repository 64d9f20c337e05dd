#!/usr/bin/env python3
"""
Match Ranker - filter -> cache-aware score -> like bonus -> badge -> page.

Per-candidate scores are resolved concurrently through the ScoreCache.
A candidate whose score raises or times out gets the configured fallback
score; the rest of the page is unaffected. Results keep the eligibility
order regardless of completion order.
"""
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from typing import Dict, List, Optional
import logging
import time

from core.cache.score_cache import ScoreCache
from core.config_loader import MatchingConfig
from core.models import MatchCandidate, MatchListing, UserProfile
from core.scorer.badge import badge_for_score
from core.scorer.modifiers import MAX_SCORE_OTHER_COUNTRY, MAX_SCORE_SAME_COUNTRY
from core.matcher.eligibility import EligibilityFilter
from database.repository import MatchingRepository

logger = logging.getLogger(__name__)


class MatchRanker:
    def __init__(self, score_cache: ScoreCache, config: MatchingConfig):
        self.score_cache = score_cache
        self.config = config

    def pair_max_score(self, requester: UserProfile, candidate: MatchCandidate) -> int:
        same_country = bool(requester.country_id and requester.country_id == candidate.country_id)
        pair_max = MAX_SCORE_SAME_COUNTRY if same_country else MAX_SCORE_OTHER_COUNTRY
        return min(self.config.compatibility.max_score, pair_max)

    def apply_like_bonus(self, score: int, candidate: MatchCandidate, max_score: int) -> int:
        """Mutual like +6, otherwise any one-way like +2; never stacked, never above max_score."""
        compatibility = self.config.compatibility
        if candidate.is_mutual_like:
            return min(max_score, score + compatibility.mutual_like_bonus)
        if candidate.has_any_like:
            return min(max_score, score + compatibility.one_way_like_bonus)
        return score

    def _resolve_score(self, requester: UserProfile, target: Optional[UserProfile], candidate_id: int) -> int:
        if target is None:
            raise LookupError(f"Profile for candidate {candidate_id} not found")
        return self.score_cache.get_or_compute(requester.id, candidate_id, requester, target)

    def rank(
        self,
        requester: UserProfile,
        candidates: List[MatchCandidate],
        profiles: Dict[int, UserProfile]
    ) -> List[MatchCandidate]:
        """Attach score and badge to every candidate, preserving order."""
        if not candidates:
            return []

        fallback = self.config.compatibility.fallback_score
        timeout = self.config.score_timeout_seconds
        workers = max(1, min(self.config.max_workers, len(candidates)))

        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="match-score")
        try:
            futures = [
                executor.submit(self._resolve_score, requester, profiles.get(c.user_id), c.user_id)
                for c in candidates
            ]

            deadline = time.monotonic() + timeout
            for candidate, future in zip(candidates, futures):
                try:
                    score = future.result(timeout=max(0.0, deadline - time.monotonic()))
                    candidate.used_fallback = False
                except FutureTimeoutError:
                    logger.error(f"Scoring timed out for candidate {candidate.user_id}, using fallback score {fallback}")
                    future.cancel()
                    score = fallback
                    candidate.used_fallback = True
                except Exception as e:
                    logger.error(f"Error calculating compatibility for user {candidate.user_id}: {e}", exc_info=True)
                    score = fallback
                    candidate.used_fallback = True

                candidate.score = self.apply_like_bonus(score, candidate, self.pair_max_score(requester, candidate))
                candidate.badge = badge_for_score(candidate.score)
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        fallbacks = sum(1 for c in candidates if c.used_fallback)
        if fallbacks:
            logger.warning(f"Used fallback score for {fallbacks}/{len(candidates)} candidates of user {requester.id}")
        return candidates

    def list_matches(
        self,
        repo: MatchingRepository,
        requester: UserProfile,
        page: int = 1,
        page_size: Optional[int] = None,
        include_total: bool = False
    ) -> MatchListing:
        """
        Ranked, paginated matches for ``requester``.

        Profiles are loaded on the calling thread; scoring threads only
        touch the score cache, whose durable tier opens its own sessions.
        """
        eligibility = EligibilityFilter(repo, self.config)
        limit = eligibility.clamp_page_size(page_size)

        candidates = eligibility.find_candidates(requester.id, requester, page, limit)
        profiles = repo.get_profiles(c.user_id for c in candidates)
        ranked = self.rank(requester, candidates, profiles)

        total = None
        if include_total:
            total = eligibility.count_candidates(requester.id, requester)

        return MatchListing(
            candidates=ranked,
            min_score_preference=repo.get_min_score_preference(requester.id),
            page=page,
            limit=limit,
            total=total,
        )
