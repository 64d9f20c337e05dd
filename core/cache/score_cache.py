"""Score Cache - Two-tier, read-through cache for compatibility scores.

Lookup order:
1. Fast tier (Redis, TTL)
2. Durable tier (SQL, no expiry); a hit backfills the fast tier
3. Compute with CompatibilityScorer, write through both tiers

Tier failures are logged and treated as misses; writes never fail the
caller. ``get_or_compute`` always returns a score.
"""
import logging
from typing import Any, Dict, Optional

from core.models import UserProfile
from core.scorer import CompatibilityScorer
from core.cache.score_store import ScoreStore

logger = logging.getLogger(__name__)


class ScoreCache:
    def __init__(
        self,
        scorer: Optional[CompatibilityScorer] = None,
        fast_store: Optional[ScoreStore] = None,
        durable_store: Optional[ScoreStore] = None
    ):
        self.scorer = scorer or CompatibilityScorer()
        self.fast_store = fast_store
        self.durable_store = durable_store

    def _read(self, store: Optional[ScoreStore], requester_id: int, target_id: int) -> Optional[int]:
        if store is None:
            return None
        try:
            return store.get(requester_id, target_id)
        except Exception as e:
            logger.warning(f"Score cache {store.name} read failed for {requester_id}->{target_id}: {e}")
            return None

    def _write(self, store: Optional[ScoreStore], requester_id: int, target_id: int, score: int) -> None:
        if store is None:
            return
        try:
            store.set(requester_id, target_id, score)
        except Exception as e:
            logger.warning(f"Score cache {store.name} write failed for {requester_id}->{target_id}: {e}")

    def get_cached(self, requester_id: int, target_id: int) -> Optional[int]:
        """Cached score from either tier, or None. Never computes."""
        score = self._read(self.fast_store, requester_id, target_id)
        if score is not None:
            logger.debug(f"Score cache hit (fast) {requester_id}->{target_id}: {score}")
            return score

        score = self._read(self.durable_store, requester_id, target_id)
        if score is not None:
            logger.debug(f"Score cache hit (durable) {requester_id}->{target_id}: {score}")
            self._write(self.fast_store, requester_id, target_id, score)
            return score

        return None

    def get_or_compute(
        self,
        requester_id: int,
        target_id: int,
        requester_profile: UserProfile,
        target_profile: UserProfile
    ) -> int:
        score = self.get_cached(requester_id, target_id)
        if score is not None:
            return score

        logger.debug(f"Score cache miss {requester_id}->{target_id}, computing")
        score = self.scorer.score(requester_profile, target_profile)

        self._write(self.fast_store, requester_id, target_id, score)
        self._write(self.durable_store, requester_id, target_id, score)
        return score

    def invalidate(self, requester_id: int, target_id: int) -> bool:
        """Drop the fast-tier entry so the next read goes to the durable tier."""
        if self.fast_store is None:
            return False
        try:
            return self.fast_store.delete(requester_id, target_id)
        except Exception as e:
            logger.warning(f"Score cache invalidate failed for {requester_id}->{target_id}: {e}")
            return False

    def stats(self) -> Dict[str, Any]:
        if self.fast_store is None:
            return {"available": False, "reason": "fast tier disabled"}
        try:
            return self.fast_store.stats()
        except Exception as e:
            logger.warning(f"Error getting score cache stats: {e}")
            return {"available": False, "error": str(e)}


# Global instance for application use
_score_cache: Optional[ScoreCache] = None


def get_score_cache() -> Optional[ScoreCache]:
    """Get global score cache instance."""
    return _score_cache


def init_score_cache(
    fast_store: Optional[ScoreStore] = None,
    durable_store: Optional[ScoreStore] = None,
    scorer: Optional[CompatibilityScorer] = None
) -> ScoreCache:
    """Initialize global score cache."""
    global _score_cache
    _score_cache = ScoreCache(scorer=scorer, fast_store=fast_store, durable_store=durable_store)
    return _score_cache
