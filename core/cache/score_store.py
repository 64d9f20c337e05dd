"""Score Stores - Pluggable backends for the two-tier score cache.

- RedisScoreStore: fast, volatile tier with a TTL
- DatabaseScoreStore: durable tier over ``user_compatibility_cache``
"""
import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional
from urllib.parse import urlparse

from redis import Redis
from sqlalchemy.orm import Session

from database.uow import matching_uow

logger = logging.getLogger(__name__)

# 7 days in seconds
SCORE_TTL_SECONDS = 7 * 24 * 60 * 60  # 604800 seconds

KEY_PREFIX = "compat"


def make_key(requester_id: int, target_id: int) -> str:
    """Directional cache key: compat:{requester}:{target}."""
    return f"{KEY_PREFIX}:{requester_id}:{target_id}"


def _sanitize_url(url: str) -> str:
    """Remove credentials from URL for safe logging."""
    try:
        parsed = urlparse(url)
        if parsed.password:
            sanitized = parsed._replace(
                netloc=f"{parsed.username or ''}:*@{parsed.hostname}:{parsed.port or 6379}"
            )
            return sanitized.geturl()
        return url
    except ValueError:
        return url


class ScoreStore(ABC):
    """
    Abstract score storage tier.

    ``get`` returns None for "unknown"; a stored score is never confused
    with absence.
    """

    name = "store"

    @abstractmethod
    def get(self, requester_id: int, target_id: int) -> Optional[int]:
        pass

    @abstractmethod
    def set(self, requester_id: int, target_id: int, score: int) -> bool:
        pass

    @abstractmethod
    def delete(self, requester_id: int, target_id: int) -> bool:
        pass

    def stats(self) -> Dict[str, Any]:
        return {"available": True}


class RedisScoreStore(ScoreStore):
    """
    Fast tier. Keys expire after ``ttl_seconds`` (7 days by default).

    Connection problems disable the store instead of raising; every read
    or write failure is logged and reported as a miss / failed write.
    """

    name = "redis"

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        password: Optional[str] = None,
        ttl_seconds: int = SCORE_TTL_SECONDS,
        socket_timeout: float = 2.0
    ):
        self.redis_url = redis_url
        self.password = password
        self.ttl_seconds = ttl_seconds
        self._redis: Optional[Redis] = None
        self._available = False

        try:
            self._redis = Redis.from_url(
                redis_url,
                password=password,
                decode_responses=True,
                socket_connect_timeout=socket_timeout,
                socket_timeout=socket_timeout
            )
            self._redis.ping()
            self._available = True
            logger.info(f"Score cache connected to Redis at {_sanitize_url(redis_url)}")
        except Exception as e:
            logger.warning(f"Score cache Redis unavailable: {e}")
            self._redis = None
            self._available = False

    @property
    def is_available(self) -> bool:
        """Check if cache is available."""
        if not self._available or not self._redis:
            return False
        try:
            return bool(self._redis.ping())
        except Exception:
            return False

    def get(self, requester_id: int, target_id: int) -> Optional[int]:
        if not self._available or not self._redis:
            return None

        key = make_key(requester_id, target_id)
        try:
            data = self._redis.get(key)
        except Exception as e:
            logger.warning(f"Error reading from score cache: {e}")
            return None

        if data is None:
            return None

        try:
            return int(json.loads(data)["score"])
        except (ValueError, TypeError, KeyError) as e:
            logger.warning(f"Discarding malformed score cache entry {key}: {e}")
            return None

    def set(self, requester_id: int, target_id: int, score: int) -> bool:
        if not self._available or not self._redis:
            return False

        key = make_key(requester_id, target_id)
        cache_entry = {
            "score": score,
            "cached_at": datetime.now(timezone.utc).isoformat(),
        }
        try:
            self._redis.setex(key, self.ttl_seconds, json.dumps(cache_entry))
            logger.debug(f"Cached score {key}={score} (TTL: {self.ttl_seconds}s)")
            return True
        except Exception as e:
            logger.warning(f"Error writing to score cache: {e}")
            return False

    def delete(self, requester_id: int, target_id: int) -> bool:
        if not self._available or not self._redis:
            return False

        try:
            self._redis.delete(make_key(requester_id, target_id))
            return True
        except Exception as e:
            logger.warning(f"Error deleting from score cache: {e}")
            return False

    def stats(self) -> Dict[str, Any]:
        if not self.is_available:
            return {"available": False}

        try:
            info = self._redis.info()
            key_count = 0
            cursor = 0
            while True:
                cursor, keys = self._redis.scan(cursor=cursor, match=f"{KEY_PREFIX}:*", count=1000)
                key_count += len(keys)
                if cursor == 0:
                    break
            return {
                "available": True,
                "used_memory_human": info.get("used_memory_human", "unknown"),
                "score_cache_keys": key_count,
                "ttl_seconds": self.ttl_seconds,
                "ttl_human": f"{self.ttl_seconds // 86400} days"
            }
        except Exception as e:
            logger.warning(f"Error getting cache stats: {e}")
            return {"available": False, "error": str(e)}


class DatabaseScoreStore(ScoreStore):
    """
    Durable tier. Each call opens its own short-lived session so the
    store can be used from scoring threads. Errors propagate to the caller.
    """

    name = "database"

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get(self, requester_id: int, target_id: int) -> Optional[int]:
        with matching_uow(self.session_factory) as repo:
            return repo.get_cached_score(requester_id, target_id)

    def set(self, requester_id: int, target_id: int, score: int) -> bool:
        with matching_uow(self.session_factory) as repo:
            repo.save_cached_score(requester_id, target_id, score)
        return True

    def delete(self, requester_id: int, target_id: int) -> bool:
        with matching_uow(self.session_factory) as repo:
            return repo.compatibility.delete_score(requester_id, target_id) > 0
