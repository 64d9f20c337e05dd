"""Cache Module - Two-tier compatibility score cache."""
from core.cache.score_store import (
    ScoreStore,
    RedisScoreStore,
    DatabaseScoreStore,
    make_key,
    SCORE_TTL_SECONDS
)
from core.cache.score_cache import (
    ScoreCache,
    get_score_cache,
    init_score_cache
)

__all__ = [
    'ScoreStore',
    'RedisScoreStore',
    'DatabaseScoreStore',
    'make_key',
    'SCORE_TTL_SECONDS',
    'ScoreCache',
    'get_score_cache',
    'init_score_cache'
]
