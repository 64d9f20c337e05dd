#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

import logging
from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from core.cache import (
    ScoreCache, RedisScoreStore, DatabaseScoreStore, get_score_cache, init_score_cache
)
from database.database import SessionLocal
from .config import get_config
from .services.match_service import MatchService
from .services.stats_service import StatsService

logger = logging.getLogger(__name__)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a database session.

    Usage:
        @app.get("/endpoint")
        def my_endpoint(db: Session = Depends(get_db)):
            ...

    Yields:
        Session: Database session that will be automatically closed.
    """
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def get_cache() -> ScoreCache:
    """
    Shared two-tier score cache, created on first use.

    The fast tier is skipped when disabled in config; an unreachable Redis
    leaves the store in place but inactive.
    """
    cache = get_score_cache()
    if cache is not None:
        return cache

    config = get_config()
    fast_store = None
    if config.cache.enabled:
        fast_store = RedisScoreStore(
            redis_url=config.cache.redis_url,
            password=config.cache.password,
            ttl_seconds=config.cache.ttl_seconds,
            socket_timeout=config.cache.socket_timeout_seconds
        )
    return init_score_cache(
        fast_store=fast_store,
        durable_store=DatabaseScoreStore(SessionLocal)
    )


def get_match_service(
    db: Session = Depends(get_db),
    cache: ScoreCache = Depends(get_cache)
) -> MatchService:
    return MatchService(db, cache, get_config().matching)


def get_stats_service(db: Session = Depends(get_db)) -> StatsService:
    return StatsService(db, get_config().matching)
