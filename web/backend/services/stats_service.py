#!/usr/bin/env python3
"""
Stats service - platform-wide counters.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy.orm import Session

from core.config_loader import MatchingConfig
from database.repository import MatchingRepository
from .match_service import database_guard

logger = logging.getLogger(__name__)


class StatsService:
    def __init__(self, db: Session, config: MatchingConfig):
        self.repo = MatchingRepository(db)
        self.config = config

    def total_users(self) -> int:
        """Non-banned users with a display name."""
        with database_guard("get total users"):
            return self.repo.count_active_users()

    def matches_today(self, now: Optional[datetime] = None) -> int:
        """Active matches created since midnight UTC."""
        now = now or datetime.now(timezone.utc)
        start = now.replace(hour=0, minute=0, second=0, microsecond=0)
        with database_guard("get matches today"):
            return self.repo.count_matches_between(start, start + timedelta(days=1))

    def online_now(self, now: Optional[datetime] = None) -> int:
        now = now or datetime.now(timezone.utc)
        cutoff = now - timedelta(minutes=self.config.online_status.interval_minutes)
        with database_guard("get online users"):
            return self.repo.count_online_users(cutoff)
