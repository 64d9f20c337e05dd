#!/usr/bin/env python3
"""
Unit tests for MatchRepository: unmatch and the dashboard counters.
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import select

from database.models import UserLike, UserMatch
from database.repositories.match import MatchRepository
from tests.fixtures.matching_fixtures import add_user, add_like, add_match, add_session

pytestmark = pytest.mark.db


@pytest.fixture
def repo(db_session):
    for user_id in (1, 2, 3):
        add_user(db_session, user_id)
    return MatchRepository(db_session)


class TestUnmatch:

    def test_removes_matches_and_likes_in_both_directions(self, repo, db_session):
        add_match(db_session, 2, 1)
        add_like(db_session, 1, 2)
        add_like(db_session, 2, 1)
        add_like(db_session, 3, 1)

        assert repo.unmatch(1, 2) == 1

        assert db_session.execute(select(UserMatch)).scalars().all() == []
        remaining = [(like.liked_by, like.liked_user_id) for like in db_session.execute(select(UserLike)).scalars()]
        assert remaining == [(3, 1)]

    def test_is_idempotent(self, repo):
        assert repo.unmatch(1, 2) == 0
        assert repo.unmatch(1, 2) == 0


class TestCounters:

    def test_count_active_users(self, repo, db_session):
        add_user(db_session, 4, is_banned=True)
        add_user(db_session, 5, real_name=None)
        assert repo.count_active_users() == 3

    def test_count_matches_between(self, repo, db_session):
        day = datetime(2026, 5, 1, tzinfo=timezone.utc)
        add_match(db_session, 1, 2, match_date=day + timedelta(hours=3))
        add_match(db_session, 1, 3, match_date=day + timedelta(hours=20))
        add_match(db_session, 2, 3, match_date=day - timedelta(hours=1))
        add_match(db_session, 3, 1, status='ended', match_date=day + timedelta(hours=5))

        assert repo.count_matches_between(day, day + timedelta(days=1)) == 2

    def test_count_online_users(self, repo, db_session):
        now = datetime.now(timezone.utc)
        add_session(db_session, 1, last_activity=now - timedelta(minutes=1))
        add_session(db_session, 1, last_activity=now - timedelta(minutes=2))
        add_session(db_session, 2, last_activity=now - timedelta(minutes=30))
        add_session(db_session, 3, last_activity=now, is_active=False)

        assert repo.count_online_users(now - timedelta(minutes=5)) == 1
