import logging
from datetime import datetime

from sqlalchemy import select, delete, func, and_, or_, false

from database.models import User, UserMatch, UserLike, UserSession
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


def _active_match():
    return or_(UserMatch.status.is_(None), UserMatch.status == 'active')


class MatchRepository(BaseRepository):
    def delete_match_pair(self, user_id: int, other_id: int) -> int:
        stmt = delete(UserMatch).where(or_(
            and_(UserMatch.user1_id == user_id, UserMatch.user2_id == other_id),
            and_(UserMatch.user1_id == other_id, UserMatch.user2_id == user_id),
        ))
        return self.db.execute(stmt).rowcount

    def delete_like_pair(self, user_id: int, other_id: int) -> int:
        stmt = delete(UserLike).where(or_(
            and_(UserLike.liked_by == user_id, UserLike.liked_user_id == other_id),
            and_(UserLike.liked_by == other_id, UserLike.liked_user_id == user_id),
        ))
        return self.db.execute(stmt).rowcount

    def unmatch(self, user_id: int, other_id: int) -> int:
        """Remove match and like rows between two users, in both directions."""
        matches_removed = self.delete_match_pair(user_id, other_id)
        likes_removed = self.delete_like_pair(user_id, other_id)
        if matches_removed or likes_removed:
            logger.info(
                f"Unmatched users {user_id} and {other_id}: "
                f"{matches_removed} matches, {likes_removed} likes removed"
            )
        return matches_removed

    # --- Stats ---

    def count_active_users(self) -> int:
        stmt = select(func.count(User.id)).where(
            or_(User.is_banned.is_(None), User.is_banned == false()),
            User.real_name.isnot(None)
        )
        return self.db.execute(stmt).scalar_one()

    def count_matches_between(self, start: datetime, end: datetime) -> int:
        stmt = select(func.count(UserMatch.id)).where(
            UserMatch.match_date >= start,
            UserMatch.match_date < end,
            _active_match()
        )
        return self.db.execute(stmt).scalar_one()

    def count_online_users(self, cutoff: datetime) -> int:
        stmt = select(func.count(func.distinct(UserSession.user_id))).where(
            UserSession.is_active == True,  # noqa: E712
            UserSession.last_activity > cutoff
        )
        return self.db.execute(stmt).scalar_one()
