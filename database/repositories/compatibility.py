import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, delete
from sqlalchemy.dialects import postgresql, sqlite

from database.models import CompatibilityCacheEntry
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    'postgresql': postgresql.insert,
    'sqlite': sqlite.insert,
}


class CompatibilityRepository(BaseRepository):
    """Durable compatibility scores keyed by (requester, target)."""

    def get_score(self, user_id: int, target_user_id: int) -> Optional[int]:
        stmt = select(CompatibilityCacheEntry.score).where(
            CompatibilityCacheEntry.user_id == user_id,
            CompatibilityCacheEntry.target_user_id == target_user_id
        ).order_by(CompatibilityCacheEntry.calculated_at.desc()).limit(1)
        return self.db.execute(stmt).scalar_one_or_none()

    def upsert_score(self, user_id: int, target_user_id: int, score: int) -> None:
        """Insert or overwrite the pair's score; last write wins."""
        dialect = self.dialect_name
        insert = _UPSERT_DIALECTS.get(dialect)
        if insert is None:
            raise NotImplementedError(f"Upsert not supported for dialect: {dialect}")

        now = datetime.now(timezone.utc)
        stmt = insert(CompatibilityCacheEntry).values(
            user_id=user_id,
            target_user_id=target_user_id,
            score=score,
            calculated_at=now
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=['user_id', 'target_user_id'],
            set_={
                'score': stmt.excluded.score,
                'calculated_at': stmt.excluded.calculated_at
            }
        )
        self.db.execute(stmt)

    def delete_score(self, user_id: int, target_user_id: int) -> int:
        stmt = delete(CompatibilityCacheEntry).where(
            CompatibilityCacheEntry.user_id == user_id,
            CompatibilityCacheEntry.target_user_id == target_user_id
        )
        return self.db.execute(stmt).rowcount
