from sqlalchemy import Column, Integer, TIMESTAMP, ForeignKey, func, UniqueConstraint

from .base import Base


class CompatibilityCacheEntry(Base):
    """
    Durable tier of the score cache.

    Directional: (user_id, target_user_id) is the requester -> target score.
    Rows never expire; writes are upserts on the pair.
    """
    __tablename__ = 'user_compatibility_cache'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    target_user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    score = Column(Integer, nullable=False)
    calculated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint('user_id', 'target_user_id', name='uq_compatibility_pair'),
    )
