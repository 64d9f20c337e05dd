from sqlalchemy import Column, Integer, Text, Boolean, TIMESTAMP, ForeignKey, func, Index, UniqueConstraint

from .base import Base


class UserBlock(Base):
    __tablename__ = 'users_blocked_by_users'

    id = Column(Integer, primary_key=True, autoincrement=True)
    blocker_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    blocked_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint('blocker_id', 'blocked_id', name='uq_user_block'),
    )


class UserLike(Base):
    """
    One-way like. A mutual like is two rows.
    """
    __tablename__ = 'users_likes'

    id = Column(Integer, primary_key=True, autoincrement=True)
    liked_by = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    liked_user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint('liked_by', 'liked_user_id', name='uq_user_like'),
        Index('idx_users_likes_liked_user', 'liked_user_id'),
    )


class UserMatch(Base):
    """
    Established match between two members, stored in either column order.
    ``status`` NULL or 'active' means the match is live.
    """
    __tablename__ = 'user_matches'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user1_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    user2_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    status = Column(Text, default='active')
    match_date = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index('idx_user_matches_users', 'user1_id', 'user2_id'),
    )


class UserMessage(Base):
    """
    Message metadata. Only the fields that decide "already in contact" are modelled.
    """
    __tablename__ = 'user_messages'

    id = Column(Integer, primary_key=True, autoincrement=True)
    sender_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    receiver_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    message_type = Column(Text, default='text')
    deleted_by_sender = Column(Boolean, default=False)
    deleted_by_receiver = Column(Boolean, default=False)
    recall_type = Column(Text, default='none')
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index('idx_user_messages_pair', 'sender_id', 'receiver_id'),
    )


class UserSession(Base):
    __tablename__ = 'user_sessions'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    last_activity = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index('idx_user_sessions_user_activity', 'user_id', 'last_activity'),
    )
