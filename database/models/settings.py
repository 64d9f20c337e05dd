from sqlalchemy import Column, Integer, Boolean, ForeignKey, TIMESTAMP, func, Index

from .base import Base


class UserProfileSettings(Base):
    """
    Who may contact a member, plus the saved minimum-score UI preference.
    """
    __tablename__ = 'user_profile_settings'

    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), primary_key=True)

    contact_age_min = Column(Integer)
    contact_age_max = Column(Integer)
    require_photos = Column(Boolean, default=False)
    no_same_gender_contact = Column(Boolean, default=False)

    # 1-100, advisory only
    match_score = Column(Integer)

    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class UserContactCountry(Base):
    """
    Contact-country allow-list. No rows means unrestricted; a row with
    ``is_all_countries`` set also means unrestricted.
    """
    __tablename__ = 'user_contact_countries'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    country_id = Column(Integer, ForeignKey('country.id', ondelete='CASCADE'))
    is_all_countries = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index('idx_user_contact_countries_user', 'user_id'),
    )
