from sqlalchemy import (
    Column, Text, Boolean, Integer, Float, Date, TIMESTAMP, ForeignKey, func, Index, UniqueConstraint
)
from sqlalchemy.orm import relationship

from .base import Base


class User(Base):
    """
    Member account with the demographics used for eligibility and scoring.
    """
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(Text, unique=True)
    real_name = Column(Text)

    birthdate = Column(Date)
    gender = Column(Text)
    country_id = Column(Integer, ForeignKey('country.id', ondelete='SET NULL'))
    city_id = Column(Integer, ForeignKey('city.id', ondelete='SET NULL'))

    is_banned = Column(Boolean, default=False)
    date_joined = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    # Relationships
    attributes = relationship("UserAttributes", uselist=False, back_populates="user", cascade="all, delete-orphan")
    preferences = relationship("UserPreferences", uselist=False, back_populates="user", cascade="all, delete-orphan")
    city = relationship("City")
    country = relationship("Country")

    __table_args__ = (
        Index('idx_users_country', 'country_id'),
    )


class UserAttributes(Base):
    """
    Self-described attributes. Categorical columns reference lookup ids;
    0 means "not specified".
    """
    __tablename__ = 'user_attributes'

    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), primary_key=True)

    # Values
    religion_id = Column(Integer)
    have_children = Column(Text)
    marital_status_id = Column(Integer)

    # Lifestyle
    smoking_preference_id = Column(Integer)
    drinking_preference_id = Column(Integer)
    exercise_habits_id = Column(Integer)
    living_situation_id = Column(Integer)
    lifestyle_id = Column(Integer)

    # Personality
    education_id = Column(Integer)
    occupation_category_id = Column(Integer)

    # Appearance and background
    height_cm = Column(Float)
    weight_kg = Column(Float)
    body_type_id = Column(Integer)
    ethnicity_id = Column(Integer)
    eye_color_id = Column(Integer)
    hair_color_id = Column(Integer)
    body_art_id = Column(Integer)
    english_ability_id = Column(Integer)
    number_of_children_id = Column(Integer)
    income_id = Column(Integer)

    user = relationship("User", back_populates="attributes")


class UserPreferences(Base):
    """
    What a member is looking for. Mirrors UserAttributes with preferred_* columns.
    """
    __tablename__ = 'user_preferences'

    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), primary_key=True)

    age_min = Column(Integer)
    age_max = Column(Integer)
    preferred_gender = Column(Text)
    relationship_type = Column(Text)

    preferred_height = Column(Float)
    preferred_weight = Column(Float)
    preferred_exercise = Column(Integer)
    preferred_body_type = Column(Integer)
    preferred_lifestyle = Column(Integer)
    preferred_body_art = Column(Integer)
    preferred_education = Column(Integer)
    preferred_occupation = Column(Integer)
    preferred_income = Column(Integer)
    preferred_religion = Column(Integer)
    preferred_smoking = Column(Integer)
    preferred_drinking = Column(Integer)
    preferred_children = Column(Text)
    preferred_number_of_children = Column(Integer)
    preferred_marital_status = Column(Integer)
    preferred_ethnicity = Column(Integer)
    preferred_eye_color = Column(Integer)
    preferred_hair_color = Column(Integer)
    preferred_english_ability = Column(Integer)

    user = relationship("User", back_populates="preferences")


class UserPreferredCountry(Base):
    __tablename__ = 'user_preferred_countries'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    country_id = Column(Integer, ForeignKey('country.id', ondelete='CASCADE'), nullable=False)

    __table_args__ = (
        UniqueConstraint('user_id', 'country_id', name='uq_user_preferred_country'),
    )


class UserInterest(Base):
    __tablename__ = 'user_interests'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    interest_id = Column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint('user_id', 'interest_id', name='uq_user_interest'),
    )


class UserHobby(Base):
    __tablename__ = 'user_hobbies'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    hobby_id = Column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint('user_id', 'hobby_id', name='uq_user_hobby'),
    )


class UserImage(Base):
    """
    Uploaded image metadata. Only ``file_name`` is exposed; storage is external.
    """
    __tablename__ = 'user_images'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    file_name = Column(Text, nullable=False)
    is_profile = Column(Integer, nullable=False, default=0)
    uploaded_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index('idx_user_images_user_profile', 'user_id', 'is_profile'),
    )
