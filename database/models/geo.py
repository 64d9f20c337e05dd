from sqlalchemy import Column, Integer, Text, Float, ForeignKey

from .base import Base


class Country(Base):
    __tablename__ = 'country'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    latitude = Column(Float)
    longitude = Column(Float)


class City(Base):
    """
    City with optional coordinates; a user's location prefers city
    coordinates and falls back to the country's.
    """
    __tablename__ = 'city'

    id = Column(Integer, primary_key=True, autoincrement=True)
    country_id = Column(Integer, ForeignKey('country.id', ondelete='CASCADE'))
    name = Column(Text, nullable=False)
    latitude = Column(Float)
    longitude = Column(Float)
