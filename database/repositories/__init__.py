from database.repositories.base import BaseRepository
from database.repositories.profile import ProfileRepository
from database.repositories.candidate import CandidateRepository
from database.repositories.match import MatchRepository
from database.repositories.compatibility import CompatibilityRepository

__all__ = [
    'BaseRepository',
    'ProfileRepository',
    'CandidateRepository',
    'MatchRepository',
    'CompatibilityRepository',
]
