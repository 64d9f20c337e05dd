from .base import Base
from .geo import Country, City
from .user import User, UserAttributes, UserPreferences, UserPreferredCountry, UserInterest, UserHobby, UserImage
from .settings import UserProfileSettings, UserContactCountry
from .relationship import UserBlock, UserLike, UserMatch, UserMessage, UserSession
from .compatibility import CompatibilityCacheEntry

__all__ = [
    'Base',
    'Country',
    'City',
    'User',
    'UserAttributes',
    'UserPreferences',
    'UserPreferredCountry',
    'UserInterest',
    'UserHobby',
    'UserImage',
    'UserProfileSettings',
    'UserContactCountry',
    'UserBlock',
    'UserLike',
    'UserMatch',
    'UserMessage',
    'UserSession',
    'CompatibilityCacheEntry',
]
