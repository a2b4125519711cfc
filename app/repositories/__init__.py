# Repositories package
from .base import BaseRepository
from .companion_repository import CompanionRepository
from .user_block_repository import UserBlockRepository
from .interaction_repository import InteractionRepository
from .favorite_repository import FavoriteRepository
from .booking_repository import BookingRepository

__all__ = [
    "BaseRepository",
    "CompanionRepository",
    "UserBlockRepository",
    "InteractionRepository",
    "FavoriteRepository",
    "BookingRepository",
]
