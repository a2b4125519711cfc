from .user import User
from .companion import CompanionProfile, CompanionPhoto, CompanionService, VerificationStatus
from .booking import Booking, BookingStatus
from .favorite import FavoriteCompanion
from .user_block import UserBlock
from .interaction import UserInteraction, InteractionEventType

__all__ = [
    "User", "CompanionProfile", "CompanionPhoto", "CompanionService", "VerificationStatus",
    "Booking", "BookingStatus", "FavoriteCompanion", "UserBlock",
    "UserInteraction", "InteractionEventType"
]
