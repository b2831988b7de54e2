"""Stampcard models."""

from stampcard.models.profile import Profile, UserType
from stampcard.models.business import Business
from stampcard.models.program import LoyaltyProgram, StampShape
from stampcard.models.card import CustomerCard, CodeReservation
from stampcard.models.events import StampEvent, RewardEvent
from stampcard.models.activity import StampActivity

__all__ = [
    "Profile",
    "UserType",
    "Business",
    "LoyaltyProgram",
    "StampShape",
    # Cards and code namespace
    "CustomerCard",
    "CodeReservation",
    # Append-only history
    "StampEvent",
    "RewardEvent",
    "StampActivity",
]
