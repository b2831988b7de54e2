"""Stampcard services.

Transaction protocol:
- stampcard.services.enrollment: enroll
- stampcard.services.stamping: add_stamps, add_stamps_by_code
- stampcard.services.redemption: redeem, redeem_by_code

Reads and management:
- stampcard.services.cards: card queries, delete_card
- stampcard.services.programs / businesses / profiles / activity
"""

from stampcard.services import activity
from stampcard.services import businesses
from stampcard.services import cards
from stampcard.services import enrollment
from stampcard.services import profiles
from stampcard.services import programs
from stampcard.services import redemption
from stampcard.services import stamping

__all__ = [
    "activity",
    "businesses",
    "cards",
    "enrollment",
    "profiles",
    "programs",
    "redemption",
    "stamping",
]
