"""
Stampcard public API.

TRANSACTIONS:
    CardService.enroll(customer_code, program_id)     - Join a program
    CardService.add_stamps(card_id, ...)              - Add stamp(s)
    CardService.add_stamps_by_code(code, business_id) - Add stamp(s) by card code
    CardService.redeem(card_id)                       - Claim the reward
    CardService.redeem_by_code(code, business_id)     - Claim by card code

QUERIES:
    CardService.get_card(card_id), customer_cards(...), program_cards(...),
    find_by_code(...), redemption_count(...), activity(card_id)
"""

from stampcard.models import CustomerCard, RewardEvent, StampActivity
from stampcard.services import activity, cards, enrollment, redemption, stamping
from stampcard.services.cards import CardView
from stampcard.services.stamping import StampResult


class CardService:
    """
    Stampcard public API.

    Uses @classmethod for extensibility: subclass and override a method to
    add caching, auditing or authorization.
    """

    # ======================================================================
    # TRANSACTIONS
    # ======================================================================

    @classmethod
    def enroll(cls, customer_code: str, program_id) -> CustomerCard:
        """Create the customer's card with a freshly reserved code."""
        return enrollment.enroll(customer_code, program_id)

    @classmethod
    def add_stamps(
        cls,
        card_id,
        customer_code: str,
        business_id,
        program_id,
        count: int = 1,
    ) -> StampResult:
        """Add ``count`` stamps (capped at the program's slots)."""
        return stamping.add_stamps(card_id, customer_code, business_id, program_id, count)

    @classmethod
    def add_stamp(cls, card_id, customer_code: str, business_id, program_id) -> StampResult:
        return cls.add_stamps(card_id, customer_code, business_id, program_id, 1)

    @classmethod
    def add_stamps_by_code(cls, code: str, business_id, count: int = 1) -> StampResult:
        return stamping.add_stamps_by_code(code, business_id, count)

    @classmethod
    def redeem(cls, card_id) -> RewardEvent:
        """Claim the card's reward exactly once."""
        return redemption.redeem(card_id)

    @classmethod
    def redeem_by_code(cls, code: str, business_id) -> RewardEvent:
        return redemption.redeem_by_code(code, business_id)

    @classmethod
    def delete_card(cls, card_id, requested_by: str) -> None:
        """Delete an owned card with its history; frees its code."""
        cards.delete_card(card_id, requested_by)

    # ======================================================================
    # QUERIES
    # ======================================================================

    @classmethod
    def get_card(cls, card_id) -> CardView | None:
        return cards.get_card(card_id)

    @classmethod
    def customer_cards(cls, customer_code: str, unclaimed_only: bool = False) -> list[CardView]:
        return cards.customer_cards(customer_code, unclaimed_only=unclaimed_only)

    @classmethod
    def customer_cards_at_business(cls, customer_code: str, business_id) -> list[CardView]:
        return cards.customer_cards_at_business(customer_code, business_id)

    @classmethod
    def program_cards(cls, program_id, unclaimed_only: bool = False) -> list[CardView]:
        return cards.program_cards(program_id, unclaimed_only=unclaimed_only)

    @classmethod
    def find_by_code(cls, code: str, business_id) -> CardView | None:
        return cards.find_by_code(code, business_id)

    @classmethod
    def redemption_count(cls, customer_code: str, program_id) -> int:
        return cards.redemption_count(customer_code, program_id)

    @classmethod
    def activity(cls, card_id, limit: int = 50) -> list[StampActivity]:
        return activity.card_activity(card_id, limit=limit)
