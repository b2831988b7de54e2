"""Activity service - log and query card activity notes."""

import logging

from stampcard.models import CustomerCard, StampActivity

logger = logging.getLogger(__name__)


def record_activity(card: CustomerCard, stamp_count: int, note: str = "") -> StampActivity:
    """
    Record an activity note for a card.

    Args:
        card: CustomerCard the activity belongs to
        stamp_count: Card stamp count after the activity
        note: Short text ("Stamp added", "Reward redeemed")

    Returns:
        Created StampActivity
    """
    business_name = card.business.name if card.business_id else ""
    return StampActivity.objects.create(
        card=card,
        customer_id=card.customer_id,
        business_id=card.business_id,
        program_id=card.program_id,
        stamp_count=stamp_count,
        customer_name=card.customer_name,
        business_name=business_name,
        note=note,
    )


def card_activity(card_id, limit: int = 50) -> list[StampActivity]:
    """Activity of a card, most recent first."""
    return list(StampActivity.objects.filter(card_id=card_id)[:limit])


def business_activity(business_id, limit: int = 50) -> list[StampActivity]:
    """Recent activity across a business's cards (dashboard feed)."""
    return list(StampActivity.objects.filter(business_id=business_id)[:limit])
