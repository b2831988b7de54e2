"""Redemption - claim a card's reward exactly once.

The card row is locked with select_for_update() before the claimed flag is
read, so of any number of concurrent redeemers exactly one sees
reward_claimed=False; the rest block, then read True and fail with
ALREADY_REDEEMED. The card's code reservation is released in the same
transaction, freeing the code for new enrollments at that business.
"""

import logging

from django.db import DatabaseError, transaction
from django.utils import timezone

from stampcard.exceptions import StampcardError, translate_store_error
from stampcard.models import CodeReservation, CustomerCard, RewardEvent
from stampcard.signals import reward_redeemed
from stampcard.signals.dispatch import emit_on_commit

logger = logging.getLogger(__name__)

REDEMPTION_NOTE = "Reward redeemed by the business"


def redeem(card_id, note: str = REDEMPTION_NOTE) -> RewardEvent:
    """
    Mark the card's reward as claimed and record the redemption.

    Args:
        card_id: CustomerCard id
        note: Free-text note stored on the RewardEvent

    Returns:
        Created RewardEvent

    Raises:
        StampcardError: CARD_NOT_FOUND, ALREADY_REDEEMED, INSUFFICIENT_STAMPS,
            or a translated store failure
    """
    try:
        with transaction.atomic():
            try:
                card = (
                    CustomerCard.objects
                    .select_for_update()
                    .select_related("program")
                    .get(pk=card_id)
                )
            except CustomerCard.DoesNotExist:
                raise StampcardError("CARD_NOT_FOUND", card_id=card_id)

            if card.reward_claimed:
                raise StampcardError("ALREADY_REDEEMED", card_id=card_id)

            required = card.program.total_slots
            if card.current_stamps < required:
                raise StampcardError(
                    "INSUFFICIENT_STAMPS",
                    card_id=card_id,
                    current=card.current_stamps,
                    required=required,
                )

            now = timezone.now()
            card.reward_claimed = True
            card.reward_claimed_at = now
            card.save(update_fields=["reward_claimed", "reward_claimed_at"])

            reward = RewardEvent.objects.create(
                card=card,
                customer_id=card.customer_id,
                business_id=card.business_id,
                program_id=card.program_id,
                claimed_at=now,
                is_redeemed=True,
                note=note,
            )

            CodeReservation.objects.filter(card=card).delete()
    except DatabaseError as exc:
        error = translate_store_error(exc, "redeem reward")
        if error is None:
            raise
        raise error from exc

    emit_on_commit(reward_redeemed, CustomerCard, card=card, reward=reward)
    logger.info("redeem: card %s reward claimed (code %s released)", card_id, card.code)
    return reward


def redeem_by_code(code: str, business_id, note: str = REDEMPTION_NOTE) -> RewardEvent:
    """
    Redeem the open card holding ``code`` at a business.

    Raises:
        StampcardError: CARD_NOT_FOUND if no open card holds the code
    """
    card_id = (
        CustomerCard.objects
        .filter(code=code, business_id=business_id, reward_claimed=False)
        .values_list("pk", flat=True)
        .first()
    )
    if card_id is None:
        raise StampcardError("CARD_NOT_FOUND", card_code=code, business_id=business_id)

    return redeem(card_id, note=note)
