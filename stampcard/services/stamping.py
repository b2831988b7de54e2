"""Stamping - add one or more stamps to a card, capped at the program's slots.

All mutations run in one transaction.atomic() block: the card row is locked,
the counter moves with an F() increment and one StampEvent per stamp actually
added is written. Notifications, cues and the activity note run after commit
through the stamps_added signal and can never undo the stamp.
"""

import logging
import math
from dataclasses import dataclass

from django.db import DatabaseError, transaction
from django.db.models import F
from django.utils import timezone

from stampcard.exceptions import StampcardError, translate_store_error
from stampcard.models import Business, CustomerCard, LoyaltyProgram, StampEvent
from stampcard.signals import stamps_added
from stampcard.signals.dispatch import emit_on_commit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StampResult:
    """Outcome of a stamp transaction."""

    card: CustomerCard
    added: int
    current_stamps: int
    total_slots: int
    is_completed: bool
    customer_name: str = ""
    business_name: str = ""

    @property
    def stamps_remaining(self) -> int:
        return max(0, self.total_slots - self.current_stamps)


def normalize_count(count) -> int:
    """Floor the requested count and clamp it to at least 1."""
    try:
        return max(1, math.floor(count))
    except (TypeError, ValueError, OverflowError):
        return 1


def stamps_to_add(current_stamps: int, total_slots: int, requested: int) -> int:
    """Stamps that fit: min(requested, remaining slots), never negative."""
    remaining = max(0, total_slots - current_stamps)
    return min(remaining, requested)


def add_stamps(
    card_id,
    customer_code: str,
    business_id,
    program_id,
    count: int = 1,
) -> StampResult:
    """
    Add stamps to a customer card.

    Adding to a full card commits without changes and reports
    is_completed=True. Claimed cards are closed and cannot be stamped.

    Args:
        card_id: CustomerCard id
        customer_code: Card owner's user id
        business_id: Business granting the stamp
        program_id: Card's loyalty program
        count: Stamps requested (floored, minimum 1)

    Returns:
        StampResult

    Raises:
        StampcardError: CARD_NOT_FOUND (also for a claimed card),
            PROGRAM_NOT_FOUND, or a translated store failure
    """
    requested = normalize_count(count)

    try:
        result = _add_stamps_atomic(card_id, customer_code, business_id, program_id, requested)
    except DatabaseError as exc:
        error = translate_store_error(exc, "add stamp")
        if error is None:
            raise
        raise error from exc

    if result.added:
        emit_on_commit(stamps_added, CustomerCard, result=result)
        logger.info(
            "add_stamps: card %s +%d -> %d/%d%s",
            card_id,
            result.added,
            result.current_stamps,
            result.total_slots,
            " (completed)" if result.is_completed else "",
        )
    else:
        logger.info("add_stamps: card %s already full (%d/%d)", card_id, result.current_stamps, result.total_slots)

    return result


def _add_stamps_atomic(card_id, customer_code, business_id, program_id, requested: int) -> StampResult:
    with transaction.atomic():
        try:
            card = (
                CustomerCard.objects
                .select_for_update()
                .get(
                    pk=card_id,
                    customer__code=customer_code,
                    business_id=business_id,
                    program_id=program_id,
                    reward_claimed=False,
                )
            )
        except CustomerCard.DoesNotExist:
            raise StampcardError("CARD_NOT_FOUND", card_id=card_id)

        try:
            program = LoyaltyProgram.objects.get(pk=program_id)
        except LoyaltyProgram.DoesNotExist:
            raise StampcardError("PROGRAM_NOT_FOUND", program_id=program_id)

        business_name = (
            Business.objects.filter(pk=business_id).values_list("name", flat=True).first()
            or ""
        )

        to_add = stamps_to_add(card.current_stamps, program.total_slots, requested)

        if to_add == 0:
            return StampResult(
                card=card,
                added=0,
                current_stamps=card.current_stamps,
                total_slots=program.total_slots,
                is_completed=card.current_stamps >= program.total_slots,
                customer_name=card.customer_name,
                business_name=business_name,
            )

        now = timezone.now()
        CustomerCard.objects.filter(pk=card.pk).update(
            current_stamps=F("current_stamps") + to_add,
            last_stamp_at=now,
        )
        StampEvent.objects.bulk_create(
            [
                StampEvent(
                    card=card,
                    customer_id=card.customer_id,
                    business_id=card.business_id,
                    program_id=card.program_id,
                    created_at=now,
                )
                for _ in range(to_add)
            ]
        )
        card.refresh_from_db(fields=["current_stamps", "last_stamp_at"])

    return StampResult(
        card=card,
        added=to_add,
        current_stamps=card.current_stamps,
        total_slots=program.total_slots,
        is_completed=card.current_stamps >= program.total_slots,
        customer_name=card.customer_name,
        business_name=business_name,
    )


def add_stamps_by_code(code: str, business_id, count: int = 1) -> StampResult:
    """
    Add stamps to the open card holding ``code`` at a business.

    Raises:
        StampcardError: CARD_NOT_FOUND if no open card holds the code
    """
    card = (
        CustomerCard.objects
        .filter(code=code, business_id=business_id, reward_claimed=False)
        .select_related("customer")
        .first()
    )
    if card is None:
        raise StampcardError("CARD_NOT_FOUND", card_code=code, business_id=business_id)

    return add_stamps(card.pk, card.customer.code, business_id, card.program_id, count)
