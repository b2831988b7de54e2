"""Card queries - read-only views joining cards with program and business.

Reads are not transactional: an embedded program snapshot may briefly lag a
concurrent program edit. Program and business rows referenced by a result
set are fetched once each.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from django.db import DatabaseError, transaction

from stampcard.exceptions import StampcardError, translate_store_error
from stampcard.models import (
    Business,
    CodeReservation,
    CustomerCard,
    LoyaltyProgram,
    RewardEvent,
    StampActivity,
    StampEvent,
)
from stampcard.signals import card_deleted
from stampcard.signals.dispatch import emit_on_commit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgramView:
    """Loyalty program with its business's display fields."""

    id: int
    business_id: int
    business_name: str
    business_logo: str
    total_slots: int
    reward_description: str
    stamp_description: str
    card_color: str
    stamp_shape: str
    background_image: str
    is_active: bool
    created_at: datetime


@dataclass(frozen=True)
class CardView:
    """Customer card enriched with its program (None if the program is gone)."""

    id: int
    customer_code: str
    customer_name: str
    program_id: int
    business_id: int
    code: str
    current_stamps: int
    reward_claimed: bool
    created_at: datetime
    last_stamp_at: datetime | None
    reward_claimed_at: datetime | None
    program: ProgramView | None = None

    @property
    def is_completed(self) -> bool:
        return self.program is not None and self.current_stamps >= self.program.total_slots


def program_view(program: LoyaltyProgram, business: Business | None) -> ProgramView:
    return ProgramView(
        id=program.pk,
        business_id=program.business_id,
        business_name=business.name if business else "",
        business_logo=business.logo_url if business else "",
        total_slots=program.total_slots,
        reward_description=program.reward_description,
        stamp_description=program.stamp_description,
        card_color=program.card_color,
        stamp_shape=program.stamp_shape,
        background_image=program.background_image,
        is_active=program.is_active,
        created_at=program.created_at,
    )


def _enrich(cards: list[CustomerCard]) -> list[CardView]:
    """Join cards with programs and businesses, one query per table."""
    if not cards:
        return []

    programs = LoyaltyProgram.objects.in_bulk({c.program_id for c in cards})
    business_ids = {c.business_id for c in cards} | {p.business_id for p in programs.values()}
    businesses = Business.objects.in_bulk(business_ids)

    views = []
    for card in cards:
        program = programs.get(card.program_id)
        view_program = None
        if program is not None:
            view_program = program_view(program, businesses.get(program.business_id))
        views.append(
            CardView(
                id=card.pk,
                customer_code=card.customer.code,
                customer_name=card.customer_name,
                program_id=card.program_id,
                business_id=card.business_id,
                code=card.code,
                current_stamps=card.current_stamps,
                reward_claimed=card.reward_claimed,
                created_at=card.created_at,
                last_stamp_at=card.last_stamp_at,
                reward_claimed_at=card.reward_claimed_at,
                program=view_program,
            )
        )
    return views


def _read(operation: str, query, default):
    """Run a read; translated store errors raise, cancelled reads yield default."""
    try:
        return query()
    except DatabaseError as exc:
        error = translate_store_error(exc, operation)
        if error is None:
            return default
        raise error from exc


def get_card(card_id) -> CardView | None:
    """Get one card with its program, or None."""

    def query():
        card = CustomerCard.objects.select_related("customer").filter(pk=card_id).first()
        return _enrich([card])[0] if card else None

    return _read("get card", query, None)


def customer_cards(customer_code: str, unclaimed_only: bool = False) -> list[CardView]:
    """All cards of a customer, newest first."""

    def query():
        qs = CustomerCard.objects.filter(customer__code=customer_code)
        if unclaimed_only:
            qs = qs.filter(reward_claimed=False)
        return _enrich(list(qs.select_related("customer").order_by("-created_at")))

    return _read("list customer cards", query, [])


def customer_cards_at_business(customer_code: str, business_id) -> list[CardView]:
    """Open cards a customer holds on a business's active programs."""

    def query():
        qs = CustomerCard.objects.filter(
            customer__code=customer_code,
            business_id=business_id,
            program__is_active=True,
            reward_claimed=False,
        )
        return _enrich(list(qs.select_related("customer").order_by("-created_at")))

    return _read("list customer cards for business", query, [])


def program_cards(program_id, unclaimed_only: bool = False) -> list[CardView]:
    """Cards enrolled in a program, newest first."""

    def query():
        qs = CustomerCard.objects.filter(program_id=program_id)
        if unclaimed_only:
            qs = qs.filter(reward_claimed=False)
        return _enrich(list(qs.select_related("customer").order_by("-created_at")))

    return _read("list program cards", query, [])


def find_by_code(code: str, business_id) -> CardView | None:
    """The open card holding ``code`` at a business, or None."""

    def query():
        card = (
            CustomerCard.objects
            .filter(code=code, business_id=business_id, reward_claimed=False)
            .select_related("customer")
            .first()
        )
        return _enrich([card])[0] if card else None

    return _read("find card by code", query, None)


def redemption_count(customer_code: str, program_id) -> int:
    """How many cards of this program the customer has redeemed."""

    def query():
        return CustomerCard.objects.filter(
            customer__code=customer_code,
            program_id=program_id,
            reward_claimed=True,
        ).count()

    return _read("count redemptions", query, 0)


def delete_card(card_id, requested_by: str) -> None:
    """
    Delete a card with its stamps, rewards, activity and code reservation.

    Args:
        card_id: CustomerCard id
        requested_by: User id of the signed-in user (must own the card)

    Raises:
        StampcardError: CARD_NOT_FOUND, PERMISSION_DENIED
    """
    try:
        with transaction.atomic():
            try:
                card = (
                    CustomerCard.objects
                    .select_for_update()
                    .select_related("customer")
                    .get(pk=card_id)
                )
            except CustomerCard.DoesNotExist:
                raise StampcardError("CARD_NOT_FOUND", card_id=card_id)

            if card.customer.code != requested_by:
                raise StampcardError("PERMISSION_DENIED", card_id=card_id)

            business_id, code = card.business_id, card.code
            purge_cards([card.pk])
    except DatabaseError as exc:
        error = translate_store_error(exc, "delete card")
        if error is None:
            raise
        raise error from exc

    emit_on_commit(card_deleted, CustomerCard, card_id=card_id, business_id=business_id, code=code)
    logger.info("delete_card: card %s deleted by %s (code %s released)", card_id, requested_by, code)


def purge_cards(card_ids) -> int:
    """
    Delete cards with their stamps, rewards, activity and code reservations.

    Must run inside the caller's transaction. Returns the number of cards
    deleted.
    """
    card_ids = list(card_ids)
    if not card_ids:
        return 0
    StampActivity.objects.filter(card_id__in=card_ids).delete()
    StampEvent.objects.filter(card_id__in=card_ids).delete()
    RewardEvent.objects.filter(card_id__in=card_ids).delete()
    CodeReservation.objects.filter(card_id__in=card_ids).delete()
    deleted, _ = CustomerCard.objects.filter(pk__in=card_ids).delete()
    return deleted
