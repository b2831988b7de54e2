"""Loyalty program service - create, edit, deactivate programs."""

import logging

from django.db import transaction
from django.utils import timezone

from stampcard.exceptions import StampcardError
from stampcard.models import Business, LoyaltyProgram
from stampcard.services.cards import ProgramView, program_view

logger = logging.getLogger(__name__)


def create_program(
    business_id,
    total_slots: int,
    reward_description: str,
    stamp_description: str = "",
    card_color: str = "",
    stamp_shape: str = "circle",
    background_image: str = "",
) -> LoyaltyProgram:
    """
    Create a loyalty program for a business.

    Raises:
        StampcardError: INVALID_SLOTS, BUSINESS_NOT_FOUND
    """
    if not isinstance(total_slots, int) or total_slots < 1:
        raise StampcardError("INVALID_SLOTS", total_slots=total_slots)

    try:
        business = Business.objects.get(pk=business_id)
    except Business.DoesNotExist:
        raise StampcardError("BUSINESS_NOT_FOUND", business_id=business_id)

    return LoyaltyProgram.objects.create(
        business=business,
        total_slots=total_slots,
        reward_description=reward_description,
        stamp_description=stamp_description,
        card_color=card_color,
        stamp_shape=stamp_shape,
        background_image=background_image,
    )


def get_program(program_id) -> ProgramView | None:
    """Get a program with business display fields, or None."""
    program = LoyaltyProgram.objects.select_related("business").filter(pk=program_id).first()
    if program is None:
        return None
    return program_view(program, program.business)


def business_programs(business_id) -> list[ProgramView]:
    """All programs of a business (active and inactive), newest first."""
    qs = LoyaltyProgram.objects.filter(business_id=business_id).select_related("business")
    return [program_view(p, p.business) for p in qs.order_by("-created_at")]


def active_programs() -> list[ProgramView]:
    """Active programs across all businesses (discovery), newest first."""
    qs = LoyaltyProgram.objects.filter(is_active=True).select_related("business")
    return [program_view(p, p.business) for p in qs.order_by("-created_at")]


UPDATABLE_FIELDS = {
    "total_slots",
    "reward_description",
    "stamp_description",
    "card_color",
    "stamp_shape",
    "background_image",
}


def update_program(program_id, **changes) -> LoyaltyProgram:
    """
    Update program fields (only whitelisted fields are accepted).

    total_slots may be raised but never lowered, so no open card ends up
    above its threshold.

    Raises:
        StampcardError: PROGRAM_NOT_FOUND, INVALID_SLOTS
    """
    with transaction.atomic():
        try:
            program = LoyaltyProgram.objects.select_for_update().get(pk=program_id)
        except LoyaltyProgram.DoesNotExist:
            raise StampcardError("PROGRAM_NOT_FOUND", program_id=program_id)

        if "total_slots" in changes:
            slots = changes["total_slots"]
            if not isinstance(slots, int) or slots < program.total_slots:
                raise StampcardError(
                    "INVALID_SLOTS",
                    message="Total stamp slots can only be increased",
                    total_slots=slots,
                )

        fields = [key for key in changes if key in UPDATABLE_FIELDS]
        for key in fields:
            setattr(program, key, changes[key])
        if fields:
            program.save(update_fields=fields + ["updated_at"])

    return program


def deactivate_program(program_id) -> bool:
    """Soft-delete: hide the program from discovery and new enrollments."""
    updated = LoyaltyProgram.objects.filter(pk=program_id, is_active=True).update(
        is_active=False,
        deactivated_at=timezone.now(),
    )
    if updated:
        logger.info("deactivate_program: program %s deactivated", program_id)
    return bool(updated)


def delete_program(program_id) -> None:
    """
    Hard-delete a program with all its cards and their history.

    Raises:
        StampcardError: PROGRAM_NOT_FOUND
    """
    deleted, per_model = LoyaltyProgram.objects.filter(pk=program_id).delete()
    if not deleted:
        raise StampcardError("PROGRAM_NOT_FOUND", program_id=program_id)
    logger.info("delete_program: program %s deleted (%s)", program_id, per_model)
