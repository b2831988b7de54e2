"""Enrollment - join a loyalty program with a freshly reserved card code.

Protocol:
    1. Outside the transaction: validate (not already enrolled, program and
       customer exist) and draw a candidate code against CodeReservation.
    2. Inside transaction.atomic(): re-check the reservation, then create
       the card and its reservation together.
    3. A collision (re-check hit, or the unique index fired) rolls back and
       the whole protocol runs again with a new code, up to
       ENROLLMENT_MAX_ATTEMPTS.
"""

import logging

from django.db import DatabaseError, IntegrityError, transaction

from stampcard.codes import generate_unique_code
from stampcard.conf import stampcard_settings
from stampcard.exceptions import CodeCollision, StampcardError, translate_store_error
from stampcard.models import Business, CodeReservation, CustomerCard, LoyaltyProgram, Profile
from stampcard.services import profiles
from stampcard.signals import card_enrolled
from stampcard.signals.dispatch import emit_on_commit

logger = logging.getLogger(__name__)


def code_reserved(code: str, business_id) -> bool:
    """Reservation lookup for the code generator (reads one business namespace)."""
    return CodeReservation.objects.filter(business_id=business_id, code=code).exists()


def has_open_card(customer_code: str, program_id) -> bool:
    return CustomerCard.objects.filter(
        customer__code=customer_code,
        program_id=program_id,
        reward_claimed=False,
    ).exists()


def enroll(customer_code: str, program_id) -> CustomerCard:
    """
    Create the customer's card for a program.

    Args:
        customer_code: Customer user id
        program_id: LoyaltyProgram id

    Returns:
        The new CustomerCard (its reservation is committed with it)

    Raises:
        StampcardError: ALREADY_ENROLLED, PROGRAM_NOT_FOUND,
            CUSTOMER_NOT_FOUND, CODE_GENERATION_EXHAUSTED, ENROLLMENT_CONTENTION
    """
    max_attempts = max(1, stampcard_settings.ENROLLMENT_MAX_ATTEMPTS)

    for attempt in range(1, max_attempts + 1):
        try:
            card = _attempt_enroll(customer_code, program_id)
        except CodeCollision as collision:
            logger.info(
                "enroll: code %s collided for business %s (attempt %d/%d)",
                collision.code,
                collision.business_id,
                attempt,
                max_attempts,
            )
            continue
        except DatabaseError as exc:
            error = translate_store_error(exc, "join loyalty program")
            if error is None:
                raise
            raise error from exc

        emit_on_commit(card_enrolled, CustomerCard, card=card)
        logger.info(
            "enroll: customer %s joined program %s with code %s",
            customer_code,
            program_id,
            card.code,
        )
        return card

    raise StampcardError(
        "ENROLLMENT_CONTENTION",
        customer_code=customer_code,
        program_id=program_id,
        attempts=max_attempts,
    )


def _attempt_enroll(customer_code: str, program_id) -> CustomerCard:
    """One pass of the protocol. Raises CodeCollision to request a retry."""
    if has_open_card(customer_code, program_id):
        raise StampcardError(
            "ALREADY_ENROLLED",
            customer_code=customer_code,
            program_id=program_id,
        )

    try:
        program = LoyaltyProgram.objects.select_related("business").get(pk=program_id)
    except LoyaltyProgram.DoesNotExist:
        raise StampcardError("PROGRAM_NOT_FOUND", program_id=program_id)
    business = program.business

    customer = profiles.get_or_raise(customer_code)

    code = generate_unique_code(
        business.pk,
        code_reserved,
        max_attempts=stampcard_settings.CODE_MAX_ATTEMPTS,
    )

    with transaction.atomic():
        if code_reserved(code, business.pk):
            raise CodeCollision(business.pk, code)

        card = _create_card(customer, program, business, code)

        try:
            with transaction.atomic():
                CodeReservation.objects.create(
                    business=business,
                    code=code,
                    customer=customer,
                    card=card,
                )
        except IntegrityError:
            raise CodeCollision(business.pk, code)

    return card


def _create_card(customer: Profile, program: LoyaltyProgram, business: Business, code: str) -> CustomerCard:
    try:
        with transaction.atomic():
            return CustomerCard.objects.create(
                customer=customer,
                program=program,
                business=business,
                code=code,
                customer_name=customer.display_name,
            )
    except IntegrityError:
        # Partial unique index: a concurrent enrollment won the race
        raise StampcardError(
            "ALREADY_ENROLLED",
            customer_code=customer.code,
            program_id=program.pk,
        )
