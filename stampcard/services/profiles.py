"""Profile service - local user records keyed by identity-provider id."""

import logging

from django.db import DatabaseError, transaction

from stampcard.exceptions import StampcardError, translate_store_error
from stampcard.models import CustomerCard, Profile
from stampcard.services.cards import purge_cards
from stampcard.signals import card_deleted
from stampcard.signals.dispatch import emit_on_commit

logger = logging.getLogger(__name__)


def get(code: str) -> Profile | None:
    """Get active profile by user id."""
    try:
        return Profile.objects.get(code=code, is_active=True)
    except Profile.DoesNotExist:
        return None


def get_or_raise(code: str) -> Profile:
    profile = get(code)
    if profile is None:
        raise StampcardError("CUSTOMER_NOT_FOUND", customer_code=code)
    return profile


def create(
    code: str,
    display_name: str = "",
    email: str = "",
    user_type: str = "customer",
    push_token: str = "",
) -> Profile:
    """Create a profile for a newly registered user."""
    return Profile.objects.create(
        code=code,
        display_name=display_name,
        email=email,
        user_type=user_type,
        push_token=push_token,
    )


UPDATABLE_FIELDS = {"display_name", "email", "push_token"}


def update(code: str, **fields) -> Profile | None:
    """Update profile fields (only whitelisted fields are accepted)."""
    profile = get(code)
    if not profile:
        return None

    changed = []
    for key, value in fields.items():
        if key not in UPDATABLE_FIELDS:
            continue
        if getattr(profile, key) != value:
            setattr(profile, key, value)
            changed.append(key)

    if changed:
        profile.save(update_fields=changed)
    return profile


def set_push_token(code: str, token: str) -> bool:
    """Register (or clear, with "") the device push token. Returns False if no profile."""
    updated = Profile.objects.filter(code=code, is_active=True).update(push_token=token)
    if not updated:
        logger.warning("set_push_token: no active profile %s", code)
    return bool(updated)


def delete_account(code: str) -> int:
    """
    Delete a user's data: every card (with its stamps, rewards, activity and
    code reservation) goes, and the profile is deactivated and scrubbed.

    The profile row itself stays because businesses reference their owner.

    Returns:
        Number of cards deleted

    Raises:
        StampcardError: CUSTOMER_NOT_FOUND
    """
    try:
        with transaction.atomic():
            try:
                profile = Profile.objects.select_for_update().get(code=code, is_active=True)
            except Profile.DoesNotExist:
                raise StampcardError("CUSTOMER_NOT_FOUND", customer_code=code)

            cards = list(
                CustomerCard.objects
                .select_for_update()
                .filter(customer=profile)
                .values_list("pk", "business_id", "code")
            )
            deleted = purge_cards(pk for pk, _, _ in cards)

            profile.display_name = ""
            profile.email = ""
            profile.push_token = ""
            profile.is_active = False
            profile.save(update_fields=["display_name", "email", "push_token", "is_active"])
    except DatabaseError as exc:
        error = translate_store_error(exc, "delete account")
        if error is None:
            raise
        raise error from exc

    for card_id, business_id, card_code in cards:
        emit_on_commit(card_deleted, CustomerCard, card_id=card_id, business_id=business_id, code=card_code)
    logger.info("delete_account: profile %s deactivated, %d cards deleted", code, deleted)
    return deleted
