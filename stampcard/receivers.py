"""
Post-commit side effects for stamps and redemptions.

Each receiver is one isolated effect: signals are sent with send_robust, so
a failing push does not stop the activity note or the cue, and none of them
can touch the already-committed transaction.
"""

import logging

from django.dispatch import receiver

from stampcard.conf import get_cue_backend, get_notification_backend
from stampcard.models import Profile
from stampcard.protocols import Cue, StampNotification
from stampcard.services import activity
from stampcard.signals import reward_redeemed, stamps_added

logger = logging.getLogger(__name__)

STAMP_NOTE = "Stamp added"
REDEEM_NOTE = "Reward redeemed"


def _push_token(profile_id) -> str:
    return Profile.objects.filter(pk=profile_id).values_list("push_token", flat=True).first() or ""


# Stamps


@receiver(stamps_added, dispatch_uid="stampcard.stamp_activity")
def record_stamp_activity(sender, result, **kwargs):
    note = STAMP_NOTE if result.added == 1 else f"{result.added} stamps added"
    activity.record_activity(result.card, result.current_stamps, note)


@receiver(stamps_added, dispatch_uid="stampcard.stamp_push")
def push_stamp_notification(sender, result, **kwargs):
    token = _push_token(result.card.customer_id)
    if not token:
        logger.debug("No push token for customer %s", result.card.customer_id)
        return False
    notification = StampNotification(
        customer_name=result.customer_name,
        business_name=result.business_name,
        current_stamps=result.current_stamps,
        total_slots=result.total_slots,
        is_completed=result.is_completed,
    )
    return get_notification_backend().send_stamp_notification(token, notification)


@receiver(stamps_added, dispatch_uid="stampcard.stamp_cue")
def play_stamp_cue(sender, result, **kwargs):
    get_cue_backend().play(Cue.COMPLETE if result.is_completed else Cue.SUCCESS)


# Redemptions


@receiver(reward_redeemed, dispatch_uid="stampcard.redeem_activity")
def record_redeem_activity(sender, card, reward, **kwargs):
    activity.record_activity(card, card.current_stamps, REDEEM_NOTE)


def _push_redemption(profile_id, business_name: str) -> bool:
    token = _push_token(profile_id)
    if not token:
        return False
    return get_notification_backend().send_redemption_notification(token, business_name)


@receiver(reward_redeemed, dispatch_uid="stampcard.redeem_push_customer")
def push_redeem_to_customer(sender, card, reward, **kwargs):
    return _push_redemption(card.customer_id, card.business.name)


@receiver(reward_redeemed, dispatch_uid="stampcard.redeem_push_business")
def push_redeem_to_business(sender, card, reward, **kwargs):
    return _push_redemption(card.business.owner_id, card.business.name)


@receiver(reward_redeemed, dispatch_uid="stampcard.redeem_cue")
def play_redeem_cue(sender, card, reward, **kwargs):
    get_cue_backend().play(Cue.COMPLETE)
