"""Logging-only backends (default, and for local development)."""

import logging

from stampcard.protocols import Cue, StampNotification

logger = logging.getLogger(__name__)


class ConsoleNotificationBackend:
    """NotificationBackend that only logs what would be sent."""

    def send_stamp_notification(self, token: str, notification: StampNotification) -> bool:
        logger.info("Push to %s: %s | %s", token, notification.title, notification.body)
        return True

    def send_redemption_notification(self, token: str, business_name: str) -> bool:
        logger.info("Push to %s: reward redeemed at %s", token, business_name)
        return True


class ConsoleCueBackend:
    """CueBackend for servers without audio output."""

    def play(self, cue: Cue) -> None:
        logger.debug("Cue: %s", cue.value)
