"""Expo push notification backend."""

from __future__ import annotations

import logging
import re

import httpx

from stampcard.conf import stampcard_settings
from stampcard.protocols import StampNotification

logger = logging.getLogger(__name__)

_EXPO_TOKEN_RE = re.compile(r"^Expo(nent)?PushToken\[.+\]$")


def is_expo_push_token(token: str) -> bool:
    return bool(token) and bool(_EXPO_TOKEN_RE.match(token))


class ExpoPushBackend:
    """
    NotificationBackend that posts messages to the Expo push API.

    Config (STAMPCARD settings):
        EXPO_PUSH_URL: endpoint
        EXPO_ACCESS_TOKEN: optional bearer token
        PUSH_TIMEOUT: request timeout in seconds
    """

    def __init__(self, client: httpx.Client | None = None):
        self.url = stampcard_settings.EXPO_PUSH_URL
        self.timeout = stampcard_settings.PUSH_TIMEOUT
        self.access_token = stampcard_settings.EXPO_ACCESS_TOKEN
        self.client = client

    def send_stamp_notification(self, token: str, notification: StampNotification) -> bool:
        return self._send(
            token,
            title=notification.title,
            body=notification.body,
            data={
                "type": "stamp_added",
                "businessName": notification.business_name,
                "currentStamps": notification.current_stamps,
                "totalSlots": notification.total_slots,
                "isCompleted": notification.is_completed,
            },
            channel_id="stamps",
        )

    def send_redemption_notification(self, token: str, business_name: str) -> bool:
        return self._send(
            token,
            title="🎁 Reward redeemed!",
            body=f"You redeemed your reward at {business_name}. Thanks for your loyalty!",
            data={"type": "reward_redeemed", "businessName": business_name},
            channel_id="default",
        )

    def _send(self, token: str, title: str, body: str, data: dict, channel_id: str) -> bool:
        if not is_expo_push_token(token):
            logger.warning("Push token %r is not a valid Expo push token", token)
            return False

        message = {
            "to": token,
            "sound": "default",
            "title": title,
            "body": body,
            "data": data,
            "priority": "high",
            "ttl": 3600,
            "channelId": channel_id,
        }
        headers = {"Accept": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"

        if self.client is not None:
            response = self.client.post(self.url, json=[message], headers=headers)
        else:
            response = httpx.post(self.url, json=[message], headers=headers, timeout=self.timeout)
        response.raise_for_status()

        tickets = response.json().get("data", [])
        ok = bool(tickets) and all(t.get("status") == "ok" for t in tickets)
        if not ok:
            logger.warning("Expo rejected push to %s: %s", token, tickets)
        return ok
