"""Stampcard protocols."""

from stampcard.protocols.notifications import (
    Cue,
    CueBackend,
    NotificationBackend,
    StampNotification,
)

__all__ = [
    "Cue",
    "CueBackend",
    "NotificationBackend",
    "StampNotification",
]
