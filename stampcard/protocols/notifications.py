"""Side-effect protocols: push notifications and completion cues."""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class StampNotification:
    """Payload for a stamp notification."""

    customer_name: str
    business_name: str
    current_stamps: int
    total_slots: int
    is_completed: bool

    @property
    def title(self) -> str:
        if self.is_completed:
            return "🎉 Card complete!"
        return "⭐ New stamp!"

    @property
    def body(self) -> str:
        if self.is_completed:
            return f"You completed your card at {self.business_name}. Your reward is ready!"
        return (
            f"You got a stamp at {self.business_name}: "
            f"{self.current_stamps}/{self.total_slots}"
        )


class Cue(str, Enum):
    """Local feedback cue played after a stamp or redemption."""

    SUCCESS = "success"
    COMPLETE = "complete"


@runtime_checkable
class NotificationBackend(Protocol):
    """Protocol for push notification delivery."""

    def send_stamp_notification(self, token: str, notification: StampNotification) -> bool:
        """Deliver a stamp/completion notification. Returns True if accepted."""
        ...

    def send_redemption_notification(self, token: str, business_name: str) -> bool:
        """Deliver a reward-redeemed notification. Returns True if accepted."""
        ...


@runtime_checkable
class CueBackend(Protocol):
    """Protocol for local feedback (sound) playback."""

    def play(self, cue: Cue) -> None:
        ...
