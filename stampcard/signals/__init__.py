"""
Stampcard signals - post-commit domain events.

Emitted only after the originating transaction commits (via
transaction.on_commit) and always with send_robust, so a failing receiver
never affects the committed work or the other receivers.

Emitted signals:
- card_enrolled: sender=CustomerCard, card=CustomerCard
- stamps_added: sender=CustomerCard, result=StampResult
- reward_redeemed: sender=CustomerCard, card=CustomerCard, reward=RewardEvent
- card_deleted: sender=CustomerCard, card_id=int, business_id=int, code=str
"""

from django.dispatch import Signal

card_enrolled = Signal()
stamps_added = Signal()
reward_redeemed = Signal()
card_deleted = Signal()
