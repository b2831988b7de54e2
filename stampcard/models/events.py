"""StampEvent and RewardEvent models - append-only card history."""

from django.db import models
from django.utils.translation import gettext_lazy as _


class StampEvent(models.Model):
    """
    One stamp granted to a card.

    Append-only. A bulk stamp of N creates N rows. Removed only when the
    card is deleted.
    """

    card = models.ForeignKey(
        "stampcard.CustomerCard",
        on_delete=models.CASCADE,
        related_name="stamp_events",
        verbose_name=_("card"),
    )
    customer = models.ForeignKey(
        "stampcard.Profile",
        on_delete=models.CASCADE,
        related_name="+",
        verbose_name=_("customer"),
    )
    business = models.ForeignKey(
        "stampcard.Business",
        on_delete=models.CASCADE,
        related_name="+",
        verbose_name=_("business"),
    )
    program = models.ForeignKey(
        "stampcard.LoyaltyProgram",
        on_delete=models.CASCADE,
        related_name="+",
        verbose_name=_("program"),
    )
    created_at = models.DateTimeField(_("created at"), db_index=True)

    class Meta:
        verbose_name = _("stamp")
        verbose_name_plural = _("stamps")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["card", "-created_at"], name="stampcard_stamp_card_idx"),
        ]

    def __str__(self):
        return f"stamp card={self.card_id} @ {self.created_at:%Y-%m-%d %H:%M}"


class RewardEvent(models.Model):
    """
    One reward redemption. Append-only; at most one per card.
    """

    card = models.ForeignKey(
        "stampcard.CustomerCard",
        on_delete=models.CASCADE,
        related_name="reward_events",
        verbose_name=_("card"),
    )
    customer = models.ForeignKey(
        "stampcard.Profile",
        on_delete=models.CASCADE,
        related_name="+",
        verbose_name=_("customer"),
    )
    business = models.ForeignKey(
        "stampcard.Business",
        on_delete=models.CASCADE,
        related_name="+",
        verbose_name=_("business"),
    )
    program = models.ForeignKey(
        "stampcard.LoyaltyProgram",
        on_delete=models.CASCADE,
        related_name="+",
        verbose_name=_("program"),
    )
    claimed_at = models.DateTimeField(_("claimed at"), db_index=True)
    is_redeemed = models.BooleanField(_("redeemed"), default=True)
    note = models.CharField(_("note"), max_length=300, blank=True)

    class Meta:
        verbose_name = _("reward")
        verbose_name_plural = _("rewards")
        ordering = ["-claimed_at"]

    def __str__(self):
        return f"reward card={self.card_id} @ {self.claimed_at:%Y-%m-%d %H:%M}"
