"""StampActivity model - human-readable activity feed per card."""

from django.db import models
from django.utils.translation import gettext_lazy as _


class StampActivity(models.Model):
    """
    Activity note shown in card history ("Stamp added", "Reward redeemed").

    Written after the stamp/redemption commits, never inside the
    transaction. Names are snapshots so the feed reads without joins.
    """

    card = models.ForeignKey(
        "stampcard.CustomerCard",
        on_delete=models.CASCADE,
        related_name="activities",
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

    stamp_count = models.PositiveIntegerField(
        _("stamp count"),
        help_text=_("Card stamp count after this activity"),
    )
    customer_name = models.CharField(_("customer name"), max_length=200, blank=True)
    business_name = models.CharField(_("business name"), max_length=200, blank=True)
    note = models.CharField(_("note"), max_length=300, blank=True)

    created_at = models.DateTimeField(_("created at"), auto_now_add=True, db_index=True)

    class Meta:
        verbose_name = _("stamp activity")
        verbose_name_plural = _("stamp activities")
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.note or 'activity'} ({self.stamp_count})"
