"""LoyaltyProgram model."""

from django.db import models
from django.utils.translation import gettext_lazy as _


class StampShape(models.TextChoices):
    CIRCLE = "circle", _("Circle")
    SQUARE = "square", _("Square")
    STAR = "star", _("Star")
    HEART = "heart", _("Heart")


class LoyaltyProgram(models.Model):
    """
    Merchant-defined stamp program with a fixed number of slots and one reward.

    Programs are deactivated, not deleted, in the normal flow. total_slots is
    the completion threshold read by every stamp and redemption.
    """

    business = models.ForeignKey(
        "stampcard.Business",
        on_delete=models.CASCADE,
        related_name="programs",
        verbose_name=_("business"),
    )
    total_slots = models.PositiveIntegerField(
        _("total slots"),
        help_text=_("Stamps needed to earn the reward"),
    )
    reward_description = models.CharField(_("reward"), max_length=300)
    stamp_description = models.CharField(
        _("stamp description"),
        max_length=300,
        blank=True,
        help_text=_("What earns a stamp (e.g. one coffee)"),
    )

    # Display styling
    card_color = models.CharField(_("card color"), max_length=20, blank=True)
    stamp_shape = models.CharField(
        _("stamp shape"),
        max_length=20,
        choices=StampShape.choices,
        default=StampShape.CIRCLE,
    )
    background_image = models.URLField(_("background image"), max_length=500, blank=True)

    is_active = models.BooleanField(_("active"), default=True, db_index=True)
    created_at = models.DateTimeField(_("created at"), auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)
    deactivated_at = models.DateTimeField(_("deactivated at"), null=True, blank=True)

    class Meta:
        verbose_name = _("loyalty program")
        verbose_name_plural = _("loyalty programs")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(total_slots__gte=1),
                name="stampcard_program_slots_positive",
            ),
        ]

    def __str__(self):
        return f"{self.business.name}: {self.total_slots} stamps → {self.reward_description}"
