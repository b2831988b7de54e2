"""CustomerCard and CodeReservation models.

Data architecture:
    CustomerCard
        One customer's progress in one program. reward_claimed only moves
        false -> true. At most one open (non-claimed) card per
        (customer, program), enforced by a partial unique constraint.

    CodeReservation
        Claims a card code inside a business namespace. Unique on
        (business, code). Lives exactly as long as its card stays open:
        created in the enrollment transaction, deleted by redemption or
        card deletion. A reservation's existence is what the code generator
        checks.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class CustomerCard(models.Model):
    """A customer's stamp card for one loyalty program."""

    customer = models.ForeignKey(
        "stampcard.Profile",
        on_delete=models.CASCADE,
        related_name="cards",
        verbose_name=_("customer"),
    )
    program = models.ForeignKey(
        "stampcard.LoyaltyProgram",
        on_delete=models.CASCADE,
        related_name="cards",
        verbose_name=_("program"),
    )
    # Denormalized from program for code lookups
    business = models.ForeignKey(
        "stampcard.Business",
        on_delete=models.CASCADE,
        related_name="cards",
        verbose_name=_("business"),
    )

    current_stamps = models.PositiveIntegerField(_("current stamps"), default=0)
    reward_claimed = models.BooleanField(_("reward claimed"), default=False, db_index=True)
    reward_claimed_at = models.DateTimeField(_("reward claimed at"), null=True, blank=True)

    code = models.CharField(_("code"), max_length=3, db_index=True)
    customer_name = models.CharField(
        _("customer name"),
        max_length=200,
        blank=True,
        help_text=_("Display name at enrollment time"),
    )

    created_at = models.DateTimeField(_("created at"), auto_now_add=True, db_index=True)
    last_stamp_at = models.DateTimeField(_("last stamp at"), null=True, blank=True)

    class Meta:
        verbose_name = _("customer card")
        verbose_name_plural = _("customer cards")
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["customer", "program"],
                condition=models.Q(reward_claimed=False),
                name="stampcard_one_open_card_per_program",
            ),
        ]
        indexes = [
            models.Index(fields=["business", "code", "reward_claimed"], name="stampcard_card_code_idx"),
            models.Index(fields=["customer", "-created_at"], name="stampcard_card_customer_idx"),
        ]

    def __str__(self):
        return f"#{self.code} {self.customer_name}: {self.current_stamps} stamps"

    @property
    def is_open(self) -> bool:
        return not self.reward_claimed


class CodeReservation(models.Model):
    """Reservation of a card code within a business."""

    business = models.ForeignKey(
        "stampcard.Business",
        on_delete=models.CASCADE,
        related_name="code_reservations",
        verbose_name=_("business"),
    )
    code = models.CharField(_("code"), max_length=3)
    customer = models.ForeignKey(
        "stampcard.Profile",
        on_delete=models.CASCADE,
        related_name="code_reservations",
        verbose_name=_("customer"),
    )
    card = models.OneToOneField(
        CustomerCard,
        on_delete=models.CASCADE,
        related_name="reservation",
        verbose_name=_("card"),
    )
    created_at = models.DateTimeField(_("created at"), auto_now_add=True)

    class Meta:
        verbose_name = _("code reservation")
        verbose_name_plural = _("code reservations")
        constraints = [
            models.UniqueConstraint(
                fields=["business", "code"],
                name="stampcard_unique_code_per_business",
            ),
        ]

    def __str__(self):
        return f"{self.business_id}:{self.code}"
