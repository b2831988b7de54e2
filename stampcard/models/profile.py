"""Profile model.

Local mirror of the identity provider's user record. ``code`` is the
provider's user id; every service addresses users by it.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class UserType(models.TextChoices):
    CUSTOMER = "customer", _("Customer")
    BUSINESS = "business", _("Business")


class Profile(models.Model):
    """
    App user (customer or business owner).

    push_token is the notification target used after stamps and redemptions.
    Blank when the user never registered a device.
    """

    code = models.CharField(
        _("code"),
        max_length=128,
        unique=True,
        help_text=_("User id issued by the identity provider"),
    )
    display_name = models.CharField(_("display name"), max_length=200, blank=True)
    email = models.EmailField(_("email"), blank=True, db_index=True)
    user_type = models.CharField(
        _("user type"),
        max_length=20,
        choices=UserType.choices,
        default=UserType.CUSTOMER,
    )
    push_token = models.CharField(_("push token"), max_length=255, blank=True)

    is_active = models.BooleanField(_("active"), default=True, db_index=True)
    created_at = models.DateTimeField(_("created at"), auto_now_add=True)

    class Meta:
        verbose_name = _("profile")
        verbose_name_plural = _("profiles")
        ordering = ["display_name"]

    def __str__(self):
        return f"{self.display_name or self.email} ({self.code})"
