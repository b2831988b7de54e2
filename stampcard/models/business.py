"""Business model."""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Business(models.Model):
    """Merchant that owns loyalty programs. Namespace for card codes."""

    owner = models.ForeignKey(
        "stampcard.Profile",
        on_delete=models.PROTECT,
        related_name="businesses",
        verbose_name=_("owner"),
    )
    name = models.CharField(_("name"), max_length=200)
    description = models.TextField(_("description"), blank=True)
    logo_url = models.URLField(_("logo"), max_length=500, blank=True)
    address = models.CharField(_("address"), max_length=300, blank=True)
    phone = models.CharField(_("phone"), max_length=30, blank=True)
    email = models.EmailField(_("email"), blank=True)

    is_active = models.BooleanField(_("active"), default=True, db_index=True)
    created_at = models.DateTimeField(_("created at"), auto_now_add=True)

    class Meta:
        verbose_name = _("business")
        verbose_name_plural = _("businesses")
        ordering = ["name"]

    def __str__(self):
        return self.name
