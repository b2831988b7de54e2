from django.apps import AppConfig


class StampcardConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "stampcard"
    verbose_name = "Stampcard - Loyalty Cards"

    def ready(self):
        from stampcard import receivers  # noqa: F401
