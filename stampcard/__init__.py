"""
Django Stampcard - Loyalty stamp cards.

Usage:
    from stampcard import CardService, StampcardError

    card = CardService.enroll("user-123", program_id)
    result = CardService.add_stamps_by_code(card.code, business_id, count=2)
    if result.is_completed:
        CardService.redeem(card.pk)
"""


def __getattr__(name):
    if name == "CardService":
        from stampcard.service import CardService

        return CardService
    if name == "StampcardError":
        from stampcard.exceptions import StampcardError

        return StampcardError
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["CardService", "StampcardError"]
__version__ = "0.1.0"
