"""Business service."""

from dataclasses import dataclass, field

from django.db.models import Q

from stampcard.exceptions import StampcardError
from stampcard.models import Business, UserType
from stampcard.services import profiles


def create_business(owner_code: str, name: str, **fields) -> Business:
    """
    Create a business owned by a profile. The owner becomes a business user.

    Raises:
        StampcardError: CUSTOMER_NOT_FOUND if the owner has no profile
    """
    owner = profiles.get_or_raise(owner_code)
    if owner.user_type != UserType.BUSINESS:
        owner.user_type = UserType.BUSINESS
        owner.save(update_fields=["user_type"])
    return Business.objects.create(owner=owner, name=name, **fields)


def get_business(business_id) -> Business | None:
    try:
        return Business.objects.select_related("owner").get(pk=business_id)
    except Business.DoesNotExist:
        return None


def business_for_owner(owner_code: str) -> Business | None:
    """The owner's first business (one business per owner in practice)."""
    return (
        Business.objects
        .filter(owner__code=owner_code, is_active=True)
        .order_by("created_at")
        .first()
    )


def require_business(business_id) -> Business:
    business = get_business(business_id)
    if business is None:
        raise StampcardError("BUSINESS_NOT_FOUND", business_id=business_id)
    return business


UPDATABLE_FIELDS = {"name", "description", "logo_url", "address", "phone", "email"}


def update_business(business_id, **changes) -> Business:
    """
    Update business fields (only whitelisted fields are accepted).

    None and empty-string values are ignored, so a partially filled settings
    form never blanks existing data.

    Raises:
        StampcardError: BUSINESS_NOT_FOUND
    """
    business = require_business(business_id)

    fields = [
        key
        for key, value in changes.items()
        if key in UPDATABLE_FIELDS and value not in (None, "")
    ]
    for key in fields:
        setattr(business, key, changes[key])
    if fields:
        business.save(update_fields=fields)
    return business


MAX_PAGE_SIZE = 50


@dataclass(frozen=True)
class BusinessPage:
    """One page of active businesses ordered by name."""

    items: list[Business] = field(default_factory=list)
    next_cursor: int | None = None
    has_more: bool = False


def list_businesses(page_size: int = 20, cursor=None) -> BusinessPage:
    """
    Active businesses for discovery, ordered by name, keyset-paginated.

    Args:
        page_size: Items per page, clamped to [1, MAX_PAGE_SIZE]
        cursor: ``next_cursor`` of the previous page (a business id). An
            unknown cursor restarts from the first page.

    Returns:
        BusinessPage
    """
    page_size = min(max(1, page_size), MAX_PAGE_SIZE)
    qs = Business.objects.filter(is_active=True).order_by("name", "pk")

    if cursor is not None:
        after = Business.objects.filter(pk=cursor).values("name", "pk").first()
        if after is not None:
            qs = qs.filter(Q(name__gt=after["name"]) | Q(name=after["name"], pk__gt=after["pk"]))

    rows = list(qs[: page_size + 1])
    has_more = len(rows) > page_size
    items = rows[:page_size]
    return BusinessPage(
        items=items,
        next_cursor=items[-1].pk if has_more else None,
        has_more=has_more,
    )
