"""Pytest fixtures for Stampcard tests."""

import pytest

from stampcard.models import (
    Business,
    CodeReservation,
    CustomerCard,
    LoyaltyProgram,
    Profile,
    UserType,
)


@pytest.fixture
def owner(db):
    """Business owner profile."""
    return Profile.objects.create(
        code="owner-001",
        display_name="Ana Owner",
        email="ana@cafe.example",
        user_type=UserType.BUSINESS,
        push_token="ExponentPushToken[owner-token]",
    )


@pytest.fixture
def customer(db):
    """Customer profile with a push token."""
    return Profile.objects.create(
        code="user-123",
        display_name="John Doe",
        email="john@example.com",
        push_token="ExponentPushToken[customer-token]",
    )


@pytest.fixture
def other_customer(db):
    """Customer profile without a push token."""
    return Profile.objects.create(
        code="user-456",
        display_name="Mary Roe",
        email="mary@example.com",
    )


@pytest.fixture
def business(db, owner):
    """A coffee shop."""
    return Business.objects.create(owner=owner, name="Corner Cafe")


@pytest.fixture
def program(db, business):
    """Three-slot program."""
    return LoyaltyProgram.objects.create(
        business=business,
        total_slots=3,
        reward_description="Free coffee",
        stamp_description="One stamp per coffee",
        card_color="#8B4513",
    )


@pytest.fixture
def card(db, customer, program, business):
    """Open card with code 123 and its reservation."""
    card = CustomerCard.objects.create(
        customer=customer,
        program=program,
        business=business,
        code="123",
        customer_name=customer.display_name,
    )
    CodeReservation.objects.create(business=business, code="123", customer=customer, card=card)
    return card


@pytest.fixture
def full_card(db, card, program):
    """The same card with every slot stamped."""
    CustomerCard.objects.filter(pk=card.pk).update(current_stamps=program.total_slots)
    card.refresh_from_db()
    return card
