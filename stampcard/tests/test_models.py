"""Tests for Stampcard models and constraints."""

import pytest
from django.contrib import admin
from django.db import IntegrityError

from stampcard.models import (
    CodeReservation,
    CustomerCard,
    LoyaltyProgram,
    Profile,
    StampActivity,
)

pytestmark = pytest.mark.django_db


class TestConstraints:
    def test_one_open_card_per_program(self, card, customer, program, business):
        with pytest.raises(IntegrityError):
            CustomerCard.objects.create(customer=customer, program=program, business=business, code="456")

    def test_claimed_cards_do_not_block(self, card, customer, program, business):
        CustomerCard.objects.filter(pk=card.pk).update(reward_claimed=True)
        CustomerCard.objects.create(customer=customer, program=program, business=business, code="456")
        assert CustomerCard.objects.filter(customer=customer, program=program).count() == 2

    def test_code_unique_per_business(self, card, other_customer, program, business):
        other = CustomerCard.objects.create(
            customer=other_customer, program=program, business=business, code="123"
        )
        with pytest.raises(IntegrityError):
            CodeReservation.objects.create(business=business, code="123", customer=other_customer, card=other)

    def test_same_code_other_business(self, card, owner, other_customer):
        from stampcard.models import Business

        bakery = Business.objects.create(owner=owner, name="Bakery")
        bakery_program = LoyaltyProgram.objects.create(business=bakery, total_slots=5, reward_description="Bread")
        other = CustomerCard.objects.create(
            customer=other_customer, program=bakery_program, business=bakery, code="123"
        )
        CodeReservation.objects.create(business=bakery, code="123", customer=other_customer, card=other)
        assert CodeReservation.objects.filter(code="123").count() == 2

    def test_program_slots_positive(self, business):
        with pytest.raises(IntegrityError):
            LoyaltyProgram.objects.create(business=business, total_slots=0, reward_description="x")


class TestModelHelpers:
    def test_str(self, card, customer):
        assert str(card) == "#123 John Doe: 0 stamps"
        assert str(customer) == "John Doe (user-123)"

    def test_is_open(self, card):
        assert card.is_open is True

    def test_activity_ordering(self, card, customer, business, program):
        first = StampActivity.objects.create(card=card, customer=customer, business=business, program=program, stamp_count=1)
        second = StampActivity.objects.create(card=card, customer=customer, business=business, program=program, stamp_count=2)
        assert list(StampActivity.objects.filter(card=card)) == [second, first]


class TestAdminRegistration:
    def test_models_registered(self):
        for model in (Profile, CustomerCard, LoyaltyProgram, CodeReservation, StampActivity):
            assert admin.site.is_registered(model)
