"""Tests for programs, businesses and profiles."""

import pytest

from stampcard.exceptions import StampcardError
from stampcard.models import (
    Business,
    CodeReservation,
    CustomerCard,
    LoyaltyProgram,
    Profile,
    StampActivity,
    StampEvent,
    UserType,
)
from stampcard.services import businesses, profiles, programs, stamping

pytestmark = pytest.mark.django_db


class TestProgramService:
    def test_create(self, business):
        program = programs.create_program(business.pk, 10, "Free sandwich", stamp_shape="star")
        assert program.total_slots == 10
        assert program.is_active is True
        assert program.stamp_shape == "star"

    @pytest.mark.parametrize("slots", [0, -1, "10", 2.5])
    def test_invalid_slots(self, business, slots):
        with pytest.raises(StampcardError, match="INVALID_SLOTS"):
            programs.create_program(business.pk, slots, "Free sandwich")

    def test_unknown_business(self, db):
        with pytest.raises(StampcardError, match="BUSINESS_NOT_FOUND"):
            programs.create_program(999999, 5, "Free sandwich")

    def test_get_program_view(self, program):
        view = programs.get_program(program.pk)
        assert view.business_name == "Corner Cafe"
        assert view.reward_description == "Free coffee"
        assert programs.get_program(999999) is None

    def test_listing(self, program, business):
        other = programs.create_program(business.pk, 4, "Free tea")
        programs.deactivate_program(program.pk)

        assert {p.id for p in programs.business_programs(business.pk)} == {program.pk, other.pk}
        assert [p.id for p in programs.active_programs()] == [other.pk]

    def test_update_raises_slots(self, program):
        updated = programs.update_program(program.pk, total_slots=5, card_color="#000000", business_id=42)
        assert updated.total_slots == 5
        assert updated.card_color == "#000000"
        assert LoyaltyProgram.objects.get(pk=program.pk).business_id == program.business_id

    def test_update_cannot_lower_slots(self, program):
        with pytest.raises(StampcardError) as exc_info:
            programs.update_program(program.pk, total_slots=2)
        assert exc_info.value.code == "INVALID_SLOTS"
        assert exc_info.value.message == "Total stamp slots can only be increased"

    def test_update_missing(self, db):
        with pytest.raises(StampcardError, match="PROGRAM_NOT_FOUND"):
            programs.update_program(999999, reward_description="x")

    def test_deactivate(self, program):
        assert programs.deactivate_program(program.pk) is True
        assert programs.deactivate_program(program.pk) is False
        program.refresh_from_db()
        assert program.is_active is False
        assert program.deactivated_at is not None

    def test_delete_cascades_cards(self, card, program):
        programs.delete_program(program.pk)
        assert not CustomerCard.objects.filter(pk=card.pk).exists()

    def test_delete_missing(self, db):
        with pytest.raises(StampcardError, match="PROGRAM_NOT_FOUND"):
            programs.delete_program(999999)


class TestBusinessService:
    def test_create_promotes_owner(self, customer):
        business = businesses.create_business(customer.code, "Bakery", address="Main St 1")
        customer.refresh_from_db()
        assert customer.user_type == UserType.BUSINESS
        assert business.address == "Main St 1"

    def test_create_unknown_owner(self, db):
        with pytest.raises(StampcardError, match="CUSTOMER_NOT_FOUND"):
            businesses.create_business("ghost", "Bakery")

    def test_lookups(self, business, owner):
        assert businesses.get_business(business.pk) == business
        assert businesses.get_business(999999) is None
        assert businesses.business_for_owner(owner.code) == business

    def test_require_business(self, db):
        with pytest.raises(StampcardError, match="BUSINESS_NOT_FOUND"):
            businesses.require_business(999999)

    def test_update_whitelist(self, business, owner):
        updated = businesses.update_business(
            business.pk,
            name="Corner Cafe & Bakery",
            phone="555-0100",
            description="",
            email=None,
            owner_id=999,
        )
        updated.refresh_from_db()
        assert updated.name == "Corner Cafe & Bakery"
        assert updated.phone == "555-0100"
        assert updated.owner_id == owner.pk

    def test_update_missing(self, db):
        with pytest.raises(StampcardError, match="BUSINESS_NOT_FOUND"):
            businesses.update_business(999999, name="x")


class TestListBusinesses:
    @pytest.fixture
    def many(self, owner, business):
        names = ["Bakery", "Deli", "Florist", "Gym", "Zoo Shop"]
        created = [Business.objects.create(owner=owner, name=n) for n in names]
        Business.objects.create(owner=owner, name="Closed Diner", is_active=False)
        return created

    def test_pages_walk_all_active(self, many):
        seen = []
        cursor = None
        while True:
            page = businesses.list_businesses(page_size=2, cursor=cursor)
            seen.extend(b.name for b in page.items)
            if not page.has_more:
                assert page.next_cursor is None
                break
            cursor = page.next_cursor

        assert seen == ["Bakery", "Corner Cafe", "Deli", "Florist", "Gym", "Zoo Shop"]

    def test_duplicate_names_not_skipped(self, owner, business):
        twin = Business.objects.create(owner=owner, name="Corner Cafe")
        first = businesses.list_businesses(page_size=1)
        second = businesses.list_businesses(page_size=1, cursor=first.next_cursor)
        assert {first.items[0].pk, second.items[0].pk} == {business.pk, twin.pk}

    def test_page_size_clamped(self, many):
        assert len(businesses.list_businesses(page_size=0).items) == 1
        assert len(businesses.list_businesses(page_size=500).items) == 6

    def test_unknown_cursor_restarts(self, many):
        page = businesses.list_businesses(page_size=2, cursor=999999)
        assert [b.name for b in page.items] == ["Bakery", "Corner Cafe"]


class TestProfileService:
    def test_create_and_get(self, db):
        profiles.create("user-789", display_name="Zed")
        assert profiles.get("user-789").display_name == "Zed"
        assert profiles.get("nobody") is None

    def test_inactive_not_found(self, customer):
        Profile.objects.filter(pk=customer.pk).update(is_active=False)
        with pytest.raises(StampcardError, match="CUSTOMER_NOT_FOUND"):
            profiles.get_or_raise(customer.code)

    def test_update_whitelist(self, customer):
        profile = profiles.update(customer.code, display_name="Johnny", user_type="business")
        profile.refresh_from_db()
        assert profile.display_name == "Johnny"
        assert profile.user_type == UserType.CUSTOMER

    def test_set_push_token(self, other_customer):
        assert profiles.set_push_token(other_customer.code, "ExpoPushToken[abc]") is True
        other_customer.refresh_from_db()
        assert other_customer.push_token == "ExpoPushToken[abc]"
        assert profiles.set_push_token("nobody", "x") is False

    def test_delete_account(self, card, customer, business, program, django_capture_on_commit_callbacks):
        stamping.add_stamps(card.pk, customer.code, business.pk, program.pk, 2)
        StampActivity.objects.create(card=card, customer=customer, business=business, program=program, stamp_count=2)

        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            deleted = profiles.delete_account(customer.code)

        assert deleted == 1
        assert not CustomerCard.objects.filter(customer=customer).exists()
        assert not StampEvent.objects.filter(card_id=card.pk).exists()
        assert not StampActivity.objects.filter(card_id=card.pk).exists()
        assert not CodeReservation.objects.filter(business=business).exists()
        assert len(callbacks) == 1

        customer.refresh_from_db()
        assert customer.is_active is False
        assert customer.push_token == ""
        assert customer.email == ""
        assert profiles.get(customer.code) is None

    def test_delete_account_keeps_owned_business(self, business, owner):
        assert profiles.delete_account(owner.code) == 0
        assert Business.objects.filter(pk=business.pk).exists()

    def test_delete_account_unknown(self, db):
        with pytest.raises(StampcardError, match="CUSTOMER_NOT_FOUND"):
            profiles.delete_account("nobody")
