"""Tests for stamping."""

from unittest.mock import MagicMock, patch

import pytest
from django.db import OperationalError

from stampcard.exceptions import StampcardError
from stampcard.models import CustomerCard, LoyaltyProgram, StampActivity, StampEvent
from stampcard.services import enrollment, programs, redemption, stamping
from stampcard.signals import stamps_added

pytestmark = pytest.mark.django_db


def _stamp(card, count=1):
    return stamping.add_stamps(card.pk, card.customer.code, card.business_id, card.program_id, count)


# ═══════════════════════════════════════════════════════════════════
# Pure helpers
# ═══════════════════════════════════════════════════════════════════


class TestNormalizeCount:
    @pytest.mark.parametrize(
        "value, expected",
        [(1, 1), (3, 3), (2.9, 2), (0, 1), (-4, 1), (0.5, 1), ("x", 1), (None, 1), (float("inf"), 1)],
    )
    def test_floor_and_clamp(self, value, expected):
        assert stamping.normalize_count(value) == expected


class TestStampsToAdd:
    def test_capped_at_remaining(self):
        assert stamping.stamps_to_add(8, 10, 5) == 2

    def test_full_card(self):
        assert stamping.stamps_to_add(10, 10, 3) == 0

    def test_over_full_never_negative(self):
        assert stamping.stamps_to_add(12, 10, 1) == 0


# ═══════════════════════════════════════════════════════════════════
# add_stamps
# ═══════════════════════════════════════════════════════════════════


class TestAddStamps:
    def test_single_stamp(self, card):
        result = _stamp(card)

        assert result.added == 1
        assert result.current_stamps == 1
        assert result.total_slots == 3
        assert result.is_completed is False
        assert result.stamps_remaining == 2
        assert result.business_name == "Corner Cafe"

        card.refresh_from_db()
        assert card.current_stamps == 1
        assert card.last_stamp_at is not None
        assert StampEvent.objects.filter(card=card).count() == 1

    def test_bulk_capped(self, card):
        """Requesting 5 on a 3-slot card adds 3 and writes 3 events."""
        result = _stamp(card, count=5)

        assert result.added == 3
        assert result.current_stamps == 3
        assert result.is_completed is True
        assert StampEvent.objects.filter(card=card).count() == 3

    def test_events_match_counter(self, card):
        _stamp(card)
        _stamp(card, count=2)
        card.refresh_from_db()
        assert StampEvent.objects.filter(card=card).count() == card.current_stamps

    def test_full_card_is_noop(self, full_card):
        result = _stamp(full_card)

        assert result.added == 0
        assert result.current_stamps == 3
        assert result.is_completed is True
        assert not StampEvent.objects.filter(card=full_card).exists()

    def test_fractional_count_floored(self, card):
        assert _stamp(card, count=2.7).added == 2

    def test_zero_count_adds_one(self, card):
        assert _stamp(card, count=0).added == 1

    def test_event_denormalizes_card(self, card):
        _stamp(card)
        event = StampEvent.objects.get(card=card)
        assert event.customer_id == card.customer_id
        assert event.business_id == card.business_id
        assert event.program_id == card.program_id


class TestAddStampsValidation:
    def test_unknown_card(self, card):
        with pytest.raises(StampcardError, match="CARD_NOT_FOUND"):
            stamping.add_stamps(999999, card.customer.code, card.business_id, card.program_id)

    def test_wrong_customer(self, card, other_customer):
        with pytest.raises(StampcardError, match="CARD_NOT_FOUND"):
            stamping.add_stamps(card.pk, other_customer.code, card.business_id, card.program_id)
        card.refresh_from_db()
        assert card.current_stamps == 0

    def test_store_failure_translated(self, card):
        with patch(
            "stampcard.services.stamping._add_stamps_atomic",
            side_effect=OperationalError("database is locked"),
        ):
            with pytest.raises(StampcardError) as exc_info:
                _stamp(card)
        assert exc_info.value.code == "UNAVAILABLE"
        assert exc_info.value.retryable is True


class TestAddStampsByCode:
    def test_by_code(self, card, business):
        result = stamping.add_stamps_by_code("123", business.pk, count=2)
        assert result.card.pk == card.pk
        assert result.current_stamps == 2

    def test_unknown_code(self, card, business):
        with pytest.raises(StampcardError, match="CARD_NOT_FOUND") as exc_info:
            stamping.add_stamps_by_code("999", business.pk)
        assert exc_info.value.data == {"card_code": "999", "business_id": business.pk}

    def test_claimed_card_not_matched(self, full_card, business):
        CustomerCard.objects.filter(pk=full_card.pk).update(reward_claimed=True)
        with pytest.raises(StampcardError, match="CARD_NOT_FOUND"):
            stamping.add_stamps_by_code("123", business.pk)


# ═══════════════════════════════════════════════════════════════════
# Post-commit effects
# ═══════════════════════════════════════════════════════════════════


class TestStampEffects:
    def test_effects_run_after_commit(self, card, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            _stamp(card, count=2)

        assert len(callbacks) == 1
        activity = StampActivity.objects.get(card=card)
        assert activity.stamp_count == 2
        assert activity.note == "2 stamps added"
        assert activity.business_name == "Corner Cafe"

    def test_not_sent_before_commit(self, card, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=False) as callbacks:
            _stamp(card)

        assert len(callbacks) == 1
        assert not StampActivity.objects.exists()

    def test_no_effects_when_nothing_added(self, full_card, django_capture_on_commit_callbacks):
        handler = MagicMock()
        stamps_added.connect(handler, weak=False, dispatch_uid="test-noop")
        try:
            with django_capture_on_commit_callbacks(execute=True) as callbacks:
                _stamp(full_card)
        finally:
            stamps_added.disconnect(dispatch_uid="test-noop")

        assert callbacks == []
        handler.assert_not_called()

    def test_failing_effect_keeps_stamp(self, card, django_capture_on_commit_callbacks):
        with patch(
            "stampcard.receivers.get_notification_backend",
            side_effect=RuntimeError("push down"),
        ):
            with django_capture_on_commit_callbacks(execute=True):
                result = _stamp(card)

        assert result.added == 1
        card.refresh_from_db()
        assert card.current_stamps == 1
        assert StampActivity.objects.filter(card=card).exists()


# ═══════════════════════════════════════════════════════════════════
# Card lifecycle scenarios
# ═══════════════════════════════════════════════════════════════════


class TestStampScenarios:
    def test_partially_capped_bulk(self, business, customer):
        program = LoyaltyProgram.objects.create(business=business, total_slots=5, reward_description="Free lunch")
        card = enrollment.enroll(customer.code, program.pk)
        _stamp(card, count=2)

        result = _stamp(card, count=10)

        assert result.added == 3
        assert result.current_stamps == 5
        assert result.is_completed is True
        assert StampEvent.objects.filter(card=card).count() == 5

    def test_enroll_stamp_to_completion_and_redeem_once(self, customer, program):
        card = enrollment.enroll(customer.code, program.pk)

        completed = [_stamp(card).is_completed for _ in range(3)]
        assert completed == [False, False, True]

        redemption.redeem(card.pk)
        with pytest.raises(StampcardError, match="ALREADY_REDEEMED"):
            redemption.redeem(card.pk)

    def test_claimed_card_cannot_be_stamped(self, full_card, program):
        redemption.redeem(full_card.pk)
        programs.update_program(program.pk, total_slots=5)

        with pytest.raises(StampcardError, match="CARD_NOT_FOUND"):
            _stamp(full_card, count=2)

        full_card.refresh_from_db()
        assert full_card.current_stamps == 3
        assert not StampEvent.objects.filter(card=full_card).exists()
