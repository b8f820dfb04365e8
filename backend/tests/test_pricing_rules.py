"""Unit tests for the individual pricing rules."""

from datetime import datetime, timedelta, timezone

import pytest

from ticket_estimator.exceptions import InvalidInputError
from ticket_estimator.models import DiscountCard, Passenger, TripDetails
from ticket_estimator.services import pricing_rules as rules

from helpers import NOW, days_ahead, hours_ahead


class TestTripValidation:
    """Test validate_trip precedence."""

    def test_valid_trip(self):
        trip = TripDetails(origin="Paris", destination="Lyon", travel_date=days_ahead(1))
        rules.validate_trip(trip, NOW)

    def test_start_of_today_is_valid(self):
        trip = TripDetails(origin="Paris", destination="Lyon",
                           travel_date=rules.start_of_day(NOW))
        rules.validate_trip(trip, NOW)

    def test_origin_checked_before_date(self):
        trip = TripDetails(origin=" ", destination="Lyon", travel_date=datetime(2020, 1, 1))
        with pytest.raises(InvalidInputError, match=rules.START_CITY_INVALID):
            rules.validate_trip(trip, NOW)

    def test_destination_checked_before_date(self):
        trip = TripDetails(origin="Paris", destination="\t", travel_date=datetime(2020, 1, 1))
        with pytest.raises(InvalidInputError, match=rules.DESTINATION_CITY_INVALID):
            rules.validate_trip(trip, NOW)

    def test_age_validation(self):
        rules.validate_age(Passenger(age=0))
        with pytest.raises(InvalidInputError, match=rules.AGE_INVALID):
            rules.validate_age(Passenger(age=-0.1))


class TestDateWindow:
    """Test day and hour differences."""

    def test_whole_days(self):
        assert rules.diff_days(NOW, days_ahead(29)) == 29

    def test_days_round_up(self):
        assert rules.diff_days(NOW, hours_ahead(1)) == 1
        assert rules.diff_days(NOW, days_ahead(2) + timedelta(minutes=1)) == 3

    def test_hours_absolute(self):
        assert rules.diff_hours(NOW, hours_ahead(-2.5)) == 3

    def test_align_naive_clock_with_aware_date(self):
        aware = datetime(2026, 3, 20, tzinfo=timezone.utc)
        aligned = rules.align_clock(datetime(2026, 3, 10, tzinfo=timezone.utc), aware)
        assert aligned.tzinfo is not None

    def test_align_aware_clock_with_naive_date(self):
        aligned = rules.align_clock(datetime(2026, 3, 10, tzinfo=timezone.utc),
                                    datetime(2026, 3, 20))
        assert aligned.tzinfo is None


class TestPassengerRules:
    """Test age tiers, overrides and family detection on base 100."""

    def test_age_bands(self):
        assert rules.is_newborn(0.99)
        assert not rules.is_newborn(1)
        assert rules.is_baby(1) and rules.is_baby(3.5)
        assert not rules.is_baby(4)
        assert rules.is_minor(17) and not rules.is_minor(17.5)
        assert rules.blocks_couple_discount(17.5)
        assert rules.is_senior(70) and not rules.is_senior(69.9)

    def test_age_tier_adjustments(self):
        assert rules.apply_age_tier(Passenger(age=10), 100, 100, False) == pytest.approx(60)
        assert rules.apply_age_tier(Passenger(age=30), 100, 100, False) == pytest.approx(120)
        assert rules.apply_age_tier(Passenger(age=71), 100, 100, False) == pytest.approx(80)
        senior = Passenger(age=71, discount_cards={DiscountCard.SENIOR})
        assert rules.apply_age_tier(senior, 100, 100, False) == pytest.approx(60)
        assert rules.apply_age_tier(senior, 100, 100, True) == pytest.approx(80)

    def test_overrides_order(self):
        baby_staff = Passenger(age=2, discount_cards={DiscountCard.TRAIN_STROKE})
        assert rules.apply_overrides(baby_staff, 150, 100, False) == 1
        assert rules.apply_overrides(Passenger(age=2), 150, 100, True) == pytest.approx(-21)

    def test_find_family_members(self):
        passengers = [
            Passenger(age=40, name="A", discount_cards={DiscountCard.FAMILY}),
            Passenger(age=12, name="A"),
            Passenger(age=40, name="B"),
            Passenger(age=40),
            Passenger(age=40, discount_cards={DiscountCard.FAMILY}),
        ]
        assert rules.find_family_members(passengers) == {0, 1, 4}

    def test_group_and_name_keys_are_distinct(self):
        passengers = [
            Passenger(age=40, name="Anne", family_group="g1",
                      discount_cards={DiscountCard.FAMILY}),
            Passenger(age=40, name="g1"),
            Passenger(age=40, name="Paul", family_group="g1"),
        ]
        assert rules.find_family_members(passengers) == {0, 2}

    def test_blank_name_is_no_family_key(self):
        passengers = [
            Passenger(age=40, name=" ", discount_cards={DiscountCard.FAMILY}),
            Passenger(age=40, name=""),
        ]
        assert rules.find_family_members(passengers) == {0}


class TestGroupRules:
    """Test group-level reductions."""

    def test_couple_reduction(self):
        assert rules.apply_group_discounts(440, 100, True, False, False) == pytest.approx(400)

    def test_half_couple_reduction(self):
        assert rules.apply_group_discounts(220, 100, False, True, False) == pytest.approx(210)

    def test_minor_blocks_reductions(self):
        assert rules.apply_group_discounts(380, 100, True, False, True) == 380
        assert rules.apply_group_discounts(160, 100, False, True, True) == 160

    def test_eligibility_depends_on_group_size(self):
        couple = Passenger(age=30, discount_cards={DiscountCard.COUPLE})
        half = Passenger(age=30, discount_cards={DiscountCard.HALF_COUPLE})
        assert rules.couple_card_eligible([couple, half], couple, False)
        assert not rules.couple_card_eligible([couple], couple, False)
        assert not rules.couple_card_eligible([couple, half], couple, True)
        assert rules.half_couple_card_eligible([half], half, False)
        assert not rules.half_couple_card_eligible([half, couple], half, False)
