"""
Pricing rules applied by the ticket estimator.

Every adjustment is a fraction of the base fare, never of the running
price, so the stages stack additively. The order of application matters
only for the fixed-fare overrides, which discard what came before them.
"""

import math
from datetime import datetime
from typing import List, Sequence, Set, Tuple

from ticket_estimator.exceptions import InvalidInputError
from ticket_estimator.models import DiscountCard, Passenger, TripDetails

DISCOUNT_10_PERCENT = 0.1
DISCOUNT_20_PERCENT = 0.2
DISCOUNT_30_PERCENT = 0.3
DISCOUNT_40_PERCENT = 0.4
INCREASE_20_PERCENT = 0.2
INCREASE_2_PERCENT = 0.02

TICKET_PRICE_9_EUR = 9
TICKET_PRICE_1_EUR = 1

NEWBORN_MAX_AGE = 1
BABY_MAX_AGE = 4
MINOR_MAX_AGE = 17
ADULT_AGE = 18
SENIOR_MIN_AGE = 70

EARLY_BOOKING_DAYS = 30
RAMP_START_DAYS = 5
RAMP_PIVOT_DAYS = 20
LAST_MINUTE_HOURS = 6

SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 24 * SECONDS_PER_HOUR

START_CITY_INVALID = "Start city is invalid"
DESTINATION_CITY_INVALID = "Destination city is invalid"
DATE_INVALID = "Date is invalid"
AGE_INVALID = "Age is invalid"


# Request validation

def validate_trip(trip: TripDetails, now: datetime) -> None:
    """
    Check the trip fields in precedence order.

    Raises:
        InvalidInputError: on the first failing field
    """
    if not trip.origin.strip():
        raise InvalidInputError(START_CITY_INVALID)
    if not trip.destination.strip():
        raise InvalidInputError(DESTINATION_CITY_INVALID)
    if trip.travel_date < start_of_day(now):
        raise InvalidInputError(DATE_INVALID)


def validate_age(passenger: Passenger) -> None:
    if passenger.age < 0:
        raise InvalidInputError(AGE_INVALID)


def start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def align_clock(now: datetime, travel_date: datetime) -> datetime:
    """Express ``now`` so it can be compared with ``travel_date``."""
    if travel_date.tzinfo is not None:
        return now.astimezone(travel_date.tzinfo)
    if now.tzinfo is not None:
        return now.astimezone().replace(tzinfo=None)
    return now


# Age tiers

def is_newborn(age: float) -> bool:
    return age < NEWBORN_MAX_AGE


def is_baby(age: float) -> bool:
    # lower bound 0, not 1: a one-year-old already pays the baby fare
    return 0 < age < BABY_MAX_AGE


def is_minor(age: float) -> bool:
    return age <= MINOR_MAX_AGE


def blocks_couple_discount(age: float) -> bool:
    return age < ADULT_AGE


def is_senior(age: float) -> bool:
    return age >= SENIOR_MIN_AGE


def apply_age_tier(passenger: Passenger, ticket_price: float, base_fare: float,
                   is_family_member: bool) -> float:
    """Minors pay 40% less, seniors 20% less (40% with a Senior card), adults 20% more."""
    if is_minor(passenger.age):
        ticket_price -= base_fare * DISCOUNT_40_PERCENT
    elif is_senior(passenger.age):
        ticket_price -= base_fare * DISCOUNT_20_PERCENT
        if passenger.has_card(DiscountCard.SENIOR) and not is_family_member:
            ticket_price -= base_fare * DISCOUNT_20_PERCENT
    else:
        ticket_price += base_fare * INCREASE_20_PERCENT
    return ticket_price


# Advance purchase

def diff_days(now: datetime, travel_date: datetime) -> int:
    return math.ceil(abs((travel_date - now).total_seconds()) / SECONDS_PER_DAY)


def diff_hours(now: datetime, travel_date: datetime) -> int:
    return math.ceil(abs((travel_date - now).total_seconds()) / SECONDS_PER_HOUR)


def apply_advance_purchase(ticket_price: float, base_fare: float,
                           now: datetime, travel_date: datetime) -> float:
    """
    Adjust the price by how far ahead the trip is booked.

    - 30 days or more: 20% off
    - 6 to 29 days: 2% of the base per day short of 20 days (negative past 20)
    - up to 5 days but more than 6 hours: base fare added again
    - 6 hours or less: 20% off
    """
    days = diff_days(now, travel_date)
    if days >= EARLY_BOOKING_DAYS:
        ticket_price -= base_fare * DISCOUNT_20_PERCENT
    elif days > RAMP_START_DAYS:
        ticket_price += (RAMP_PIVOT_DAYS - days) * INCREASE_2_PERCENT * base_fare
    elif diff_hours(now, travel_date) > LAST_MINUTE_HOURS:
        ticket_price += base_fare
    else:
        ticket_price -= base_fare * DISCOUNT_20_PERCENT
    return ticket_price


# Fixed fares and family reduction

def apply_overrides(passenger: Passenger, ticket_price: float, base_fare: float,
                    is_family_member: bool) -> float:
    if is_baby(passenger.age):
        ticket_price = TICKET_PRICE_9_EUR
    if passenger.has_card(DiscountCard.TRAIN_STROKE):
        ticket_price = TICKET_PRICE_1_EUR
    if is_family_member:
        # can push a fixed fare below its nominal value
        ticket_price -= base_fare * DISCOUNT_30_PERCENT
    return ticket_price


def find_family_members(passengers: Sequence[Passenger]) -> Set[int]:
    """
    Return the positions of every passenger linked to a Family card holder.

    A holder always belongs to its own family. Other passengers join when
    their family key (explicit group, else name) matches a holder's key.
    """
    members: Set[int] = set()
    holder_keys: Set[Tuple[str, str]] = set()
    for idx, passenger in enumerate(passengers):
        if passenger.has_card(DiscountCard.FAMILY):
            members.add(idx)
            if passenger.family_key is not None:
                holder_keys.add(passenger.family_key)

    for idx, passenger in enumerate(passengers):
        if passenger.family_key is not None and passenger.family_key in holder_keys:
            members.add(idx)
    return members


# Group discounts

def apply_group_discounts(total: float, base_fare: float, has_couple_card: bool,
                          has_half_couple_card: bool, has_minor: bool) -> float:
    """Couple and half-couple reductions, never granted when a minor travels."""
    if has_couple_card and not has_minor:
        total -= base_fare * DISCOUNT_20_PERCENT * 2
    if has_half_couple_card and not has_minor:
        total -= base_fare * DISCOUNT_10_PERCENT
    return total


def couple_card_eligible(passengers: List[Passenger], passenger: Passenger,
                         is_family_member: bool) -> bool:
    return (len(passengers) == 2 and passenger.has_card(DiscountCard.COUPLE)
            and not is_family_member)


def half_couple_card_eligible(passengers: List[Passenger], passenger: Passenger,
                              is_family_member: bool) -> bool:
    return (len(passengers) == 1 and passenger.has_card(DiscountCard.HALF_COUPLE)
            and not is_family_member)
