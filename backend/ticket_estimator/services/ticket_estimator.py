"""Ticket estimation service implementing the pricing pipeline."""

import logging
from datetime import datetime
from typing import Callable, Optional, Protocol, runtime_checkable

from ticket_estimator.exceptions import ApiFailureError, FareProviderError
from ticket_estimator.models import TripRequest
from ticket_estimator.services import pricing_rules as rules
from ticket_estimator.services.fare_provider import (
    FareProviderInterface,
    get_fare_provider,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


@runtime_checkable
class TicketEstimatorInterface(Protocol):
    """
    Interface for ticket estimation (Dependency Inversion Principle).
    This protocol defines the contract the API layer depends on.
    """

    async def estimate(self, request: TripRequest) -> float:
        """Estimate the total price for every passenger of the request."""
        ...


class TrainTicketEstimator:
    """
    Prices a group of passengers for one trip.

    The base fare comes from an injected fare provider and "now" from an
    injected clock, so the whole computation is deterministic under test.
    """

    def __init__(self, fare_provider: FareProviderInterface, clock: Optional[Clock] = None):
        self.fare_provider = fare_provider
        self.clock = clock or datetime.now

    async def estimate(self, request: TripRequest) -> float:
        """
        Estimate the total ticket price for a trip request.

        Args:
            request: Trip details and the passengers travelling

        Returns:
            Total price for the group, unclamped

        Raises:
            InvalidInputError: blank city, past date or negative age
            ApiFailureError: the base fare could not be fetched
        """
        passengers = request.passengers
        if not passengers:
            return 0

        trip = request.trip
        now = rules.align_clock(self.clock(), trip.travel_date)
        rules.validate_trip(trip, now)

        base_fare = await self._fetch_base_fare(request)

        family_members = rules.find_family_members(passengers)
        total_price = 0
        ticket_price = base_fare
        has_couple_card = False
        has_half_couple_card = False
        has_minor = False

        for idx, passenger in enumerate(passengers):
            rules.validate_age(passenger)
            if rules.is_newborn(passenger.age):
                continue

            is_family_member = idx in family_members
            ticket_price = rules.apply_age_tier(
                passenger, ticket_price, base_fare, is_family_member
            )
            ticket_price = rules.apply_advance_purchase(
                ticket_price, base_fare, now, trip.travel_date
            )
            ticket_price = rules.apply_overrides(
                passenger, ticket_price, base_fare, is_family_member
            )
            logger.debug("Passenger %d (age %s) priced at %s", idx, passenger.age, ticket_price)

            total_price += ticket_price
            ticket_price = base_fare

            if rules.blocks_couple_discount(passenger.age):
                has_minor = True
            if rules.couple_card_eligible(passengers, passenger, is_family_member):
                has_couple_card = True
            if rules.half_couple_card_eligible(passengers, passenger, is_family_member):
                has_half_couple_card = True

        total_price = rules.apply_group_discounts(
            total_price, base_fare, has_couple_card, has_half_couple_card, has_minor
        )
        logger.info(
            "Estimated %s -> %s for %d passengers: %s",
            trip.origin, trip.destination, len(passengers), total_price,
        )
        return total_price

    async def _fetch_base_fare(self, request: TripRequest) -> float:
        try:
            base_fare = await self.fare_provider.fetch_base_fare(request.trip)
        except FareProviderError as e:
            logger.warning("Fare provider failed: %s", e)
            raise ApiFailureError(str(e)) from e

        if base_fare is None or base_fare < 0:
            logger.warning(
                "No base fare for %s -> %s", request.trip.origin, request.trip.destination
            )
            raise ApiFailureError()
        return base_fare


# Singleton instance for default estimator
_default_estimator: Optional[TicketEstimatorInterface] = None


def get_ticket_estimator() -> TicketEstimatorInterface:
    """
    Get the default ticket estimator instance (Singleton pattern).

    Returns:
        Estimator wired to the configured fare provider
    """
    global _default_estimator
    if _default_estimator is None:
        _default_estimator = TrainTicketEstimator(get_fare_provider())
    return _default_estimator
