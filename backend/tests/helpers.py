"""Test doubles and time helpers shared by the test modules."""

from datetime import datetime, timedelta

from ticket_estimator.exceptions import FareProviderError
from ticket_estimator.services.fare_provider import BaseFareProvider, FARE_UNAVAILABLE

NOW = datetime(2026, 3, 10, 9, 0, 0)


def days_ahead(days: float) -> datetime:
    """Travel date a given number of days after NOW."""
    return NOW + timedelta(days=days)


def hours_ahead(hours: float) -> datetime:
    return NOW + timedelta(hours=hours)


def fixed_clock() -> datetime:
    return NOW


class FixedFareProvider(BaseFareProvider):
    """Returns the same base fare for every trip and counts calls."""

    def __init__(self, fare: float = 100):
        self.fare = fare
        self.calls = 0

    async def fetch_base_fare(self, trip):
        self.calls += 1
        return self.fare


class FailingFareProvider(BaseFareProvider):
    """Signals failure either with the sentinel or by raising."""

    def __init__(self, raise_error: bool = False):
        self.raise_error = raise_error
        self.calls = 0

    async def fetch_base_fare(self, trip):
        self.calls += 1
        if self.raise_error:
            raise FareProviderError("connection refused")
        return FARE_UNAVAILABLE
