"""Base fare providers consumed by the ticket estimator."""

import logging
from abc import ABC, abstractmethod
from typing import Optional, Protocol, runtime_checkable

import httpx

from ticket_estimator.config import settings
from ticket_estimator.exceptions import FareProviderError
from ticket_estimator.models import TripDetails

logger = logging.getLogger(__name__)

# Returned by providers when no usable base fare exists for the trip
FARE_UNAVAILABLE = -1


@runtime_checkable
class FareProviderInterface(Protocol):
    """Contract for anything able to supply the base fare of a trip."""

    async def fetch_base_fare(self, trip: TripDetails) -> float:
        """Return the base fare, or FARE_UNAVAILABLE."""
        ...


class BaseFareProvider(ABC):
    """Abstract base class for fare providers (Open/Closed Principle)."""

    @abstractmethod
    async def fetch_base_fare(self, trip: TripDetails) -> float:
        """
        Fetch the base fare for a trip.
        Must be implemented by subclasses.
        """
        pass


class HttpFareProvider(BaseFareProvider):
    """
    Queries the remote pricing service.

    The service answers ``GET <url>?from=..&to=..&date=..`` with a JSON
    body carrying a numeric ``price``.
    """

    def __init__(self, base_url: str, timeout: float = 5.0):
        self.base_url = base_url
        self.timeout = timeout

    async def fetch_base_fare(self, trip: TripDetails) -> float:
        try:
            return await self._request_price(trip)
        except FareProviderError as e:
            logger.warning("Pricing service unavailable for %s -> %s: %s",
                           trip.origin, trip.destination, e)
            return FARE_UNAVAILABLE

    async def _request_price(self, trip: TripDetails) -> float:
        params = {
            "from": trip.origin,
            "to": trip.destination,
            "date": trip.travel_date.isoformat(),
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(self.base_url, params=params)
                response.raise_for_status()
                data = response.json()
        except httpx.TimeoutException as e:
            raise FareProviderError(f"Request timed out after {self.timeout}s") from e
        except httpx.HTTPStatusError as e:
            raise FareProviderError(
                f"Pricing service error: {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise FareProviderError(f"Network error: {e}") from e
        except ValueError as e:
            raise FareProviderError("Pricing service returned invalid JSON") from e

        price = parse_price(data)
        if price is None:
            raise FareProviderError(f"No usable price in response: {data!r}")
        return price


def parse_price(data) -> Optional[float]:
    """Extract a positive numeric ``price`` from a decoded response body."""
    if not isinstance(data, dict):
        return None
    price = data.get("price")
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        return None
    if price <= 0:
        return None
    return float(price)


class DatabaseFareProvider(BaseFareProvider):
    """Looks base fares up in the local route fare store."""

    def __init__(self, db_manager=None):
        self._db_manager = db_manager

    @property
    def db_manager(self):
        if self._db_manager is None:
            from ticket_estimator.database import get_db_manager
            self._db_manager = get_db_manager()
        return self._db_manager

    async def fetch_base_fare(self, trip: TripDetails) -> float:
        fare = self.db_manager.get_route_fare(trip.origin, trip.destination)
        if fare is None:
            logger.warning("No stored fare for %s -> %s", trip.origin, trip.destination)
            return FARE_UNAVAILABLE
        return fare


# Singleton instance for default provider
_default_provider: Optional[FareProviderInterface] = None


def get_fare_provider() -> FareProviderInterface:
    """
    Get the configured fare provider instance (Singleton pattern).

    Returns:
        Provider selected by settings.FARE_PROVIDER
    """
    global _default_provider
    if _default_provider is None:
        if settings.FARE_PROVIDER == "database":
            _default_provider = DatabaseFareProvider()
        elif settings.FARE_PROVIDER == "http":
            _default_provider = HttpFareProvider(
                settings.FARE_API_URL, timeout=settings.FARE_API_TIMEOUT
            )
        else:
            raise ValueError(f"Unknown fare provider: {settings.FARE_PROVIDER}")
    return _default_provider
