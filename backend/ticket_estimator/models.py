"""Models for the train ticket estimation system."""

from datetime import datetime
from enum import Enum
from typing import List, Optional, Set, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DiscountCard(str, Enum):
    """Discount cards a passenger can hold."""
    SENIOR = "Senior"
    TRAIN_STROKE = "TrainStroke"
    COUPLE = "Couple"
    HALF_COUPLE = "HalfCouple"
    FAMILY = "Family"


class TripDetails(BaseModel):
    """Origin, destination and departure of the trip."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    origin: str = Field(..., alias="from", description="Start city")
    destination: str = Field(..., alias="to", description="Destination city")
    travel_date: datetime = Field(..., alias="when", description="Departure date and time")


class Passenger(BaseModel):
    """
    A traveller in the request.

    Age is deliberately unconstrained here: the estimator rejects negative
    ages while pricing, passenger by passenger.
    """
    model_config = ConfigDict(frozen=True)

    age: float = Field(..., description="Age in years, fractions allowed")
    discount_cards: Set[DiscountCard] = Field(default_factory=set)
    name: Optional[str] = Field(None, description="Passenger name")
    family_group: Optional[str] = Field(
        None,
        description="Explicit family link; falls back to the name when absent",
    )

    @field_validator("name", "family_group")
    @classmethod
    def blank_to_none(cls, v):
        if v is not None and not v.strip():
            return None
        return v

    def has_card(self, card: DiscountCard) -> bool:
        return card in self.discount_cards

    @property
    def family_key(self) -> Optional[Tuple[str, str]]:
        """Key linking this passenger to a family, if any.

        Explicit groups and names are tagged so a name never matches a group.
        """
        if self.family_group is not None:
            return ("group", self.family_group)
        if self.name is not None:
            return ("name", self.name)
        return None


class TripRequest(BaseModel):
    """Request model for a ticket estimate."""
    model_config = ConfigDict(frozen=True)

    trip: TripDetails
    passengers: List[Passenger] = Field(
        default_factory=list,
        description="Passengers travelling together (may be empty)",
    )


class EstimateResponse(BaseModel):
    """Response model for a ticket estimate."""
    total: float = Field(..., description="Total price for the whole group")
    passenger_count: int = Field(..., description="Number of passengers priced")


class RouteFare(BaseModel):
    """Model representing a base fare stored for a route."""
    origin: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)
    price: float = Field(..., gt=0)

    @property
    def route_key(self) -> tuple:
        """Generate a normalized key for the city pair."""
        return tuple(sorted([self.origin.strip().lower(), self.destination.strip().lower()]))
