"""Services package for the train ticket estimator."""

from .fare_provider import (
    get_fare_provider,
    FareProviderInterface,
    HttpFareProvider,
    DatabaseFareProvider
)
from .ticket_estimator import (
    get_ticket_estimator,
    TicketEstimatorInterface,
    TrainTicketEstimator
)

__all__ = [
    'get_fare_provider',
    'FareProviderInterface',
    'HttpFareProvider',
    'DatabaseFareProvider',
    'get_ticket_estimator',
    'TicketEstimatorInterface',
    'TrainTicketEstimator'
]
