"""Errors raised while estimating a ticket price."""


class EstimatorError(Exception):
    """Base class for all estimator failures."""


class InvalidInputError(EstimatorError):
    """A trip or passenger field failed validation."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class ApiFailureError(EstimatorError):
    """The base fare could not be obtained from the pricing service."""

    def __init__(self, message: str = "Base fare is unavailable"):
        super().__init__(message)


class FareProviderError(EstimatorError):
    """Transport or decoding failure inside a fare provider."""
