"""API endpoints for ticket estimation."""

from fastapi import APIRouter, Body, Depends, HTTPException

from ticket_estimator.database import get_db_manager
from ticket_estimator.exceptions import ApiFailureError, InvalidInputError
from ticket_estimator.models import DiscountCard, EstimateResponse, RouteFare, TripRequest
from ticket_estimator.services import get_ticket_estimator
from ticket_estimator.services.ticket_estimator import TicketEstimatorInterface

router = APIRouter(prefix="/api", tags=["Ticket Estimation"])


def get_estimator() -> TicketEstimatorInterface:
    """
    Dependency injection for the ticket estimator.
    Returns any implementation of TicketEstimatorInterface.
    """
    return get_ticket_estimator()


@router.post("/estimate", response_model=EstimateResponse)
async def estimate_ticket_price(
    request: TripRequest,
    estimator: TicketEstimatorInterface = Depends(get_estimator)
) -> EstimateResponse:
    """
    Estimate the ticket price for a group of passengers.

    Args:
        request: Trip details and passengers
        estimator: Injected estimator implementing TicketEstimatorInterface

    Returns:
        EstimateResponse with the group total

    Raises:
        HTTPException: 400 on invalid input, 502 when no base fare is available
    """
    try:
        total = await estimator.estimate(request)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=e.reason)
    except ApiFailureError as e:
        raise HTTPException(status_code=502, detail=f"Pricing service failure: {e}")

    return EstimateResponse(total=total, passenger_count=len(request.passengers))


@router.get("/discount-cards")
async def list_discount_cards():
    """List the discount cards understood by the estimator."""
    return {"discount_cards": [card.value for card in DiscountCard]}


@router.get("/route-fares")
async def get_route_fares():
    """
    Get all route fares from the local datastore.

    Returns:
        Dictionary of route fares from database
    """
    db_manager = get_db_manager()
    routes = [
        {
            "origin": origin,
            "destination": destination,
            "price": price,
            "description": f"{origin.title()} to {destination.title()}"
        }
        for (origin, destination), price in sorted(db_manager.get_all_route_fares().items())
    ]
    return {
        "routes": routes,
        "total_routes": len(routes),
        "datastore": "SQLite Local Database"
    }


@router.put("/route-fares")
async def update_route_fare(route: RouteFare = Body(...)):
    """
    Update a route fare in the local datastore.

    Returns:
        Updated route fare
    """
    if route.route_key[0] == route.route_key[1]:
        raise HTTPException(status_code=400, detail="Origin and destination must differ")

    db_manager = get_db_manager()
    stored = db_manager.update_route_fare(route.origin, route.destination, route.price)

    return {
        "origin": stored.origin,
        "destination": stored.destination,
        "price": stored.price,
        "message": "Route fare updated successfully in local datastore"
    }


@router.delete("/route-fares")
async def delete_route_fare(origin: str, destination: str):
    """
    Remove a route fare from the local datastore.

    Raises:
        HTTPException: 404 when the route is not stored
    """
    db_manager = get_db_manager()
    if not db_manager.delete_route_fare(origin, destination):
        raise HTTPException(
            status_code=404,
            detail=f"No fare stored for {origin} to {destination}"
        )

    return {
        "origin": origin,
        "destination": destination,
        "message": "Route fare deleted from local datastore"
    }


@router.get("/health")
async def health_check():
    """Health check endpoint including database status."""
    db_status = "healthy"
    try:
        db_manager = get_db_manager()
        routes_count = len(db_manager.get_all_route_fares())
    except Exception as e:
        db_status = f"unhealthy: {str(e)}"
        routes_count = 0

    return {
        "status": "healthy",
        "service": "Train Ticket Estimator",
        "datastore_status": db_status,
        "route_fares_count": routes_count
    }
