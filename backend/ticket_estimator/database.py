"""Database models and setup for the local route fare store."""

import logging
import os
from typing import Dict, Optional, Tuple

from sqlalchemy import Column, Float, Integer, String, UniqueConstraint, create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

logger = logging.getLogger(__name__)

Base = declarative_base()


def normalize_city(city: str) -> str:
    """Cities are stored trimmed and lower-cased."""
    return city.strip().lower()


class RouteFareDB(Base):
    """Database model for storing the base fare of a route."""
    __tablename__ = "route_fares"

    id = Column(Integer, primary_key=True, index=True)
    origin = Column(String, nullable=False)
    destination = Column(String, nullable=False)
    price = Column(Float, nullable=False)
    description = Column(String, nullable=True)

    # Ensure unique combination of origin and destination
    __table_args__ = (
        UniqueConstraint('origin', 'destination', name='_route_uc'),
    )

    def __repr__(self):
        return f"<RouteFare(origin={self.origin}, destination={self.destination}, price={self.price})>"


class DatabaseManager:
    """Manager class for route fare operations."""

    DEFAULT_ROUTE_FARES = [
        ("paris", "bordeaux", 100.0),
        ("paris", "toulouse", 120.0),
        ("paris", "lyon", 80.0),
        ("lyon", "marseille", 60.0),
        ("bordeaux", "toulouse", 45.0),
    ]

    def __init__(self, database_url: Optional[str] = None):
        """Initialize database connection."""
        self.database_url = database_url or os.getenv(
            "DATABASE_URL",
            "sqlite:///./ticket_estimator_fares.db"
        )

        # Create engine with appropriate settings for SQLite
        connect_args = {"check_same_thread": False} if "sqlite" in self.database_url else {}
        self.engine = create_engine(self.database_url, connect_args=connect_args)

        # Create session factory
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

        # Create tables if they don't exist
        Base.metadata.create_all(bind=self.engine)

    def get_session(self) -> Session:
        """Get a new database session."""
        return self.SessionLocal()

    def init_default_route_fares(self):
        """Seed the store with default route fares when it is empty."""
        session = self.get_session()
        try:
            if session.query(RouteFareDB).count() == 0:
                for origin, destination, price in self.DEFAULT_ROUTE_FARES:
                    session.add(RouteFareDB(
                        origin=origin,
                        destination=destination,
                        price=price,
                        description=f"{origin.title()} to {destination.title()}"
                    ))
                session.commit()
                logger.info("Initialized %d default route fares", len(self.DEFAULT_ROUTE_FARES))
        finally:
            session.close()

    def reset_route_fares(self):
        """Drop every stored route fare and reseed the defaults."""
        Base.metadata.drop_all(bind=self.engine)
        Base.metadata.create_all(bind=self.engine)
        self.init_default_route_fares()

    def get_all_route_fares(self) -> Dict[Tuple[str, str], float]:
        """Retrieve all route fares from database."""
        session = self.get_session()
        try:
            return {
                (route.origin, route.destination): route.price
                for route in session.query(RouteFareDB).all()
            }
        finally:
            session.close()

    def _find_route(self, session: Session, origin: str, destination: str) -> Optional[RouteFareDB]:
        origin, destination = normalize_city(origin), normalize_city(destination)
        route = session.query(RouteFareDB).filter_by(
            origin=origin, destination=destination
        ).first()
        if route:
            return route
        # Fare is the same both ways
        return session.query(RouteFareDB).filter_by(
            origin=destination, destination=origin
        ).first()

    def get_route_fare(self, origin: str, destination: str) -> Optional[float]:
        """Get the base fare between two cities, in either direction."""
        session = self.get_session()
        try:
            route = self._find_route(session, origin, destination)
            return route.price if route else None
        finally:
            session.close()

    def update_route_fare(self, origin: str, destination: str, price: float) -> RouteFareDB:
        """Update or create a route fare."""
        session = self.get_session()
        try:
            route = self._find_route(session, origin, destination)
            if route:
                route.price = price
            else:
                origin, destination = normalize_city(origin), normalize_city(destination)
                route = RouteFareDB(
                    origin=origin,
                    destination=destination,
                    price=price,
                    description=f"{origin.title()} to {destination.title()}"
                )
                session.add(route)

            session.commit()
            session.refresh(route)
            return route
        finally:
            session.close()

    def delete_route_fare(self, origin: str, destination: str) -> bool:
        """Remove a route fare. Returns False when the route is unknown."""
        session = self.get_session()
        try:
            route = self._find_route(session, origin, destination)
            if route is None:
                return False
            session.delete(route)
            session.commit()
            return True
        finally:
            session.close()


# Singleton instance
_db_manager: Optional[DatabaseManager] = None


def get_db_manager() -> DatabaseManager:
    """Get singleton database manager instance."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
        _db_manager.init_default_route_fares()
    return _db_manager
