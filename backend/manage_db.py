#!/usr/bin/env python3
"""
Route fare store management utility.

Usage:
    python manage_db.py init      - Initialize database with default route fares
    python manage_db.py show      - Show all route fares
    python manage_db.py update    - Update a route fare
    python manage_db.py reset     - Reset to default route fares
"""

import sys

from ticket_estimator.database import DatabaseManager


def init_database():
    """Initialize database with default route fares."""
    print("Initializing database...")
    db = DatabaseManager()
    db.init_default_route_fares()
    print("Database initialized successfully!")
    show_routes()


def show_routes():
    """Display all route fares."""
    db = DatabaseManager()
    routes = db.get_all_route_fares()

    print("\n" + "="*50)
    print("CURRENT ROUTE FARES IN LOCAL DATASTORE")
    print("="*50)
    print(f"{'From':<15} {'To':<15} {'Base fare':<10}")
    print("-"*40)

    for (origin, destination), price in sorted(routes.items()):
        print(f"{origin:<15} {destination:<15} {price:<10.2f}")

    print("-"*40)
    print(f"Total routes: {len(routes)}")
    print("="*50)


def update_route():
    """Interactive route fare update."""
    print("\nUPDATE ROUTE FARE")
    print("-"*30)

    try:
        db = DatabaseManager()
        origin = input("Enter start city: ").strip()
        destination = input("Enter destination city: ").strip()

        if not origin or not destination:
            print("Cities must not be blank!")
            return

        current_price = db.get_route_fare(origin, destination)
        if current_price:
            print(f"Current base fare: {current_price}")
        else:
            print("No existing fare for this route.")

        new_price = float(input("Enter new base fare: "))
        if new_price <= 0:
            print("Fare must be positive!")
            return

        db.update_route_fare(origin, destination, new_price)
        print(f"✓ Updated fare for {origin} → {destination} to {new_price}")

    except ValueError:
        print("Invalid input! Please enter a number for the fare.")


def reset_database():
    """Reset database to default route fares."""
    confirm = input("Are you sure you want to reset all route fares to defaults? (yes/no): ")

    if confirm.lower() == 'yes':
        db = DatabaseManager()
        db.reset_route_fares()
        show_routes()
        print("Database reset to defaults!")
    else:
        print("Reset cancelled.")


def main():
    """Main entry point."""
    if len(sys.argv) < 2:
        print(__doc__)
        return

    command = sys.argv[1].lower()

    commands = {
        'init': init_database,
        'show': show_routes,
        'update': update_route,
        'reset': reset_database,
    }

    if command in commands:
        commands[command]()
    else:
        print(f"Unknown command: {command}")
        print(__doc__)


if __name__ == "__main__":
    main()
