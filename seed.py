#!/usr/bin/env python3
"""
Seed script for the TidyTask database.
This script creates the demo account used for manual testing.
"""

import sys
from app import create_app
from errors import Conflict
from extensions import db
from services import user_service

DEMO_USER = {
    'first_name': 'Usuario',
    'last_name': 'Prueba',
    'email': 'test@example.com',
    'password': '123456',
    'age': 30,
}


def seed_demo_user():
    """Create the demo user if it does not exist yet."""
    print("🌱 Starting database seeding...")

    # Create Flask app context
    app = create_app()

    with app.app_context():
        try:
            # Create all tables if they don't exist
            db.create_all()
            print("✅ Database tables created/verified")

            user = user_service.create_user(**DEMO_USER)
            print(f"✅ Demo user created: {user.email} (id {user.id})")

        except Conflict:
            print(f"ℹ️  Demo user {DEMO_USER['email']} already exists")
        except Exception as e:
            print(f"❌ Error during seeding: {e}")
            db.session.rollback()
            return False

    return True


if __name__ == '__main__':
    success = seed_demo_user()
    sys.exit(0 if success else 1)
