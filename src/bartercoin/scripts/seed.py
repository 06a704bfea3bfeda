# src/bartercoin/scripts/seed.py
"""Populate a development database with demo profiles and listings."""
from __future__ import annotations

import argparse
import logging

from sqlalchemy.orm import Session

from bartercoin.db.session import SessionLocal, create_tables
from bartercoin.models import Profile
from bartercoin.services import ListingService, ProfileService

logger = logging.getLogger(__name__)

DEMO_PROFILES = [
    ("demo-alice", "alice", "Alice"),
    ("demo-bob", "bob", "Bob"),
]

DEMO_LISTINGS = [
    (
        "demo-alice",
        {
            "title": "Acoustic guitar",
            "description": "Six-string acoustic guitar, lightly used, comes with a soft case.",
            "category": "music",
            "price": 40,
        },
    ),
    (
        "demo-bob",
        {
            "title": "Bike tune-up",
            "description": "One hour of bicycle maintenance: brakes, gears and chain cleaning.",
            "category": "services",
            "price": 25,
            "is_service": True,
        },
    ),
]


def seed(db: Session) -> None:
    profiles = ProfileService(db)
    listings = ListingService(db)
    for user_id, username, display_name in DEMO_PROFILES:
        if db.get(Profile, user_id) is None:
            profiles.register(user_id, username, display_name)
            logger.info("Seeded profile %s", username)
    for owner_id, data in DEMO_LISTINGS:
        listings.create(owner_id, data)
    logger.info("Seeded %d listings", len(DEMO_LISTINGS))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Seed demo data.")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create tables directly instead of relying on migrations",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    if args.create_tables:
        create_tables()
    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
