#!/usr/bin/env python3
"""
Seed a database with demo users, taxonomy and a few spaces.

Usage:
  python scripts/seed.py [--database-url sqlite:///./catalog.db] [--password 888888] [--create-tables]
"""
from __future__ import annotations

import argparse
import sys

from catalog.core.config import get_settings
from catalog.core.logging import configure_logging
from catalog.db.models import Base
from catalog.db.session import build_session_factory, create_db_engine
from catalog.domain.errors import CatalogError, ConflictError
from catalog.services.auth_service import AuthService
from catalog.services.space_service import SpaceService
from catalog.services.taxonomy_service import TaxonomyService
from catalog.services.user_service import UserService

USERS = [
    ("alice_smith", "alice@example.com", "Avid explorer of urban spaces and hidden gems."),
    ("bob_jones", "bob@example.com", "Loves quiet parks and architectural marvels."),
]

TAXONOMY = {
    "type": [
        ("Park", "Green public spaces for recreation and relaxation."),
        ("Plaza", "Open urban areas, often paved, for public gathering."),
        ("Landmark", "Structures or sites of historical or cultural significance."),
        ("Hidden Gem", "Lesser-known, unique, and often surprising spots."),
    ],
    "category": [
        ("Historical", "Spaces with deep historical roots and stories."),
        ("Recreational", "Ideal for sports, games, and outdoor activities."),
        ("Architectural", "Known for their unique or significant design and structure."),
        ("Natural", "Emphasizing natural landscapes, flora, and fauna."),
        ("Cultural", "Host to events, art, or community gatherings."),
    ],
    "feature": [
        ("Playground", None),
        ("Public Restrooms", None),
        ("Seating Areas", None),
        ("Wheelchair Accessible", None),
        ("Free Wi-Fi", None),
    ],
}

SPACES = [
    {
        "owner": "alice_smith",
        "name": "City Central Park",
        "type": "Park",
        "categories": ["Recreational", "Natural"],
        "features": ["Playground", "Public Restrooms", "Seating Areas"],
        "descriptions": "A large urban park with walking trails, a lake, and sports facilities.",
        "activities": ["Jogging", "Picnicking", "Boating"],
        "operatingHours": {"mon-sun": "06:00-22:00"},
        "entranceFee": {"adult": 0},
    },
    {
        "owner": "bob_jones",
        "name": "Old Town Square",
        "type": "Plaza",
        "categories": ["Historical", "Cultural"],
        "features": ["Seating Areas", "Free Wi-Fi"],
        "alternateNames": ["Market Square"],
        "historicalContext": "Market place since the 14th century.",
        "architecturalStyle": "Gothic",
    },
    {
        "owner": "alice_smith",
        "name": "Grand Cathedral",
        "type": "Landmark",
        "categories": ["Historical", "Architectural"],
        "features": ["Wheelchair Accessible"],
        "accessibility": {"ramp": True},
    },
]


def _ensure_users(auth: AuthService, users: UserService, password: str) -> dict:
    existing = {user.username: user for user in users.list_users()}
    for username, email, bio in USERS:
        if username not in existing:
            existing[username] = auth.register({"username": username, "email": email, "password": password})
            users.update_profile(existing[username].id, {"bio": bio})
            print(f"  user: {username}")
    return {name: user.id for name, user in existing.items()}


def _ensure_taxonomy(session_factory) -> dict:
    ids = {}
    for kind, rows in TAXONOMY.items():
        svc = TaxonomyService(session_factory, kind)
        current = {item.name: item.id for item in svc.list()}
        for name, descriptions in rows:
            if name not in current:
                current[name] = svc.create({"name": name, "descriptions": descriptions}).id
                print(f"  {kind}: {name}")
        ids[kind] = current
    return ids


def main() -> None:
    ap = argparse.ArgumentParser(description="Seed demo data for the space catalog")
    ap.add_argument("--database-url", help="SQLAlchemy URL (default: DATABASE_URL)")
    ap.add_argument("--password", default="888888", help="Password for the demo users")
    ap.add_argument("--create-tables", action="store_true", help="Create missing tables first")
    args = ap.parse_args()

    settings = get_settings()
    configure_logging(settings.log_level)
    engine = create_db_engine(args.database_url or settings.database_url)
    if args.create_tables:
        Base.metadata.create_all(bind=engine)
    session_factory = build_session_factory(engine)

    print("Seeding users...")
    user_ids = _ensure_users(AuthService(session_factory, settings), UserService(session_factory), args.password)
    print("Seeding taxonomy...")
    taxonomy = _ensure_taxonomy(session_factory)

    print("Seeding spaces...")
    spaces = SpaceService(session_factory, slug_max_attempts=settings.slug_max_attempts)
    existing = {space.name for space in spaces.list_spaces()}
    for entry in SPACES:
        if entry["name"] in existing:
            continue
        payload = {key: value for key, value in entry.items() if key not in ("owner", "type", "categories", "features")}
        payload["typeId"] = taxonomy["type"][entry["type"]]
        payload["categoryIds"] = [taxonomy["category"][name] for name in entry["categories"]]
        payload["featureIds"] = [taxonomy["feature"][name] for name in entry["features"]]
        try:
            created = spaces.create_space(user_ids[entry["owner"]], payload)
        except ConflictError as exc:
            print(f"  skipped {entry['name']}: {exc.message}")
            continue
        print(f"  space: {created.name} ({created.slug})")
    print("OK: seed complete")


if __name__ == "__main__":
    try:
        main()
    except CatalogError as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc.message}\n")
        raise SystemExit(1)
