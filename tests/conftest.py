from __future__ import annotations

import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

# Make the catalog package importable when running from a plain checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from catalog.core.config import Settings  # noqa: E402
from catalog.db import models  # noqa: E402
from catalog.db.session import build_session_factory, create_db_engine  # noqa: E402
from catalog.repositories.taxonomy_repository import TaxonomyRepository  # noqa: E402
from catalog.repositories.user_repository import UserRepository  # noqa: E402


@pytest.fixture()
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'test.db'}"


@pytest.fixture()
def session_factory(db_url):
    """Temporary SQLite file with the full schema, torn down after each test."""
    engine = create_db_engine(db_url)
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)

    yield build_session_factory(engine)

    models.Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def settings(db_url):
    return Settings(
        app_env="test",
        database_url=db_url,
        jwt_secret="test-secret",
        access_token_ttl_seconds=600,
        slug_max_attempts=100,
        log_level="WARNING",
    )


@pytest.fixture()
def seeded(session_factory):
    """Two users plus a small taxonomy: ids are exposed by name."""
    with session_factory() as session, session.begin():
        users = UserRepository(session)
        alice = users.create(username="alice", email="alice@example.com", password_hash="hash")
        bob = users.create(username="bob", email="bob@example.com", password_hash="hash")

        types = TaxonomyRepository(session, models.SpaceType)
        park = types.create("Park", "Public green space")
        museum = types.create("Museum")

        categories = TaxonomyRepository(session, models.Category)
        recreational = categories.create("Recreational")
        natural = categories.create("Natural")
        historical = categories.create("Historical")

        features = TaxonomyRepository(session, models.Feature)
        playground = features.create("Playground")
        seating = features.create("Seating")
        parking = features.create("Parking")

        ids = SimpleNamespace(
            alice=alice.id,
            bob=bob.id,
            park=park.id,
            museum=museum.id,
            recreational=recreational.id,
            natural=natural.id,
            historical=historical.id,
            playground=playground.id,
            seating=seating.id,
            parking=parking.id,
        )
    return ids
