"""
Space lifecycle against a temporary SQLite database.
"""
from __future__ import annotations

import uuid

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from catalog.db.models import Category, Space, SpaceToCategory, SpaceToFeature, SpaceType
from catalog.domain.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InternalConsistencyError,
    NotFoundError,
    ValidationError,
)
from catalog.repositories.space_repository import SpaceRepository
from catalog.services.slug_service import SlugService
from catalog.services.space_service import SpaceService
from catalog.services.taxonomy_validator import TaxonomyValidator


@pytest.fixture()
def svc(session_factory):
    return SpaceService(session_factory)


def _park_payload(seeded, **overrides):
    payload = {
        "name": "City Central Park",
        "typeId": str(seeded.park),
        "categoryIds": [str(seeded.recreational), str(seeded.natural)],
        "featureIds": [str(seeded.playground), str(seeded.seating)],
        "descriptions": "A large green park downtown.",
        "alternateNames": ["Central Green"],
        "activities": ["jogging", "picnic"],
        "operatingHours": {"mon-sun": "06:00-22:00"},
    }
    payload.update(overrides)
    return payload


def _count(session_factory, model) -> int:
    with session_factory() as session:
        return session.execute(select(func.count()).select_from(model)).scalar_one()


def _link_ids(session_factory, space_id):
    with session_factory() as session:
        repo = SpaceRepository(session)
        return repo.category_ids(space_id), repo.feature_ids(space_id)


def test_create_then_get_resolves_taxonomy_names(svc, seeded):
    identity = svc.create_space(seeded.alice, _park_payload(seeded))
    assert identity.slug == "city-central-park"

    space = svc.get_space(identity.id)
    assert space.name == "City Central Park"
    assert space.slug == "city-central-park"
    assert space.type == "Park"
    assert space.type_id == seeded.park
    assert space.submitted_by == seeded.alice
    assert set(space.categories) == {"Recreational", "Natural"}
    assert space.categories == ["Natural", "Recreational"]
    assert set(space.features) == {"Playground", "Seating"}
    assert space.alternate_names == ["Central Green"]
    assert space.activities == ["jogging", "picnic"]
    assert space.operating_hours == {"mon-sun": "06:00-22:00"}
    assert space.entrance_fee is None


def test_get_space_by_slug_and_reads_are_idempotent(svc, seeded):
    identity = svc.create_space(seeded.alice, _park_payload(seeded))
    by_slug = svc.get_space("city-central-park")
    assert by_slug.id == identity.id
    assert svc.get_space("city-central-park") == by_slug
    assert svc.get_space(str(identity.id)) == svc.get_space(identity.id)


def test_get_unknown_space_raises_not_found(svc, seeded):
    with pytest.raises(NotFoundError):
        svc.get_space(uuid.uuid4())
    with pytest.raises(NotFoundError):
        svc.get_space("no-such-space")


def test_second_space_with_same_name_gets_suffixed_slug(svc, seeded):
    first = svc.create_space(seeded.alice, _park_payload(seeded))
    second = svc.create_space(seeded.bob, _park_payload(seeded))
    assert first.slug == "city-central-park"
    assert second.slug == "city-central-park-1"
    assert len(svc.list_spaces()) == 2


def test_create_without_taxonomy_lists_has_no_associations(svc, seeded):
    identity = svc.create_space(seeded.alice, {"name": "Quiet Corner", "typeId": str(seeded.park)})
    space = svc.get_space(identity.id)
    assert space.categories == []
    assert space.features == []
    assert space.alternate_names == []


def test_create_requires_identity(svc, seeded):
    with pytest.raises(AuthenticationError):
        svc.create_space(None, _park_payload(seeded))


def test_create_rejects_malformed_payload(svc, seeded):
    with pytest.raises(ValidationError) as excinfo:
        svc.create_space(seeded.alice, {"name": "", "typeId": "not-a-uuid"})
    locs = {err["loc"] for err in excinfo.value.details}
    assert {"name", "typeId"} <= locs


def test_create_with_unknown_type_names_the_id(svc, seeded, session_factory):
    bogus = uuid.uuid4()
    with pytest.raises(ValidationError) as excinfo:
        svc.create_space(seeded.alice, _park_payload(seeded, typeId=str(bogus)))
    assert str(bogus) in excinfo.value.message
    assert excinfo.value.details == {"typeId": str(bogus)}
    assert _count(session_factory, Space) == 0


def test_one_invalid_feature_persists_nothing(svc, seeded, session_factory):
    bogus = uuid.uuid4()
    payload = _park_payload(seeded, featureIds=[str(seeded.playground), str(bogus), str(seeded.seating)])
    with pytest.raises(ValidationError) as excinfo:
        svc.create_space(seeded.alice, payload)
    assert excinfo.value.details == {"featureIds": [str(bogus)]}
    assert _count(session_factory, Space) == 0
    assert _count(session_factory, SpaceToCategory) == 0
    assert _count(session_factory, SpaceToFeature) == 0


def test_missing_ids_are_enumerated_per_kind(svc, seeded):
    missing_category = uuid.uuid4()
    missing_features = [uuid.uuid4(), uuid.uuid4()]
    payload = _park_payload(
        seeded,
        categoryIds=[str(seeded.natural), str(missing_category)],
        featureIds=[str(item) for item in missing_features],
    )
    with pytest.raises(ValidationError) as excinfo:
        svc.create_space(seeded.alice, payload)
    assert excinfo.value.details == {
        "categoryIds": [str(missing_category)],
        "featureIds": [str(item) for item in missing_features],
    }


def test_duplicate_ids_in_request_are_collapsed(svc, seeded):
    payload = _park_payload(seeded, categoryIds=[str(seeded.natural), str(seeded.natural)])
    identity = svc.create_space(seeded.alice, payload)
    assert svc.get_space(identity.id).categories == ["Natural"]


def test_update_descriptions_only_keeps_slug_and_associations(svc, seeded, session_factory):
    identity = svc.create_space(seeded.alice, _park_payload(seeded))
    before = svc.get_space(identity.id)
    links_before = _link_ids(session_factory, identity.id)

    updated = svc.update_space(seeded.alice, identity.id, {"descriptions": "Renovated in 2024."})

    assert updated.descriptions == "Renovated in 2024."
    assert updated.slug == before.slug
    assert updated.categories == before.categories
    assert updated.features == before.features
    assert _link_ids(session_factory, identity.id) == links_before
    assert updated.created_at == before.created_at
    assert updated.updated_at > before.updated_at


def test_update_reports_lost_race_and_rolls_back(svc, seeded, monkeypatch, session_factory):
    identity = svc.create_space(seeded.alice, _park_payload(seeded))
    before = svc.get_space(identity.id)
    monkeypatch.setattr(SpaceRepository, "update_values", lambda self, space_id, values: 0)

    with pytest.raises(InternalConsistencyError):
        svc.update_space(
            seeded.alice,
            identity.id,
            {"name": "Harbour View", "categoryIds": [str(seeded.historical)], "featureIds": []},
        )

    monkeypatch.undo()
    assert svc.get_space(identity.id) == before
    assert svc.get_space("city-central-park").id == identity.id
    assert _link_ids(session_factory, identity.id) == (
        {seeded.recreational, seeded.natural},
        {seeded.playground, seeded.seating},
    )


def test_store_conflict_without_rename_has_generic_message(svc, seeded, monkeypatch):
    identity = svc.create_space(seeded.alice, _park_payload(seeded))

    def _conflict(self, space_id, values):
        raise IntegrityError("UPDATE space", {}, Exception("UNIQUE constraint failed"))

    monkeypatch.setattr(SpaceRepository, "update_values", _conflict)
    with pytest.raises(ConflictError) as exc_info:
        svc.update_space(seeded.alice, identity.id, {"descriptions": "x"})
    assert "None" not in exc_info.value.message
    assert exc_info.value.details is None


def test_update_with_empty_payload_leaves_associations(svc, seeded):
    identity = svc.create_space(seeded.alice, _park_payload(seeded))
    updated = svc.update_space(seeded.alice, identity.id, {})
    assert set(updated.categories) == {"Recreational", "Natural"}
    assert set(updated.features) == {"Playground", "Seating"}


def test_update_with_empty_category_list_clears_only_categories(svc, seeded):
    identity = svc.create_space(seeded.alice, _park_payload(seeded))
    updated = svc.update_space(seeded.alice, identity.id, {"categoryIds": []})
    assert updated.categories == []
    assert set(updated.features) == {"Playground", "Seating"}


def test_update_replaces_association_set(svc, seeded):
    identity = svc.create_space(seeded.alice, _park_payload(seeded))
    updated = svc.update_space(
        seeded.alice,
        identity.id,
        {"categoryIds": [str(seeded.historical)], "featureIds": [str(seeded.parking), str(seeded.seating)]},
    )
    assert updated.categories == ["Historical"]
    assert set(updated.features) == {"Parking", "Seating"}


def test_renaming_regenerates_slug(svc, seeded):
    svc.create_space(seeded.bob, {"name": "Harbour View", "typeId": str(seeded.park)})
    identity = svc.create_space(seeded.alice, _park_payload(seeded))

    updated = svc.update_space(seeded.alice, identity.id, {"name": "Harbour View"})
    assert updated.name == "Harbour View"
    assert updated.slug == "harbour-view-1"
    assert svc.get_space("harbour-view-1").id == identity.id


def test_same_name_keeps_slug_and_equivalent_name_reuses_it(svc, seeded):
    identity = svc.create_space(seeded.alice, _park_payload(seeded))
    assert svc.update_space(seeded.alice, identity.id, {"name": "City Central Park"}).slug == "city-central-park"
    renamed = svc.update_space(seeded.alice, identity.id, {"name": "City  Central  Park!"})
    assert renamed.name == "City  Central  Park!"
    assert renamed.slug == "city-central-park"


def test_update_type_is_validated(svc, seeded):
    identity = svc.create_space(seeded.alice, _park_payload(seeded))
    with pytest.raises(ValidationError):
        svc.update_space(seeded.alice, identity.id, {"typeId": str(uuid.uuid4())})
    updated = svc.update_space(seeded.alice, identity.id, {"typeId": str(seeded.museum)})
    assert updated.type == "Museum"


def test_update_rejects_null_for_required_fields(svc, seeded):
    identity = svc.create_space(seeded.alice, _park_payload(seeded))
    for key in ("name", "typeId", "categoryIds"):
        with pytest.raises(ValidationError):
            svc.update_space(seeded.alice, identity.id, {key: None})


def test_update_null_clears_optional_documents(svc, seeded):
    identity = svc.create_space(seeded.alice, _park_payload(seeded))
    updated = svc.update_space(seeded.alice, identity.id, {"operatingHours": None, "entranceFee": {"adult": 5}})
    assert updated.operating_hours is None
    assert updated.entrance_fee == {"adult": 5}


def test_failed_update_rolls_back_every_change(svc, seeded):
    identity = svc.create_space(seeded.alice, _park_payload(seeded))
    before = svc.get_space(identity.id)
    with pytest.raises(ValidationError):
        svc.update_space(
            seeded.alice,
            identity.id,
            {"name": "Renamed", "descriptions": "changed", "featureIds": [str(uuid.uuid4())]},
        )
    assert svc.get_space(identity.id) == before


def test_non_owner_cannot_update_or_delete(svc, seeded):
    identity = svc.create_space(seeded.alice, _park_payload(seeded))
    before = svc.get_space(identity.id)

    with pytest.raises(AuthorizationError):
        svc.update_space(seeded.bob, identity.id, {"name": "Bob's Park", "categoryIds": []})
    with pytest.raises(AuthorizationError):
        svc.delete_space(seeded.bob, identity.id)

    assert svc.get_space(identity.id) == before


def test_missing_space_is_not_found_before_ownership(svc, seeded):
    with pytest.raises(NotFoundError):
        svc.update_space(seeded.bob, uuid.uuid4(), {"descriptions": "x"})
    with pytest.raises(NotFoundError):
        svc.delete_space(seeded.bob, uuid.uuid4())


def test_delete_removes_space_and_its_associations(svc, seeded, session_factory):
    identity = svc.create_space(seeded.alice, _park_payload(seeded))
    deleted = svc.delete_space(seeded.alice, identity.id)
    assert deleted.id == identity.id
    assert deleted.slug == "city-central-park"
    with pytest.raises(NotFoundError):
        svc.get_space(identity.id)
    assert _count(session_factory, SpaceToCategory) == 0
    assert _count(session_factory, SpaceToFeature) == 0


def test_delete_reports_lost_race(svc, seeded, monkeypatch):
    identity = svc.create_space(seeded.alice, _park_payload(seeded))
    monkeypatch.setattr(SpaceRepository, "delete", lambda self, space_id: 0)
    with pytest.raises(InternalConsistencyError):
        svc.delete_space(seeded.alice, identity.id)
    monkeypatch.undo()
    assert svc.get_space(identity.id).id == identity.id


def test_slug_race_surfaces_as_conflict(svc, seeded, monkeypatch, session_factory):
    svc.create_space(seeded.alice, _park_payload(seeded))
    # Simulate a concurrent writer that took the slug after our existence check.
    monkeypatch.setattr(SlugService, "generate_unique_slug", lambda self, name, **kw: "city-central-park")
    with pytest.raises(ConflictError):
        svc.create_space(seeded.bob, _park_payload(seeded))
    assert _count(session_factory, Space) == 1


def test_foreign_key_is_second_line_of_defense(svc, seeded, monkeypatch, session_factory):
    monkeypatch.setattr(TaxonomyValidator, "validate", lambda self, **kw: None)
    with pytest.raises(ValidationError):
        svc.create_space(seeded.alice, _park_payload(seeded, typeId=str(uuid.uuid4()), categoryIds=None, featureIds=None))
    assert _count(session_factory, Space) == 0


def test_deleting_category_cascades_links(svc, seeded, session_factory):
    identity = svc.create_space(seeded.alice, _park_payload(seeded))
    with session_factory() as session, session.begin():
        session.execute(Category.__table__.delete().where(Category.id == seeded.natural))
    assert svc.get_space(identity.id).categories == ["Recreational"]


def test_deleting_type_cascades_spaces(svc, seeded, session_factory):
    svc.create_space(seeded.alice, _park_payload(seeded))
    with session_factory() as session, session.begin():
        session.execute(SpaceType.__table__.delete().where(SpaceType.id == seeded.park))
    assert svc.list_spaces() == []
    assert _count(session_factory, SpaceToFeature) == 0


def test_list_spaces_filters_by_owner(svc, seeded):
    svc.create_space(seeded.alice, _park_payload(seeded))
    svc.create_space(seeded.bob, {"name": "Old Museum", "typeId": str(seeded.museum)})
    mine = svc.list_spaces(submitted_by=seeded.bob)
    assert [space.name for space in mine] == ["Old Museum"]
    assert svc.list_spaces(submitted_by="not-a-uuid") == []
