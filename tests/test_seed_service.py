# tests/test_seed_service.py
"""Unit tests for the transactional bulk seed import."""

import json
import pytest
from sqlalchemy import func, select
from spotfinder.exceptions import ConflictError, ValidationError
from spotfinder.models.location import Location
from spotfinder.models.tag import Tag
from spotfinder.services.seed_service import import_locations, load_seed_file

SEED = [
    {"id": "lib", "name": "Parks Library", "lat": 42.0281, "lng": -93.6488, "tags": ["quiet", "study"]},
    {"id": "mu", "name": "Memorial Union", "lat": 42.0235, "lng": -93.6459, "tags": ["food", "study"],
     "address": "2229 Lincoln Way"},
]


def count(db, model):
    return db.scalar(select(func.count()).select_from(model))


class TestImportLocations:
    def test_imports_batch(self, db):
        summary = import_locations(db, SEED)
        assert summary.inserted == 2
        assert count(db, Location) == 2
        assert sorted(db.scalars(select(Tag.name))) == ["food", "quiet", "study"]

    def test_bad_record_rolls_back_everything(self, db):
        broken = SEED + [{"id": "oops", "lat": 42.0, "lng": -93.6, "tags": ["brand-new"]}]
        with pytest.raises(ValidationError):
            import_locations(db, broken)
        assert count(db, Location) == 0
        assert count(db, Tag) == 0

    def test_rerun_fails_on_existing_ids(self, db):
        import_locations(db, SEED)
        with pytest.raises(ConflictError):
            import_locations(db, SEED)
        assert count(db, Location) == 2

    def test_rerun_with_skip_existing_is_idempotent(self, db):
        import_locations(db, SEED)
        summary = import_locations(db, SEED, skip_existing=True)
        assert summary.inserted == 0
        assert summary.skipped == ["lib", "mu"]
        assert count(db, Location) == 2
        assert count(db, Tag) == 3

    def test_records_without_id_get_generated_ids(self, db):
        records = [{"name": "Bench", "lat": 42.0, "lng": -93.6, "tags": ["quiet"]}]
        import_locations(db, records)
        import_locations(db, records)
        # No idempotency key: the location duplicates, the tag does not
        assert count(db, Location) == 2
        assert count(db, Tag) == 1

    def test_numeric_ids_are_stringified(self, db):
        import_locations(db, [{"id": 7, "name": "Seven", "lat": 1.0, "lng": 2.0}])
        assert db.get(Location, "7") is not None


class TestLoadSeedFile:
    def test_reads_array(self, tmp_path):
        path = tmp_path / "locations.json"
        path.write_text(json.dumps(SEED), encoding="utf-8")
        assert load_seed_file(str(path)) == SEED

    def test_rejects_non_array(self, tmp_path):
        path = tmp_path / "locations.json"
        path.write_text(json.dumps({"locations": SEED}), encoding="utf-8")
        with pytest.raises(ValidationError):
            load_seed_file(str(path))
