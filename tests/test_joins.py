"""Tests for the batch join helper."""

from app.core.joins import batch_fetch, collect_ids, project
from tests.conftest import ALICE, BOB


class TestCollectIds:
    def test_dedupes_in_first_seen_order(self):
        rows = [
            {"a": "1", "b": "2"},
            {"a": "2", "b": "3"},
            {"a": None, "b": "1"},
        ]
        assert collect_ids(rows, "a", "b") == ["1", "2", "3"]

    def test_empty(self):
        assert collect_ids([], "a") == []


class TestBatchFetch:
    def test_empty_ids_skip_query(self, db):
        db.queries.clear()
        assert batch_fetch(db, "skills", []) == {}
        assert db.queries == []

    def test_keyed_by_requested_column(self, db):
        lookup = batch_fetch(db, "profiles", [ALICE, BOB], key="user_id")
        assert set(lookup) == {ALICE, BOB}
        assert lookup[ALICE]["display_name"] == "Alice"

    def test_row_filter(self, db):
        lookup = batch_fetch(db, "profiles", [ALICE, BOB], key="user_id", row_filter=lambda r: r["user_id"] == BOB)
        assert list(lookup) == [BOB]


class TestProject:
    def test_missing_reference_is_none(self):
        rows = [{"id": "r1", "skill_id": "s1"}, {"id": "r2", "skill_id": "s9"}]
        skills = {"s1": {"id": "s1", "name": "Guitar"}}
        out = project(rows, {"skill": ("skill_id", skills)})
        assert out[0]["skill"]["name"] == "Guitar"
        assert out[1]["skill"] is None
        assert "skill" not in rows[0]
