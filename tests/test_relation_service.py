"""Tests for attaching/detaching activities and catalog-wide cascades."""

import pytest

from allowance.core.errors import NotFoundError, PersistenceError, ValidationError
from allowance.db import store
from allowance.models.activity_list import ListStatus
from allowance.services import activity_service, list_service, member_service, relation_service
from tests.conftest import years_ago


class TestAttach:
    def test_attach_appends_snapshot(self, db, dishes, open_list) -> None:
        lst = relation_service.attach_activity(db, list_id=open_list.id, activity_id=dishes.id, value=-10)
        assert lst.activities == [{"activity_id": dishes.id, "description": "Dishes", "value": -10.0}]

    def test_value_is_rounded_to_cents(self, db, dishes, open_list) -> None:
        lst = relation_service.attach_activity(db, list_id=open_list.id, activity_id=dishes.id, value=-1.239)
        assert lst.activities[0]["value"] == -1.24

    def test_reattach_replaces_instead_of_duplicating(self, db, dishes, open_list) -> None:
        relation_service.attach_activity(db, list_id=open_list.id, activity_id=dishes.id, value=-10)
        lst = relation_service.attach_activity(db, list_id=open_list.id, activity_id=dishes.id, value=4)
        assert len(lst.activities) == 1
        assert lst.activities[0]["value"] == 4.0

    def test_order_is_preserved(self, db, dishes, open_list) -> None:
        other = activity_service.create_activity(db, description="Homework")
        relation_service.attach_activity(db, list_id=open_list.id, activity_id=dishes.id, value=1)
        lst = relation_service.attach_activity(db, list_id=open_list.id, activity_id=other.id, value=2)
        assert [i["activity_id"] for i in lst.activities] == [dishes.id, other.id]

    def test_missing_list(self, db, dishes) -> None:
        with pytest.raises(NotFoundError):
            relation_service.attach_activity(db, list_id="missing", activity_id=dishes.id, value=1)

    def test_missing_activity(self, db, open_list) -> None:
        with pytest.raises(NotFoundError):
            relation_service.attach_activity(db, list_id=open_list.id, activity_id="missing", value=1)

    def test_closed_list_rejected(self, db, dishes, closed_list) -> None:
        with pytest.raises(ValidationError):
            relation_service.attach_activity(db, list_id=closed_list.id, activity_id=dishes.id, value=1)

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_value_rejected(self, db, dishes, open_list, bad) -> None:
        with pytest.raises(ValidationError, match="Invalid value"):
            relation_service.attach_activity(db, list_id=open_list.id, activity_id=dishes.id, value=bad)
        assert list_service.get_list(db, open_list.id).activities == []


class TestDetach:
    def test_detach_only_touches_one_list(self, db, dishes, open_list) -> None:
        member_service.create_member(db, name="Bruno", birth_date=years_ago(9), allowance_value=10)
        other = list_service.create_list(db, family_member_name="Bruno", status=ListStatus.WAITING)
        relation_service.attach_activity(db, list_id=open_list.id, activity_id=dishes.id, value=-1)
        relation_service.attach_activity(db, list_id=other.id, activity_id=dishes.id, value=-1)

        relation_service.detach_activity(db, list_id=open_list.id, activity_id=dishes.id)

        assert list_service.get_list(db, open_list.id).activities == []
        assert len(list_service.get_list(db, other.id).activities) == 1

    def test_detach_works_on_closed_list(self, db, dishes, closed_list) -> None:
        closed_list.activities = [{"activity_id": dishes.id, "description": "Dishes", "value": -3.0}]
        db.commit()
        lst = relation_service.detach_activity(db, list_id=closed_list.id, activity_id=dishes.id)
        assert lst.activities == []

    def test_detach_missing_list(self, db, dishes) -> None:
        with pytest.raises(NotFoundError):
            relation_service.detach_activity(db, list_id="missing", activity_id=dishes.id)


class TestCascade:
    def test_find_skips_closed_and_unrelated_lists(self, db, dishes, open_list, closed_list) -> None:
        member_service.create_member(db, name="Bruno", birth_date=years_ago(9), allowance_value=10)
        unrelated = list_service.create_list(db, family_member_name="Bruno", status=ListStatus.OPEN)
        relation_service.attach_activity(db, list_id=open_list.id, activity_id=dishes.id, value=-1)
        closed_list.activities = [{"activity_id": dishes.id, "description": "Dishes", "value": -1.0}]
        db.commit()

        found = relation_service.find_lists_with_activity(db, activity_id=dishes.id)

        assert [lst.id for lst in found] == [open_list.id]
        assert unrelated.id not in [lst.id for lst in found]

    def test_one_failing_list_does_not_stop_the_batch(self, db, dishes, monkeypatch) -> None:
        ids = []
        for name in ("Bruno", "Carla", "Diego"):
            member_service.create_member(db, name=name, birth_date=years_ago(9), allowance_value=10)
            lst = list_service.create_list(db, family_member_name=name, status=ListStatus.OPEN)
            relation_service.attach_activity(db, list_id=lst.id, activity_id=dishes.id, value=-1)
            ids.append(lst.id)

        real_save = store.save
        broken_id = ids[1]

        def flaky_save(session, record):
            if getattr(record, "id", None) == broken_id:
                session.rollback()
                raise PersistenceError("disk full")
            return real_save(session, record)

        monkeypatch.setattr(store, "save", flaky_save)
        lists = relation_service.find_lists_with_activity(db, activity_id=dishes.id)
        report = relation_service.remove_activity_from_lists(db, lists, activity_id=dishes.id)
        monkeypatch.undo()

        assert sorted(report.updated) == sorted([ids[0], ids[2]])
        assert report.failed == {broken_id: "disk full"}
        assert not report.ok
        assert list_service.get_list(db, ids[0]).activities == []
        assert list_service.get_list(db, ids[2]).activities == []
        assert len(list_service.get_list(db, broken_id).activities) == 1

    def test_filter_activities_returns_copies(self, dishes, open_list) -> None:
        open_list.activities = [
            {"activity_id": dishes.id, "description": "Dishes", "value": -1.0},
            {"activity_id": "other", "description": "Other", "value": 2.0},
        ]
        kept = relation_service.filter_activities(open_list, dishes.id)
        assert kept == [{"activity_id": "other", "description": "Other", "value": 2.0}]
        assert kept[0] is not open_list.activities[1]
