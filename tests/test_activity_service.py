"""Tests for the activity catalog."""

import pytest

from allowance.core.errors import NotFoundError, PersistenceError, ValidationError
from allowance.db import store
from allowance.models.activity_list import ListStatus
from allowance.services import activity_service, list_service, member_service, relation_service
from tests.conftest import years_ago


class TestCreateActivity:
    def test_create_returns_activity(self, db) -> None:
        a = activity_service.create_activity(db, description="Make the bed")
        assert a.id
        assert a.description == "Make the bed"
        assert activity_service.get_activity(db, a.id).id == a.id

    def test_short_description_rejected(self, db) -> None:
        with pytest.raises(ValidationError):
            activity_service.create_activity(db, description="Bed")

    def test_duplicate_description_rejected(self, db) -> None:
        activity_service.create_activity(db, description="Walk the dog")
        with pytest.raises(ValidationError, match="already exists"):
            activity_service.create_activity(db, description="Walk the dog")

    def test_lookups_return_none_when_absent(self, db) -> None:
        assert activity_service.get_by_description(db, "Nothing here") is None
        assert activity_service.get_activity(db, "missing-id") is None

    def test_list_activities_paginates(self, db) -> None:
        for name in ("Sweep floor", "Water plants", "Feed the cat"):
            activity_service.create_activity(db, description=name)
        rows, count = activity_service.list_activities(db, page=1, size=2)
        assert count == 3
        assert len(rows) == 2


class TestUpdateActivity:
    def test_update_refreshes_snapshot_in_open_lists_only(self, db, dishes, open_list, closed_list) -> None:
        relation_service.attach_activity(db, list_id=open_list.id, activity_id=dishes.id, value=-2)
        closed_list.activities = [{"activity_id": dishes.id, "description": "Dishes", "value": 1.0}]
        db.commit()

        _, report = activity_service.update_activity(db, activity_id=dishes.id, description="Wash the dishes")

        assert report.updated == [open_list.id]

        assert list_service.get_list(db, open_list.id).activities[0]["description"] == "Wash the dishes"
        assert list_service.get_list(db, open_list.id).activities[0]["value"] == -2
        assert list_service.get_list(db, closed_list.id).activities[0]["description"] == "Dishes"

    def test_update_reports_lists_that_failed_to_refresh(self, db, dishes, monkeypatch) -> None:
        ids = []
        for name in ("Bruno", "Carla"):
            member_service.create_member(db, name=name, birth_date=years_ago(9), allowance_value=10)
            lst = list_service.create_list(db, family_member_name=name, status=ListStatus.OPEN)
            relation_service.attach_activity(db, list_id=lst.id, activity_id=dishes.id, value=-1)
            ids.append(lst.id)

        real_save = store.save
        broken_id = ids[0]

        def flaky_save(session, record):
            if getattr(record, "id", None) == broken_id:
                session.rollback()
                raise PersistenceError("disk full")
            return real_save(session, record)

        monkeypatch.setattr(store, "save", flaky_save)
        a, report = activity_service.update_activity(db, activity_id=dishes.id, description="Wash the dishes")
        monkeypatch.undo()

        assert a.description == "Wash the dishes"
        assert report.updated == [ids[1]]
        assert report.failed == {broken_id: "disk full"}
        assert not report.ok
        assert list_service.get_list(db, ids[1]).activities[0]["description"] == "Wash the dishes"
        assert list_service.get_list(db, broken_id).activities[0]["description"] == "Dishes"

    def test_update_to_own_description_is_allowed(self, db, dishes) -> None:
        a, report = activity_service.update_activity(db, activity_id=dishes.id, description="Dishes")
        assert a.description == "Dishes"
        assert report.updated == []
        assert report.ok

    def test_update_to_other_description_rejected(self, db, dishes) -> None:
        activity_service.create_activity(db, description="Laundry")
        with pytest.raises(ValidationError):
            activity_service.update_activity(db, activity_id=dishes.id, description="Laundry")

    def test_update_missing_activity(self, db) -> None:
        with pytest.raises(NotFoundError):
            activity_service.update_activity(db, activity_id="missing", description="Anything")


class TestDeleteActivity:
    def test_delete_missing_activity(self, db) -> None:
        with pytest.raises(NotFoundError):
            activity_service.delete_activity(db, "missing")

    def test_dishes_scenario(self, db, dishes, open_list, closed_list) -> None:
        relation_service.attach_activity(db, list_id=open_list.id, activity_id=dishes.id, value=-10)
        # closed lists refuse attach, so seed the historic copy directly
        closed_list.activities = [{"activity_id": dishes.id, "description": "Dishes", "value": 5.0}]
        db.commit()

        report = activity_service.delete_activity(db, dishes.id)

        assert report.updated == [open_list.id]
        assert report.ok
        assert list_service.get_list(db, open_list.id).activities == []
        assert list_service.get_list(db, closed_list.id).activities == [
            {"activity_id": dishes.id, "description": "Dishes", "value": 5.0}
        ]
        assert activity_service.get_by_description(db, "Dishes") is None

    def test_delete_cascades_across_many_lists(self, db, dishes) -> None:
        keep = activity_service.create_activity(db, description="Homework")
        list_ids = []
        for name in ("Bruno", "Carla", "Diego"):
            member_service.create_member(db, name=name, birth_date=years_ago(8), allowance_value=20)
            lst = list_service.create_list(db, family_member_name=name, status=ListStatus.IN_PROGRESS)
            relation_service.attach_activity(db, list_id=lst.id, activity_id=dishes.id, value=-1)
            relation_service.attach_activity(db, list_id=lst.id, activity_id=keep.id, value=3)
            list_ids.append(lst.id)

        report = activity_service.delete_activity(db, dishes.id)

        assert sorted(report.updated) == sorted(list_ids)
        for list_id in list_ids:
            items = list_service.get_list(db, list_id).activities
            assert [i["activity_id"] for i in items] == [keep.id]
