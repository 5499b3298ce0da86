"""Tests des modèles / Model tests."""

from app.database import Base
from app.models.availability import Availability
from app.models.candidate import Candidate
from app.models.schedule import Schedule
from app.models.user import User


def test_user_repr():
    u = User(user_id=1, username="octocat")
    assert "octocat" in repr(u)


def test_schedule_repr():
    s = Schedule(schedule_id="abc", schedule_name="Meeting", memo="", created_by=1)
    assert "Meeting" in repr(s)


def test_availability_composite_key():
    columns = [c.name for c in Availability.__table__.primary_key.columns]
    assert sorted(columns) == ["candidate_id", "user_id"]


def test_comment_composite_key():
    columns = [c.name for c in Base.metadata.tables["comments"].primary_key.columns]
    assert sorted(columns) == ["schedule_id", "user_id"]


def test_foreign_keys():
    targets = {fk.target_fullname for fk in Candidate.__table__.foreign_keys}
    assert targets == {"schedules.schedule_id"}
    targets = {fk.target_fullname for fk in Availability.__table__.foreign_keys}
    assert targets == {"candidates.candidate_id", "users.user_id", "schedules.schedule_id"}
