from schooladmin.core.results import Outcome
from schooladmin.core.security import get_password_hash
from schooladmin.services.subject_service import SubjectService
from schooladmin.services.teacher_service import TeacherService


async def test_code_taken_after_the_check_is_a_conflict(coordinator, session_factory, school, monkeypatch):
    # A concurrent request commits the same code once the existence check has passed
    async def code_inserted_elsewhere(school_id, codes):
        async with session_factory() as other:
            await SubjectService(other).create_many(
                school_id, school["class_a"], [{"sub_name": "Maths", "sub_code": "MTH101", "sessions": 10}]
            )
            await other.commit()
        return set()

    monkeypatch.setattr(coordinator.subjects, "find_existing_codes", code_inserted_elsewhere)

    result = await coordinator.create_subjects(
        school["class_a"], school["id"], [{"sub_name": "Maths", "sub_code": "MTH101", "sessions": 12}]
    )

    assert result.outcome is Outcome.CONFLICT
    monkeypatch.undo()
    follow_up = await coordinator.create_subjects(
        school["class_a"], school["id"], [{"sub_name": "Physics", "sub_code": "PHY101", "sessions": 8}]
    )
    assert follow_up.ok
    listing = await SubjectService(coordinator.db).list_by_school(school["id"])
    assert [subject["sub_code"] for subject in listing.value] == ["MTH101", "PHY101"]


async def test_email_taken_after_the_lookup_is_a_conflict(coordinator, session_factory, monkeypatch):
    async def email_registered_elsewhere(email):
        async with session_factory() as other:
            await TeacherService(other).create_teacher(
                {"name": "Ada", "email": email, "password_hash": get_password_hash("first")}, []
            )
            await other.commit()
        return None

    monkeypatch.setattr(coordinator.teachers, "get_by_email", email_registered_elsewhere)

    result = await coordinator.register_teacher(name="Ada", email="ada@hillside.edu", password="second")

    assert result.outcome is Outcome.CONFLICT
    assert "ada@hillside.edu" in result.message
