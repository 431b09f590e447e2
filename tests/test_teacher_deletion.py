from uuid import uuid4

from schooladmin.core.results import Outcome
from schooladmin.services.subject_service import SubjectService
from schooladmin.services.teacher_service import TeacherService


async def test_delete_teacher_releases_subjects(coordinator, session_factory, make_subjects, make_teacher):
    maths, physics = await make_subjects("MTH101", "PHY101")
    teacher_id = await make_teacher("ada@hillside.edu", [maths, physics])

    result = await coordinator.delete_teacher(teacher_id)

    assert result.ok
    assert result.value.email == "ada@hillside.edu"
    assert result.value.teach_subjects == {maths, physics}
    async with session_factory() as check:
        assert await TeacherService(check).get(teacher_id) is None
        subjects = SubjectService(check)
        for subject_id in (maths, physics):
            subject = await subjects.get(subject_id)
            assert subject is not None
            assert subject.teacher_id is None


async def test_delete_missing_teacher(coordinator):
    result = await coordinator.delete_teacher(uuid4())

    assert result.outcome is Outcome.NOT_FOUND


async def test_delete_teachers_by_school(coordinator, session_factory, make_subjects, make_teacher):
    maths, physics, art = await make_subjects("MTH101", "PHY101", "ART101")
    other_school = uuid4()
    first = await make_teacher("ada@hillside.edu", [maths])
    second = await make_teacher("grace@hillside.edu", [physics])
    survivor = await make_teacher("alan@hillside.edu", [art], school_id=other_school)
    school_id = (await coordinator.teachers.get(first)).school_id

    result = await coordinator.delete_teachers_by_school(school_id)

    assert result.ok
    assert result.value["deleted_count"] == 2
    assert set(result.value["deleted_ids"]) == {first, second}
    assert result.value["subjects_updated"] == 2
    async with session_factory() as check:
        subjects = SubjectService(check)
        assert (await subjects.get(maths)).teacher_id is None
        assert (await subjects.get(physics)).teacher_id is None
        assert (await subjects.get(art)).teacher_id == survivor
        assert await TeacherService(check).get(survivor) is not None


async def test_delete_teachers_by_class(coordinator, session_factory, school, make_subjects, make_teacher):
    maths, physics = await make_subjects("MTH101", "PHY101")
    in_class = await make_teacher("ada@hillside.edu", [maths], teach_class_id=school["class_b"])
    elsewhere = await make_teacher("grace@hillside.edu", [physics], teach_class_id=school["class_a"])

    result = await coordinator.delete_teachers_by_class(school["class_b"])

    assert result.value["deleted_ids"] == [in_class]
    async with session_factory() as check:
        assert (await SubjectService(check).get(maths)).teacher_id is None
        assert (await SubjectService(check).get(physics)).teacher_id == elsewhere


async def test_delete_teachers_with_empty_scope(coordinator, make_teacher):
    await make_teacher("ada@hillside.edu")

    result = await coordinator.delete_teachers_by_school(uuid4())

    assert result.outcome is Outcome.EMPTY
    assert result.message == "No teachers found to delete"
