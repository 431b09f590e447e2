import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("CACHE_ENABLED", "false")

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from schooladmin.core.database import get_db
from schooladmin.main import app
from schooladmin.models import Base
from schooladmin.services.consistency_coordinator import ConsistencyCoordinator
from schooladmin.services.school_service import SchoolService, ClassService
from schooladmin.services.student_service import StudentService


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession, autoflush=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def coordinator(db):
    return ConsistencyCoordinator(db)


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def school(db):
    """A school with two classes."""
    school = await SchoolService(db).create({"school_name": "Hillside High"})
    classes = ClassService(db)
    class_a = await classes.create({"school_id": school.id, "class_name": "7A"})
    class_b = await classes.create({"school_id": school.id, "class_name": "7B"})
    await db.commit()
    return {"id": school.id, "class_a": class_a.id, "class_b": class_b.id}


@pytest_asyncio.fixture
async def make_subjects(coordinator, school):
    async def make(*codes, class_id=None, school_id=None):
        result = await coordinator.create_subjects(
            class_id or school["class_a"],
            school_id or school["id"],
            [{"sub_name": f"Subject {code}", "sub_code": code, "sessions": 10} for code in codes],
        )
        assert result.ok, result.message
        return [subject.id for subject in result.value]
    return make


@pytest_asyncio.fixture
async def make_teacher(coordinator, school):
    async def make(email, subject_ids=(), **fields):
        fields.setdefault("school_id", school["id"])
        fields.setdefault("teach_class_id", school["class_a"])
        result = await coordinator.register_teacher(
            name=email.split("@")[0].title(),
            email=email,
            password="secret-pass",
            subject_ids=subject_ids,
            **fields,
        )
        assert result.ok, result.message
        return result.value.id
    return make


@pytest_asyncio.fixture
async def make_student(db, school):
    async def make(roll_num, records=()):
        """``records`` is a list of (subject_id, marks, day, status) tuples."""
        service = StudentService(db)
        student = await service.create_student({
            "name": f"Student {roll_num}",
            "roll_num": roll_num,
            "school_id": school["id"],
            "class_id": school["class_a"],
        })
        for subject_id, marks, day, status in records:
            await service.upsert_exam_result(student, subject_id, marks)
            await service.upsert_attendance(student, subject_id, day, status)
        await db.commit()
        return student.id
    return make
