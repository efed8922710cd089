from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.ext.asyncio.session import AsyncSession

from app.main import app
from app.models import (
    Grade,
    GradeSubject,
    GradeSubjectLesson,
    Lesson,
    Question,
    Subject,
)
from app.services.database import get_session


@pytest.fixture()
def db_path(tmp_path) -> str:
    path = tmp_path / "test.db"
    sync_engine = create_engine(f"sqlite:///{path}")
    SQLModel.metadata.create_all(sync_engine)
    sync_engine.dispose()
    return str(path)


@pytest.fixture()
def db(db_path) -> Iterator[Session]:
    """Synchronous session on the test database, used for seeding and checks."""
    engine = create_engine(f"sqlite:///{db_path}")
    with Session(engine, expire_on_commit=False) as session:
        yield session
    engine.dispose()


@pytest.fixture()
def client(db_path) -> Iterator[TestClient]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def add_all(session: Session, *rows) -> None:
    for row in rows:
        session.add(row)
    session.commit()


@pytest.fixture()
def curriculum(db) -> Session:
    """Grades 1 and 3, subject 2 with lessons 10 and 11.

    Lesson 10 is linked under grade 1 / subject 2, lesson 11 under
    grade 3 / subject 2.
    """
    add_all(
        db,
        Grade(id=1, name="Grade 1"),
        Grade(id=3, name="Grade 3"),
        Subject(id=2, grade_id=1, name="Science"),
        Subject(id=4, grade_id=3, name="History"),
    )
    add_all(
        db,
        Lesson(id=10, subject_id=2, name="Plants"),
        Lesson(id=11, subject_id=2, name="Animals"),
        Lesson(id=12, subject_id=4, name="Kings"),
    )
    add_all(
        db,
        GradeSubject(grade_id=1, subject_id=2),
        GradeSubject(grade_id=3, subject_id=2),
        GradeSubject(grade_id=3, subject_id=4),
    )
    add_all(
        db,
        GradeSubjectLesson(grade_id=1, subject_id=2, lesson_id=10),
        GradeSubjectLesson(grade_id=3, subject_id=2, lesson_id=11),
        GradeSubjectLesson(grade_id=3, subject_id=4, lesson_id=12),
    )
    return db


def make_question(**kwargs) -> Question:
    values = {
        "question": "What is 2 + 2?",
        "correct_answer": "4",
        "other_answers": '["3", "5"]',
    }
    values.update(kwargs)
    return Question(**values)
