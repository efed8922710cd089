"""Data access for the menu-configuration admin screens.

Every list here shares one shape: optional filters, a LIKE search, newest id
first and the common page window.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple, Type

from loguru import logger
from sqlalchemy import String, cast, func
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.exceptions import AlreadyLinkedError, NotFoundError, ParentNotFoundError
from app.models import (
    Grade,
    GradeSubject,
    GradeSubjectLesson,
    Lesson,
    Subject,
    Subtopic,
    Topic,
    Year,
)
from app.utils.pagination import PageWindow


def search_condition(model: Type[SQLModel], search: Optional[str]):
    """LIKE condition on the row's display column, or ``None`` for no search."""
    search = (search or "").strip()
    if not search:
        return None
    like = f"%{search}%"
    if model is Year:
        return cast(Year.value, String).like(like)
    return model.name.ilike(like)


async def list_page(
    session: AsyncSession,
    model: Type[SQLModel],
    conditions: Sequence[Any],
    window: PageWindow,
) -> Tuple[List[Any], int]:
    conditions = [c for c in conditions if c is not None]

    count_query = select(func.count()).select_from(model)
    if conditions:
        count_query = count_query.where(*conditions)
    _result = await session.exec(count_query)
    total_result = _result.first()
    if isinstance(total_result, tuple):
        total = total_result[0]
    else:
        total = total_result or 0

    query = select(model)
    if conditions:
        query = query.where(*conditions)
    _result = await session.exec(
        query.order_by(model.id.desc()).offset(window.offset).limit(window.page_size)
    )
    return list(_result.all()), total


async def get_row(session: AsyncSession, model: Type[SQLModel], row_id: int):
    row = await session.get(model, row_id)
    if not row:
        raise NotFoundError(f"{model.__tablename__} {row_id} not found")
    return row


async def parent_exists(session: AsyncSession, model: Type[SQLModel], row_id: int) -> bool:
    return await session.get(model, row_id) is not None


async def ensure_parent(
    session: AsyncSession, model: Type[SQLModel], row_id: int, label: str
) -> None:
    if not await parent_exists(session, model, row_id):
        raise ParentNotFoundError(f"{label} not found")


def _clean(data: Dict[str, Any]) -> Dict[str, Any]:
    if isinstance(data.get("name"), str):
        data["name"] = data["name"].strip()
    return data


async def create_row(session: AsyncSession, model: Type[SQLModel], data: Dict[str, Any]):
    row = model(**_clean(data))
    session.add(row)
    await session.commit()
    await session.refresh(row)
    logger.info(f"Created {model.__tablename__} row {row.id}")
    return row


async def update_row(
    session: AsyncSession, model: Type[SQLModel], row_id: int, data: Dict[str, Any]
):
    row = await get_row(session, model, row_id)
    for field, value in _clean(data).items():
        setattr(row, field, value)
    session.add(row)
    await session.commit()
    await session.refresh(row)
    return row


async def delete_row(session: AsyncSession, model: Type[SQLModel], row_id: int) -> None:
    row = await get_row(session, model, row_id)
    await session.delete(row)
    await session.commit()
    logger.info(f"Deleted {model.__tablename__} row {row_id}")


# --------------------
# Curriculum links
# --------------------
async def link_grade_subject(
    session: AsyncSession, grade_id: int, subject_id: int
) -> GradeSubject:
    await ensure_parent(session, Grade, grade_id, "grade")
    await ensure_parent(session, Subject, subject_id, "subject")

    if await session.get(
        GradeSubject, {"grade_id": grade_id, "subject_id": subject_id}
    ):
        raise AlreadyLinkedError("grade subject link exists")

    link = GradeSubject(grade_id=grade_id, subject_id=subject_id)
    session.add(link)
    await session.commit()
    await session.refresh(link)
    return link


async def unlink_grade_subject(session: AsyncSession, grade_id: int, subject_id: int) -> None:
    link = await session.get(
        GradeSubject, {"grade_id": grade_id, "subject_id": subject_id}
    )
    if not link:
        raise NotFoundError("grade subject link not found")
    await session.delete(link)
    await session.commit()


async def link_grade_subject_lesson(
    session: AsyncSession, grade_id: int, subject_id: int, lesson_id: int
) -> GradeSubjectLesson:
    await ensure_parent(session, Grade, grade_id, "grade")
    await ensure_parent(session, Subject, subject_id, "subject")

    lesson = await session.get(Lesson, lesson_id)
    if not lesson:
        raise ParentNotFoundError("lesson not found")
    if lesson.subject_id != subject_id:
        raise ParentNotFoundError("lesson does not belong to subject")
    if not await session.get(
        GradeSubject, {"grade_id": grade_id, "subject_id": subject_id}
    ):
        raise ParentNotFoundError("grade subject link not found")

    if await session.get(
        GradeSubjectLesson,
        {"grade_id": grade_id, "subject_id": subject_id, "lesson_id": lesson_id},
    ):
        raise AlreadyLinkedError("grade subject lesson link exists")

    link = GradeSubjectLesson(grade_id=grade_id, subject_id=subject_id, lesson_id=lesson_id)
    session.add(link)
    await session.commit()
    await session.refresh(link)
    return link


async def unlink_grade_subject_lesson(
    session: AsyncSession, grade_id: int, subject_id: int, lesson_id: int
) -> None:
    link = await session.get(
        GradeSubjectLesson,
        {"grade_id": grade_id, "subject_id": subject_id, "lesson_id": lesson_id},
    )
    if not link:
        raise NotFoundError("grade subject lesson link not found")
    await session.delete(link)
    await session.commit()


async def fetch_catalog(session: AsyncSession) -> Dict[str, List[Any]]:
    """Every hierarchy row and link, for building admin menus in one call."""
    catalog: Dict[str, List[Any]] = {}
    for key, query in (
        ("grades", select(Grade).order_by(Grade.id)),
        ("subjects", select(Subject).order_by(Subject.id)),
        (
            "grade_subjects",
            select(GradeSubject).order_by(GradeSubject.grade_id, GradeSubject.subject_id),
        ),
        (
            "grade_subject_lessons",
            select(GradeSubjectLesson).order_by(
                GradeSubjectLesson.grade_id,
                GradeSubjectLesson.subject_id,
                GradeSubjectLesson.lesson_id,
            ),
        ),
        ("lessons", select(Lesson).order_by(Lesson.id)),
        ("topics", select(Topic).order_by(Topic.id)),
        ("subtopics", select(Subtopic).order_by(Subtopic.id)),
    ):
        _result = await session.exec(query)
        catalog[key] = list(_result.all())
    return catalog
