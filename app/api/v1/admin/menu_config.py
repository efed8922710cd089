from typing import Optional, Type

from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.exceptions import AlreadyLinkedError, NotFoundError, ParentNotFoundError
from app.models import (
    Grade,
    GradeSubject,
    Lesson,
    Subject,
    Subtopic,
    Topic,
    Tutor,
    Tutorial,
    Year,
)
from app.schemas import (
    CatalogResponse,
    GradeRead,
    GradeSubjectLessonLinkRequest,
    GradeSubjectLessonRead,
    GradeSubjectLinkRequest,
    GradeSubjectRead,
    GradeUpsert,
    LessonRead,
    LessonUpsert,
    PagedResponse,
    SubjectRead,
    SubjectUpsert,
    SubtopicRead,
    SubtopicUpsert,
    TopicRead,
    TopicUpsert,
    TutorialRead,
    TutorialUpsert,
    TutorRead,
    TutorUpsert,
    YearRead,
    YearUpsert,
)
from app.services import menu_config as menu_service
from app.services.database import get_session
from app.utils.pagination import normalize_page

router = APIRouter()


def _http_error(e: Exception, action: str) -> HTTPException:
    if isinstance(e, HTTPException):
        return e
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=404, detail="resource not found")
    if isinstance(e, (ParentNotFoundError, AlreadyLinkedError, ValueError)):
        return HTTPException(status_code=400, detail=str(e))
    logger.error(f"Error {action}: {e}")
    return HTTPException(status_code=500, detail=str(e))


async def _paged(session, model, read_schema, conditions, page, page_size, action):
    window = normalize_page(page, page_size)
    try:
        rows, total = await menu_service.list_page(session, model, conditions, window)
    except Exception as e:
        raise _http_error(e, action)
    return PagedResponse[read_schema](
        data=[read_schema.model_validate(row) for row in rows], total_count=total
    )


def _register_item_routes(
    path: str,
    model: Type[SQLModel],
    upsert_schema,
    read_schema,
    parent: Optional[tuple] = None,
):
    """Add get / create / update / delete routes for one menu entity.

    ``parent`` is ``(parent_model, payload_field, label)`` for entities whose
    parent row has to exist before they are written.
    """
    label = model.__tablename__

    async def _check(payload, session: AsyncSession) -> None:
        payload.validate_input()
        if parent:
            parent_model, field, parent_label = parent
            await menu_service.ensure_parent(
                session, parent_model, getattr(payload, field), parent_label
            )

    @router.get(f"/{path}/{{item_id}}", response_model=read_schema)
    async def get_item(item_id: int, session: AsyncSession = Depends(get_session)):
        try:
            row = await menu_service.get_row(session, model, item_id)
        except Exception as e:
            raise _http_error(e, f"fetching {label} {item_id}")
        return read_schema.model_validate(row)

    @router.post(f"/{path}", response_model=read_schema, status_code=201)
    async def create_item(
        payload: upsert_schema, session: AsyncSession = Depends(get_session)
    ):
        try:
            await _check(payload, session)
            row = await menu_service.create_row(session, model, payload.model_dump())
        except Exception as e:
            await session.rollback()
            raise _http_error(e, f"creating {label}")
        return read_schema.model_validate(row)

    @router.put(f"/{path}/{{item_id}}", response_model=read_schema)
    async def update_item(
        item_id: int,
        payload: upsert_schema,
        session: AsyncSession = Depends(get_session),
    ):
        try:
            await _check(payload, session)
            row = await menu_service.update_row(
                session, model, item_id, payload.model_dump()
            )
        except Exception as e:
            await session.rollback()
            raise _http_error(e, f"updating {label} {item_id}")
        return read_schema.model_validate(row)

    @router.delete(f"/{path}/{{item_id}}")
    async def delete_item(item_id: int, session: AsyncSession = Depends(get_session)):
        try:
            await menu_service.delete_row(session, model, item_id)
        except Exception as e:
            await session.rollback()
            raise _http_error(e, f"deleting {label} {item_id}")
        return {"success": True}


# --------------------
# Lists
# --------------------
@router.get("/grades", response_model=PagedResponse[GradeRead])
async def list_grades(
    search: Optional[str] = Query(None),
    page: Optional[int] = Query(None),
    page_size: Optional[int] = Query(None, alias="pageSize"),
    session: AsyncSession = Depends(get_session),
):
    conditions = [menu_service.search_condition(Grade, search)]
    return await _paged(session, Grade, GradeRead, conditions, page, page_size, "listing grades")


@router.get("/subjects", response_model=PagedResponse[SubjectRead])
async def list_subjects(
    search: Optional[str] = Query(None),
    grade_id: Optional[int] = Query(None, alias="gradeId"),
    page: Optional[int] = Query(None),
    page_size: Optional[int] = Query(None, alias="pageSize"),
    session: AsyncSession = Depends(get_session),
):
    conditions = [menu_service.search_condition(Subject, search)]
    if grade_id is not None:
        conditions.append(Subject.grade_id == grade_id)
    return await _paged(
        session, Subject, SubjectRead, conditions, page, page_size, "listing subjects"
    )


@router.get("/lessons", response_model=PagedResponse[LessonRead])
async def list_lessons(
    search: Optional[str] = Query(None),
    grade_id: Optional[int] = Query(None, alias="gradeId"),
    subject_id: Optional[int] = Query(None, alias="subjectId"),
    page: Optional[int] = Query(None),
    page_size: Optional[int] = Query(None, alias="pageSize"),
    session: AsyncSession = Depends(get_session),
):
    conditions = []
    if grade_id is not None:
        # lessons whose subject is linked to the grade
        conditions.append(
            select(GradeSubject.subject_id)
            .where(
                GradeSubject.subject_id == Lesson.subject_id,
                GradeSubject.grade_id == grade_id,
            )
            .correlate(Lesson)
            .exists()
        )
    if subject_id is not None:
        conditions.append(Lesson.subject_id == subject_id)
    conditions.append(menu_service.search_condition(Lesson, search))
    return await _paged(
        session, Lesson, LessonRead, conditions, page, page_size, "listing lessons"
    )


@router.get("/topics", response_model=PagedResponse[TopicRead])
async def list_topics(
    search: Optional[str] = Query(None),
    lesson_id: Optional[int] = Query(None, alias="lessonId"),
    page: Optional[int] = Query(None),
    page_size: Optional[int] = Query(None, alias="pageSize"),
    session: AsyncSession = Depends(get_session),
):
    conditions = [menu_service.search_condition(Topic, search)]
    if lesson_id is not None:
        conditions.append(Topic.lesson_id == lesson_id)
    return await _paged(session, Topic, TopicRead, conditions, page, page_size, "listing topics")


@router.get("/subtopics", response_model=PagedResponse[SubtopicRead])
async def list_subtopics(
    search: Optional[str] = Query(None),
    topic_id: Optional[int] = Query(None, alias="topicId"),
    page: Optional[int] = Query(None),
    page_size: Optional[int] = Query(None, alias="pageSize"),
    session: AsyncSession = Depends(get_session),
):
    conditions = [menu_service.search_condition(Subtopic, search)]
    if topic_id is not None:
        conditions.append(Subtopic.topic_id == topic_id)
    return await _paged(
        session, Subtopic, SubtopicRead, conditions, page, page_size, "listing subtopics"
    )


@router.get("/tutors", response_model=PagedResponse[TutorRead])
async def list_tutors(
    search: Optional[str] = Query(None),
    page: Optional[int] = Query(None),
    page_size: Optional[int] = Query(None, alias="pageSize"),
    session: AsyncSession = Depends(get_session),
):
    conditions = [menu_service.search_condition(Tutor, search)]
    return await _paged(session, Tutor, TutorRead, conditions, page, page_size, "listing tutors")


@router.get("/years", response_model=PagedResponse[YearRead])
async def list_years(
    search: Optional[str] = Query(None),
    page: Optional[int] = Query(None),
    page_size: Optional[int] = Query(None, alias="pageSize"),
    session: AsyncSession = Depends(get_session),
):
    conditions = [menu_service.search_condition(Year, search)]
    return await _paged(session, Year, YearRead, conditions, page, page_size, "listing years")


@router.get("/tutorials", response_model=PagedResponse[TutorialRead])
async def list_tutorials(
    search: Optional[str] = Query(None),
    page: Optional[int] = Query(None),
    page_size: Optional[int] = Query(None, alias="pageSize"),
    session: AsyncSession = Depends(get_session),
):
    conditions = [menu_service.search_condition(Tutorial, search)]
    return await _paged(
        session, Tutorial, TutorialRead, conditions, page, page_size, "listing tutorials"
    )


# --------------------
# Links and catalog
# --------------------
@router.post("/grade-subjects", response_model=GradeSubjectRead, status_code=201)
async def link_grade_subject(
    payload: GradeSubjectLinkRequest, session: AsyncSession = Depends(get_session)
):
    try:
        link = await menu_service.link_grade_subject(
            session, payload.grade_id, payload.subject_id
        )
    except Exception as e:
        await session.rollback()
        raise _http_error(e, "linking grade subject")
    return GradeSubjectRead.model_validate(link)


@router.delete("/grade-subjects")
async def unlink_grade_subject(
    grade_id: int = Query(..., alias="gradeId"),
    subject_id: int = Query(..., alias="subjectId"),
    session: AsyncSession = Depends(get_session),
):
    try:
        await menu_service.unlink_grade_subject(session, grade_id, subject_id)
    except Exception as e:
        await session.rollback()
        raise _http_error(e, "unlinking grade subject")
    return {"success": True}


@router.post(
    "/grade-subject-lessons", response_model=GradeSubjectLessonRead, status_code=201
)
async def link_grade_subject_lesson(
    payload: GradeSubjectLessonLinkRequest, session: AsyncSession = Depends(get_session)
):
    try:
        link = await menu_service.link_grade_subject_lesson(
            session, payload.grade_id, payload.subject_id, payload.lesson_id
        )
    except Exception as e:
        await session.rollback()
        raise _http_error(e, "linking grade subject lesson")
    return GradeSubjectLessonRead.model_validate(link)


@router.delete("/grade-subject-lessons")
async def unlink_grade_subject_lesson(
    grade_id: int = Query(..., alias="gradeId"),
    subject_id: int = Query(..., alias="subjectId"),
    lesson_id: int = Query(..., alias="lessonId"),
    session: AsyncSession = Depends(get_session),
):
    try:
        await menu_service.unlink_grade_subject_lesson(
            session, grade_id, subject_id, lesson_id
        )
    except Exception as e:
        await session.rollback()
        raise _http_error(e, "unlinking grade subject lesson")
    return {"success": True}


@router.get("/catalog", response_model=CatalogResponse)
async def get_catalog(session: AsyncSession = Depends(get_session)):
    try:
        catalog = await menu_service.fetch_catalog(session)
    except Exception as e:
        raise _http_error(e, "fetching catalog")
    return CatalogResponse(
        grades=[GradeRead.model_validate(g) for g in catalog["grades"]],
        subjects=[SubjectRead.model_validate(s) for s in catalog["subjects"]],
        grade_subjects=[
            GradeSubjectRead.model_validate(gs) for gs in catalog["grade_subjects"]
        ],
        grade_subject_lessons=[
            GradeSubjectLessonRead.model_validate(gsl)
            for gsl in catalog["grade_subject_lessons"]
        ],
        lessons=[LessonRead.model_validate(lesson) for lesson in catalog["lessons"]],
        topics=[TopicRead.model_validate(t) for t in catalog["topics"]],
        subtopics=[SubtopicRead.model_validate(s) for s in catalog["subtopics"]],
    )


_register_item_routes("grades", Grade, GradeUpsert, GradeRead)
_register_item_routes(
    "subjects", Subject, SubjectUpsert, SubjectRead, parent=(Grade, "grade_id", "grade")
)
_register_item_routes(
    "lessons", Lesson, LessonUpsert, LessonRead, parent=(Subject, "subject_id", "subject")
)
_register_item_routes(
    "topics", Topic, TopicUpsert, TopicRead, parent=(Lesson, "lesson_id", "lesson")
)
_register_item_routes(
    "subtopics", Subtopic, SubtopicUpsert, SubtopicRead, parent=(Topic, "topic_id", "topic")
)
_register_item_routes("tutors", Tutor, TutorUpsert, TutorRead)
_register_item_routes("years", Year, YearUpsert, YearRead)
_register_item_routes("tutorials", Tutorial, TutorialUpsert, TutorialRead)
