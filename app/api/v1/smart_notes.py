from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.models import Lesson, SmartNote, Subject
from app.schemas import SmartNoteRead
from app.services.database import get_session

router = APIRouter()


def _required_id(raw: Optional[str], name: str) -> int:
    try:
        value = int((raw or "").strip())
    except ValueError:
        raise HTTPException(status_code=400, detail=f"invalid {name}")
    if value <= 0:
        raise HTTPException(status_code=400, detail=f"invalid {name}")
    return value


def _optional_id(raw: Optional[str], name: str) -> Optional[int]:
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw.strip())
    except ValueError:
        raise HTTPException(status_code=400, detail=f"invalid {name}")


@router.get("/smartnote", response_model=SmartNoteRead)
async def get_smart_note(
    grade_id: Optional[str] = Query(None, alias="gradeId"),
    subject_id: Optional[str] = Query(None, alias="subjectId"),
    lesson_id: Optional[str] = Query(None, alias="lessonId"),
    topic_id: Optional[str] = Query(None, alias="topicId"),
    subtopic_id: Optional[str] = Query(None, alias="subtopicId"),
    session: AsyncSession = Depends(get_session),
):
    """First smart note of a lesson, checked against its subject and grade."""
    parsed_grade = _required_id(grade_id, "gradeId")
    parsed_subject = _required_id(subject_id, "subjectId")
    parsed_lesson = _required_id(lesson_id, "lessonId")
    parsed_topic = _optional_id(topic_id, "topicId")
    parsed_subtopic = _optional_id(subtopic_id, "subtopicId")

    query = (
        select(SmartNote)
        .join(Lesson, SmartNote.lesson_id == Lesson.id)
        .join(Subject, Lesson.subject_id == Subject.id)
        .where(
            SmartNote.lesson_id == parsed_lesson,
            Lesson.subject_id == parsed_subject,
            Subject.grade_id == parsed_grade,
        )
    )
    if parsed_topic is not None:
        query = query.where(SmartNote.topic_id == parsed_topic)
    if parsed_subtopic is not None:
        query = query.where(SmartNote.subtopic_id == parsed_subtopic)

    try:
        _result = await session.exec(query.order_by(SmartNote.id).limit(1))
        note = _result.first()
    except Exception as e:
        logger.error(f"Error getting smart note for lesson {parsed_lesson}: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    if not note:
        raise HTTPException(status_code=404, detail="smart note not found")
    return SmartNoteRead.model_validate(note)
