from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.exceptions import NotFoundError
from app.schemas import QuestionFilter, QuestionPage, QuestionRead, QuestionUpsert
from app.schemas.question import parse_filter_id
from app.services import questions as question_service
from app.services.database import get_session
from app.utils.pagination import normalize_page

router = APIRouter()


def _require_grade(payload: QuestionUpsert) -> None:
    if not payload.grade_id:
        raise HTTPException(status_code=400, detail="gradeId is required")


@router.get("/questions", response_model=QuestionPage)
async def get_questions(
    grade_id: Optional[str] = Query(None, alias="gradeId"),
    subject_id: Optional[str] = Query(None, alias="subjectId"),
    lesson_id: Optional[str] = Query(None, alias="lessonId"),
    topic_id: Optional[str] = Query(None, alias="topicId"),
    subtopic_id: Optional[str] = Query(None, alias="subtopicId"),
    tutor_id: Optional[str] = Query(None, alias="tutorId"),
    tute_id: Optional[str] = Query(None, alias="tuteId"),
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    session: AsyncSession = Depends(get_session),
):
    """List questions matching the hierarchy filter, newest first.

    Filter values that are blank, zero or not integers are ignored.
    """
    filters = QuestionFilter(
        grade_id=grade_id,
        subject_id=subject_id,
        lesson_id=lesson_id,
        topic_id=topic_id,
        subtopic_id=subtopic_id,
        tutor_id=tutor_id,
        tute_id=tute_id,
    )
    window = normalize_page(parse_filter_id(page), parse_filter_id(page_size))
    try:
        questions, total = await question_service.fetch_question_page(
            session, filters, window
        )
    except Exception as e:
        logger.error(f"Error listing questions: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return QuestionPage(
        data=[QuestionRead.model_validate(q) for q in questions],
        page=window.page,
        page_size=window.page_size,
        total_count=total,
    )


@router.get("/questions/{question_id}", response_model=QuestionRead)
async def get_question(question_id: int, session: AsyncSession = Depends(get_session)):
    try:
        question = await question_service.get_question(session, question_id)
        return QuestionRead.model_validate(question)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="question not found")
    except Exception as e:
        logger.error(f"Error fetching question {question_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/questions", response_model=QuestionRead, status_code=201)
async def create_question(
    payload: QuestionUpsert, session: AsyncSession = Depends(get_session)
):
    _require_grade(payload)
    try:
        question = await question_service.create_question(session, payload)
        return QuestionRead.model_validate(question)
    except Exception as e:
        await session.rollback()
        logger.error(f"Error creating question: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.put("/questions/{question_id}", response_model=QuestionRead)
async def update_question(
    question_id: int,
    payload: QuestionUpsert,
    session: AsyncSession = Depends(get_session),
):
    _require_grade(payload)
    try:
        question = await question_service.update_question(session, question_id, payload)
        return QuestionRead.model_validate(question)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="question not found")
    except Exception as e:
        await session.rollback()
        logger.error(f"Error updating question {question_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/questions/{question_id}")
async def delete_question(question_id: int, session: AsyncSession = Depends(get_session)):
    try:
        await question_service.delete_question(session, question_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="question not found")
    except Exception as e:
        await session.rollback()
        logger.error(f"Error deleting question {question_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return {"message": "deleted"}
