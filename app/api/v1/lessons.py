from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.models import Lesson
from app.schemas.question import parse_filter_id
from app.services.database import get_session

router = APIRouter()


@router.get("", response_model=List[Dict])
async def get_lessons(
    subject: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_session),
):
    subject_id = parse_filter_id(subject)
    if subject_id is None:
        raise HTTPException(status_code=400, detail="invalid subjectId")
    try:
        _result = await session.exec(
            select(Lesson).where(Lesson.subject_id == subject_id).order_by(Lesson.id)
        )
        lessons = _result.all()
        return [
            {"id": lesson.id, "name": lesson.name, "imageUrl": lesson.image_url or ""}
            for lesson in lessons
        ]
    except Exception as e:
        logger.error(f"Error getting lessons for subject {subject_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
