from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.models import Subject
from app.schemas.question import parse_filter_id
from app.services.database import get_session

router = APIRouter()


@router.get("", response_model=List[Dict])
async def get_subjects_by_grade(
    grade_id: Optional[str] = Query(None, alias="gradeId"),
    session: AsyncSession = Depends(get_session),
):
    parsed_grade_id = parse_filter_id(grade_id)
    if parsed_grade_id is None:
        raise HTTPException(status_code=400, detail="invalid gradeId")
    try:
        _result = await session.exec(
            select(Subject)
            .where(Subject.grade_id == parsed_grade_id)
            .order_by(Subject.id)
        )
        subjects = _result.all()
        return [{"id": s.id, "name": s.name} for s in subjects]
    except Exception as e:
        logger.error(f"Error getting subjects for grade {parsed_grade_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
