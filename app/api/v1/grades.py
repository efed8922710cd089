from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.models import Grade
from app.services.database import get_session

router = APIRouter()


@router.get("", response_model=List[Dict])
async def get_grades(session: AsyncSession = Depends(get_session)):
    try:
        _result = await session.exec(select(Grade).order_by(Grade.id))
        grades = _result.all()
        return [{"id": g.id, "name": g.name} for g in grades]
    except Exception as e:
        logger.error(f"Error getting grades: {e}")
        raise HTTPException(status_code=500, detail=str(e))
