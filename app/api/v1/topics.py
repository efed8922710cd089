from collections import defaultdict
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.models import SmartNote, Subtopic, Topic
from app.schemas import SmartNoteRead, SubTopicItem, TopicItem, TopicsResponse
from app.schemas.question import parse_filter_id
from app.services.database import get_session

router = APIRouter()


@router.get("/topics", response_model=TopicsResponse)
async def get_topics(
    lesson_id: Optional[str] = Query(None, alias="lessonId"),
    session: AsyncSession = Depends(get_session),
):
    """Topics of a lesson with their subtopics and the lesson's default smart note."""
    parsed_lesson_id = parse_filter_id(lesson_id)
    if parsed_lesson_id is None:
        raise HTTPException(status_code=400, detail="invalid lessonId")
    try:
        _result = await session.exec(
            select(Topic)
            .where(Topic.lesson_id == parsed_lesson_id)
            .order_by(Topic.created_at, Topic.id)
        )
        topics = _result.all()

        subtopics_by_topic = defaultdict(list)
        topic_ids = [t.id for t in topics]
        if topic_ids:
            _result = await session.exec(
                select(Subtopic)
                .where(Subtopic.topic_id.in_(topic_ids))
                .order_by(Subtopic.created_at, Subtopic.id)
            )
            for sub in _result.all():
                subtopics_by_topic[sub.topic_id].append(
                    SubTopicItem(
                        sub_topic_id=sub.id, topic_id=sub.topic_id, sub_topic_name=sub.name
                    )
                )

        _result = await session.exec(
            select(SmartNote)
            .where(SmartNote.lesson_id == parsed_lesson_id, SmartNote.is_default == True)  # noqa: E712
            .limit(1)
        )
        default_note = _result.first()

        return TopicsResponse(
            topics=[
                TopicItem(
                    topic_id=t.id,
                    topic_name=t.name,
                    sub_topic_list=subtopics_by_topic.get(t.id, []),
                )
                for t in topics
            ],
            default_smart_note=(
                SmartNoteRead.model_validate(default_note)
                if default_note
                else SmartNoteRead()
            ),
        )
    except Exception as e:
        logger.error(f"Error getting topics for lesson {parsed_lesson_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
