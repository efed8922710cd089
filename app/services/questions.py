"""Question reads and writes.

Listing and counting go through :func:`build_question_query` once per call.
The two statements run without a shared transaction, so concurrent writes can
make them observe different snapshots.
"""

from typing import List, Tuple

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.exceptions import NotFoundError
from app.models import Question
from app.schemas.question import QuestionFilter, QuestionUpsert
from app.services.question_filters import QuestionQuery, build_question_query
from app.utils.pagination import PageWindow
from app.utils.serialization import dump_string_list


async def list_questions(
    session: AsyncSession, query: QuestionQuery, window: PageWindow
) -> List[Question]:
    statement = (
        query.apply(select(Question))
        .order_by(Question.id.desc())
        .offset(window.offset)
        .limit(window.page_size)
    )
    _result = await session.exec(statement)
    return list(_result.all())


async def count_questions(session: AsyncSession, query: QuestionQuery) -> int:
    statement = query.apply(select(func.count(Question.id)).select_from(Question))
    _result = await session.exec(statement)
    total = _result.one()
    if isinstance(total, tuple):
        total = total[0]
    return total or 0


async def fetch_question_page(
    session: AsyncSession, filters: QuestionFilter, window: PageWindow
) -> Tuple[List[Question], int]:
    """Return one page of questions (newest id first) and the total match count."""
    query = build_question_query(filters)
    questions = await list_questions(session, query, window)
    total = await count_questions(session, query)
    return questions, total


async def get_question(session: AsyncSession, question_id: int) -> Question:
    question = await session.get(Question, question_id)
    if not question:
        raise NotFoundError(f"question {question_id} not found")
    return question


def _apply_payload(question: Question, payload: QuestionUpsert) -> None:
    data = payload.model_dump(exclude={"other_answers"})
    for field, value in data.items():
        setattr(question, field, value)
    question.other_answers = dump_string_list(payload.other_answers)


async def create_question(session: AsyncSession, payload: QuestionUpsert) -> Question:
    question = Question(question=payload.question, correct_answer=payload.correct_answer)
    _apply_payload(question, payload)
    session.add(question)
    await session.commit()
    await session.refresh(question)
    return question


async def update_question(
    session: AsyncSession, question_id: int, payload: QuestionUpsert
) -> Question:
    question = await get_question(session, question_id)
    _apply_payload(question, payload)
    session.add(question)
    await session.commit()
    await session.refresh(question)
    return question


async def delete_question(session: AsyncSession, question_id: int) -> None:
    question = await get_question(session, question_id)
    await session.delete(question)
    await session.commit()
