"""Translate a sparse question filter into joins and a WHERE predicate.

The same :class:`QuestionQuery` is applied to the page query and to the count
query, so both always see one predicate.
"""

from dataclasses import dataclass, field
from typing import Any, List, Tuple

import sqlalchemy as sa
from loguru import logger

from app.models import GradeSubjectLesson, Lesson, Question
from app.schemas.question import QuestionFilter

# Rendered inline so the sentinel never shows up as a bound parameter.
UNSET_ID = sa.literal_column("0")


def lesson_unscoped() -> sa.ColumnElement:
    """Rows not attached to a lesson; the column may hold NULL or 0."""
    return sa.or_(Question.lesson_id.is_(None), Question.lesson_id == UNSET_ID)


def lesson_scoped() -> sa.ColumnElement:
    return sa.and_(Question.lesson_id.is_not(None), Question.lesson_id != UNSET_ID)


@dataclass
class QuestionQuery:
    """Resolved filter.

    Attributes:
        joins: ``(target, onclause)`` pairs, applied as LEFT OUTER JOINs
        conditions: predicates joined with AND
        params: bound values in the order their placeholders render
    """

    joins: List[Tuple[Any, sa.ColumnElement]] = field(default_factory=list)
    conditions: List[sa.ColumnElement] = field(default_factory=list)
    params: List[int] = field(default_factory=list)

    def add(self, condition: sa.ColumnElement, *params: int) -> None:
        self.conditions.append(condition)
        self.params.extend(params)

    @property
    def predicate(self) -> sa.ColumnElement:
        if not self.conditions:
            return sa.true()
        return sa.and_(*self.conditions)

    def apply(self, statement):
        for target, onclause in self.joins:
            statement = statement.outerjoin(target, onclause)
        if self.conditions:
            statement = statement.where(*self.conditions)
        return statement


def _linked_to_grade(grade_id: int, subject_id: int | None) -> sa.ColumnElement:
    membership = [GradeSubjectLesson.grade_id == grade_id]
    if subject_id is not None:
        membership.append(GradeSubjectLesson.subject_id == subject_id)
    return (
        sa.select(GradeSubjectLesson.lesson_id)
        .where(*membership, GradeSubjectLesson.lesson_id == Question.lesson_id)
        .correlate(Question)
        .exists()
    )


def build_question_query(filters: QuestionFilter) -> QuestionQuery:
    """Resolve ``filters`` into joins, predicate and parameters.

    An explicit lesson wins over grade and subject. Without a lesson, grade
    matches unscoped rows by their own ``grade_id`` and lesson-scoped rows
    through ``grade_subject_lessons``; subject alone can only be reached
    through the question's lesson.
    """
    query = QuestionQuery()
    grade_id = filters.grade_id
    subject_id = filters.subject_id
    lesson_id = filters.lesson_id

    if lesson_id is not None:
        query.add(Question.lesson_id == lesson_id, lesson_id)
    elif grade_id is not None:
        params = [grade_id, grade_id]
        if subject_id is not None:
            params.append(subject_id)
        query.add(
            sa.or_(
                sa.and_(lesson_unscoped(), Question.grade_id == grade_id),
                sa.and_(lesson_scoped(), _linked_to_grade(grade_id, subject_id)),
            ),
            *params,
        )
    elif subject_id is not None:
        query.joins.append((Lesson, Lesson.id == Question.lesson_id))
        query.add(sa.and_(lesson_scoped(), Lesson.subject_id == subject_id), subject_id)

    for column, value in (
        (Question.topic_id, filters.topic_id),
        (Question.subtopic_id, filters.subtopic_id),
        (Question.tutor_id, filters.tutor_id),
        (Question.tute_id, filters.tute_id),
    ):
        if value is not None:
            query.add(column == value, value)

    if grade_id is not None and subject_id is None and lesson_id is None:
        logger.opt(lazy=True).debug(
            "Grade-only question filter (grade_id={}): {} | params={}",
            lambda: grade_id,
            lambda: str(query.predicate),
            lambda: list(query.params),
        )
    return query
