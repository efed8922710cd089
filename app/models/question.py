from typing import Optional
import sqlalchemy as sa
from sqlmodel import Field
from app.models.base import BaseModel


class Question(BaseModel, table=True):
    """An MCQ question.

    The hierarchy columns are plain integers rather than foreign keys: a null
    or zero value means the question is not scoped at that level. A question
    with no lesson is attached to its grade directly through ``grade_id``.
    """

    __tablename__ = "questions"

    id: Optional[int] = Field(default=None, primary_key=True)
    grade_id: Optional[int] = Field(default=None, index=True)
    lesson_id: Optional[int] = Field(default=None, index=True)
    topic_id: Optional[int] = Field(default=None, index=True)
    subtopic_id: Optional[int] = Field(default=None, index=True)
    tutor_id: Optional[int] = Field(default=None, index=True)
    tute_id: Optional[int] = Field(default=None, index=True)

    question: str = Field(sa_type=sa.Text)
    question_img_url: Optional[str] = Field(default=None)
    correct_answer: str = Field(sa_type=sa.Text)
    theory: Optional[str] = Field(default=None, sa_type=sa.Text)
    solution: Optional[str] = Field(default=None, sa_type=sa.Text)
    # JSON encoded list of strings
    other_answers: Optional[str] = Field(default=None, sa_type=sa.Text)
