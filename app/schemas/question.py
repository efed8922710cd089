from typing import Any, List, Optional

from pydantic import field_validator

from app.schemas.common import CamelModel, TimestampedRead
from app.utils.pagination import MAX_ID
from app.utils.serialization import load_string_list


def parse_filter_id(value: Any) -> Optional[int]:
    """Normalize a loosely typed filter value to a positive id or ``None``.

    Zero, blank strings, negative numbers and anything that does not parse as
    an integer all mean "dimension not applied". So do values above
    ``MAX_ID``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return _in_range(value)
    if isinstance(value, float):
        if not value.is_integer() or value <= 0:
            return None
        return _in_range(int(value))
    if isinstance(value, (str, bytes)):
        text = value.decode() if isinstance(value, bytes) else value
        text = text.strip()
        if not text:
            return None
        try:
            parsed = int(text)
        except ValueError:
            return None
        return _in_range(parsed)
    return None


def _in_range(value: int) -> Optional[int]:
    return value if 0 < value <= MAX_ID else None


class QuestionFilter(CamelModel):
    """Optional hierarchy filter for question listings.

    Attributes:
        grade_id: Grade of the question, directly or through its lesson
        subject_id: Subject of the question's lesson
        lesson_id: Lesson of the question; takes precedence over grade/subject
        topic_id: Topic equality filter
        subtopic_id: Subtopic equality filter
        tutor_id: Tutor equality filter
        tute_id: Tute (tutorial) equality filter
    """

    grade_id: Optional[int] = None
    subject_id: Optional[int] = None
    lesson_id: Optional[int] = None
    topic_id: Optional[int] = None
    subtopic_id: Optional[int] = None
    tutor_id: Optional[int] = None
    tute_id: Optional[int] = None

    @field_validator("*", mode="before")
    @classmethod
    def normalize_id(cls, value: Any) -> Optional[int]:
        return parse_filter_id(value)


class QuestionUpsert(CamelModel):
    grade_id: Optional[int] = None
    lesson_id: Optional[int] = None
    topic_id: Optional[int] = None
    subtopic_id: Optional[int] = None
    tutor_id: Optional[int] = None
    tute_id: Optional[int] = None
    question: str
    question_img_url: Optional[str] = None
    correct_answer: str
    theory: Optional[str] = None
    solution: Optional[str] = None
    other_answers: List[str] = []


class QuestionRead(TimestampedRead):
    id: int
    grade_id: Optional[int] = None
    lesson_id: Optional[int] = None
    topic_id: Optional[int] = None
    subtopic_id: Optional[int] = None
    tutor_id: Optional[int] = None
    tute_id: Optional[int] = None
    question: str
    question_img_url: Optional[str] = None
    correct_answer: str
    theory: Optional[str] = None
    solution: Optional[str] = None
    other_answers: List[str] = []

    @field_validator("other_answers", mode="before")
    @classmethod
    def decode_other_answers(cls, value: Any) -> List[str]:
        return load_string_list(value)


class QuestionPage(CamelModel):
    data: List[QuestionRead]
    page: int
    page_size: int
    total_count: int
