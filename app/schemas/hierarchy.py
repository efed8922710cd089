from typing import List, Optional

from app.schemas.common import CamelModel, TimestampedRead

NAME_MAX_LENGTH = 120


def _validate_name(name: Optional[str]) -> None:
    trimmed = (name or "").strip()
    if not trimmed:
        raise ValueError("name is required")
    if len(trimmed) > NAME_MAX_LENGTH:
        raise ValueError(f"name must be at most {NAME_MAX_LENGTH} characters")


def _require_parent(value: Optional[int], field: str) -> None:
    if not value:
        raise ValueError(f"{field} is required")


# --------------------
# Upserts
# --------------------
class GradeUpsert(CamelModel):
    name: str = ""

    def validate_input(self) -> None:
        _validate_name(self.name)


class SubjectUpsert(CamelModel):
    grade_id: int = 0
    name: str = ""

    def validate_input(self) -> None:
        _require_parent(self.grade_id, "gradeId")
        _validate_name(self.name)


class LessonUpsert(CamelModel):
    subject_id: int = 0
    name: str = ""
    image_url: Optional[str] = None

    def validate_input(self) -> None:
        _require_parent(self.subject_id, "subjectId")
        _validate_name(self.name)


class TopicUpsert(CamelModel):
    lesson_id: int = 0
    name: str = ""

    def validate_input(self) -> None:
        _require_parent(self.lesson_id, "lessonId")
        _validate_name(self.name)


class SubtopicUpsert(CamelModel):
    topic_id: int = 0
    name: str = ""

    def validate_input(self) -> None:
        _require_parent(self.topic_id, "topicId")
        _validate_name(self.name)


class TutorUpsert(CamelModel):
    name: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None

    def validate_input(self) -> None:
        _validate_name(self.name)


class YearUpsert(CamelModel):
    value: int = 0

    def validate_input(self) -> None:
        if self.value < 1900 or self.value > 2100:
            raise ValueError("value must be between 1900 and 2100")


class TutorialUpsert(CamelModel):
    name: str = ""
    url: Optional[str] = None

    def validate_input(self) -> None:
        _validate_name(self.name)


class GradeSubjectLinkRequest(CamelModel):
    grade_id: int
    subject_id: int


class GradeSubjectLessonLinkRequest(CamelModel):
    grade_id: int
    subject_id: int
    lesson_id: int


# --------------------
# Reads
# --------------------
class GradeRead(TimestampedRead):
    id: int
    name: str


class SubjectRead(TimestampedRead):
    id: int
    grade_id: int
    name: str


class LessonRead(TimestampedRead):
    id: int
    subject_id: int
    name: str
    image_url: Optional[str] = None


class TopicRead(TimestampedRead):
    id: int
    lesson_id: int
    name: str


class SubtopicRead(TimestampedRead):
    id: int
    topic_id: int
    name: str


class TutorRead(TimestampedRead):
    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None


class YearRead(TimestampedRead):
    id: int
    value: int


class TutorialRead(TimestampedRead):
    id: int
    name: str
    url: Optional[str] = None


class GradeSubjectRead(TimestampedRead):
    grade_id: int
    subject_id: int


class GradeSubjectLessonRead(TimestampedRead):
    grade_id: int
    subject_id: int
    lesson_id: int


class CatalogResponse(CamelModel):
    grades: List[GradeRead] = []
    subjects: List[SubjectRead] = []
    grade_subjects: List[GradeSubjectRead] = []
    grade_subject_lessons: List[GradeSubjectLessonRead] = []
    lessons: List[LessonRead] = []
    topics: List[TopicRead] = []
    subtopics: List[SubtopicRead] = []


# --------------------
# Student facing views
# --------------------
class SubTopicItem(CamelModel):
    sub_topic_id: int
    topic_id: int
    sub_topic_name: str


class TopicItem(CamelModel):
    topic_id: int
    topic_name: str
    sub_topic_list: List[SubTopicItem] = []


class SmartNoteRead(CamelModel):
    sub_topic_name: str = ""
    image_def_url: str = ""
    definition: str = ""
    theory: str = ""
    image_theory_url: str = ""
    example: str = ""
    image_example_url: str = ""


class TopicsResponse(CamelModel):
    topics: List[TopicItem] = []
    default_smart_note: SmartNoteRead = SmartNoteRead()
