from typing import Optional
from sqlmodel import SQLModel, Field
from app.models.base import BaseModel


# --------------------
# Grade
# --------------------
class GradeBase(SQLModel):
    name: str = Field(max_length=120, index=True)


class Grade(GradeBase, BaseModel, table=True):
    __tablename__ = "grades"

    id: Optional[int] = Field(default=None, primary_key=True)


# --------------------
# Subject
# --------------------
class SubjectBase(SQLModel):
    name: str = Field(max_length=120)
    grade_id: int = Field(foreign_key="grades.id", ondelete="CASCADE", index=True)


class Subject(SubjectBase, BaseModel, table=True):
    __tablename__ = "subjects"

    id: Optional[int] = Field(default=None, primary_key=True)


# --------------------
# Lesson
# --------------------
class LessonBase(SQLModel):
    name: str = Field(max_length=120)
    subject_id: int = Field(foreign_key="subjects.id", ondelete="CASCADE", index=True)
    image_url: Optional[str] = Field(default=None)


class Lesson(LessonBase, BaseModel, table=True):
    __tablename__ = "lessons"

    id: Optional[int] = Field(default=None, primary_key=True)


# --------------------
# Topic / Subtopic
# --------------------
class TopicBase(SQLModel):
    name: str = Field(max_length=120)
    lesson_id: int = Field(foreign_key="lessons.id", ondelete="CASCADE", index=True)


class Topic(TopicBase, BaseModel, table=True):
    __tablename__ = "topics"

    id: Optional[int] = Field(default=None, primary_key=True)


class SubtopicBase(SQLModel):
    name: str = Field(max_length=120)
    topic_id: int = Field(foreign_key="topics.id", ondelete="CASCADE", index=True)


class Subtopic(SubtopicBase, BaseModel, table=True):
    __tablename__ = "subtopics"

    id: Optional[int] = Field(default=None, primary_key=True)


# --------------------
# Curriculum links
# --------------------
class GradeSubject(BaseModel, table=True):
    """Explicit grade <-> subject membership."""

    __tablename__ = "grade_subjects"

    grade_id: int = Field(foreign_key="grades.id", ondelete="CASCADE", primary_key=True)
    subject_id: int = Field(
        foreign_key="subjects.id", ondelete="CASCADE", primary_key=True
    )


class GradeSubjectLesson(BaseModel, table=True):
    """Lessons visible under a (grade, subject) pairing.

    Question filtering by grade reads this table for lesson-scoped rows.
    """

    __tablename__ = "grade_subject_lessons"

    grade_id: int = Field(foreign_key="grades.id", ondelete="CASCADE", primary_key=True)
    subject_id: int = Field(
        foreign_key="subjects.id", ondelete="CASCADE", primary_key=True
    )
    lesson_id: int = Field(
        foreign_key="lessons.id", ondelete="CASCADE", primary_key=True, index=True
    )
