from app.models.base import BaseModel
from app.models.academic_hierarchy import (
    Grade,
    Subject,
    Lesson,
    Topic,
    Subtopic,
    GradeSubject,
    GradeSubjectLesson,
)
from app.models.resources import Tutor, Year, Tutorial, SmartNote
from app.models.question import Question

__all__ = [
    "BaseModel",
    "Grade",
    "Subject",
    "Lesson",
    "Topic",
    "Subtopic",
    "GradeSubject",
    "GradeSubjectLesson",
    "Tutor",
    "Year",
    "Tutorial",
    "SmartNote",
    "Question",
]
