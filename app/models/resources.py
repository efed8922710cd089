from typing import Optional
from sqlmodel import SQLModel, Field
from app.models.base import BaseModel


class Tutor(BaseModel, table=True):
    __tablename__ = "tutors"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=120)
    email: Optional[str] = Field(default=None)
    phone: Optional[str] = Field(default=None)


class Year(BaseModel, table=True):
    __tablename__ = "years"

    id: Optional[int] = Field(default=None, primary_key=True)
    value: int = Field(index=True)


class Tutorial(BaseModel, table=True):
    __tablename__ = "tutorials"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=120)
    url: Optional[str] = Field(default=None)


class SmartNoteBase(SQLModel):
    lesson_id: int = Field(foreign_key="lessons.id", ondelete="CASCADE", index=True)
    topic_id: Optional[int] = Field(default=None)
    subtopic_id: Optional[int] = Field(default=None)
    sub_topic_name: str = Field(default="")
    definition: str = Field(default="")
    image_def_url: str = Field(default="")
    theory: str = Field(default="")
    image_theory_url: str = Field(default="")
    example: str = Field(default="")
    image_example_url: str = Field(default="")
    is_default: bool = Field(default=False)


class SmartNote(SmartNoteBase, BaseModel, table=True):
    __tablename__ = "smart_notes"

    id: Optional[int] = Field(default=None, primary_key=True)
