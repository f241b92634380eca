"""Pydantic request/response schemas used by the API.

Schemas keep API input/output shapes stable and provide validation for
controller handlers and tests. JSON keys are camelCase on the wire;
snake_case names are accepted on input as well.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, PastDate, field_validator
from pydantic.alias_generators import to_camel

from . import models


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TeacherIn(_CamelModel):
    """Payload for creating or fully updating a teacher."""
    full_name: str = Field(min_length=2, max_length=100)
    date_of_birth: PastDate
    number_of_classes: int = Field(ge=1, le=50)

    @field_validator("full_name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Full name is required")
        return value


class TeacherOut(_CamelModel):
    """A stored teacher with its id and age as of today."""
    id: int
    full_name: str
    date_of_birth: date
    number_of_classes: int
    age: int

    @classmethod
    def from_model(cls, teacher: models.Teacher, today: Optional[date] = None) -> "TeacherOut":
        """Build the response shape, computing `age` from `date_of_birth`."""
        return cls(
            id=teacher.id,
            full_name=teacher.full_name,
            date_of_birth=teacher.date_of_birth,
            number_of_classes=teacher.number_of_classes,
            age=teacher.age if today is None else teacher.age_on(today),
        )


class FilterCriteria(_CamelModel):
    """Optional filter bounds; an absent field imposes no constraint."""
    min_age: Optional[int] = None
    max_age: Optional[int] = None
    min_classes: Optional[int] = None
    max_classes: Optional[int] = None
    search_term: Optional[str] = None


class StatisticsOut(_CamelModel):
    """Record count and mean class load over the whole store."""
    total_teachers: int
    average_classes: float
