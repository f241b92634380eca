"""SQLModel data models.

This module defines the application's database table using SQLModel.
`Teacher` is the single record shape shared by the store, the services,
the HTTP layer and the report renderers.
"""

from datetime import date
from typing import Optional

from sqlmodel import SQLModel, Field

from .utils.dates import years_between


class Teacher(SQLModel, table=True):
    """A teacher and their class load.

    Fields:
    - `full_name`: 2-100 characters, not blank
    - `date_of_birth`: strictly in the past
    - `number_of_classes`: between 1 and 50

    `age` is derived from `date_of_birth` on every read and is never
    stored.
    """
    __tablename__ = "teachers"

    id: Optional[int] = Field(default=None, primary_key=True)
    full_name: str = Field(max_length=100, nullable=False)
    date_of_birth: date = Field(nullable=False, index=True)
    number_of_classes: int = Field(nullable=False, index=True)

    def age_on(self, day: date) -> int:
        """Whole years between `date_of_birth` and `day`."""
        return years_between(self.date_of_birth, day)

    @property
    def age(self) -> int:
        return self.age_on(date.today())
