"""Repository class encapsulating database operations.

`TeacherRepository` is the record store for the `teachers` table. It
returns SQLModel objects, performs commits/refreshes where appropriate
and always lists rows in store order (ascending id).
"""

from datetime import date
from typing import List, Optional

from sqlmodel import Session, col, select
from sqlalchemy import func

from . import models


class TeacherRepository:
    """CRUD and query operations for `Teacher` objects."""
    def __init__(self, session: Session):
        self.session = session

    def create(self, teacher: models.Teacher) -> models.Teacher:
        """Persist a new teacher and return the managed instance with its id."""
        self.session.add(teacher)
        self.session.commit()
        self.session.refresh(teacher)
        return teacher

    def get(self, teacher_id: int) -> Optional[models.Teacher]:
        """Get a `Teacher` by primary key or `None` if not found."""
        return self.session.get(models.Teacher, teacher_id)

    def list_all(self) -> List[models.Teacher]:
        stmt = select(models.Teacher).order_by(models.Teacher.id)
        return list(self.session.exec(stmt).all())

    def update(self, teacher: models.Teacher, full_name: str, date_of_birth: date, number_of_classes: int) -> models.Teacher:
        """Overwrite the mutable fields of a managed teacher; the id is untouched."""
        teacher.full_name = full_name
        teacher.date_of_birth = date_of_birth
        teacher.number_of_classes = number_of_classes
        self.session.add(teacher)
        self.session.commit()
        self.session.refresh(teacher)
        return teacher

    def delete(self, teacher: models.Teacher) -> None:
        self.session.delete(teacher)
        self.session.commit()

    def exists(self, teacher_id: int) -> bool:
        """Return True if a teacher with `teacher_id` is stored."""
        stmt = select(models.Teacher.id).where(models.Teacher.id == teacher_id)
        return self.session.exec(stmt).first() is not None

    def search_by_name(self, term: str) -> List[models.Teacher]:
        """Teachers whose full name contains `term`, ignoring case."""
        stmt = (
            select(models.Teacher)
            .where(col(models.Teacher.full_name).icontains(term, autoescape=True))
            .order_by(models.Teacher.id)
        )
        return list(self.session.exec(stmt).all())

    def find_by_classes_between(self, min_classes: int, max_classes: int) -> List[models.Teacher]:
        """Teachers whose class count lies in the inclusive range."""
        stmt = (
            select(models.Teacher)
            .where(col(models.Teacher.number_of_classes).between(min_classes, max_classes))
            .order_by(models.Teacher.id)
        )
        return list(self.session.exec(stmt).all())

    def find_by_date_of_birth_between(self, start_date: date, end_date: date) -> List[models.Teacher]:
        """Teachers born between `start_date` and `end_date`, both inclusive."""
        stmt = (
            select(models.Teacher)
            .where(col(models.Teacher.date_of_birth).between(start_date, end_date))
            .order_by(models.Teacher.id)
        )
        return list(self.session.exec(stmt).all())

    def find_by_criteria(
        self,
        search_term: Optional[str] = None,
        min_classes: Optional[int] = None,
        max_classes: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[models.Teacher]:
        """Teachers matching every bound that is given.

        A `None` argument adds no clause, so calling with no arguments
        returns every teacher.
        """
        stmt = select(models.Teacher)
        if search_term is not None:
            stmt = stmt.where(col(models.Teacher.full_name).icontains(search_term, autoescape=True))
        if min_classes is not None:
            stmt = stmt.where(models.Teacher.number_of_classes >= min_classes)
        if max_classes is not None:
            stmt = stmt.where(models.Teacher.number_of_classes <= max_classes)
        if start_date is not None:
            stmt = stmt.where(models.Teacher.date_of_birth >= start_date)
        if end_date is not None:
            stmt = stmt.where(models.Teacher.date_of_birth <= end_date)
        stmt = stmt.order_by(models.Teacher.id)
        return list(self.session.exec(stmt).all())

    def count(self) -> int:
        stmt = select(func.count()).select_from(models.Teacher)
        return self.session.exec(stmt).one()

    def average_classes(self) -> Optional[float]:
        """Raw mean of `number_of_classes`, or `None` on an empty table."""
        stmt = select(func.avg(models.Teacher.number_of_classes))
        value = self.session.exec(stmt).one()
        return float(value) if value is not None else None
