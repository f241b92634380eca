"""Business logic services used by HTTP controllers.

`TeacherService` coordinates the repository, the age/date translation
and the report renderers. It is intentionally thin: it validates input,
translates filter criteria into store queries and turns store failures
into typed errors from `errors`.
"""

import logging
from contextlib import contextmanager
from datetime import date
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from . import models, repositories, schemas
from .errors import InternalError, NotFoundError, RecordValidationError
from .utils.dates import date_of_birth_range
from .utils.excel_report import render_teachers_excel
from .utils.pdf_report import render_teachers_pdf
from .utils.stats import round_half_up

logger = logging.getLogger("teacher_registry.services")


@contextmanager
def _store_call(action: str, session: Session):
    """Wrap store failures raised inside the block as `InternalError`."""
    try:
        yield
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("store_failed action=%s", action)
        raise InternalError(f"Error {action}: {exc}") from exc


class TeacherService:
    """Teacher CRUD, filtering, statistics and exports."""
    def __init__(self, session: Session):
        self.session = session
        self.repo = repositories.TeacherRepository(session)

    def list_teachers(self) -> List[models.Teacher]:
        with _store_call("retrieving teachers", self.session):
            return self.repo.list_all()

    def get_teacher(self, teacher_id: int) -> models.Teacher:
        """Return the teacher with `teacher_id` or raise `NotFoundError`."""
        with _store_call("retrieving teacher", self.session):
            teacher = self.repo.get(teacher_id)
        if teacher is None:
            raise NotFoundError(teacher_id)
        return teacher

    def create_teacher(self, data: schemas.TeacherIn) -> models.Teacher:
        """Validate `data` and persist it as a new teacher; the store assigns the id."""
        self._validate(data)
        teacher = models.Teacher(
            full_name=data.full_name,
            date_of_birth=data.date_of_birth,
            number_of_classes=data.number_of_classes,
        )
        with _store_call("creating teacher", self.session):
            created = self.repo.create(teacher)
        logger.info("teacher_created id=%s", created.id)
        return created

    def update_teacher(self, teacher_id: int, data: schemas.TeacherIn) -> models.Teacher:
        """Overwrite all mutable fields of an existing teacher.

        Raises `NotFoundError` for an unknown id and `RecordValidationError`
        before touching the store when `data` breaks a constraint.
        """
        self._validate(data)
        teacher = self.get_teacher(teacher_id)
        with _store_call("updating teacher", self.session):
            updated = self.repo.update(teacher, data.full_name, data.date_of_birth, data.number_of_classes)
        logger.info("teacher_updated id=%s", teacher_id)
        return updated

    def delete_teacher(self, teacher_id: int) -> None:
        teacher = self.get_teacher(teacher_id)
        with _store_call("deleting teacher", self.session):
            self.repo.delete(teacher)
        logger.info("teacher_deleted id=%s", teacher_id)

    def search_teachers(self, query: str) -> List[models.Teacher]:
        """Teachers whose name contains `query`, ignoring case."""
        with _store_call("searching teachers", self.session):
            return self.repo.search_by_name(query)

    def filter_teachers(self, criteria: schemas.FilterCriteria, today: Optional[date] = None) -> List[models.Teacher]:
        """Apply every present bound of `criteria` at once.

        Age bounds are translated into a birth-date range relative to
        `today` (defaults to the current date). Absent bounds impose no
        constraint; inverted ranges simply match nothing.
        """
        start_date, end_date = date_of_birth_range(criteria.min_age, criteria.max_age, today or date.today())
        with _store_call("filtering teachers", self.session):
            return self.repo.find_by_criteria(
                search_term=criteria.search_term,
                min_classes=criteria.min_classes,
                max_classes=criteria.max_classes,
                start_date=start_date,
                end_date=end_date,
            )

    def get_teachers_by_age_range(self, min_age: Optional[int], max_age: Optional[int], today: Optional[date] = None) -> List[models.Teacher]:
        """Teachers aged `min_age` to `max_age` inclusive; both bounds are required."""
        if min_age is None or max_age is None:
            raise RecordValidationError("minAge and maxAge are required")
        start_date, end_date = date_of_birth_range(min_age, max_age, today or date.today())
        with _store_call("filtering teachers by age", self.session):
            return self.repo.find_by_date_of_birth_between(start_date, end_date)

    def get_teachers_by_classes_range(self, min_classes: Optional[int], max_classes: Optional[int]) -> List[models.Teacher]:
        """Teachers with `min_classes` to `max_classes` classes; both bounds are required."""
        if min_classes is None or max_classes is None:
            raise RecordValidationError("minClasses and maxClasses are required")
        with _store_call("filtering teachers by classes", self.session):
            return self.repo.find_by_classes_between(min_classes, max_classes)

    def count_teachers(self) -> int:
        with _store_call("counting teachers", self.session):
            return self.repo.count()

    def average_classes(self) -> float:
        """Mean class load rounded half-up to 2 decimals; 0.0 when there are no teachers."""
        with _store_call("averaging classes", self.session):
            average = self.repo.average_classes()
        if average is None:
            return 0.0
        return round_half_up(average, 2)

    def statistics(self) -> schemas.StatisticsOut:
        return schemas.StatisticsOut(
            total_teachers=self.count_teachers(),
            average_classes=self.average_classes(),
        )

    def export_pdf(self) -> bytes:
        return render_teachers_pdf(self.list_teachers())

    def export_excel(self) -> bytes:
        return render_teachers_excel(self.list_teachers())

    def _validate(self, data: schemas.TeacherIn):
        """Re-check record constraints for callers that bypass the API schema."""
        name = (data.full_name or "").strip()
        if not name:
            raise RecordValidationError("Full name is required")
        if not 2 <= len(data.full_name) <= 100:
            raise RecordValidationError("Full name must be between 2 and 100 characters")
        if data.date_of_birth is None or data.date_of_birth >= date.today():
            raise RecordValidationError("Date of birth must be in the past")
        if data.number_of_classes is None or not 1 <= data.number_of_classes <= 50:
            raise RecordValidationError("Number of classes must be between 1 and 50")
