"""FastAPI application entrypoint and HTTP controllers.

This module defines the HTTP endpoints of the teacher registry backend.
Controllers are intentionally thin: they accept requests, delegate to
`TeacherService`, and return JSON or file responses. Typed service errors
are mapped to status codes by the exception handlers below.

Endpoints implemented (under /api/teachers):
- GET / , POST /
- GET /{id}, PUT /{id}, DELETE /{id}
- GET /search
- POST /filter
- GET /filter/age
- GET /filter/classes
- GET /statistics
- GET /export/pdf
- GET /export/excel
"""

from fastapi import FastAPI, Depends, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session
from typing import List, Optional
import json
import logging
import time
import uuid
from .database import create_db_and_tables, get_session
from . import services
from .errors import InternalError, NotFoundError, RecordValidationError
from .schemas import FilterCriteria, StatisticsOut, TeacherIn, TeacherOut
from .config import settings

app = FastAPI(title="Teacher Management API")
logger = logging.getLogger("teacher_registry.api")
if not logger.handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# The browser frontend is served from another origin during development.
if settings.ALLOW_DEV_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

create_db_and_tables()


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    response: Response
    try:
        response = await call_next(request)
    except Exception:
        elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
        if request.url.path.startswith("/api"):
            logger.exception(
                "request_failed %s",
                json.dumps(
                    {
                        "request_id": req_id,
                        "path": request.url.path,
                        "method": request.method,
                        "duration_ms": elapsed_ms,
                        "client": request.client.host if request.client else "unknown",
                    },
                    ensure_ascii=True,
                ),
            )
        raise
    response.headers["X-Request-ID"] = req_id
    elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
    if request.url.path.startswith("/api"):
        logger.info(
            "request_done %s",
            json.dumps(
                {
                    "request_id": req_id,
                    "path": request.url.path,
                    "method": request.method,
                    "status_code": response.status_code,
                    "duration_ms": elapsed_ms,
                    "client": request.client.host if request.client else "unknown",
                },
                ensure_ascii=True,
            ),
        )
    return response


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(RecordValidationError)
async def record_validation_handler(request: Request, exc: RecordValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


@app.exception_handler(InternalError)
async def internal_error_handler(request: Request, exc: InternalError):
    # cause is already logged where it was wrapped
    return JSONResponse(status_code=500, content={"detail": "internal error"})


def _out(teachers) -> List[TeacherOut]:
    return [TeacherOut.from_model(t) for t in teachers]


@app.get("/health")
def health():
    """Lightweight health check for uptime monitoring."""
    return {"status": "ok"}


@app.get("/api/test", response_class=PlainTextResponse)
@app.get("/api/teachers/test", response_class=PlainTextResponse)
def test_endpoint():
    return "Backend is working!"


@app.get("/api/test/ping", response_class=PlainTextResponse)
def ping():
    return "pong"


@app.get('/api/teachers', response_model=List[TeacherOut])
def list_teachers(db: Session = Depends(get_session)):
    """List every teacher in store order, with ages as of today."""
    return _out(services.TeacherService(db).list_teachers())


@app.post('/api/teachers', response_model=TeacherOut, status_code=201)
def create_teacher(payload: TeacherIn, db: Session = Depends(get_session)):
    teacher = services.TeacherService(db).create_teacher(payload)
    return TeacherOut.from_model(teacher)


@app.get('/api/teachers/search', response_model=List[TeacherOut])
def search_teachers(query: str, db: Session = Depends(get_session)):
    """Case-insensitive substring search on the full name."""
    return _out(services.TeacherService(db).search_teachers(query))


@app.post('/api/teachers/filter', response_model=List[TeacherOut])
def filter_teachers(criteria: FilterCriteria, db: Session = Depends(get_session)):
    """Filter by any combination of name, class-count and age bounds.

    Every field of the body is optional; an omitted field imposes no
    constraint.
    """
    return _out(services.TeacherService(db).filter_teachers(criteria))


@app.get('/api/teachers/filter/age', response_model=List[TeacherOut])
def teachers_by_age(
    min_age: Optional[int] = Query(None, alias="minAge"),
    max_age: Optional[int] = Query(None, alias="maxAge"),
    db: Session = Depends(get_session),
):
    """Teachers aged minAge..maxAge inclusive; both parameters are required."""
    return _out(services.TeacherService(db).get_teachers_by_age_range(min_age, max_age))


@app.get('/api/teachers/filter/classes', response_model=List[TeacherOut])
def teachers_by_classes(
    min_classes: Optional[int] = Query(None, alias="minClasses"),
    max_classes: Optional[int] = Query(None, alias="maxClasses"),
    db: Session = Depends(get_session),
):
    return _out(services.TeacherService(db).get_teachers_by_classes_range(min_classes, max_classes))


@app.get('/api/teachers/statistics', response_model=StatisticsOut)
def statistics(db: Session = Depends(get_session)):
    """Total teacher count and mean classes per teacher (2 decimals)."""
    return services.TeacherService(db).statistics()


@app.get('/api/teachers/export/pdf')
def export_pdf(db: Session = Depends(get_session)):
    """Download every teacher as a PDF table report."""
    content = services.TeacherService(db).export_pdf()
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="teachers.pdf"'},
    )


@app.get('/api/teachers/export/excel')
def export_excel(db: Session = Depends(get_session)):
    """Download every teacher as an xlsx workbook with a statistics sheet."""
    content = services.TeacherService(db).export_excel()
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="teachers.xlsx"'},
    )


@app.get('/api/teachers/{teacher_id}', response_model=TeacherOut)
def get_teacher(teacher_id: int, db: Session = Depends(get_session)):
    return TeacherOut.from_model(services.TeacherService(db).get_teacher(teacher_id))


@app.put('/api/teachers/{teacher_id}', response_model=TeacherOut)
def update_teacher(teacher_id: int, payload: TeacherIn, db: Session = Depends(get_session)):
    """Replace the name, birth date and class load of an existing teacher."""
    teacher = services.TeacherService(db).update_teacher(teacher_id, payload)
    return TeacherOut.from_model(teacher)


@app.delete('/api/teachers/{teacher_id}', status_code=204)
def delete_teacher(teacher_id: int, db: Session = Depends(get_session)):
    services.TeacherService(db).delete_teacher(teacher_id)
    return Response(status_code=204)
