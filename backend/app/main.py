"""FastAPI application entrypoint and HTTP controllers.

This module defines the HTTP endpoints of the student registry.
Controllers are intentionally thin: they accept requests, delegate to
`StudentService`, and return JSON responses.

Endpoints implemented:
- POST /students
- GET /students
- GET /students/{student_id}
- PUT /students/{student_id}
- DELETE /students/{student_id}
- GET /health
"""

from contextlib import asynccontextmanager
from typing import List
from fastapi import FastAPI, Depends, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session
import json
import logging
import time
import uuid
from pathlib import Path
from .database import create_db_and_tables, get_session
from . import services, models
from .schemas import StudentPayload
from .config import settings


@asynccontextmanager
async def lifespan(_app: FastAPI):
    create_db_and_tables()
    yield


app = FastAPI(title="Student Registry API", lifespan=lifespan)
logger = logging.getLogger("app.api")
if not logger.handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)

# The browser UI may be served from a separate dev server on FRONTEND_ORIGIN.
if settings.ALLOW_DEV_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.FRONTEND_ORIGIN],
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Serve the form/list page; open /static/index.html while the API is running.
static_dir = Path(__file__).resolve().parent.parent / "static"
if static_dir.exists():
    app.mount("/static", StaticFiles(directory=static_dir), name="static")


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
        logger.exception(
            "request_failed %s",
            json.dumps(
                {
                    "request_id": req_id,
                    "path": request.url.path,
                    "method": request.method,
                    "duration_ms": elapsed_ms,
                },
                ensure_ascii=True,
            ),
        )
        raise
    response.headers["X-Request-ID"] = req_id
    elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
    if request.url.path.startswith("/students"):
        logger.info(
            "request_done %s",
            json.dumps(
                {
                    "request_id": req_id,
                    "path": request.url.path,
                    "method": request.method,
                    "status_code": response.status_code,
                    "duration_ms": elapsed_ms,
                },
                ensure_ascii=True,
            ),
        )
    return response


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("storage error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "storage error"})


@app.post('/students', response_model=models.Student)
def create_student(payload: StudentPayload, db: Session = Depends(get_session)):
    """Create a student and return it with its generated `id`."""
    return services.StudentService(db).save(payload)


@app.get('/students', response_model=List[StudentPayload])
def list_students(db: Session = Depends(get_session)):
    """List all students as `{name, email}` objects in insertion order."""
    return services.StudentService(db).list_all()


@app.get('/students/{student_id}', response_model=StudentPayload)
def get_student(student_id: int, db: Session = Depends(get_session)):
    """Return one student; 404 if the id is unknown."""
    try:
        return services.StudentService(db).get_by_id(student_id)
    except services.StudentNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.put('/students/{student_id}', response_model=models.Student)
def update_student(student_id: int, payload: StudentPayload, db: Session = Depends(get_session)):
    """Replace the name and email of an existing student.

    Other students are left untouched. Returns the updated record
    including its `id`, or 404 if the id is unknown.
    """
    try:
        return services.StudentService(db).update(student_id, payload)
    except services.StudentNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.delete('/students/{student_id}', response_class=PlainTextResponse)
def delete_student(student_id: int, db: Session = Depends(get_session)):
    """Delete a student and answer with a plain-text confirmation."""
    try:
        services.StudentService(db).delete_by_id(student_id)
    except services.StudentNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return "Student deleted successfully"


@app.get("/")
def home():
    """Open the bundled form/list page."""
    return RedirectResponse(url="/static/index.html")


@app.get("/health")
def health():
    """Lightweight health check for uptime monitoring."""
    return {"status": "ok"}
