import logging

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.base import Base
from app.core.config import settings
from app.core.constants import RoleEnum
from app.core.database import SessionLocal, engine
from app.core.exceptions import AppError
from app.core.logging import configure_logging
from app.crud.role import role as crud_role
from app.endpoints import admin, assignment, auth, course, course_note, lesson, moderation, submission, user, utility
from app.middleware.exceptions import (
    app_error_handler,
    global_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from app.middleware.logging import RequestLoggingMiddleware

configure_logging()
logger = logging.getLogger("app.main")

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
)

app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)

app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

app.include_router(utility.router, tags=["Utility"])
app.include_router(auth.router, prefix="/auth", tags=["Auth"])
app.include_router(user.router, prefix="/users", tags=["Users"])
app.include_router(course.router, prefix="/courses", tags=["Courses"])
app.include_router(course_note.router, prefix="/course-notes", tags=["Course Notes"])
app.include_router(lesson.router, prefix="/lessons", tags=["Lessons"])
app.include_router(assignment.router, prefix="/assignments", tags=["Assignments"])
app.include_router(submission.router, prefix="/submissions", tags=["Submissions"])
app.include_router(admin.router, prefix="/admin", tags=["Admin"])
app.include_router(moderation.router, prefix="/moderation", tags=["Moderation"])


def seed_roles():
    db = SessionLocal()
    try:
        for role_name in RoleEnum:
            crud_role.get_or_create(db, name=role_name.value)
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


@app.on_event("startup")
def startup_event():
    if settings.is_development:
        # production schemas are managed by alembic
        Base.metadata.create_all(bind=engine)
    seed_roles()
    logger.info("%s %s started (environment=%s)", settings.PROJECT_NAME, settings.VERSION, settings.ENVIRONMENT)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
