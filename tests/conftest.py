import os
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_DIR", "logs")

import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

import main
from app.core.base import Base
from app.core.constants import RoleEnum
from app.core.database import build_engine
from app.core.security import get_password_hash, token_codec
from app.crud.course import course as crud_course
from app.crud.lesson import lesson as crud_lesson
from app.crud.role import role as crud_role
from app.crud.user import user as crud_user
from app.utils import deps as deps_utils

DEFAULT_PASSWORD = "testpass123"


@pytest.fixture(scope="function")
def database_engine(tmp_path):
    test_db_url = os.environ.get("TEST_DATABASE_URL") or f"sqlite:///{tmp_path / 'test.db'}"
    engine = build_engine(test_db_url)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(database_engine):
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=database_engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()


@pytest.fixture(scope="function")
def client(db_session):
    def _get_db():
        yield db_session

    def _get_transactional_db():
        try:
            yield db_session
            db_session.commit()
        except Exception:
            db_session.rollback()
            raise

    main.app.dependency_overrides[deps_utils.get_db] = _get_db
    main.app.dependency_overrides[deps_utils.get_transactional_db] = _get_transactional_db
    # raise_server_exceptions off so unhandled errors reach the 500 handler
    test_client = TestClient(main.app, raise_server_exceptions=False)
    yield test_client
    main.app.dependency_overrides.clear()


@pytest.fixture
def roles(db_session):
    seeded = {r: crud_role.get_or_create(db_session, name=r.value) for r in RoleEnum}
    db_session.commit()
    return seeded


@pytest.fixture
def user_factory(db_session, roles):
    def _user_factory(role: RoleEnum = RoleEnum.STUDENT, *, password: str = DEFAULT_PASSWORD, is_active: bool = True, email: str = None, username: str = None):
        suffix = uuid.uuid4().hex[:8]
        test_user = crud_user.create_with_password(
            db_session,
            username=username or f"{role.value}_{suffix}",
            email=email or f"{role.value}-{suffix}@test.com",
            hashed_password=get_password_hash(password),
            role=roles[role],
            full_name=f"Test {role.value}",
            is_active=is_active,
        )
        db_session.commit()
        return test_user
    return _user_factory


@pytest.fixture
def auth_headers():
    def _auth_headers(user):
        return {"Authorization": f"Bearer {token_codec.issue(user.id)}"}
    return _auth_headers


@pytest.fixture
def token_for_role(user_factory):
    """One cached user per role; returns a bearer token for it."""
    tokens = {}

    def _create_token_for_role(role_name: str):
        if role_name not in tokens:
            user = user_factory(RoleEnum(role_name))
            tokens[role_name] = token_codec.issue(user.id)
        return tokens[role_name]

    return _create_token_for_role


@pytest.fixture
def course_factory(db_session, user_factory):
    def _course_factory(tutor=None, *, lessons: int = 0, is_published: bool = True, title: str = None, **extra):
        tutor = tutor or user_factory(RoleEnum.TUTOR)
        course = crud_course.create(
            db_session,
            obj_in={
                "tutor_id": tutor.id,
                "title": title or f"Course {uuid.uuid4().hex[:6]}",
                "is_published": is_published,
                **extra,
            },
        )
        for i in range(lessons):
            crud_lesson.create(
                db_session,
                obj_in={"course_id": course.id, "title": f"Lesson {i + 1}", "order_index": i},
            )
        db_session.commit()
        db_session.refresh(course)
        return course
    return _course_factory
