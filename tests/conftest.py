import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import uuid
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import coaching.models  # noqa: F401
import main
from coaching.core.constants import RoleEnum
from coaching.core.database import Base
from coaching.core.security import get_password_hash
from coaching.crud.batch import batch as crud_batch
from coaching.crud.exam import exam as crud_exam
from coaching.crud.parent_profile import parent_profile as crud_parent_profile
from coaching.crud.question import question as crud_question
from coaching.crud.student_profile import student_profile as crud_student_profile
from coaching.crud.user import user as crud_user
from coaching.utils import deps as deps_utils
from tests.helpers.factories import TEST_PASSWORD, question_data


@pytest.fixture(scope="function")
def database_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # pysqlite defers BEGIN on its own; take it over so SAVEPOINTs nest properly.
    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")

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
    def _transactional_db():
        try:
            yield db_session
            db_session.commit()
        except Exception:
            db_session.rollback()
            raise

    main.app.dependency_overrides[deps_utils.get_db] = lambda: db_session
    main.app.dependency_overrides[deps_utils.get_transactional_db] = _transactional_db
    with TestClient(main.app) as test_client:
        yield test_client
    main.app.dependency_overrides.clear()


@pytest.fixture
def user_factory(db_session):
    def _user_factory(role: RoleEnum = RoleEnum.STUDENT, username: str = None,
                      password: str = TEST_PASSWORD, is_active: bool = True):
        user = crud_user.create(db_session, obj_in={
            "username": username or f"{role.value.lower()}-{uuid.uuid4().hex[:8]}",
            "hashed_password": get_password_hash(password),
            "role": role,
            "is_active": is_active,
        })
        db_session.commit()
        return user
    return _user_factory


@pytest.fixture
def auth_headers(client):
    """Log a user in through /auth/login and return bearer headers."""
    def _auth_headers(user, password: str = TEST_PASSWORD):
        response = client.post("/auth/login", json={"username": user.username, "password": password})
        body = response.json()
        token = body.get("data", {}).get("access_token")
        assert token, f"Login failed or token missing: {body}"
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers


@pytest.fixture
def token_for_role(user_factory, auth_headers):
    headers = {}

    def _token_for_role(role: RoleEnum):
        if role not in headers:
            headers[role] = auth_headers(user_factory(role=role))
        return headers[role]
    return _token_for_role


@pytest.fixture
def director_headers(token_for_role):
    return token_for_role(RoleEnum.SUPER_ADMIN)


@pytest.fixture
def teacher_headers(token_for_role):
    return token_for_role(RoleEnum.TEACHER)


@pytest.fixture
def batch_factory(db_session):
    def _batch_factory(name: str = None, fee: float = 150000):
        batch = crud_batch.create(db_session, obj_in={"name": name or f"Batch {uuid.uuid4().hex[:6]}", "fee": fee})
        db_session.commit()
        return batch
    return _batch_factory


@pytest.fixture
def parent_factory(db_session, user_factory):
    def _parent_factory(mobile: str = "9876543210", is_mobile_visible: bool = False):
        parent_user = user_factory(role=RoleEnum.PARENT)
        parent = crud_parent_profile.create(db_session, obj_in={
            "user_id": parent_user.id, "mobile": mobile, "is_mobile_visible": is_mobile_visible
        })
        db_session.commit()
        return parent
    return _parent_factory


@pytest.fixture
def student_factory(db_session, user_factory):
    def _student_factory(batch=None, parent=None, full_name: str = None, fee_agreed: float = 0,
                         waive_off: float = 0, installment_schedule=None, is_active: bool = True):
        student_user = user_factory(role=RoleEnum.STUDENT, is_active=is_active)
        profile = crud_student_profile.create(db_session, obj_in={
            "user_id": student_user.id,
            "full_name": full_name or f"Student {student_user.username}",
            "batch_id": batch.id if batch else None,
            "parent_id": parent.id if parent else None,
            "fee_agreed": fee_agreed,
            "waive_off": waive_off,
            "installment_schedule": installment_schedule,
        })
        db_session.commit()
        return profile
    return _student_factory


@pytest.fixture
def exam_factory(db_session):
    """Create an exam with question snapshots directly, bypassing import."""
    def _exam_factory(questions=None, is_published: bool = True, title: str = "Mock Test"):
        exam = crud_exam.create(db_session, obj_in={
            "title": title,
            "duration_min": 180,
            "is_published": is_published,
            "scheduled_at": datetime.now(timezone.utc),
        })
        questions = [question_data()] if questions is None else questions
        crud_question.create_multi(db_session, objs_in=[
            {**q, "exam_id": exam.id, "order_index": index} for index, q in enumerate(questions)
        ])
        exam.total_marks = sum(q["marks"] for q in questions)
        db_session.commit()
        db_session.refresh(exam)
        return exam
    return _exam_factory
