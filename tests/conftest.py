# /tests/conftest.py

import pytest
from types import SimpleNamespace

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from gradeflow.db.base import Base
from gradeflow.models.principal_model import Principal
from gradeflow.services.database_service import DatabaseService


@pytest.fixture
def engine():
    """
    A fresh in-memory SQLite database per test. StaticPool keeps the single
    connection alive so every session (and the TestClient's worker thread)
    sees the same database.
    """
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def db_service(session):
    return DatabaseService(db_session=session)


@pytest.fixture
def people(db_service):
    """
    A small school:
      - one admin
      - teacher_1 with students student_1 and student_2
      - teacher_2 with student_3
      - student_4, who has no teacher yet
    """
    def add(user_id, name, role, teacher_id=None):
        return db_service.add_user({
            "id": user_id,
            "name": name,
            "email": f"{user_id}@school.edu",
            "role": role,
            "assigned_teacher_id": teacher_id,
            "hashed_password": "not-a-real-hash",
        })

    admin = add("usr_admin", "Alice Admin", "admin")
    teacher_1 = add("usr_t1", "James Wilson", "teacher")
    teacher_2 = add("usr_t2", "Emily Chen", "teacher")
    student_1 = add("usr_s1", "Sam Student", "student", teacher_1.id)
    student_2 = add("usr_s2", "Priya Patel", "student", teacher_1.id)
    student_3 = add("usr_s3", "Omar Haddad", "student", teacher_2.id)
    student_4 = add("usr_s4", "Lena Novak", "student")

    return SimpleNamespace(
        admin=admin,
        teacher_1=teacher_1,
        teacher_2=teacher_2,
        student_1=student_1,
        student_2=student_2,
        student_3=student_3,
        student_4=student_4,
    )


@pytest.fixture
def as_principal():
    """Turns a stored user into the Principal the services expect."""
    return Principal.from_user
