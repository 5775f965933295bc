"""In-memory SQLite database and API test base class shared by the tests."""

import unittest

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from artshop.core.database import get_db
from artshop.core.security import hash_answer, hash_password
from artshop.main import app
from artshop.models import Base, User


def make_sessionmaker():
    """Fresh schema on a single shared in-memory connection (safe across threads)."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine, sessionmaker(bind=engine, autocommit=False, autoflush=False)


def insert_user(
    session,
    username: str = "bob",
    email: str = "bob@example.com",
    password: str = "bobpass1",
    role: str = "user",
    question: str | None = None,
    answer: str | None = None,
) -> User:
    """Insert an account directly, bypassing registration rules."""
    user = User(
        username=username,
        email=email,
        password_hash=hash_password(password),
        role=role,
        security_question=question,
        security_answer=hash_answer(answer) if answer is not None else None,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


class ApiTestCase(unittest.TestCase):
    """TestClient wired to a per-test in-memory database via dependency override."""

    def setUp(self) -> None:
        self.engine, self.Session = make_sessionmaker()

        def override_get_db():
            db = self.Session()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        self.engine.dispose()
