"""Shared test fixtures: a throwaway SQLite database and API clients wired to it."""

import unittest

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from portal.core.database import get_db
from portal.core.security import hash_password
from portal.main import app
from portal.models import Base, User

PASSWORD = "Str0ng!Pass"


def make_session_factory():
    """One in-memory database per test, shared across threads via StaticPool."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine, sessionmaker(autocommit=False, autoflush=False, bind=engine)


class DatabaseTestCase(unittest.TestCase):
    """Fresh schema for every test; self.db is a session the test may use directly."""

    def setUp(self) -> None:
        self.engine, self.SessionTesting = make_session_factory()
        self.db = self.SessionTesting()

    def tearDown(self) -> None:
        self.db.close()
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()

    def create_user(
        self,
        username: str,
        role: str = "user",
        password: str = PASSWORD,
        is_active: bool = True,
        **fields: object,
    ) -> User:
        user = User(
            email=f"{username}@example.com",
            username=username,
            password_hash=hash_password(password),
            role=role,
            is_active=is_active,
            data_processing_consent=True,
            **fields,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def reload(self, model, pk):
        """Read a row as the API last committed it."""
        self.db.expire_all()
        return self.db.get(model, pk)


class ApiTestCase(DatabaseTestCase):
    """DatabaseTestCase plus the FastAPI app with get_db pointed at the test database."""

    def setUp(self) -> None:
        super().setUp()

        def override_get_db():
            db = self.SessionTesting()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        super().tearDown()

    def login_client(self, identifier: str, password: str = PASSWORD) -> TestClient:
        """Return a new client holding a session cookie for identifier."""
        client = TestClient(app)
        response = client.post(
            "/auth/login",
            json={"identifier": identifier, "password": password},
        )
        self.assertEqual(response.status_code, 200, response.text)
        return client

    def client_as(self, username: str, role: str = "user") -> tuple[TestClient, User]:
        user = self.create_user(username, role=role)
        return self.login_client(username), user
