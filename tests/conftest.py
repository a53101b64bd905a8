# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import datetime

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from tech_news.core.security import hash_password
from tech_news.core.settings import settings
from tech_news.db.session import Base
from tech_news.db.session import get_db as app_get_session
from tech_news.db.time import isoformat_utc
from tech_news.main import app as fastapi_app
from tech_news.models import Post, User
from tech_news.repositories.post_repo import PostRepository
from tech_news.repositories.user_repo import UserRepository
from tech_news.services.session_codec import issue_token

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "secret12"


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    # https so that the Secure session cookie is sent back.
    with TestClient(app, base_url="https://testserver") as test_client:
        yield test_client


@pytest.fixture()
def user_repo(db_session: Session) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture()
def post_repo(db_session: Session) -> PostRepository:
    return PostRepository(db_session)


def _create_user(repo: UserRepository, username: str) -> User:
    user_id = repo.insert(username, hash_password(TEST_PASSWORD))
    user = repo.get_by_id(user_id)
    assert user is not None
    return user


@pytest.fixture()
def test_user(user_repo: UserRepository) -> User:
    """Create and return a persisted test user."""
    return _create_user(user_repo, "alice1")


@pytest.fixture()
def other_user(user_repo: UserRepository) -> User:
    """Create and return a second persisted user."""
    return _create_user(user_repo, "bob2")


@pytest.fixture()
def make_post(post_repo: PostRepository) -> Callable[..., Post]:
    """Return a factory that stores a post and returns the ORM instance."""

    def _make_post(
        author: User,
        title: str = "Test post",
        content: str = "Test post content",
        created: datetime | None = None,
    ) -> Post:
        post_id = post_repo.create(
            title=title,
            content=content,
            author_id=author.id,
            created_date=isoformat_utc(created),
        )
        post = post_repo.get_by_id(post_id)
        assert post is not None
        return post

    return _make_post


@pytest.fixture()
def test_post(make_post: Callable[..., Post], test_user: User) -> Post:
    """Create a baseline post owned by the primary test user."""
    return make_post(test_user)


@pytest.fixture()
def login_as(client: TestClient) -> Callable[[User], None]:
    """Return a helper that gives ``client`` a valid session for a user."""

    def _login_as(user: User) -> None:
        client.cookies.set(settings.session_cookie_name, issue_token(user.id, user.username))

    return _login_as
