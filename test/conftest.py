import datetime
import pytest
from unittest.mock import MagicMock
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool
from forum import models
from forum.database import Base


@pytest.fixture
def mock_db():
    """
    Creates a mock database session.
    This allows us to test CRUD functions without a running database.
    """
    session = MagicMock(spec=Session)
    return session


@pytest.fixture
def db():
    """
    Real session on a private in-memory SQLite database, for tests that depend
    on constraints and rollbacks actually happening.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def make_user(db):
    def _make(user_id, interests=None):
        user = models.User(id=user_id, username=f"{user_id}_name")
        db.add(user)
        if interests is not None:
            db.add(models.Profile(user_id=user_id, interests=interests, hobbies=[]))
        db.commit()
        return user
    return _make


@pytest.fixture
def make_topic(db):
    def _make(topic_id, title="General", created_by="owner", is_public=True, created_at=None):
        topic = models.Topic(
            id=topic_id,
            title=title,
            created_by=created_by,
            is_public=is_public,
            created_at=created_at or datetime.datetime(2024, 1, 1),
        )
        db.add(topic)
        db.commit()
        return topic
    return _make


@pytest.fixture
def make_post(db):
    def _make(post_id, topic_id, created_by, content="hello", created_at=None):
        post = models.Post(
            id=post_id,
            topic_id=topic_id,
            created_by=created_by,
            content=content,
            created_at=created_at or datetime.datetime(2024, 1, 1),
        )
        db.add(post)
        db.commit()
        return post
    return _make


@pytest.fixture
def befriend(db):
    """Writes a symmetric friendship pair directly."""
    def _make(user_a, user_b):
        db.add(models.Friendship(id=f"{user_a}-{user_b}", user_id=user_a, friend_id=user_b))
        db.add(models.Friendship(id=f"{user_b}-{user_a}", user_id=user_b, friend_id=user_a))
        db.commit()
    return _make
