import datetime
import pytest
from unittest.mock import patch
from sqlalchemy.exc import IntegrityError
from forum import models
from forum.exceptions import ValidationError, ConflictError, NotFoundError
from forum.services.follow_service import FollowService


@pytest.fixture
def service(db, make_user, make_topic):
    make_user("alice")
    make_user("bob")
    make_topic("t1", title="Chess")
    return FollowService(db)


def test_follow_topic_is_idempotent(db, service):
    first = service.follow_topic("alice", "t1")
    second = service.follow_topic("alice", "t1")

    assert first.id == second.id
    assert db.query(models.Follow).filter_by(follower_id="alice", topic_id="t1").count() == 1


def test_follow_topic_survives_lost_race(db, service):
    """The existence check missed a concurrent insert; the unique constraint catches it."""
    winner = models.Follow(id="winner", follower_id="alice", topic_id="t1")
    db.add(winner)
    db.commit()

    with patch(
        "forum.services.follow_service.crud_follow.get_topic_follow",
        side_effect=[None, winner],
    ):
        result = service.follow_topic("alice", "t1")

    assert result.id == "winner"
    assert db.query(models.Follow).count() == 1


def test_follow_topic_conflict_without_existing_row_propagates(db, service):
    """A conflict that left no follow behind is not a lost race."""
    with patch(
        "forum.services.follow_service.crud_follow.create_follow",
        side_effect=ConflictError("The change conflicts with existing data."),
    ):
        with pytest.raises(ConflictError):
            service.follow_topic("alice", "t1")

    assert db.query(models.Follow).count() == 0


def test_follow_user_conflict_without_existing_row_propagates(db, service):
    with patch(
        "forum.services.follow_service.crud_follow.create_follow",
        side_effect=ConflictError("The change conflicts with existing data."),
    ):
        with pytest.raises(ConflictError):
            service.follow_user("alice", "bob")

    assert service.list_followed_user_ids("alice") == []


def test_follow_missing_topic(service):
    with pytest.raises(NotFoundError):
        service.follow_topic("alice", "nope")


def test_unfollow_topic(db, service):
    service.follow_topic("alice", "t1")

    service.unfollow_topic("alice", "t1")

    assert db.query(models.Follow).count() == 0


def test_unfollow_topic_not_followed(service):
    with pytest.raises(NotFoundError):
        service.unfollow_topic("alice", "t1")


def test_follow_user_and_exclusivity(db, service):
    service.follow_user("alice", "bob")
    service.follow_user("alice", "bob")
    service.follow_topic("alice", "t1")

    follows = db.query(models.Follow).all()
    assert len(follows) == 2
    for follow in follows:
        assert (follow.following_id is None) != (follow.topic_id is None)
    assert service.list_followed_user_ids("alice") == ["bob"]


def test_follow_self_rejected(service):
    with pytest.raises(ValidationError):
        service.follow_user("alice", "alice")


def test_unfollow_user(db, service):
    service.follow_user("alice", "bob")

    service.unfollow_user("alice", "bob")

    assert service.list_followed_user_ids("alice") == []
    with pytest.raises(NotFoundError):
        service.unfollow_user("alice", "bob")


def test_store_rejects_follow_with_both_targets(db, service):
    db.add(models.Follow(id="bad", follower_id="alice", following_id="bob", topic_id="t1"))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_store_rejects_follow_with_no_target(db, service):
    db.add(models.Follow(id="bad", follower_id="alice"))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_list_followed_topics_by_recent_activity(db, service, make_topic, make_post):
    make_topic("t2", title="Go")
    make_topic("t3", title="Quiet", created_at=datetime.datetime(2023, 6, 1))
    make_post("p1", "t1", "bob", created_at=datetime.datetime(2024, 2, 1))
    make_post("p2", "t2", "bob", created_at=datetime.datetime(2024, 3, 1))
    make_post("p3", "t1", "bob", created_at=datetime.datetime(2024, 1, 5))
    for topic_id in ("t1", "t2", "t3"):
        service.follow_topic("alice", topic_id)

    topics = service.list_followed_topics("alice")

    assert [t.id for t in topics] == ["t2", "t1", "t3"]


def test_list_followed_topics_only_own_follows(service, make_topic):
    make_topic("t2", title="Go")
    service.follow_topic("bob", "t2")

    assert service.list_followed_topics("alice") == []
