import pytest
from forum import models
from forum.crud import follow as crud_follow


def test_create_topic_follow(mock_db):
    follow = crud_follow.create_follow(mock_db, "u1", topic_id="t1")

    assert follow.topic_id == "t1"
    assert follow.following_id is None
    mock_db.add.assert_called_once_with(follow)
    mock_db.commit.assert_not_called()


def test_create_user_follow(mock_db):
    follow = crud_follow.create_follow(mock_db, "u1", following_id="u2")

    assert follow.following_id == "u2"
    assert follow.topic_id is None


def test_create_follow_with_both_targets(mock_db):
    with pytest.raises(ValueError, match="exactly one"):
        crud_follow.create_follow(mock_db, "u1", following_id="u2", topic_id="t1")
    mock_db.add.assert_not_called()


def test_create_follow_with_no_target(mock_db):
    with pytest.raises(ValueError):
        crud_follow.create_follow(mock_db, "u1")


def test_get_followed_topic_ids(mock_db):
    mock_db.query.return_value.filter.return_value.all.return_value = [("t1",), ("t2",)]

    assert crud_follow.get_followed_topic_ids(mock_db, "u1") == ["t1", "t2"]


def test_delete_topic_follow_returns_count(mock_db):
    mock_db.query.return_value.filter.return_value.delete.return_value = 1

    assert crud_follow.delete_topic_follow(mock_db, "u1", "t1") == 1
