import logging
from typing import List

from sqlalchemy.orm import Session

from forum import models
from forum.crud import follow as crud_follow
from forum.crud import topic as crud_topic
from forum.database import unit_of_work
from forum.exceptions import ValidationError, ConflictError, NotFoundError

logger = logging.getLogger(__name__)


class FollowService:
    """User -> topic and user -> user follow edges."""

    def __init__(self, db: Session):
        self.db = db

    def follow_topic(self, user_id: str, topic_id: str) -> models.Follow:
        """Idempotent: following an already followed topic returns the existing edge."""
        if not crud_topic.get_topic(self.db, topic_id):
            raise NotFoundError("Topic not found.")

        existing = crud_follow.get_topic_follow(self.db, user_id, topic_id)
        if existing:
            return existing

        try:
            with unit_of_work(self.db):
                follow = crud_follow.create_follow(self.db, user_id, topic_id=topic_id)
        except ConflictError:
            # Lost a race with a concurrent follow; the unique constraint kept one row.
            winner = crud_follow.get_topic_follow(self.db, user_id, topic_id)
            if winner is None:
                raise
            return winner

        logger.info(f"User {user_id} followed topic {topic_id}")
        return follow

    def unfollow_topic(self, user_id: str, topic_id: str):
        with unit_of_work(self.db):
            removed = crud_follow.delete_topic_follow(self.db, user_id, topic_id)

        if not removed:
            raise NotFoundError("You are not following this topic.")
        logger.info(f"User {user_id} unfollowed topic {topic_id}")

    def list_followed_topics(self, user_id: str) -> List[models.Topic]:
        return crud_topic.get_followed_topics_by_activity(self.db, user_id)

    def follow_user(self, follower_id: str, following_id: str) -> models.Follow:
        if not follower_id or not following_id:
            raise ValidationError("Follower and followed user are required.")
        if follower_id == following_id:
            raise ValidationError("You cannot follow yourself.")

        existing = crud_follow.get_user_follow(self.db, follower_id, following_id)
        if existing:
            return existing

        try:
            with unit_of_work(self.db):
                follow = crud_follow.create_follow(self.db, follower_id, following_id=following_id)
        except ConflictError:
            winner = crud_follow.get_user_follow(self.db, follower_id, following_id)
            if winner is None:
                raise
            return winner

        logger.info(f"User {follower_id} followed user {following_id}")
        return follow

    def unfollow_user(self, follower_id: str, following_id: str):
        with unit_of_work(self.db):
            removed = crud_follow.delete_user_follow(self.db, follower_id, following_id)

        if not removed:
            raise NotFoundError("You are not following this user.")
        logger.info(f"User {follower_id} unfollowed user {following_id}")

    def list_followed_user_ids(self, user_id: str) -> List[str]:
        return crud_follow.get_followed_user_ids(self.db, user_id)
