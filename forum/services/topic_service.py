import logging
from typing import Dict, Optional

from sqlalchemy.orm import Session

from forum import models
from forum.crud import topic as crud_topic
from forum.database import unit_of_work
from forum.exceptions import ValidationError, NotFoundError

logger = logging.getLogger(__name__)


class TopicService:
    def __init__(self, db: Session):
        self.db = db

    def create_topic(
        self,
        title: str,
        description: Optional[str],
        created_by: str,
        is_public: bool = True,
        first_post_content: Optional[str] = None
    ) -> models.Topic:
        if not title or not title.strip() or not created_by:
            raise ValidationError("Title and creator are required.")

        with unit_of_work(self.db):
            topic = crud_topic.create_topic(self.db, title.strip(), description, created_by, is_public)
            if first_post_content and first_post_content.strip():
                crud_topic.create_post(self.db, topic.id, first_post_content, created_by)

        logger.info(f"Topic {topic.id} created by {created_by}")
        return topic

    def add_post(self, topic_id: str, content: str, created_by: str) -> models.Post:
        if not content or not content.strip() or not created_by:
            raise ValidationError("Post content and author are required.")
        if not crud_topic.get_topic(self.db, topic_id):
            raise NotFoundError("Topic not found.")

        with unit_of_work(self.db):
            post = crud_topic.create_post(self.db, topic_id, content, created_by)

        return post

    def get_topic(self, topic_id: str) -> Dict:
        topic = crud_topic.get_topic(self.db, topic_id)
        if not topic:
            raise NotFoundError("Topic not found.")
        return {"topic": topic, "posts": crud_topic.get_posts_for_topic(self.db, topic_id)}
