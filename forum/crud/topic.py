from sqlalchemy.orm import Session
from sqlalchemy import or_, and_, func, case
from forum import models
import uuid
from typing import List, Optional


def get_topic(db: Session, topic_id: str) -> Optional[models.Topic]:
    return db.query(models.Topic).filter(models.Topic.id == topic_id).first()


def create_topic(db: Session, title: str, description: Optional[str], created_by: str, is_public: bool = True) -> models.Topic:
    topic = models.Topic(
        id=str(uuid.uuid4()),
        title=title,
        description=description,
        created_by=created_by,
        is_public=is_public
    )
    db.add(topic)
    return topic


def create_post(db: Session, topic_id: str, content: str, created_by: str) -> models.Post:
    post = models.Post(
        id=str(uuid.uuid4()),
        topic_id=topic_id,
        content=content,
        created_by=created_by
    )
    db.add(post)
    return post


def get_posts_for_topic(db: Session, topic_id: str) -> List[models.Post]:
    return db.query(models.Post).filter(
        models.Post.topic_id == topic_id
    ).order_by(models.Post.created_at.asc()).all()


def get_followed_topics_by_activity(db: Session, user_id: str) -> List[models.Topic]:
    """Topics the user follows, most recent post activity first."""
    last_post = db.query(
        models.Post.topic_id.label("topic_id"),
        func.max(models.Post.created_at).label("last_post_at")
    ).group_by(models.Post.topic_id).subquery()

    last_activity = func.coalesce(last_post.c.last_post_at, models.Topic.created_at)

    return db.query(models.Topic).join(
        models.Follow, models.Follow.topic_id == models.Topic.id
    ).outerjoin(
        last_post, last_post.c.topic_id == models.Topic.id
    ).filter(
        models.Follow.follower_id == user_id
    ).order_by(last_activity.desc(), models.Topic.id).all()


def get_feed_candidates(
    db: Session,
    user_id: str,
    friend_ids: List[str],
    topic_ids: List[str],
    limit: int,
    friend_score: int,
    topic_score: int
) -> List[tuple]:
    """
    (post, topic_title, author_username) rows for posts by friends, posts in
    followed topics and the user's own posts in public topics.

    Rows come strongest base score first, then newest first, so the limit cuts
    the weakest and oldest candidates.
    """
    base_score = case(
        (models.Post.created_by.in_(friend_ids), friend_score),
        (models.Post.topic_id.in_(topic_ids), topic_score),
        else_=0
    )
    return db.query(models.Post, models.Topic.title, models.User.username).join(
        models.Topic, models.Post.topic_id == models.Topic.id
    ).outerjoin(
        models.User, models.Post.created_by == models.User.id
    ).filter(
        or_(
            models.Post.created_by.in_(friend_ids),
            models.Post.topic_id.in_(topic_ids),
            and_(models.Topic.is_public.is_(True), models.Post.created_by == user_id)
        )
    ).order_by(base_score.desc(), models.Post.created_at.desc()).limit(limit).all()
