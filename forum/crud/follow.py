from sqlalchemy.orm import Session
from forum import models
import uuid
from typing import List, Optional


def get_topic_follow(db: Session, follower_id: str, topic_id: str) -> Optional[models.Follow]:
    return db.query(models.Follow).filter(
        models.Follow.follower_id == follower_id,
        models.Follow.topic_id == topic_id
    ).first()


def get_user_follow(db: Session, follower_id: str, following_id: str) -> Optional[models.Follow]:
    return db.query(models.Follow).filter(
        models.Follow.follower_id == follower_id,
        models.Follow.following_id == following_id
    ).first()


def create_follow(
    db: Session,
    follower_id: str,
    following_id: Optional[str] = None,
    topic_id: Optional[str] = None
) -> models.Follow:
    """A follow targets exactly one of a user or a topic."""
    if (following_id is None) == (topic_id is None):
        raise ValueError("A follow needs exactly one of following_id or topic_id.")

    follow = models.Follow(
        id=str(uuid.uuid4()),
        follower_id=follower_id,
        following_id=following_id,
        topic_id=topic_id
    )
    db.add(follow)
    return follow


def delete_topic_follow(db: Session, follower_id: str, topic_id: str) -> int:
    return db.query(models.Follow).filter(
        models.Follow.follower_id == follower_id,
        models.Follow.topic_id == topic_id
    ).delete(synchronize_session=False)


def delete_user_follow(db: Session, follower_id: str, following_id: str) -> int:
    return db.query(models.Follow).filter(
        models.Follow.follower_id == follower_id,
        models.Follow.following_id == following_id
    ).delete(synchronize_session=False)


def get_followed_topic_ids(db: Session, follower_id: str) -> List[str]:
    rows = db.query(models.Follow.topic_id).filter(
        models.Follow.follower_id == follower_id,
        models.Follow.topic_id.isnot(None)
    ).all()
    return [r[0] for r in rows]


def get_followed_user_ids(db: Session, follower_id: str) -> List[str]:
    rows = db.query(models.Follow.following_id).filter(
        models.Follow.follower_id == follower_id,
        models.Follow.following_id.isnot(None)
    ).all()
    return [r[0] for r in rows]
