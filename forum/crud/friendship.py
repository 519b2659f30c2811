from sqlalchemy.orm import Session
from sqlalchemy import or_, and_
from forum import models
from . import utils as crud_utils
import uuid
import datetime
from typing import List


def friendship_exists(db: Session, user_a: str, user_b: str) -> bool:
    friendship = db.query(models.Friendship).filter(
        or_(
            and_(models.Friendship.user_id == user_a, models.Friendship.friend_id == user_b),
            and_(models.Friendship.user_id == user_b, models.Friendship.friend_id == user_a)
        )
    ).first()
    return friendship is not None


def add_friendship_pair(db: Session, user_a: str, user_b: str) -> int:
    """
    Writes both directions of the friendship. Directions that already exist are
    skipped, so two concurrent accepts both succeed and leave one pair.
    """
    now = datetime.datetime.utcnow()
    rows = [
        {"id": str(uuid.uuid4()), "user_id": user_a, "friend_id": user_b, "status": "accepted", "created_at": now},
        {"id": str(uuid.uuid4()), "user_id": user_b, "friend_id": user_a, "status": "accepted", "created_at": now},
    ]
    return crud_utils.insert_or_ignore(db, models.Friendship, rows)


def delete_friendship_pair(db: Session, user_a: str, user_b: str) -> int:
    return db.query(models.Friendship).filter(
        or_(
            and_(models.Friendship.user_id == user_a, models.Friendship.friend_id == user_b),
            and_(models.Friendship.user_id == user_b, models.Friendship.friend_id == user_a)
        )
    ).delete(synchronize_session=False)


def get_friend_ids(db: Session, user_id: str) -> List[str]:
    # Both directions are read so a half-written pair still counts.
    rows = db.query(models.Friendship.user_id, models.Friendship.friend_id).filter(
        or_(models.Friendship.user_id == user_id, models.Friendship.friend_id == user_id),
        models.Friendship.status == "accepted"
    ).all()

    friend_ids = set()
    for owner_id, friend_id in rows:
        friend_ids.add(friend_id if owner_id == user_id else owner_id)
    friend_ids.discard(user_id)
    return sorted(friend_ids)


def get_friends(db: Session, user_id: str) -> List[models.User]:
    friend_ids = get_friend_ids(db, user_id)
    if not friend_ids:
        return []
    return db.query(models.User).filter(
        models.User.id.in_(friend_ids)
    ).order_by(models.User.username).all()
