from sqlalchemy.orm import Session
from sqlalchemy import or_, and_
from forum import models
import uuid
from typing import List, Optional


def get_pending_request(db: Session, request_id: str) -> Optional[models.FriendRequest]:
    return db.query(models.FriendRequest).filter(
        models.FriendRequest.id == request_id,
        models.FriendRequest.status == "pending"
    ).first()


def get_any_between(db: Session, user_a: str, user_b: str) -> Optional[models.FriendRequest]:
    """Any request row between the two users, in either direction and with any status."""
    return db.query(models.FriendRequest).filter(
        or_(
            and_(models.FriendRequest.sender_id == user_a, models.FriendRequest.receiver_id == user_b),
            and_(models.FriendRequest.sender_id == user_b, models.FriendRequest.receiver_id == user_a)
        )
    ).first()


def has_pending_request(db: Session, sender_id: str, receiver_id: str) -> bool:
    pending = db.query(models.FriendRequest).filter(
        models.FriendRequest.sender_id == sender_id,
        models.FriendRequest.receiver_id == receiver_id,
        models.FriendRequest.status == "pending"
    ).first()
    return pending is not None


def create_request(db: Session, sender_id: str, receiver_id: str) -> models.FriendRequest:
    request = models.FriendRequest(
        id=str(uuid.uuid4()),
        sender_id=sender_id,
        receiver_id=receiver_id,
        status="pending"
    )
    db.add(request)
    return request


def get_received_requests(db: Session, user_id: str) -> List[models.FriendRequest]:
    return db.query(models.FriendRequest).filter(
        models.FriendRequest.receiver_id == user_id,
        models.FriendRequest.status == "pending"
    ).order_by(models.FriendRequest.created_at.desc()).all()


def get_sent_requests(db: Session, user_id: str) -> List[models.FriendRequest]:
    return db.query(models.FriendRequest).filter(
        models.FriendRequest.sender_id == user_id,
        models.FriendRequest.status == "pending"
    ).order_by(models.FriendRequest.created_at.desc()).all()
