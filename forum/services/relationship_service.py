import logging
from enum import Enum
from typing import Dict, List

from sqlalchemy.orm import Session

from forum import models
from forum.crud import friend_request as crud_request
from forum.crud import friendship as crud_friendship
from forum.database import unit_of_work
from forum.exceptions import ValidationError, ConflictError, NotFoundError

logger = logging.getLogger(__name__)


class RelationshipStatus(str, Enum):
    NONE = "none"
    FRIENDS = "friends"
    REQUEST_SENT = "request_sent"
    REQUEST_RECEIVED = "request_received"


FRIEND_REQUEST_DECISIONS = {"accept": "accepted", "decline": "declined"}


class RelationshipService:
    """Friend requests and symmetric friendships."""

    def __init__(self, db: Session):
        self.db = db

    def send_friend_request(self, sender_id: str, receiver_id: str) -> models.FriendRequest:
        if not sender_id or not receiver_id:
            raise ValidationError("Sender and receiver are required.")
        if sender_id == receiver_id:
            raise ValidationError("You cannot send a friend request to yourself.")

        if crud_request.get_any_between(self.db, sender_id, receiver_id):
            raise ConflictError("A friend request already exists between these users.")
        if crud_friendship.friendship_exists(self.db, sender_id, receiver_id):
            raise ConflictError("You are already friends.")

        with unit_of_work(self.db):
            request = crud_request.create_request(self.db, sender_id, receiver_id)

        logger.info(f"Friend request {request.id} sent from {sender_id} to {receiver_id}")
        return request

    def respond_to_friend_request(self, request_id: str, responder_id: str, decision: str) -> models.FriendRequest:
        if decision not in FRIEND_REQUEST_DECISIONS:
            raise ValidationError("Decision must be 'accept' or 'decline'.")

        request = crud_request.get_pending_request(self.db, request_id)
        # Requests addressed to someone else are reported exactly like missing ones
        if not request or request.receiver_id != responder_id:
            raise NotFoundError("Friend request not found or already processed.")

        with unit_of_work(self.db):
            request.status = FRIEND_REQUEST_DECISIONS[decision]
            if decision == "accept":
                crud_friendship.add_friendship_pair(self.db, request.sender_id, request.receiver_id)

        logger.info(f"Friend request {request_id} {request.status} by {responder_id}")
        return request

    def remove_friend(self, user_id: str, friend_id: str) -> int:
        """Deletes both directions of the friendship. Removing a non-friend is a no-op."""
        with unit_of_work(self.db):
            removed = crud_friendship.delete_friendship_pair(self.db, user_id, friend_id)

        if removed:
            logger.info(f"Friendship between {user_id} and {friend_id} removed")
        return removed

    def get_relationship_status(self, user_a: str, user_b: str) -> RelationshipStatus:
        # Friendship wins over any stale pending request that predates it
        if crud_friendship.friendship_exists(self.db, user_a, user_b):
            return RelationshipStatus.FRIENDS
        if crud_request.has_pending_request(self.db, user_a, user_b):
            return RelationshipStatus.REQUEST_SENT
        if crud_request.has_pending_request(self.db, user_b, user_a):
            return RelationshipStatus.REQUEST_RECEIVED
        return RelationshipStatus.NONE

    def list_friends(self, user_id: str) -> List[models.User]:
        return crud_friendship.get_friends(self.db, user_id)

    def list_friend_requests(self, user_id: str) -> Dict[str, List[models.FriendRequest]]:
        return {
            "received": crud_request.get_received_requests(self.db, user_id),
            "sent": crud_request.get_sent_requests(self.db, user_id),
        }
