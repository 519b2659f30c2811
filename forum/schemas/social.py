from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import List, Literal


class FriendRequestCreate(BaseModel):
    target_user_id: str


class FriendRequestAction(BaseModel):
    decision: Literal["accept", "decline"]


class FriendRequestResponse(BaseModel):
    id: str
    sender_id: str
    receiver_id: str
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class FriendRequestList(BaseModel):
    received: List[FriendRequestResponse]
    sent: List[FriendRequestResponse]


class FriendUser(BaseModel):
    id: str
    username: str

    model_config = ConfigDict(from_attributes=True)


class RelationshipStatusResponse(BaseModel):
    user_id: str
    status: str
