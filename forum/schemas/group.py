from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Literal, Optional


class GroupCreate(BaseModel):
    name: str
    description: str
    access_type: Literal["open", "invitation"] = "open"


class GroupResponse(BaseModel):
    id: str
    name: str
    description: str
    access_type: str
    created_by: str
    created_at: datetime
    member_count: int = 0
    is_member: Optional[bool] = None
    user_role: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class GroupMemberResponse(BaseModel):
    group_id: str
    user_id: str
    role: str
    joined_at: datetime

    model_config = ConfigDict(from_attributes=True)


class InvitationCreate(BaseModel):
    invitee_id: str


class InvitationAction(BaseModel):
    accept: bool


class InvitationResponse(BaseModel):
    id: str
    group_id: str
    inviter_id: str
    invitee_id: str
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
