from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Annotated

from forum.database import get_db
from forum.auth.auth_service import get_current_user_id
from forum.schemas import group as group_schemas
from forum.services.group_service import GroupService

router = APIRouter(
    prefix="/groups",
    tags=["groups"],
)


def get_group_service(db: Session = Depends(get_db)) -> GroupService:
    return GroupService(db)


@router.get("/", response_model=List[group_schemas.GroupResponse])
def list_open_groups(
    current_user_id: Annotated[str, Depends(get_current_user_id)],
    service: GroupService = Depends(get_group_service)
):
    return service.list_open_groups(current_user_id)


@router.get("/mine", response_model=List[group_schemas.GroupResponse])
def list_my_groups(
    current_user_id: Annotated[str, Depends(get_current_user_id)],
    service: GroupService = Depends(get_group_service)
):
    return service.list_user_groups(current_user_id)


@router.get("/invitations", response_model=List[group_schemas.InvitationResponse])
def list_my_invitations(
    current_user_id: Annotated[str, Depends(get_current_user_id)],
    service: GroupService = Depends(get_group_service)
):
    return service.list_pending_invitations(current_user_id)


@router.put("/invitations/{invitation_id}", response_model=group_schemas.InvitationResponse)
def respond_to_invitation(
    invitation_id: str,
    action: group_schemas.InvitationAction,
    current_user_id: Annotated[str, Depends(get_current_user_id)],
    service: GroupService = Depends(get_group_service)
):
    return service.respond_to_invitation(invitation_id, current_user_id, action.accept)


@router.post("/", response_model=group_schemas.GroupResponse, status_code=status.HTTP_201_CREATED)
def create_group(
    payload: group_schemas.GroupCreate,
    current_user_id: Annotated[str, Depends(get_current_user_id)],
    service: GroupService = Depends(get_group_service)
):
    group = service.create_group(payload.name, payload.description, payload.access_type, current_user_id)
    return service.get_group(group.id, current_user_id)


@router.get("/{group_id}", response_model=group_schemas.GroupResponse)
def get_group(
    group_id: str,
    current_user_id: Annotated[str, Depends(get_current_user_id)],
    service: GroupService = Depends(get_group_service)
):
    return service.get_group(group_id, current_user_id)


@router.get("/{group_id}/members", response_model=List[group_schemas.GroupMemberResponse])
def list_members(
    group_id: str,
    current_user_id: Annotated[str, Depends(get_current_user_id)],
    service: GroupService = Depends(get_group_service)
):
    return service.list_members(group_id)


@router.post("/{group_id}/join", response_model=group_schemas.GroupMemberResponse, status_code=status.HTTP_201_CREATED)
def join_group(
    group_id: str,
    current_user_id: Annotated[str, Depends(get_current_user_id)],
    service: GroupService = Depends(get_group_service)
):
    return service.join_group(group_id, current_user_id)


@router.delete("/{group_id}/leave")
def leave_group(
    group_id: str,
    current_user_id: Annotated[str, Depends(get_current_user_id)],
    service: GroupService = Depends(get_group_service)
):
    service.leave_group(group_id, current_user_id)
    return {"message": "Successfully left group"}


@router.post("/{group_id}/invite", response_model=group_schemas.InvitationResponse, status_code=status.HTTP_201_CREATED)
def invite_to_group(
    group_id: str,
    payload: group_schemas.InvitationCreate,
    current_user_id: Annotated[str, Depends(get_current_user_id)],
    service: GroupService = Depends(get_group_service)
):
    return service.invite_to_group(group_id, current_user_id, payload.invitee_id)
