from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Annotated

from forum.database import get_db
from forum.auth.auth_service import get_current_user_id
from forum.schemas import social as social_schemas
from forum.services.relationship_service import RelationshipService

router = APIRouter(
    prefix="/friends",
    tags=["friends"],
)


def get_relationship_service(db: Session = Depends(get_db)) -> RelationshipService:
    return RelationshipService(db)


@router.get("/", response_model=List[social_schemas.FriendUser])
def get_my_friends(
    current_user_id: Annotated[str, Depends(get_current_user_id)],
    service: RelationshipService = Depends(get_relationship_service)
):
    return service.list_friends(current_user_id)


@router.get("/requests", response_model=social_schemas.FriendRequestList)
def get_friend_requests(
    current_user_id: Annotated[str, Depends(get_current_user_id)],
    service: RelationshipService = Depends(get_relationship_service)
):
    return service.list_friend_requests(current_user_id)


@router.post("/request", response_model=social_schemas.FriendRequestResponse, status_code=status.HTTP_201_CREATED)
def send_friend_request(
    request: social_schemas.FriendRequestCreate,
    current_user_id: Annotated[str, Depends(get_current_user_id)],
    service: RelationshipService = Depends(get_relationship_service)
):
    return service.send_friend_request(current_user_id, request.target_user_id)


@router.put("/request/{request_id}", response_model=social_schemas.FriendRequestResponse)
def respond_to_friend_request(
    request_id: str,
    action: social_schemas.FriendRequestAction,
    current_user_id: Annotated[str, Depends(get_current_user_id)],
    service: RelationshipService = Depends(get_relationship_service)
):
    return service.respond_to_friend_request(request_id, current_user_id, action.decision)


@router.get("/status/{user_id}", response_model=social_schemas.RelationshipStatusResponse)
def get_relationship_status(
    user_id: str,
    current_user_id: Annotated[str, Depends(get_current_user_id)],
    service: RelationshipService = Depends(get_relationship_service)
):
    relationship = service.get_relationship_status(current_user_id, user_id)
    return {"user_id": user_id, "status": relationship.value}


@router.delete("/{friend_id}")
def remove_friend(
    friend_id: str,
    current_user_id: Annotated[str, Depends(get_current_user_id)],
    service: RelationshipService = Depends(get_relationship_service)
):
    service.remove_friend(current_user_id, friend_id)
    return {"message": "Friend removed."}
