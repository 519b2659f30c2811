from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Annotated

from forum.database import get_db
from forum.auth.auth_service import get_current_user_id
from forum.schemas import topic as topic_schemas
from forum.services.follow_service import FollowService
from forum.services.topic_service import TopicService

router = APIRouter(
    prefix="/topics",
    tags=["topics"],
)


def get_topic_service(db: Session = Depends(get_db)) -> TopicService:
    return TopicService(db)


def get_follow_service(db: Session = Depends(get_db)) -> FollowService:
    return FollowService(db)


@router.get("/followed", response_model=List[topic_schemas.TopicResponse])
def list_followed_topics(
    current_user_id: Annotated[str, Depends(get_current_user_id)],
    service: FollowService = Depends(get_follow_service)
):
    return service.list_followed_topics(current_user_id)


@router.post("/", response_model=topic_schemas.TopicResponse, status_code=status.HTTP_201_CREATED)
def create_topic(
    payload: topic_schemas.TopicCreate,
    current_user_id: Annotated[str, Depends(get_current_user_id)],
    service: TopicService = Depends(get_topic_service)
):
    return service.create_topic(
        payload.title, payload.description, current_user_id,
        is_public=payload.is_public, first_post_content=payload.first_post_content
    )


@router.get("/{topic_id}", response_model=topic_schemas.TopicDetail)
def get_topic(
    topic_id: str,
    current_user_id: Annotated[str, Depends(get_current_user_id)],
    service: TopicService = Depends(get_topic_service)
):
    result = service.get_topic(topic_id)
    detail = topic_schemas.TopicDetail.model_validate(result["topic"])
    detail.posts = [topic_schemas.PostResponse.model_validate(p) for p in result["posts"]]
    return detail


@router.post("/{topic_id}/posts", response_model=topic_schemas.PostResponse, status_code=status.HTTP_201_CREATED)
def add_post(
    topic_id: str,
    payload: topic_schemas.PostCreate,
    current_user_id: Annotated[str, Depends(get_current_user_id)],
    service: TopicService = Depends(get_topic_service)
):
    return service.add_post(topic_id, payload.content, current_user_id)


@router.post("/{topic_id}/follow", response_model=topic_schemas.FollowResponse)
def follow_topic(
    topic_id: str,
    current_user_id: Annotated[str, Depends(get_current_user_id)],
    service: FollowService = Depends(get_follow_service)
):
    return service.follow_topic(current_user_id, topic_id)


@router.delete("/{topic_id}/follow")
def unfollow_topic(
    topic_id: str,
    current_user_id: Annotated[str, Depends(get_current_user_id)],
    service: FollowService = Depends(get_follow_service)
):
    service.unfollow_topic(current_user_id, topic_id)
    return {"message": "Topic unfollowed"}


@router.post("/users/{user_id}/follow", response_model=topic_schemas.FollowResponse)
def follow_user(
    user_id: str,
    current_user_id: Annotated[str, Depends(get_current_user_id)],
    service: FollowService = Depends(get_follow_service)
):
    return service.follow_user(current_user_id, user_id)


@router.delete("/users/{user_id}/follow")
def unfollow_user(
    user_id: str,
    current_user_id: Annotated[str, Depends(get_current_user_id)],
    service: FollowService = Depends(get_follow_service)
):
    service.unfollow_user(current_user_id, user_id)
    return {"message": "User unfollowed"}
