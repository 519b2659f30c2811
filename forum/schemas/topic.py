from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import List, Optional


class TopicCreate(BaseModel):
    title: str
    description: Optional[str] = None
    is_public: bool = True
    first_post_content: Optional[str] = None


class PostCreate(BaseModel):
    content: str


class PostResponse(BaseModel):
    id: str
    topic_id: str
    content: str
    created_by: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TopicResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    created_by: str
    is_public: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TopicDetail(TopicResponse):
    posts: List[PostResponse] = []


class FollowResponse(BaseModel):
    id: str
    follower_id: str
    following_id: Optional[str] = None
    topic_id: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
