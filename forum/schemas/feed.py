from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class FeedPost(BaseModel):
    post_id: str
    topic_id: str
    topic_title: Optional[str] = None
    content: str
    poster_id: str
    author_username: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    relevance_score: int
