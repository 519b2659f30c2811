from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Annotated

from forum.database import get_db
from forum.auth.auth_service import get_current_user_id
from forum.schemas.feed import FeedPost
from forum.services.feed_service import FeedService

router = APIRouter(
    prefix="/feed",
    tags=["feed"],
)


def get_feed_service(db: Session = Depends(get_db)) -> FeedService:
    return FeedService(db)


@router.get("/", response_model=List[FeedPost])
def get_feed(
    current_user_id: Annotated[str, Depends(get_current_user_id)],
    service: FeedService = Depends(get_feed_service)
):
    return service.get_feed(current_user_id)
