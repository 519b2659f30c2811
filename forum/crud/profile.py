from sqlalchemy.orm import Session
from forum import models
import json
from typing import List, Optional


def _decode_string_list(value) -> List[str]:
    """JSON columns may come back as a list or, from older rows, as encoded text."""
    if not value:
        return []
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            return []
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v is not None]


def get_profile(db: Session, user_id: str) -> Optional[models.Profile]:
    return db.query(models.Profile).filter(models.Profile.user_id == user_id).first()


def get_interests(db: Session, user_id: str) -> List[str]:
    profile = get_profile(db, user_id)
    if not profile:
        return []
    return _decode_string_list(profile.interests)


def set_interests(db: Session, user_id: str, interests: List[str]) -> models.Profile:
    profile = get_profile(db, user_id)
    if not profile:
        profile = models.Profile(user_id=user_id, interests=[], hobbies=[])
        db.add(profile)
    profile.interests = [i for i in interests if i and i.strip()]
    return profile
