from sqlalchemy.orm import Session
from forum import models


def create_user(db: Session, id: str, username: str) -> models.User:
    """Mirror of an externally owned identity, used by seeding and tests."""
    db_user = models.User(id=id, username=username)
    db.add(db_user)
    return db_user
