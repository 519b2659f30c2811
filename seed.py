# seed.py
from sqlalchemy.orm import Session
from forum.database import SessionLocal, engine
from forum import models
from forum.crud import user as crud_user
from forum.crud import profile as crud_profile
from forum.services.relationship_service import RelationshipService
from forum.services.follow_service import FollowService
from forum.services.topic_service import TopicService
from forum.exceptions import ForumError
import logging

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

USER_DATA = [
    {"id": "seed-john", "username": "john_doe", "interests": ["chess", "hiking"]},
    {"id": "seed-jane", "username": "jane_smith", "interests": ["cooking"]},
    {"id": "seed-bob", "username": "bob_wilson", "interests": []},
    {"id": "seed-alice", "username": "alice_brown", "interests": ["chess"]},
]

FRIEND_PAIRS = [
    ("seed-john", "seed-jane"),
    ("seed-john", "seed-bob"),
]

TOPIC_DATA = [
    {"title": "Chess Club", "created_by": "seed-jane", "first_post": "Anyone for chess tonight?"},
    {"title": "Weekend Hikes", "created_by": "seed-bob", "first_post": "Planning a hike on Saturday."},
    {"title": "Recipes", "created_by": "seed-alice", "first_post": "Share your favourite soup."},
]


def seed_data(db: Session):
    logger.info("Seeding users...")
    existing_ids = {u.id for u in db.query(models.User).all()}
    for user_data in USER_DATA:
        if user_data["id"] in existing_ids:
            logger.info(f"Skipped User (already exists): {user_data['username']}")
            continue
        crud_user.create_user(db, user_data["id"], user_data["username"])
        crud_profile.set_interests(db, user_data["id"], user_data["interests"])
        db.commit()
        logger.info(f"Added User: {user_data['username']}")

    relationships = RelationshipService(db)
    for sender_id, receiver_id in FRIEND_PAIRS:
        try:
            request = relationships.send_friend_request(sender_id, receiver_id)
            relationships.respond_to_friend_request(request.id, receiver_id, "accept")
            logger.info(f"Befriended {sender_id} and {receiver_id}")
        except ForumError as e:
            logger.info(f"Skipped friendship {sender_id} -> {receiver_id}: {e.message}")

    topics = TopicService(db)
    follows = FollowService(db)
    if db.query(models.Topic).count() == 0:
        for topic_data in TOPIC_DATA:
            topic = topics.create_topic(
                topic_data["title"], None, topic_data["created_by"],
                first_post_content=topic_data["first_post"]
            )
            follows.follow_topic("seed-alice", topic.id)
            logger.info(f"Added Topic: {topic_data['title']}")
    else:
        logger.info("Skipped Topics (already seeded)")

    logger.info("Seeding complete.")

if __name__ == "__main__":
    logger.info("Creating tables if they don't exist.")
    models.Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        seed_data(db)
    except Exception as e:
        logger.error(f"An error occurred during seeding: {e}")
    finally:
        db.close()
        logger.info("Database session closed.")
