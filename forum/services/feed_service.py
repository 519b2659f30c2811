import logging
from typing import Iterable, List, Optional, Set

from sqlalchemy.orm import Session

from forum.crud import follow as crud_follow
from forum.crud import friendship as crud_friendship
from forum.crud import profile as crud_profile
from forum.crud import topic as crud_topic
from forum.schemas.feed import FeedPost

logger = logging.getLogger(__name__)

# --- CONFIGURATION ---
FEED_PAGE_SIZE = 50
FRIEND_SCORE = 100
FOLLOWED_TOPIC_SCORE = 80
INTEREST_BONUS = 20
# Candidates considered for ranking, taken by base score and then recency.
FEED_CANDIDATE_WINDOW = 500


def base_score(author_id: str, topic_id: str, friend_ids: Set[str], topic_ids: Set[str]) -> int:
    """
    Strongest signal wins. A friend's post inside a followed topic scores the
    friend weight, not the sum of both.
    """
    scores = [0]
    if author_id in friend_ids:
        scores.append(FRIEND_SCORE)
    if topic_id in topic_ids:
        scores.append(FOLLOWED_TOPIC_SCORE)
    return max(scores)


def normalize_interests(interests: Iterable[str]) -> List[str]:
    seen = []
    for interest in interests or []:
        if not interest:
            continue
        key = interest.strip().lower()
        if key and key not in seen:
            seen.append(key)
    return seen


def interest_bonus(content: Optional[str], topic_title: Optional[str], interests: List[str]) -> int:
    """
    Each interest adds INTEREST_BONUS for a match in the post content and again
    for a match in the topic title. Expects interests from normalize_interests.
    """
    content = (content or "").lower()
    topic_title = (topic_title or "").lower()

    bonus = 0
    for interest in interests:
        if interest in content:
            bonus += INTEREST_BONUS
        if interest in topic_title:
            bonus += INTEREST_BONUS
    return bonus


class FeedService:
    """Read-only ranking over friendships, topic follows and profile interests."""

    def __init__(self, db: Session):
        self.db = db

    def get_feed(self, user_id: str, interests: Optional[List[str]] = None, limit: int = FEED_PAGE_SIZE) -> List[FeedPost]:
        if interests is None:
            interests = crud_profile.get_interests(self.db, user_id)
        interests = normalize_interests(interests)

        friend_ids = set(crud_friendship.get_friend_ids(self.db, user_id))
        topic_ids = set(crud_follow.get_followed_topic_ids(self.db, user_id))

        # No snapshot is held across these reads; rows added in between are simply
        # ranked or missed on this call.
        rows = crud_topic.get_feed_candidates(
            self.db, user_id, list(friend_ids), list(topic_ids), FEED_CANDIDATE_WINDOW,
            FRIEND_SCORE, FOLLOWED_TOPIC_SCORE
        )

        ranked = {}
        for post, topic_title, author_username in rows:
            if post.id in ranked:
                continue
            score = base_score(post.created_by, post.topic_id, friend_ids, topic_ids)
            score += interest_bonus(post.content, topic_title, interests)
            ranked[post.id] = FeedPost(
                post_id=post.id,
                topic_id=post.topic_id,
                topic_title=topic_title,
                content=post.content,
                poster_id=post.created_by,
                author_username=author_username,
                created_at=post.created_at,
                updated_at=post.updated_at,
                relevance_score=score,
            )

        # Stable sorts: id, then recency, then score gives score desc, created_at desc, id asc
        items = sorted(ranked.values(), key=lambda item: item.post_id)
        items.sort(key=lambda item: item.created_at, reverse=True)
        items.sort(key=lambda item: item.relevance_score, reverse=True)

        logger.info(
            f"Feed for {user_id}: {len(items)} candidates from {len(friend_ids)} friends "
            f"and {len(topic_ids)} followed topics"
        )
        return items[:limit]
