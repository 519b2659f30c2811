# forum/models.py
import datetime
from sqlalchemy import (
    Column, String, DateTime, Boolean, ForeignKey, Text, JSON,
    UniqueConstraint, CheckConstraint, Index, text,
)
from sqlalchemy.orm import relationship
from .database import Base


class User(Base):
    __tablename__ = 'users'

    id = Column(String, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)

    profile = relationship("Profile", back_populates="user", uselist=False)


class Profile(Base):
    __tablename__ = 'profiles'

    user_id = Column(String, ForeignKey('users.id'), primary_key=True)
    # JSON arrays of strings, decoded into lists by crud.profile
    interests = Column(JSON, default=list, nullable=True)
    hobbies = Column(JSON, default=list, nullable=True)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)

    user = relationship("User", back_populates="profile")


class FriendRequest(Base):
    __tablename__ = 'friend_requests'

    id = Column(String, primary_key=True, index=True)
    sender_id = Column(String, ForeignKey('users.id'), nullable=False, index=True)
    receiver_id = Column(String, ForeignKey('users.id'), nullable=False, index=True)
    status = Column(String, default="pending", nullable=False)  # "pending", "accepted", "declined"
    created_at = Column(DateTime, default=datetime.datetime.utcnow)

    __table_args__ = (
        UniqueConstraint('sender_id', 'receiver_id', 'status', name='uq_friend_request_status'),
    )


class Friendship(Base):
    """One direction of a friendship. Rows always exist in symmetric pairs."""
    __tablename__ = 'friendships'

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey('users.id'), nullable=False, index=True)
    friend_id = Column(String, ForeignKey('users.id'), nullable=False)
    status = Column(String, default="accepted", nullable=False)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)

    __table_args__ = (
        UniqueConstraint('user_id', 'friend_id', name='uq_friendship_pair'),
    )


class Group(Base):
    __tablename__ = 'groups'

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    access_type = Column(String, default="open", nullable=False)  # "open", "invitation"
    created_by = Column(String, ForeignKey('users.id'), nullable=False)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)

    members = relationship("GroupMember", back_populates="group", cascade="all, delete-orphan")


class GroupMember(Base):
    __tablename__ = 'group_members'

    id = Column(String, primary_key=True, index=True)
    group_id = Column(String, ForeignKey('groups.id'), nullable=False, index=True)
    user_id = Column(String, ForeignKey('users.id'), nullable=False, index=True)
    role = Column(String, default="member", nullable=False)  # "owner", "admin", "member"
    joined_at = Column(DateTime, default=datetime.datetime.utcnow)

    group = relationship("Group", back_populates="members")

    __table_args__ = (
        UniqueConstraint('group_id', 'user_id', name='uq_group_member'),
    )


class GroupInvitation(Base):
    __tablename__ = 'group_invitations'

    id = Column(String, primary_key=True, index=True)
    group_id = Column(String, ForeignKey('groups.id'), nullable=False, index=True)
    inviter_id = Column(String, ForeignKey('users.id'), nullable=False)
    invitee_id = Column(String, ForeignKey('users.id'), nullable=False, index=True)
    status = Column(String, default="pending", nullable=False)  # "pending", "accepted", "rejected"
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)

    group = relationship("Group")

    __table_args__ = (
        # Only one pending invitation per invitee and group; answered ones are history.
        Index(
            'uq_group_invitation_pending', 'group_id', 'invitee_id',
            unique=True,
            sqlite_where=text("status = 'pending'"),
            postgresql_where=text("status = 'pending'"),
        ),
    )


class Follow(Base):
    """A user-follow (following_id set) or a topic-follow (topic_id set), never both."""
    __tablename__ = 'follows'

    id = Column(String, primary_key=True, index=True)
    follower_id = Column(String, ForeignKey('users.id'), nullable=False, index=True)
    following_id = Column(String, ForeignKey('users.id'), nullable=True)
    topic_id = Column(String, ForeignKey('topics.id'), nullable=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)

    __table_args__ = (
        CheckConstraint(
            '(following_id IS NULL) <> (topic_id IS NULL)',
            name='ck_follow_exactly_one_target',
        ),
        UniqueConstraint('follower_id', 'topic_id', name='uq_follow_topic'),
        UniqueConstraint('follower_id', 'following_id', name='uq_follow_user'),
    )


class Topic(Base):
    __tablename__ = 'topics'

    id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    created_by = Column(String, ForeignKey('users.id'), nullable=False)
    is_public = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)

    posts = relationship("Post", back_populates="topic", cascade="all, delete-orphan")


class Post(Base):
    __tablename__ = 'posts'

    id = Column(String, primary_key=True, index=True)
    topic_id = Column(String, ForeignKey('topics.id'), nullable=False, index=True)
    content = Column(Text, nullable=False)
    created_by = Column(String, ForeignKey('users.id'), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)

    topic = relationship("Topic", back_populates="posts")
    author = relationship("User")
