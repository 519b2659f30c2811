from sqlalchemy.orm import Session
from sqlalchemy import func, case
from forum import models
import uuid
from typing import Dict, List, Optional


# --- Groups ---

def get_group(db: Session, group_id: str) -> Optional[models.Group]:
    return db.query(models.Group).filter(models.Group.id == group_id).first()


def create_group(db: Session, name: str, description: str, access_type: str, created_by: str) -> models.Group:
    group = models.Group(
        id=str(uuid.uuid4()),
        name=name,
        description=description,
        access_type=access_type,
        created_by=created_by
    )
    db.add(group)
    return group


def get_open_groups(db: Session) -> List[models.Group]:
    return db.query(models.Group).filter(
        models.Group.access_type == "open"
    ).order_by(models.Group.created_at.desc()).all()


def get_groups_for_user(db: Session, user_id: str) -> List[tuple]:
    """(group, role) pairs for every group the user belongs to, newest group first."""
    return db.query(models.Group, models.GroupMember.role).join(
        models.GroupMember, models.GroupMember.group_id == models.Group.id
    ).filter(
        models.GroupMember.user_id == user_id
    ).order_by(models.Group.created_at.desc()).all()


def get_member_counts(db: Session, group_ids: List[str]) -> Dict[str, int]:
    if not group_ids:
        return {}
    rows = db.query(models.GroupMember.group_id, func.count(models.GroupMember.id)).filter(
        models.GroupMember.group_id.in_(group_ids)
    ).group_by(models.GroupMember.group_id).all()
    return {group_id: count for group_id, count in rows}


# --- Members ---

def get_membership(db: Session, group_id: str, user_id: str) -> Optional[models.GroupMember]:
    return db.query(models.GroupMember).filter(
        models.GroupMember.group_id == group_id,
        models.GroupMember.user_id == user_id
    ).first()


def get_user_roles(db: Session, user_id: str) -> Dict[str, str]:
    rows = db.query(models.GroupMember.group_id, models.GroupMember.role).filter(
        models.GroupMember.user_id == user_id
    ).all()
    return {group_id: role for group_id, role in rows}


def add_member(db: Session, group_id: str, user_id: str, role: str = "member") -> models.GroupMember:
    member = models.GroupMember(
        id=str(uuid.uuid4()),
        group_id=group_id,
        user_id=user_id,
        role=role
    )
    db.add(member)
    return member


def get_members(db: Session, group_id: str) -> List[models.GroupMember]:
    # Owner first, then admins, then everyone else by join date
    role_rank = case(
        (models.GroupMember.role == "owner", 0),
        (models.GroupMember.role == "admin", 1),
        else_=2
    )
    return db.query(models.GroupMember).filter(
        models.GroupMember.group_id == group_id
    ).order_by(role_rank, models.GroupMember.joined_at.asc()).all()


def count_members(db: Session, group_id: str) -> int:
    return db.query(models.GroupMember).filter(models.GroupMember.group_id == group_id).count()


# --- Invitations ---

def get_pending_invitation(db: Session, invitation_id: str, invitee_id: str) -> Optional[models.GroupInvitation]:
    return db.query(models.GroupInvitation).filter(
        models.GroupInvitation.id == invitation_id,
        models.GroupInvitation.invitee_id == invitee_id,
        models.GroupInvitation.status == "pending"
    ).first()


def has_pending_invitation(db: Session, group_id: str, invitee_id: str) -> bool:
    invitation = db.query(models.GroupInvitation).filter(
        models.GroupInvitation.group_id == group_id,
        models.GroupInvitation.invitee_id == invitee_id,
        models.GroupInvitation.status == "pending"
    ).first()
    return invitation is not None


def create_invitation(db: Session, group_id: str, inviter_id: str, invitee_id: str) -> models.GroupInvitation:
    invitation = models.GroupInvitation(
        id=str(uuid.uuid4()),
        group_id=group_id,
        inviter_id=inviter_id,
        invitee_id=invitee_id,
        status="pending"
    )
    db.add(invitation)
    return invitation


def get_pending_invitations_for_user(db: Session, user_id: str) -> List[models.GroupInvitation]:
    return db.query(models.GroupInvitation).filter(
        models.GroupInvitation.invitee_id == user_id,
        models.GroupInvitation.status == "pending"
    ).order_by(models.GroupInvitation.created_at.desc()).all()
