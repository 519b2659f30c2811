import logging
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from forum import models
from forum.crud import group as crud_group
from forum.database import unit_of_work
from forum.exceptions import (
    ValidationError, ConflictError, NotFoundError, ForbiddenError, OwnerMustTransferError,
)

logger = logging.getLogger(__name__)

ACCESS_TYPES = ("open", "invitation")
INVITER_ROLES = ("owner", "admin")


class GroupService:
    """Groups, memberships and invitations."""

    def __init__(self, db: Session):
        self.db = db

    def create_group(
        self,
        name: str,
        description: str,
        access_type: Optional[str],
        creator_id: str
    ) -> models.Group:
        if not name or not name.strip() or not description or not description.strip() or not creator_id:
            raise ValidationError("Name, description and creator are required.")
        access_type = access_type or "open"
        if access_type not in ACCESS_TYPES:
            raise ValidationError("Access type must be 'open' or 'invitation'.")

        # The group never exists without its owner
        with unit_of_work(self.db):
            group = crud_group.create_group(self.db, name.strip(), description.strip(), access_type, creator_id)
            crud_group.add_member(self.db, group.id, creator_id, role="owner")

        logger.info(f"Group {group.id} ({access_type}) created by {creator_id}")
        return group

    def join_group(self, group_id: str, user_id: str) -> models.GroupMember:
        group = crud_group.get_group(self.db, group_id)
        if not group:
            raise NotFoundError("Group not found.")
        if group.access_type != "open":
            raise ForbiddenError("This group requires an invitation to join.")
        if crud_group.get_membership(self.db, group_id, user_id):
            raise ConflictError("Already a member of this group.")

        with unit_of_work(self.db):
            member = crud_group.add_member(self.db, group_id, user_id)

        logger.info(f"User {user_id} joined group {group_id}")
        return member

    def leave_group(self, group_id: str, user_id: str):
        membership = crud_group.get_membership(self.db, group_id, user_id)
        if not membership:
            raise NotFoundError("Not a member of this group.")
        if membership.role == "owner":
            raise OwnerMustTransferError("Owner cannot leave the group. Transfer ownership first.")

        with unit_of_work(self.db):
            self.db.delete(membership)

        logger.info(f"User {user_id} left group {group_id}")

    def invite_to_group(self, group_id: str, inviter_id: str, invitee_id: str) -> models.GroupInvitation:
        if not inviter_id or not invitee_id:
            raise ValidationError("Inviter and invitee are required.")

        inviter = crud_group.get_membership(self.db, group_id, inviter_id)
        if not inviter or inviter.role not in INVITER_ROLES:
            raise ForbiddenError("Only admins and owners can invite members.")
        if crud_group.get_membership(self.db, group_id, invitee_id):
            raise ConflictError("User is already a member.")
        if crud_group.has_pending_invitation(self.db, group_id, invitee_id):
            raise ConflictError("Invitation already sent.")

        with unit_of_work(self.db):
            invitation = crud_group.create_invitation(self.db, group_id, inviter_id, invitee_id)

        logger.info(f"User {inviter_id} invited {invitee_id} to group {group_id}")
        return invitation

    def respond_to_invitation(self, invitation_id: str, user_id: str, accept: bool) -> models.GroupInvitation:
        invitation = crud_group.get_pending_invitation(self.db, invitation_id, user_id)
        if not invitation:
            raise NotFoundError("Invitation not found or already processed.")

        # A failed membership insert rolls the status change back with it,
        # leaving the invitation pending.
        with unit_of_work(self.db):
            invitation.status = "accepted" if accept else "rejected"
            if accept:
                crud_group.add_member(self.db, invitation.group_id, user_id)

        logger.info(f"Invitation {invitation_id} {invitation.status} by {user_id}")
        return invitation

    # --- Read side ---

    def get_group(self, group_id: str, user_id: Optional[str] = None) -> Dict:
        group = crud_group.get_group(self.db, group_id)
        if not group:
            raise NotFoundError("Group not found.")

        result = self._describe(group, crud_group.count_members(self.db, group_id))
        if user_id:
            membership = crud_group.get_membership(self.db, group_id, user_id)
            result["is_member"] = membership is not None
            result["user_role"] = membership.role if membership else None
        return result

    def list_open_groups(self, user_id: Optional[str] = None) -> List[Dict]:
        groups = crud_group.get_open_groups(self.db)
        counts = crud_group.get_member_counts(self.db, [g.id for g in groups])
        roles = crud_group.get_user_roles(self.db, user_id) if user_id else {}

        results = []
        for group in groups:
            item = self._describe(group, counts.get(group.id, 0))
            if user_id:
                item["is_member"] = group.id in roles
                item["user_role"] = roles.get(group.id)
            results.append(item)
        return results

    def list_user_groups(self, user_id: str) -> List[Dict]:
        rows = crud_group.get_groups_for_user(self.db, user_id)
        counts = crud_group.get_member_counts(self.db, [group.id for group, _ in rows])

        results = []
        for group, role in rows:
            item = self._describe(group, counts.get(group.id, 0))
            item["is_member"] = True
            item["user_role"] = role
            results.append(item)
        return results

    def list_members(self, group_id: str) -> List[models.GroupMember]:
        if not crud_group.get_group(self.db, group_id):
            raise NotFoundError("Group not found.")
        return crud_group.get_members(self.db, group_id)

    def list_pending_invitations(self, user_id: str) -> List[models.GroupInvitation]:
        return crud_group.get_pending_invitations_for_user(self.db, user_id)

    @staticmethod
    def _describe(group: models.Group, member_count: int) -> Dict:
        return {
            "id": group.id,
            "name": group.name,
            "description": group.description,
            "access_type": group.access_type,
            "created_by": group.created_by,
            "created_at": group.created_at,
            "member_count": member_count,
        }
