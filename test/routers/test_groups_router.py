import pytest
from fastapi.testclient import TestClient
from unittest.mock import MagicMock
from datetime import datetime, timezone
from forum.main import app
from forum import models
from forum.auth.auth_service import get_current_user_id
from forum.exceptions import ForbiddenError, OwnerMustTransferError
from forum.routers.groups import get_group_service

mock_service = MagicMock()


@pytest.fixture(autouse=True)
def setup_dependency_overrides():
    app.dependency_overrides[get_current_user_id] = lambda: "u1"
    app.dependency_overrides[get_group_service] = lambda: mock_service
    yield
    app.dependency_overrides = {}
    mock_service.reset_mock(return_value=True, side_effect=True)


client = TestClient(app)


def group_dict(**kwargs):
    data = {
        "id": "g1",
        "name": "Chess",
        "description": "Board games",
        "access_type": "open",
        "created_by": "u1",
        "created_at": datetime.now(timezone.utc),
        "member_count": 1,
        "is_member": True,
        "user_role": "owner",
    }
    data.update(kwargs)
    return data


def test_create_group():
    mock_service.create_group.return_value = models.Group(id="g1")
    mock_service.get_group.return_value = group_dict()

    response = client.post("/groups/", json={"name": "Chess", "description": "Board games"})

    assert response.status_code == 201
    assert response.json()["user_role"] == "owner"
    mock_service.create_group.assert_called_once_with("Chess", "Board games", "open", "u1")


def test_create_group_rejects_unknown_access_type():
    response = client.post("/groups/", json={"name": "Chess", "description": "x", "access_type": "secret"})

    assert response.status_code == 422
    mock_service.create_group.assert_not_called()


def test_join_invitation_group_forbidden():
    mock_service.join_group.side_effect = ForbiddenError("This group requires an invitation to join.")

    response = client.post("/groups/g1/join")

    assert response.status_code == 403


def test_join_group():
    mock_service.join_group.return_value = models.GroupMember(
        id="m1", group_id="g1", user_id="u1", role="member", joined_at=datetime.now(timezone.utc)
    )

    response = client.post("/groups/g1/join")

    assert response.status_code == 201
    assert response.json()["role"] == "member"


def test_owner_leave_returns_error():
    mock_service.leave_group.side_effect = OwnerMustTransferError("Owner cannot leave the group. Transfer ownership first.")

    response = client.delete("/groups/g1/leave")

    assert response.status_code == 400
    assert "Transfer ownership" in response.json()["detail"]


def test_invite_and_respond():
    invitation = models.GroupInvitation(
        id="i1", group_id="g1", inviter_id="u1", invitee_id="u2", status="pending",
        created_at=datetime.now(timezone.utc)
    )
    mock_service.invite_to_group.return_value = invitation

    response = client.post("/groups/g1/invite", json={"invitee_id": "u2"})
    assert response.status_code == 201
    mock_service.invite_to_group.assert_called_once_with("g1", "u1", "u2")

    invitation.status = "rejected"
    mock_service.respond_to_invitation.return_value = invitation
    response = client.put("/groups/invitations/i1", json={"accept": False})
    assert response.status_code == 200
    assert response.json()["status"] == "rejected"
    mock_service.respond_to_invitation.assert_called_once_with("i1", "u1", False)


def test_list_open_groups():
    mock_service.list_open_groups.return_value = [group_dict(is_member=False, user_role=None, member_count=4)]

    response = client.get("/groups/")

    assert response.status_code == 200
    assert response.json()[0]["member_count"] == 4
