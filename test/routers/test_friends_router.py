import pytest
from fastapi.testclient import TestClient
from unittest.mock import MagicMock
from datetime import datetime, timezone
from forum.main import app
from forum import models
from forum.auth.auth_service import get_current_user_id
from forum.exceptions import ConflictError, NotFoundError
from forum.routers.friends import get_relationship_service
from forum.services.relationship_service import RelationshipStatus

mock_service = MagicMock()


@pytest.fixture(autouse=True)
def setup_dependency_overrides():
    app.dependency_overrides[get_current_user_id] = lambda: "u1"
    app.dependency_overrides[get_relationship_service] = lambda: mock_service
    yield
    app.dependency_overrides = {}
    mock_service.reset_mock(return_value=True, side_effect=True)


client = TestClient(app)


def make_request(status="pending"):
    return models.FriendRequest(
        id="r1", sender_id="u1", receiver_id="u2", status=status,
        created_at=datetime.now(timezone.utc)
    )


def test_send_friend_request():
    mock_service.send_friend_request.return_value = make_request()

    response = client.post("/friends/request", json={"target_user_id": "u2"})

    assert response.status_code == 201
    assert response.json()["status"] == "pending"
    mock_service.send_friend_request.assert_called_once_with("u1", "u2")


def test_send_friend_request_conflict():
    mock_service.send_friend_request.side_effect = ConflictError("A friend request already exists between these users.")

    response = client.post("/friends/request", json={"target_user_id": "u2"})

    assert response.status_code == 409
    assert "already exists" in response.json()["detail"]


def test_respond_to_friend_request():
    mock_service.respond_to_friend_request.return_value = make_request(status="accepted")

    response = client.put("/friends/request/r1", json={"decision": "accept"})

    assert response.status_code == 200
    assert response.json()["status"] == "accepted"
    mock_service.respond_to_friend_request.assert_called_once_with("r1", "u1", "accept")


def test_respond_with_unknown_decision_is_rejected_by_schema():
    response = client.put("/friends/request/r1", json={"decision": "maybe"})

    assert response.status_code == 422
    mock_service.respond_to_friend_request.assert_not_called()


def test_respond_not_found():
    mock_service.respond_to_friend_request.side_effect = NotFoundError("Friend request not found or already processed.")

    response = client.put("/friends/request/r1", json={"decision": "decline"})

    assert response.status_code == 404


def test_get_relationship_status():
    mock_service.get_relationship_status.return_value = RelationshipStatus.REQUEST_RECEIVED

    response = client.get("/friends/status/u2")

    assert response.status_code == 200
    assert response.json() == {"user_id": "u2", "status": "request_received"}


def test_list_friends():
    mock_service.list_friends.return_value = [models.User(id="u2", username="bob")]

    response = client.get("/friends/")

    assert response.status_code == 200
    assert response.json() == [{"id": "u2", "username": "bob"}]


def test_list_friend_requests():
    mock_service.list_friend_requests.return_value = {"received": [make_request()], "sent": []}

    response = client.get("/friends/requests")

    assert response.status_code == 200
    assert len(response.json()["received"]) == 1


def test_remove_friend():
    response = client.delete("/friends/u2")

    assert response.status_code == 200
    mock_service.remove_friend.assert_called_once_with("u1", "u2")
