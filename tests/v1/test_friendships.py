# tests/v1/test_friendships.py
"""Tests for friendship endpoints."""

from fastapi import status
from fastapi.testclient import TestClient

from chat_geo.models import User


def _befriend(client: TestClient, headers, user1: User, user2: User) -> dict:
    response = client.post(
        "/api/v1/friendships/",
        json={"user1_uuid": user1.uuid, "user2_uuid": user2.uuid},
        headers=headers,
    )
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()["data"]


def test_create_friendship_starts_pending(
    client: TestClient, alice: User, bob: User, alice_headers
) -> None:
    data = _befriend(client, alice_headers, alice, bob)
    assert data["status"] == "Pending"
    assert (data["user1_uuid"], data["user2_uuid"]) == (alice.uuid, bob.uuid)


def test_friendship_with_self_is_invalid(client: TestClient, alice: User, alice_headers) -> None:
    response = client.post(
        "/api/v1/friendships/",
        json={"user1_uuid": alice.uuid, "user2_uuid": alice.uuid},
        headers=alice_headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_friendship_with_unknown_user(client: TestClient, alice: User, alice_headers) -> None:
    response = client.post(
        "/api/v1/friendships/",
        json={"user1_uuid": alice.uuid, "user2_uuid": "ghost"},
        headers=alice_headers,
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_accept_friendship(client: TestClient, alice: User, bob: User, bob_headers) -> None:
    created = _befriend(client, bob_headers, alice, bob)
    response = client.put(
        f"/api/v1/friendships/{created['uuid']}",
        json={"status": "Accepted"},
        headers=bob_headers,
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"]["status"] == "Accepted"


def test_update_friendship_rejects_unknown_status(
    client: TestClient, alice: User, bob: User, alice_headers
) -> None:
    created = _befriend(client, alice_headers, alice, bob)
    response = client.put(
        f"/api/v1/friendships/{created['uuid']}",
        json={"status": "Besties"},
        headers=alice_headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_friendships_for_user_match_either_side(
    client: TestClient, make_user, alice: User, bob: User, alice_headers
) -> None:
    carol = make_user("carol")
    first = _befriend(client, alice_headers, alice, bob)
    second = _befriend(client, alice_headers, carol, alice)
    _befriend(client, alice_headers, bob, carol)

    response = client.get(f"/api/v1/friendships/user_uuid/{alice.uuid}", headers=alice_headers)
    assert [row["uuid"] for row in response.json()["data"]] == [first["uuid"], second["uuid"]]

    assert client.get("/api/v1/friendships/", headers=alice_headers).json()["count"] == 3


def test_get_and_delete_friendship(
    client: TestClient, alice: User, bob: User, alice_headers
) -> None:
    created = _befriend(client, alice_headers, alice, bob)
    assert client.get(f"/api/v1/friendships/{created['uuid']}", headers=alice_headers).json()[
        "data"
    ] == created

    deleted = client.delete(f"/api/v1/friendships/{created['uuid']}", headers=alice_headers)
    assert deleted.json()["data"] == created

    gone = client.get(f"/api/v1/friendships/{created['uuid']}", headers=alice_headers)
    assert gone.status_code == status.HTTP_404_NOT_FOUND
