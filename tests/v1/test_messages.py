# tests/v1/test_messages.py
"""Tests for message endpoints and their enriched reads."""

from fastapi import status
from fastapi.testclient import TestClient

from chat_geo.core.settings import settings
from chat_geo.models import Channel, User


def test_register_create_channel_post_and_read_back(client: TestClient, bob: User) -> None:
    """Register alice, open Team with bob, say hi, and read it back enriched."""
    registered = client.post(
        "/api/v1/auth/register",
        json={
            "fullname": "Alice Liddell",
            "username": "alice",
            "email": "alice@x.com",
            "password": "s3cret-passphrase",
        },
    )
    assert registered.status_code == status.HTTP_201_CREATED
    alice_uuid = registered.json()["data"]["uuid"]

    login = client.post(
        "/api/v1/auth/login",
        json={"username": "alice", "password": "s3cret-passphrase"},
    )
    headers = {"Authorization": f"Bearer {login.json()['data']['token']}"}

    channel = client.post(
        "/api/v1/channels/",
        json={"name": "Team", "type": "Group", "user_uuids": [alice_uuid, bob.uuid]},
        headers=headers,
    )
    assert channel.status_code == status.HTTP_201_CREATED
    team_uuid = channel.json()["data"]["uuid"]

    posted = client.post(
        "/api/v1/messages/",
        json={"channel_uuid": team_uuid, "message": "hi"},
        headers=headers,
    )
    assert posted.status_code == status.HTTP_201_CREATED
    assert posted.json()["data"]["user_uuid"] == alice_uuid

    response = client.get(f"/api/v1/messages/channel_uuid/{team_uuid}", headers=headers)
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["count"] == 1
    message = body["data"][0]
    assert message["message"] == "hi"
    assert message["user"]["username"] == "alice"
    assert message["channel"]["name"] == "Team"
    assert [user["username"] for user in message["channel"]["users"]] == ["alice", "bob"]
    assert "password" not in message["user"]


def test_post_message_to_missing_channel(client: TestClient, alice_headers) -> None:
    response = client.post(
        "/api/v1/messages/",
        json={"channel_uuid": "nope", "message": "hi"},
        headers=alice_headers,
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["error"] == "Channel nope not found"


def test_post_message_for_missing_author(client: TestClient, team: Channel, alice_headers) -> None:
    response = client.post(
        "/api/v1/messages/",
        json={"channel_uuid": team.uuid, "user_uuid": "ghost", "message": "hi"},
        headers=alice_headers,
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["error"] == "User ghost not found"


def test_post_empty_message_is_invalid(client: TestClient, team: Channel, alice_headers) -> None:
    response = client.post(
        "/api/v1/messages/",
        json={"channel_uuid": team.uuid, "message": ""},
        headers=alice_headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_post_without_author_or_identity_is_invalid(
    client: TestClient, team: Channel, monkeypatch
) -> None:
    monkeypatch.setattr(settings, "require_auth", False)
    response = client.post(
        "/api/v1/messages/",
        json={"channel_uuid": team.uuid, "message": "hi"},
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"] == "user_uuid is required"


def test_post_message_echoes_to_room(
    client: TestClient, team: Channel, alice: User, alice_headers, fresh_rooms, mocker
) -> None:
    """A persisted message is broadcast to the channel's room."""
    broadcast = mocker.spy(fresh_rooms, "broadcast")
    response = client.post(
        "/api/v1/messages/",
        json={"channel_uuid": team.uuid, "message": "hi"},
        headers=alice_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    broadcast.assert_called_once_with(team.uuid, "message", response.json()["data"])


def test_post_message_echo_can_be_disabled(
    client: TestClient, team: Channel, alice_headers, fresh_rooms, mocker, monkeypatch
) -> None:
    monkeypatch.setattr(settings, "echo_rest_writes", False)
    broadcast = mocker.spy(fresh_rooms, "broadcast")
    client.post(
        "/api/v1/messages/",
        json={"channel_uuid": team.uuid, "message": "hi"},
        headers=alice_headers,
    )
    broadcast.assert_not_called()


def test_list_and_get_messages_are_enriched(
    client: TestClient, team: Channel, alice: User, bob: User, alice_headers, bob_headers
) -> None:
    first = client.post(
        "/api/v1/messages/",
        json={"channel_uuid": team.uuid, "message": "one"},
        headers=alice_headers,
    ).json()["data"]
    client.post(
        "/api/v1/messages/",
        json={"channel_uuid": team.uuid, "message": "two"},
        headers=bob_headers,
    )

    listed = client.get("/api/v1/messages/", headers=alice_headers).json()
    assert listed["count"] == 2
    assert [item["user"]["username"] for item in listed["data"]] == ["alice", "bob"]

    single = client.get(f"/api/v1/messages/{first['uuid']}", headers=alice_headers)
    assert single.status_code == status.HTTP_200_OK
    assert single.json()["data"]["channel"]["uuid"] == team.uuid


def test_list_messages_for_empty_channel(client: TestClient, team: Channel, alice_headers) -> None:
    response = client.get(f"/api/v1/messages/channel_uuid/{team.uuid}", headers=alice_headers)
    assert response.json() == {"status": "success", "data": [], "count": 0}


def test_update_message_body(client: TestClient, team: Channel, alice_headers) -> None:
    created = client.post(
        "/api/v1/messages/",
        json={"channel_uuid": team.uuid, "message": "helo"},
        headers=alice_headers,
    ).json()["data"]

    response = client.put(
        f"/api/v1/messages/{created['uuid']}",
        json={"message": "hello"},
        headers=alice_headers,
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"]["message"] == "hello"
    assert response.json()["data"]["created_on"] == created["created_on"]


def test_update_message_without_fields_leaves_it_unchanged(
    client: TestClient, team: Channel, alice_headers
) -> None:
    created = client.post(
        "/api/v1/messages/",
        json={"channel_uuid": team.uuid, "message": "hi"},
        headers=alice_headers,
    ).json()["data"]

    response = client.put(f"/api/v1/messages/{created['uuid']}", json={}, headers=alice_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

    after = client.get(f"/api/v1/messages/{created['uuid']}", headers=alice_headers)
    assert after.json()["data"]["message"] == "hi"
    assert after.json()["data"]["modified_on"] == created["modified_on"]


def test_delete_message(client: TestClient, team: Channel, alice_headers) -> None:
    created = client.post(
        "/api/v1/messages/",
        json={"channel_uuid": team.uuid, "message": "bye"},
        headers=alice_headers,
    ).json()["data"]

    response = client.delete(f"/api/v1/messages/{created['uuid']}", headers=alice_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"] == created

    missing = client.get(f"/api/v1/messages/{created['uuid']}", headers=alice_headers)
    assert missing.status_code == status.HTTP_404_NOT_FOUND


def test_channel_with_messages_cannot_be_deleted(
    client: TestClient, team: Channel, alice_headers
) -> None:
    client.post(
        "/api/v1/messages/",
        json={"channel_uuid": team.uuid, "message": "hi"},
        headers=alice_headers,
    )
    response = client.delete(f"/api/v1/channels/{team.uuid}", headers=alice_headers)
    assert response.status_code == status.HTTP_409_CONFLICT
    assert "still referenced" in response.json()["error"]
