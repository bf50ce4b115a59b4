# tests/v1/test_channels.py
"""Tests for channel endpoints."""

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from chat_geo.core.settings import settings
from chat_geo.models import Channel, User


def test_create_group_channel(client: TestClient, alice: User, bob: User, alice_headers) -> None:
    """Member ids are stored in order with duplicates removed."""
    response = client.post(
        "/api/v1/channels/",
        json={"name": "Team", "type": "Group", "user_uuids": [alice.uuid, bob.uuid, alice.uuid]},
        headers=alice_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()["data"]
    assert data["name"] == "Team"
    assert data["type"] == "Group"
    assert data["user_uuids"] == [alice.uuid, bob.uuid]


def test_create_direct_message_accepts_alias(
    client: TestClient, alice: User, bob: User, alice_headers
) -> None:
    response = client.post(
        "/api/v1/channels/",
        json={"name": "alice+bob", "type": "DirectMessage", "user_uuids": [alice.uuid, bob.uuid]},
        headers=alice_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["data"]["type"] == "Direct Message"


def test_direct_message_needs_two_members(client: TestClient, alice: User, alice_headers) -> None:
    response = client.post(
        "/api/v1/channels/",
        json={"name": "solo", "type": "Direct Message", "user_uuids": [alice.uuid]},
        headers=alice_headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "exactly two members" in response.json()["error"]


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "Team", "type": "Group", "user_uuids": []},
        {"name": "Team", "type": "Broadcast", "user_uuids": ["a"]},
        {"name": "", "type": "Group", "user_uuids": ["a"]},
        {"type": "Group", "user_uuids": ["a"]},
    ],
)
def test_create_channel_rejects_bad_payloads(client: TestClient, alice_headers, payload) -> None:
    response = client.post("/api/v1/channels/", json=payload, headers=alice_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["status"] == "fail"


def test_get_channel(client: TestClient, team: Channel, alice_headers) -> None:
    response = client.get(f"/api/v1/channels/{team.uuid}", headers=alice_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"]["user_uuids"] == team.member_uuids


def test_channel_members_in_membership_order(
    client: TestClient, make_channel, alice: User, bob: User, alice_headers
) -> None:
    """Profiles follow the stored order and skip ids with no user."""
    channel = make_channel([bob.uuid, "ghost", alice.uuid])
    response = client.get(f"/api/v1/channels/{channel.uuid}/users", headers=alice_headers)
    assert response.status_code == status.HTTP_200_OK
    assert [user["username"] for user in response.json()["data"]] == ["bob", "alice"]


@pytest.mark.parametrize("lookup", ["table", "serialized"])
def test_channels_for_user(
    client: TestClient, make_channel, alice: User, bob: User, alice_headers, monkeypatch, lookup
) -> None:
    monkeypatch.setattr(settings, "membership_lookup", lookup)
    team = make_channel([alice.uuid, bob.uuid], name="Team")
    make_channel([bob.uuid], name="Bob only")

    for path in ("user", "user_uuid"):
        response = client.get(f"/api/v1/channels/{path}/{alice.uuid}", headers=alice_headers)
        assert response.status_code == status.HTTP_200_OK
        assert [channel["uuid"] for channel in response.json()["data"]] == [team.uuid]


def test_update_channel_members(
    client: TestClient, team: Channel, alice: User, alice_headers
) -> None:
    response = client.put(
        f"/api/v1/channels/{team.uuid}",
        json={"user_uuids": [alice.uuid]},
        headers=alice_headers,
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"]["user_uuids"] == [alice.uuid]

    listed = client.get(f"/api/v1/channels/{team.uuid}/users", headers=alice_headers)
    assert [user["uuid"] for user in listed.json()["data"]] == [alice.uuid]


def test_update_channel_without_fields(client: TestClient, team: Channel, alice_headers) -> None:
    response = client.put(f"/api/v1/channels/{team.uuid}", json={}, headers=alice_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

    unchanged = client.get(f"/api/v1/channels/{team.uuid}", headers=alice_headers)
    assert unchanged.json()["data"]["name"] == "Team"


def test_update_missing_channel(client: TestClient, alice_headers) -> None:
    response = client.put("/api/v1/channels/missing", json={"name": "x"}, headers=alice_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_delete_channel(client: TestClient, team: Channel, alice_headers) -> None:
    response = client.delete(f"/api/v1/channels/{team.uuid}", headers=alice_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"]["uuid"] == team.uuid
    assert response.json()["message"] == f"Channel {team.uuid} deleted successfully"

    assert client.get(f"/api/v1/channels/{team.uuid}", headers=alice_headers).status_code == 404
