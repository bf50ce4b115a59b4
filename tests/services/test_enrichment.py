# tests/services/test_enrichment.py
"""Tests for message enrichment."""

from __future__ import annotations

import pytest
from sqlalchemy import event

from chat_geo.core.errors import NotFoundError
from chat_geo.models import Message
from chat_geo.repositories import MessageRepository
from chat_geo.services.enrichment import MessageEnricher


def test_enrich_attaches_author_and_channel(db_session, team, alice, bob) -> None:
    message = MessageRepository(db_session).create(
        channel_uuid=team.uuid, user_uuid=alice.uuid, message="hi"
    )
    [view] = MessageEnricher(db_session).enrich([message])

    assert view.message == "hi"
    assert view.user.username == "alice"
    assert view.channel.name == "Team"
    assert [user.username for user in view.channel.users] == ["alice", "bob"]


def test_enrich_empty_list(db_session) -> None:
    assert MessageEnricher(db_session).enrich([]) == []


def test_enrich_keeps_input_order(db_session, team, make_channel, alice, bob) -> None:
    other = make_channel([bob.uuid], name="Other")
    repo = MessageRepository(db_session)
    rows = [
        repo.create(channel_uuid=team.uuid, user_uuid=bob.uuid, message="1"),
        repo.create(channel_uuid=other.uuid, user_uuid=bob.uuid, message="2"),
        repo.create(channel_uuid=team.uuid, user_uuid=alice.uuid, message="3"),
    ]
    views = MessageEnricher(db_session).enrich(rows)
    assert [v.message for v in views] == ["1", "2", "3"]
    assert [v.channel.name for v in views] == ["Team", "Other", "Team"]


def test_enrich_uses_a_fixed_number_of_queries(db_session, engine, team, alice, bob) -> None:
    repo = MessageRepository(db_session)
    rows = [
        repo.create(channel_uuid=team.uuid, user_uuid=author.uuid, message=str(n))
        for n, author in enumerate([alice, bob] * 5)
    ]
    statements: list[str] = []

    def _count(conn, cursor, statement, parameters, context, executemany) -> None:
        statements.append(statement)

    event.listen(engine, "before_cursor_execute", _count)
    try:
        MessageEnricher(db_session).enrich(rows)
    finally:
        event.remove(engine, "before_cursor_execute", _count)

    assert len(statements) == 2


def test_enrich_missing_channel_is_not_found(db_session, alice) -> None:
    dangling = Message(uuid="m-1", channel_uuid="gone", user_uuid=alice.uuid, message="x")
    with pytest.raises(NotFoundError):
        MessageEnricher(db_session).enrich_one(dangling)


def test_enrich_missing_author_is_not_found(db_session, team) -> None:
    dangling = Message(uuid="m-2", channel_uuid=team.uuid, user_uuid="gone", message="x")
    with pytest.raises(NotFoundError) as exc_info:
        MessageEnricher(db_session).enrich_one(dangling)
    assert "Author gone" in exc_info.value.message
