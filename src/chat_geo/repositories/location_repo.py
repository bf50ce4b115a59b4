"""Data access helpers for shared locations."""
from __future__ import annotations

from sqlalchemy import select

from chat_geo.core.errors import NotFoundError
from chat_geo.models import Channel, Location, User
from chat_geo.repositories.base import CrudRepository
from chat_geo.schemas.location import LocationResponse

__all__ = ["LocationRepository"]


class LocationRepository(CrudRepository[Location]):
    """Position broadcasts scoped to a channel and an author."""

    model = Location
    entity_name = "Location"
    response_schema = LocationResponse
    updatable_fields = frozenset({"latitude", "longitude", "weather"})
    clearable_fields = frozenset({"weather"})

    def create(
        self,
        *,
        channel_uuid: str,
        user_uuid: str,
        latitude: float,
        longitude: float,
        weather: str | None = None,
    ) -> Location:
        """Insert a location after checking that its channel and author exist."""
        with self._translate_errors("create"):
            if self.session.get(Channel, channel_uuid) is None:
                raise NotFoundError(f"Channel {channel_uuid} not found")
            if self.session.get(User, user_uuid) is None:
                raise NotFoundError(f"User {user_uuid} not found")
        row = Location(
            channel_uuid=channel_uuid,
            user_uuid=user_uuid,
            latitude=latitude,
            longitude=longitude,
            weather=weather,
        )
        return self._insert(row)

    def list_for_channel(self, channel_uuid: str) -> list[Location]:
        """Return locations shared in a channel, oldest first."""
        with self._translate_errors("list"):
            stmt = self._oldest_first(select(Location).where(Location.channel_uuid == channel_uuid))
            return list(self.session.scalars(stmt))

    def list_for_user(self, user_uuid: str) -> list[Location]:
        """Return locations shared by a user, oldest first."""
        with self._translate_errors("list"):
            stmt = self._oldest_first(select(Location).where(Location.user_uuid == user_uuid))
            return list(self.session.scalars(stmt))
