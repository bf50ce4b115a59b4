"""Data access helpers for friendships."""
from __future__ import annotations

from sqlalchemy import or_, select

from chat_geo.core.errors import NotFoundError
from chat_geo.models import Friendship, FriendshipStatus, User
from chat_geo.repositories.base import CrudRepository
from chat_geo.schemas.friendship import FriendshipResponse

__all__ = ["FriendshipRepository"]


class FriendshipRepository(CrudRepository[Friendship]):
    """Friendship records between pairs of users."""

    model = Friendship
    entity_name = "Friendship"
    response_schema = FriendshipResponse
    updatable_fields = frozenset({"status"})

    def create(
        self,
        *,
        user1_uuid: str,
        user2_uuid: str,
        status: str = FriendshipStatus.PENDING,
    ) -> Friendship:
        """Insert a friendship after checking that both users exist."""
        with self._translate_errors("create"):
            for user_uuid in (user1_uuid, user2_uuid):
                if self.session.get(User, user_uuid) is None:
                    raise NotFoundError(f"User {user_uuid} not found")
        row = Friendship(
            user1_uuid=user1_uuid,
            user2_uuid=user2_uuid,
            status=FriendshipStatus(status).value,
        )
        return self._insert(row)

    def list_for_user(self, user_uuid: str) -> list[Friendship]:
        """Return friendships where the user is on either side."""
        with self._translate_errors("list"):
            involved = or_(Friendship.user1_uuid == user_uuid, Friendship.user2_uuid == user_uuid)
            stmt = self._oldest_first(select(Friendship).where(involved))
            return list(self.session.scalars(stmt))
