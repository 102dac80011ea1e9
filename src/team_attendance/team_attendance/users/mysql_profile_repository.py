from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Profile
from .repository import ProfileRepository


def _to_profile(row: dict) -> Profile:
    return Profile(
        user_id=str(row["id"]),
        first_name=row.get("first_name") or "",
        last_name=row.get("last_name") or "",
        role=Role(row["role"]),
        is_active=bool(row.get("is_active", True)),
        avatar_url=row.get("avatar_url"),
    )


class MySQLProfileRepository(ProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, first_name, last_name, role, is_active, avatar_url
                FROM profiles
                WHERE id=%s
                """,
                (user_id,),
            )
            row = fetchone(cur)
            return _to_profile(row) if row else None

    def list_active(self) -> Sequence[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, first_name, last_name, role, is_active, avatar_url
                FROM profiles
                WHERE is_active=1
                ORDER BY first_name, last_name
                """
            )
            return [_to_profile(r) for r in fetchall(cur)]
