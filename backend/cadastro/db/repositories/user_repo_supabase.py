"""Supabase-backed User repository using supabase-py v2."""
from __future__ import annotations

import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from ...domain.user import USER_FIELDS, User
from ...errors import DuplicateEmail, NotFound, StoreUnavailable

UNIQUE_VIOLATION = "23505"


def _row_to_dc(row: Dict[str, Any]) -> User:
    return User(
        id=str(row.get("id")),
        email=row.get("email", ""),
        name=row.get("name", ""),
        age=str(row.get("age", "")),
    )


@contextmanager
def _guard() -> Iterator[None]:
    try:
        yield
    except APIError as e:
        if e.code == UNIQUE_VIOLATION:
            raise DuplicateEmail() from e
        raise
    except httpx.TransportError as e:
        raise StoreUnavailable() from e


def _check_id(user_id: str) -> str:
    """Ids are uuid columns; anything else cannot exist."""
    try:
        uuid.UUID(user_id)
    except ValueError as e:
        raise NotFound() from e
    return user_id


class UserRepositorySupabase:
    def __init__(self, client: Client) -> None:
        self.client = client
        self.table = client.table("usuarios")

    def list(self, filters: Mapping[str, str] | None = None) -> List[User]:
        q = self.table.select("*").order("created_at")
        for key, value in (filters or {}).items():
            q = q.eq(key, value)
        with _guard():
            res = q.execute()
        return [_row_to_dc(r) for r in res.data or []]

    def get(self, user_id: str) -> User:
        _check_id(user_id)
        with _guard():
            res = self.table.select("*").eq("id", user_id).limit(1).execute()
        rows = res.data or []
        if not rows:
            raise NotFound()
        return _row_to_dc(rows[0])

    def create(self, *, email: str, name: str, age: str) -> User:
        with _guard():
            res = self.table.insert({"email": email, "name": name, "age": age}).execute()
        return _row_to_dc((res.data or [])[0])

    def update(self, user_id: str, **fields: str) -> User:
        _check_id(user_id)
        body = {k: v for k, v in fields.items() if k in USER_FIELDS}
        if not body:
            return self.get(user_id)
        with _guard():
            res = self.table.update(body).eq("id", user_id).execute()
        rows = res.data or []
        if not rows:
            raise NotFound()
        return _row_to_dc(rows[0])

    def delete(self, user_id: str) -> None:
        _check_id(user_id)
        with _guard():
            res = self.table.delete().eq("id", user_id).execute()
        if not res.data:
            raise NotFound()
