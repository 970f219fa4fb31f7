"""Repository factory for User (sqlalchemy|supabase)."""
from __future__ import annotations

from typing import Optional, Union

from flask import current_app
from sqlalchemy.orm import Session

from .user_repo import UserRepository as SQLARepo
from .user_repo_supabase import UserRepositorySupabase
from ...integrations.supabase_client import supabase_ext

UserStore = Union[SQLARepo, UserRepositorySupabase]


def user_repo(session: Optional[Session] = None) -> UserStore:
    backend = (current_app.config.get("USER_REPO_BACKEND") or "sqlalchemy").lower()
    if backend == "supabase":
        client = supabase_ext.client
        if client is None:
            raise RuntimeError("Supabase client is not initialized; set SUPABASE_URL and a key.")
        return UserRepositorySupabase(client)
    if session is None:
        raise RuntimeError("SQLAlchemy repo requires a session")
    return SQLARepo(session)
