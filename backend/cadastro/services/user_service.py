"""User service encapsulating business rules."""
from __future__ import annotations

from typing import Dict, List, Mapping, Optional

from loguru import logger
from sqlalchemy.orm import Session

from ..db.repositories.factory import user_repo
from ..domain.user import USER_FIELDS, User
from ..errors import DuplicateEmail, NotFound


def mask_email(email: str) -> str:
    """`ana@x.com` -> `a***@x.com`, for logs."""
    local, _, domain = email.partition("@")
    return f"{local[:1]}***@{domain}"


def clean_fields(values: Mapping[str, Optional[str]]) -> Dict[str, str]:
    """Keep only known attributes that were actually supplied and are non-blank."""
    return {
        k: v for k, v in values.items()
        if k in USER_FIELDS and v is not None and str(v).strip()
    }


class UserService:
    def __init__(self, session: Optional[Session] = None) -> None:
        self.repo = user_repo(session)

    def list_users(self, filters: Mapping[str, Optional[str]] | None = None) -> List[User]:
        return self.repo.list(clean_fields(filters or {}))

    def get_user(self, user_id: str) -> User:
        return self.repo.get(user_id)

    def create_user(self, email: str, name: str, age: str) -> User:
        # uniqueness is left to the database constraint, no pre-check
        try:
            user = self.repo.create(email=email, name=name, age=age)
        except DuplicateEmail:
            logger.info("create rejected, email already registered: {}", mask_email(email))
            raise
        logger.info("user created: {}", user.id)
        return user

    def update_user(self, user_id: str, **fields: Optional[str]) -> User:
        changes = clean_fields(fields)
        try:
            user = self.repo.update(user_id, **changes)
        except (NotFound, DuplicateEmail) as e:
            logger.info("update rejected for {}: {}", user_id, e.message)
            raise
        logger.info("user updated: {} fields={}", user_id, sorted(changes))
        return user

    def delete_user(self, user_id: str) -> None:
        try:
            self.repo.delete(user_id)
        except NotFound:
            logger.info("delete rejected, no user {}", user_id)
            raise
        logger.info("user deleted: {}", user_id)
