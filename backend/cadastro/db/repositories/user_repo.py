"""SQLAlchemy-backed User repository returning dataclasses."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Mapping

from psycopg.errors import QueryCanceled
from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeout
from sqlalchemy.orm import Session

from ..models.user import UserModel
from ...domain.user import USER_FIELDS, User
from ...errors import DuplicateEmail, NotFound, StoreUnavailable


def _to_dc(m: UserModel) -> User:
    return User(id=m.id, email=m.email, name=m.name, age=m.age)


def _is_transient(e: OperationalError) -> bool:
    """Timeouts and dropped connections; schema or auth failures are not retryable."""
    if e.connection_invalidated or isinstance(e.orig, QueryCanceled):
        return True
    # sqlite busy timeout
    return "database is locked" in str(e.orig)


class UserRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    @contextmanager
    def _guard(self) -> Iterator[None]:
        """Roll back and translate driver failures into store errors."""
        try:
            yield
        except IntegrityError as e:
            self.session.rollback()
            if "email" in str(e.orig).lower():
                raise DuplicateEmail() from e
            raise
        except PoolTimeout as e:
            self.session.rollback()
            raise StoreUnavailable() from e
        except OperationalError as e:
            self.session.rollback()
            if _is_transient(e):
                raise StoreUnavailable() from e
            raise
        except Exception:
            self.session.rollback()
            raise

    def _load(self, user_id: str) -> UserModel:
        m = self.session.get(UserModel, user_id)
        if m is None:
            raise NotFound()
        return m

    def list(self, filters: Mapping[str, str] | None = None) -> List[User]:
        stmt: Select = select(UserModel).order_by(UserModel.created_at.asc())
        for key, value in (filters or {}).items():
            stmt = stmt.where(getattr(UserModel, key) == value)
        with self._guard():
            return [_to_dc(m) for m in self.session.scalars(stmt).all()]

    def get(self, user_id: str) -> User:
        with self._guard():
            return _to_dc(self._load(user_id))

    def create(self, *, email: str, name: str, age: str) -> User:
        m = UserModel(email=email, name=name, age=age)
        with self._guard():
            self.session.add(m)
            self.session.commit()
            self.session.refresh(m)
        return _to_dc(m)

    def update(self, user_id: str, **fields: str) -> User:
        with self._guard():
            m = self._load(user_id)
            for k, v in fields.items():
                if k in USER_FIELDS:
                    setattr(m, k, v)
            self.session.commit()
            self.session.refresh(m)
        return _to_dc(m)

    def delete(self, user_id: str) -> None:
        with self._guard():
            m = self._load(user_id)
            self.session.delete(m)
            self.session.commit()
