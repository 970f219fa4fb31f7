"""Users blueprint (CRUD) mounted at /usuarios."""
from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

from flask import Blueprint, request
from sqlalchemy.orm import Session

from ...db.session import db
from ...errors import BODY_MESSAGE, ValidationError, ok
from ...services.user_service import UserService
from .schemas import UserCreateIn, UserFilterIn, UserOut, UserUpdateIn


bp = Blueprint("users", __name__)

DELETED_MESSAGE = "Usuário deletado com sucesso!"


def _service() -> UserService:
    session: Session | None = db.Session() if db.Session is not None else None
    return UserService(session)


def _json_body() -> Dict[str, Any]:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError(BODY_MESSAGE, [{"field": "body", "message": BODY_MESSAGE}])
    return payload


def _user_id(user_id: str) -> str:
    user_id = user_id.strip()
    if not user_id:
        raise ValidationError("O id do usuário é obrigatório", [{"field": "id", "message": "obrigatório"}])
    return user_id


def _out(user) -> Dict[str, Any]:
    return UserOut.model_validate(asdict(user)).model_dump()


@bp.post("")
def create_user():
    payload = UserCreateIn.model_validate(_json_body())
    user = _service().create_user(email=payload.email, name=payload.name, age=payload.age)
    return ok(_out(user), 201)


@bp.get("")
def list_users():
    filters = UserFilterIn.model_validate(request.args.to_dict())
    users = _service().list_users(filters.model_dump(exclude_none=True))
    return ok([_out(u) for u in users])


@bp.get("/<user_id>")
def get_user(user_id: str):
    user = _service().get_user(_user_id(user_id))
    return ok(_out(user))


@bp.put("/<user_id>")
def update_user(user_id: str):
    user_id = _user_id(user_id)
    payload = UserUpdateIn.model_validate(_json_body())
    user = _service().update_user(user_id, **payload.model_dump(exclude_none=True))
    return ok(_out(user))


@bp.delete("/<user_id>")
def delete_user(user_id: str):
    _service().delete_user(_user_id(user_id))
    return ok({"message": DELETED_MESSAGE})
