"""Error taxonomy, global HTTP error handling and JSON response helpers."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

import pydantic
from flask import Flask, jsonify
from loguru import logger
from werkzeug.exceptions import HTTPException


class AppError(Exception):
    status = 500
    code = "internal_server_error"
    message = "Erro interno do servidor"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.code, "message": self.message}


class ValidationError(AppError):
    status = 400
    code = "validation_error"
    message = "Dados inválidos"

    def __init__(self, message: str | None = None, errors: Optional[List[Dict[str, str]]] = None) -> None:
        super().__init__(message)
        self.errors = errors or []

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["errors"] = self.errors
        return body


class NotFound(AppError):
    status = 404
    code = "not_found"
    message = "Usuário não encontrado"


class DuplicateEmail(AppError):
    status = 409
    code = "duplicate_email"
    message = "E-mail já cadastrado"


class StoreUnavailable(AppError):
    """Transient store failure (timeout, lost connection); safe to retry."""

    status = 503
    code = "store_unavailable"
    message = "Serviço temporariamente indisponível"
    retry_after = 1


class InternalError(AppError):
    pass


# Field-oriented messages, checked in this order.
REQUIRED_MESSAGE = "Nome e e-mail são obrigatórios"
AGE_MESSAGE = "Idade mínima permitida é 1 ano"
MAX_AGE_MESSAGE = "Idade máxima permitida é 150 anos"
EMAIL_MESSAGE = "E-mail inválido"
BODY_MESSAGE = "O corpo da requisição deve ser um objeto JSON"


def from_pydantic(err: pydantic.ValidationError) -> ValidationError:
    """Translate a pydantic error into a ValidationError with a field breakdown."""
    errors: List[Dict[str, str]] = []
    for item in err.errors():
        loc = item.get("loc") or ()
        field = str(loc[0]) if loc else "body"
        if item.get("type") == "missing":
            msg = AGE_MESSAGE if field == "age" else REQUIRED_MESSAGE
        else:
            msg = str(item.get("msg", ValidationError.message))
            # pydantic prefixes messages raised from validators with "Value error, "
            if msg.startswith("Value error, "):
                msg = msg[len("Value error, "):]
        errors.append({"field": field, "message": msg})

    message = ValidationError.message
    for group in (("email", "name"), ("age",)):
        hits = [e["message"] for e in errors if e["field"] in group]
        if hits:
            message = REQUIRED_MESSAGE if REQUIRED_MESSAGE in hits else hits[0]
            break
    return ValidationError(message, errors)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(AppError)
    def app_error(err: AppError):  # type: ignore[override]
        if isinstance(err, StoreUnavailable):
            logger.warning("store unavailable: {}", err.__cause__ or err)
            resp = jsonify(err.to_dict())
            resp.headers["Retry-After"] = str(err.retry_after)
            return resp, err.status
        return jsonify(err.to_dict()), err.status

    @app.errorhandler(pydantic.ValidationError)
    def invalid_payload(err: pydantic.ValidationError):  # type: ignore[override]
        mapped = from_pydantic(err)
        return jsonify(mapped.to_dict()), mapped.status

    @app.errorhandler(HTTPException)
    def http_error(err: HTTPException):  # type: ignore[override]
        name = (err.name or "error").lower().replace(" ", "_")
        return jsonify({"error": name, "message": err.description}), err.code or 500

    @app.errorhandler(Exception)
    def internal(err: Exception):  # type: ignore[override]
        logger.exception("unhandled error: {}", err)
        return jsonify(InternalError().to_dict()), InternalError.status


def ok(data: Any, status: int = 200):
    return jsonify(data), status
