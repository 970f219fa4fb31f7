"""Builds a minimal OpenAPI spec from existing Pydantic schemas."""
from __future__ import annotations

from typing import Any, Dict
from flask import request

from ..api.users.schemas import MessageOut, UserCreateIn, UserOut, UserUpdateIn


def _schemas() -> Dict[str, Any]:
    return {
        "UserCreateIn": UserCreateIn.model_json_schema(ref_template="#/components/schemas/{model}"),
        "UserUpdateIn": UserUpdateIn.model_json_schema(ref_template="#/components/schemas/{model}"),
        "UserOut": UserOut.model_json_schema(ref_template="#/components/schemas/{model}"),
        "MessageOut": MessageOut.model_json_schema(ref_template="#/components/schemas/{model}"),
        "Error": {
            "type": "object",
            "properties": {
                "error": {"type": "string"},
                "message": {"type": "string"},
                "errors": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {"field": {"type": "string"}, "message": {"type": "string"}},
                    },
                },
            },
            "required": ["message"],
        },
    }


def _json(ref: str, array: bool = False) -> Dict[str, Any]:
    schema: Dict[str, Any] = {"$ref": f"#/components/schemas/{ref}"}
    if array:
        schema = {"type": "array", "items": schema}
    return {"application/json": {"schema": schema}}


def _error(description: str) -> Dict[str, Any]:
    return {"description": description, "content": _json("Error")}


def build_openapi() -> Dict[str, Any]:
    base_url = f"{request.scheme}://{request.host}"
    unavailable = _error("Store temporarily unavailable (retryable)")
    internal = _error("Internal error")
    filters = [
        {"name": name, "in": "query", "required": False, "schema": {"type": "string"}}
        for name in ("name", "email", "age")
    ]
    return {
        "openapi": "3.0.3",
        "info": {"title": "Cadastro de Usuários API", "version": "1.0.0"},
        "servers": [{"url": base_url}],
        "tags": [
            {"name": "Health"},
            {"name": "Usuarios"},
        ],
        "paths": {
            "/health/": {
                "get": {"tags": ["Health"], "summary": "Liveness probe", "responses": {"200": {"description": "OK"}}}
            },
            "/health/supabase": {
                "get": {"tags": ["Health"], "summary": "Supabase client status", "responses": {"200": {"description": "Status"}}}
            },
            "/usuarios": {
                "get": {
                    "tags": ["Usuarios"], "summary": "List users, optionally filtered by exact attribute match",
                    "parameters": filters,
                    "responses": {
                        "200": {"description": "OK", "content": _json("UserOut", array=True)},
                        "503": unavailable, "500": internal,
                    },
                },
                "post": {
                    "tags": ["Usuarios"], "summary": "Create user",
                    "requestBody": {"required": True, "content": _json("UserCreateIn")},
                    "responses": {
                        "201": {"description": "Created", "content": _json("UserOut")},
                        "400": _error("Missing or invalid fields"),
                        "409": _error("E-mail already registered"),
                        "503": unavailable, "500": internal,
                    },
                },
            },
            "/usuarios/{user_id}": {
                "parameters": [{"name": "user_id", "in": "path", "required": True, "schema": {"type": "string"}}],
                "get": {
                    "tags": ["Usuarios"], "summary": "Get user by id",
                    "responses": {
                        "200": {"description": "OK", "content": _json("UserOut")},
                        "404": _error("Not found"), "503": unavailable, "500": internal,
                    },
                },
                "put": {
                    "tags": ["Usuarios"], "summary": "Partially update user",
                    "requestBody": {"required": True, "content": _json("UserUpdateIn")},
                    "responses": {
                        "200": {"description": "OK", "content": _json("UserOut")},
                        "400": _error("Invalid fields"),
                        "404": _error("Not found"),
                        "409": _error("E-mail already registered"),
                        "503": unavailable, "500": internal,
                    },
                },
                "delete": {
                    "tags": ["Usuarios"], "summary": "Delete user",
                    "responses": {
                        "200": {"description": "Deleted", "content": _json("MessageOut")},
                        "404": _error("Not found"), "503": unavailable, "500": internal,
                    },
                },
            },
        },
        "components": {
            "schemas": _schemas(),
        },
    }
