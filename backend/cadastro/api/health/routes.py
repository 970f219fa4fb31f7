"""Health check endpoints."""
from __future__ import annotations

from flask import Blueprint, current_app

from ...errors import ok
from ...integrations.supabase_client import supabase_ext


bp = Blueprint("health", __name__)


@bp.get("/")
def alive():
    backend = (current_app.config.get("USER_REPO_BACKEND") or "sqlalchemy").lower()
    return ok({"status": "ok", "store": backend})


@bp.get("/supabase")
def supabase_status():
    return ok({
        "anon_initialized": bool(supabase_ext.anon is not None),
        "service_initialized": bool(supabase_ext.service is not None),
    })
