"""Domain dataclass for User entities (DB-agnostic)."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class User:
    id: str
    email: str
    name: str
    age: str


# Attributes a client may filter on or change; ``id`` is immutable.
USER_FIELDS = ("email", "name", "age")
