from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import pytest
from postgrest.exceptions import APIError

from cadastro.db.repositories.user_repo_supabase import UserRepositorySupabase
from cadastro.domain.user import User
from cadastro.errors import DuplicateEmail, NotFound, StoreUnavailable

UID = "6f1c2a7e-3b4d-4c5e-9f80-1a2b3c4d5e6f"
ROW = {"id": UID, "email": "ana@example.com", "name": "Ana", "age": "30", "created_at": "2025-01-01"}


@pytest.fixture
def table():
    t = MagicMock(name="table")
    # query builders return themselves until execute()
    for method in ("select", "order", "eq", "limit", "insert", "update", "delete"):
        getattr(t, method).return_value = t
    t.execute.return_value = SimpleNamespace(data=[ROW])
    return t


@pytest.fixture
def repo(table):
    client = MagicMock(name="client")
    client.table.return_value = table
    return UserRepositorySupabase(client)


def test_list_applies_only_given_filters(repo, table):
    users = repo.list({"email": "ana@example.com"})
    assert users == [User(id=UID, email="ana@example.com", name="Ana", age="30")]
    table.eq.assert_called_once_with("email", "ana@example.com")


def test_list_without_filters(repo, table):
    repo.list()
    table.eq.assert_not_called()


def test_get_missing(repo, table):
    table.execute.return_value = SimpleNamespace(data=[])
    with pytest.raises(NotFound):
        repo.get(UID)


def test_create_duplicate(repo, table):
    table.execute.side_effect = APIError({"message": "duplicate key", "code": "23505", "hint": None, "details": None})
    with pytest.raises(DuplicateEmail):
        repo.create(email="ana@example.com", name="Ana", age="30")


def test_other_api_errors_propagate(repo, table):
    table.execute.side_effect = APIError({"message": "boom", "code": "XX000", "hint": None, "details": None})
    with pytest.raises(APIError):
        repo.list()


def test_timeout_is_store_unavailable(repo, table):
    table.execute.side_effect = httpx.ReadTimeout("timed out")
    with pytest.raises(StoreUnavailable):
        repo.list()


def test_update_sends_only_known_fields(repo, table):
    repo.update(UID, age="40", id="hijack")
    table.update.assert_called_once_with({"age": "40"})


def test_update_empty_reads_current(repo, table):
    assert repo.update(UID).id == UID
    table.update.assert_not_called()


def test_update_missing(repo, table):
    table.execute.return_value = SimpleNamespace(data=[])
    with pytest.raises(NotFound):
        repo.update(UID, name="X")


def test_delete_missing(repo, table):
    table.execute.return_value = SimpleNamespace(data=[])
    with pytest.raises(NotFound):
        repo.delete(UID)


@pytest.mark.parametrize("op", ["get", "update", "delete"])
def test_non_uuid_id_is_not_found_without_query(repo, table, op):
    with pytest.raises(NotFound):
        if op == "update":
            repo.update("abc", name="X")
        else:
            getattr(repo, op)("abc")
    table.execute.assert_not_called()
