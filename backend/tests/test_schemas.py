import pydantic
import pytest

from cadastro.api.users.schemas import UserCreateIn, UserFilterIn, UserUpdateIn
from cadastro.errors import AGE_MESSAGE, EMAIL_MESSAGE, MAX_AGE_MESSAGE, REQUIRED_MESSAGE, from_pydantic


@pytest.mark.parametrize("raw, expected", [(30, "30"), ("7", "7"), (" 12 ", "12"), (18.0, "18"), ("+5", "5")])
def test_age_is_normalized_to_text(raw, expected):
    u = UserCreateIn.model_validate({"email": "a@x.com", "name": "Ana", "age": raw})
    assert u.age == expected


def test_name_is_trimmed():
    u = UserCreateIn.model_validate({"email": "a@x.com", "name": "  Ana ", "age": 1})
    assert u.name == "Ana"


def test_missing_everything_reports_required_first():
    with pytest.raises(pydantic.ValidationError) as exc:
        UserCreateIn.model_validate({})
    err = from_pydantic(exc.value)
    assert err.status == 400
    assert err.message == REQUIRED_MESSAGE
    assert [e["field"] for e in err.errors] == ["email", "name", "age"]
    assert err.errors[2]["message"] == AGE_MESSAGE


def test_update_accepts_any_subset():
    assert UserUpdateIn.model_validate({}).model_dump(exclude_none=True) == {}
    assert UserUpdateIn.model_validate({"age": "40"}).model_dump(exclude_none=True) == {"age": "40"}


def test_filters_drop_blank_values():
    f = UserFilterIn.model_validate({"name": " ", "email": "foo@bar.com", "age": ""})
    assert f.model_dump(exclude_none=True) == {"email": "foo@bar.com"}


@pytest.mark.parametrize("raw", [151, "151", "+0000151", "9" * 5000, 1e300])
def test_age_above_maximum_is_rejected(raw):
    with pytest.raises(pydantic.ValidationError) as exc:
        UserCreateIn.model_validate({"email": "a@x.com", "name": "Ana", "age": raw})
    assert from_pydantic(exc.value).message == MAX_AGE_MESSAGE


def test_age_at_maximum_fits_column():
    u = UserCreateIn.model_validate({"email": "a@x.com", "name": "Ana", "age": 150})
    assert u.age == "150"


def test_email_keeps_its_case():
    u = UserCreateIn.model_validate({"email": " Ana@X.COM ", "name": "Ana", "age": 1})
    assert u.email == "Ana@X.COM"


def test_invalid_email_message():
    with pytest.raises(pydantic.ValidationError) as exc:
        UserUpdateIn.model_validate({"email": "ana@"})
    assert from_pydantic(exc.value).message == EMAIL_MESSAGE
