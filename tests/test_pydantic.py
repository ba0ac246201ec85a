"""
tests.test_pydantic
Use of value wrappers as Pydantic field types.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


from types import SimpleNamespace
from typing import List, Optional

import pytest
from pydantic import BaseModel, TypeAdapter, ValidationError

from preoccupied.pydantic.value import (
    IsValidNotImplementedError, SerializableValueWrapper, ValueWrapper)


@pytest.fixture
def models() -> SimpleNamespace:
    """
    Provide a namespace containing wrapper classes and a model using them.
    """

    class Code(ValueWrapper[str]):
        @classmethod
        def is_valid(cls, candidate):
            if isinstance(candidate, cls):
                return True
            return isinstance(candidate, str) and candidate.isupper()

    class Amount(SerializableValueWrapper[int]):
        @classmethod
        def is_valid(cls, candidate):
            if isinstance(candidate, cls):
                return True
            return type(candidate) is int and candidate >= 0

    class Broken(ValueWrapper[str]):
        pass

    class Order(BaseModel):
        code: Code
        amount: Amount
        discount: Optional[Amount] = None

    class BrokenOrder(BaseModel):
        broken: Broken

    return SimpleNamespace(**locals())


def test_model_validates_raw_values(models: SimpleNamespace) -> None:
    order = models.Order(code="ABC", amount=5)

    assert isinstance(order.code, models.Code)
    assert isinstance(order.amount, models.Amount)
    assert order.code == "ABC"
    assert order.amount == 5
    assert order.discount is None


def test_model_keeps_instances(models: SimpleNamespace) -> None:
    """
    Already-wrapped values are passed through without copying.
    """

    code = models.Code("XYZ")
    amount = models.Amount(3)
    order = models.Order(code=code, amount=amount, discount=amount)

    assert order.code is code
    assert order.amount is amount
    assert order.discount is amount


@pytest.mark.parametrize(
    "payload, note",
    [
        ({"code": "abc", "amount": 5}, "lowercase code"),
        ({"code": "ABC", "amount": -1}, "negative amount"),
        ({"code": "ABC", "amount": "5"}, "amount is not an int"),
        ({"code": "ABC", "amount": 5, "discount": -2}, "negative discount"),
    ],
)
def test_model_rejects_invalid(
        models: SimpleNamespace,
        payload: dict,
        note: str) -> None:

    with pytest.raises(ValidationError) as error:
        models.Order.model_validate(payload)

    assert "not a valid" in str(error.value), note


def test_model_dump_serializable(models: SimpleNamespace) -> None:
    """
    Serializable wrappers dump as their bare value.
    """

    order = models.Order(code="ABC", amount=5, discount=1)
    dumped = order.model_dump(exclude={"code"})
    assert dumped == {"amount": 5, "discount": 1}
    assert type(dumped["amount"]) is int


def test_model_dump_plain_wrapper(models: SimpleNamespace) -> None:
    """
    Plain wrappers are opaque to pydantic serialization.
    """

    order = models.Order(code="ABC", amount=5)
    dumped = order.model_dump()
    assert dumped["code"] is order.code


def test_model_json_roundtrip(models: SimpleNamespace) -> None:
    adapter = TypeAdapter(List[models.Amount])

    encoded = adapter.dump_json([models.Amount(1), models.Amount(2)])
    assert encoded == b"[1,2]"

    decoded = adapter.validate_json(encoded)
    assert decoded == [models.Amount(1), models.Amount(2)]
    assert all(isinstance(item, models.Amount) for item in decoded)

    with pytest.raises(ValidationError):
        adapter.validate_json(b"[1,-2]")


def test_model_json_schema(models: SimpleNamespace) -> None:
    schema = models.Order.model_json_schema()
    assert set(schema["properties"]) == {"code", "amount", "discount"}


def test_missing_is_valid_is_not_a_validation_error(
        models: SimpleNamespace) -> None:

    with pytest.raises(IsValidNotImplementedError):
        models.BrokenOrder(broken="x")


# The end.
