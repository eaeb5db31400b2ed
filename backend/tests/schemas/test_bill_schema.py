"""Tests for Bill / LineItem schemas — derived totals, range checks, payload round trip."""

import pytest
from pydantic import ValidationError

from app.schemas.bill import Bill, LineItem


def test_line_total_derived_when_missing():
    assert LineItem(desc="Tea", qty=3, price=2.5).total == 7.5


def test_line_total_kept_when_sent():
    assert LineItem(desc="Tea", qty=3, price=2.5, total=7).total == 7


@pytest.mark.parametrize("qty", [0, -1])
def test_qty_must_be_positive(qty):
    with pytest.raises(ValidationError):
        LineItem(desc="Tea", qty=qty, price=1)


def test_price_cannot_be_negative():
    with pytest.raises(ValidationError):
        LineItem(desc="Tea", qty=1, price=-0.01)


def test_free_item_allowed():
    assert LineItem(desc="Water", qty=1, price=0).total == 0


def test_empty_body_parses_without_id():
    bill = Bill.model_validate({})
    assert bill.id is None
    assert bill.lines == []
    assert bill.created_at is None


def test_created_at_uses_wire_alias():
    bill = Bill.model_validate({"id": "b1", "createdAt": 1234})
    assert bill.created_at == 1234
    assert bill.to_payload()["createdAt"] == 1234
    assert "created_at" not in bill.to_payload()


def test_stamped_fills_only_missing_created_at():
    assert Bill(id="b1").stamped(99).created_at == 99
    assert Bill(id="b1", createdAt=5).stamped(99).created_at == 5


def test_payload_keeps_unknown_fields_and_integers():
    raw = {
        "id": "b1",
        "user": "alice",
        "lines": [{"desc": "Tea", "qty": 2, "price": 10, "total": 20, "sku": "T-1"}],
        "total": 20,
        "createdAt": 1,
        "device": "till-2",
    }
    assert Bill.model_validate(raw).to_payload() == raw


def test_numeric_id_is_stored_as_text():
    assert Bill.model_validate({"id": 123}).id == "123"
    assert Bill.model_validate({"id": "123"}).id == "123"


def test_boolean_id_is_rejected():
    with pytest.raises(ValidationError):
        Bill.model_validate({"id": True})
