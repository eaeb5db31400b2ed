"""Tests for render_receipt — pure, deterministic receipt layout."""

from datetime import timedelta, timezone

from app.core.receipt_format import (
    format_amount,
    format_qty,
    format_timestamp,
    render_receipt,
)
from app.schemas.bill import Bill, LineItem


def _bill(**overrides):
    data = {
        "id": "b1",
        "user": "alice",
        "lines": [
            LineItem(desc="Tea", qty=2, price=10),
            LineItem(desc="Samosa", qty=1.5, price=4),
        ],
        "total": 26,
        "createdAt": 0,
    }
    data.update(overrides)
    return Bill(**data)


def test_full_layout():
    receipt = render_receipt(_bill(), "General Billing", "₹", tz=timezone.utc)

    assert [line.text for line in receipt.lines] == [
        "General Billing",
        "-" * 32,
        "User: alice",
        "Date: 1970-01-01 00:00:00",
        "Tea - 2 x ₹10.00 = ₹20.00",
        "Samosa - 1.5 x ₹4.00 = ₹6.00",
        "-" * 32,
        "Total: ₹26.00",
    ]


def test_title_centered_and_total_bold():
    receipt = render_receipt(_bill(), "Shop", "$", tz=timezone.utc)

    assert receipt.lines[0].align == "center"
    assert receipt.lines[0].bold
    assert receipt.lines[-1].bold
    assert receipt.bill_id == "b1"


def test_rendering_is_deterministic():
    bill = _bill()
    first = render_receipt(bill, "Shop", "$", tz=timezone.utc)
    second = render_receipt(bill, "Shop", "$", tz=timezone.utc)
    assert first == second


def test_missing_user_renders_blank():
    receipt = render_receipt(_bill(user=None), "Shop", "$", tz=timezone.utc)
    assert receipt.lines[2].text == "User: "


def test_width_controls_rule_length():
    receipt = render_receipt(_bill(), "Shop", "$", tz=timezone.utc, width=42)
    assert receipt.lines[1].text == "-" * 42


def test_client_line_total_is_printed_as_sent():
    bill = _bill(lines=[LineItem(desc="Combo", qty=2, price=10, total=18)], total=18)
    receipt = render_receipt(bill, "Shop", "$", tz=timezone.utc)
    assert "Combo - 2 x $10.00 = $18.00" in receipt.as_text()


def test_format_helpers():
    assert format_amount(3, "$") == "$3.00"
    assert format_amount(12.5, "") == "12.50"
    assert format_qty(3.0) == "3"
    assert format_qty(0.25) == "0.25"
    assert format_timestamp(None) == ""
    ist = timezone(timedelta(hours=5, minutes=30))
    assert format_timestamp(0, ist) == "1970-01-01 05:30:00"
