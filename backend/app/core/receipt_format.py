"""Receipt Format — pure rendering of a Bill into printable receipt lines.

Invariants:
    - Same bill + same settings -> same Receipt (no clock, no IO)
    - Layout: centered title, rule, User, Date, one line per item, rule, Total
    - Item line: "<desc> - <qty> x <cur><price> = <cur><line total>"
    - Amounts always carry two decimals

Design Decisions:
    - Receipt is a plain value; drivers decide how alignment/bold map to device bytes
"""

from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo

from app.schemas.bill import Bill, LineItem

DEFAULT_WIDTH = 32  # characters on 58mm paper
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class ReceiptLine:
    text: str
    align: str = "left"
    bold: bool = False


@dataclass(frozen=True)
class Receipt:
    bill_id: str | None
    lines: tuple[ReceiptLine, ...]

    def as_text(self) -> str:
        return "\n".join(line.text for line in self.lines)


def format_amount(value: float, currency: str) -> str:
    return f"{currency}{float(value):.2f}"


def format_qty(qty: float) -> str:
    if float(qty).is_integer():
        return str(int(qty))
    return f"{qty:g}"


def format_timestamp(created_at_ms: int | None, tz: tzinfo | None = None) -> str:
    """Render epoch ms in the given zone (machine local time when tz is None)."""
    if created_at_ms is None:
        return ""
    moment = datetime.fromtimestamp(created_at_ms / 1000, tz=timezone.utc)
    return moment.astimezone(tz).strftime(TIMESTAMP_FORMAT)


def format_item(item: LineItem, currency: str) -> str:
    return (
        f"{item.desc} - {format_qty(item.qty)} x "
        f"{format_amount(item.price, currency)} = "
        f"{format_amount(item.total, currency)}"
    )


def render_receipt(
    bill: Bill,
    title: str,
    currency: str,
    tz: tzinfo | None = None,
    width: int = DEFAULT_WIDTH,
) -> Receipt:
    rule = ReceiptLine("-" * width)
    lines = [
        ReceiptLine(title, align="center", bold=True),
        rule,
        ReceiptLine(f"User: {bill.user or ''}"),
        ReceiptLine(f"Date: {format_timestamp(bill.created_at, tz)}"),
    ]
    lines.extend(ReceiptLine(format_item(item, currency)) for item in bill.lines)
    lines.append(rule)
    lines.append(ReceiptLine(f"Total: {format_amount(bill.total, currency)}", bold=True))
    return Receipt(bill_id=bill.id, lines=tuple(lines))
