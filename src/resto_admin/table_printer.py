from __future__ import annotations

import sys
from typing import Any, TextIO

from .models import Order, Restaurant, User

EMPTY_VALUE = "—"

USER_COLUMNS = [
    ("id", "ID"),
    ("name", "Name"),
    ("email", "Email"),
    ("role", "Role"),
    ("status", "Status"),
]
RESTAURANT_COLUMNS = [
    ("id", "ID"),
    ("name", "Name"),
    ("slug", "Slug"),
    ("admin", "Administrator"),
]
ORDER_COLUMNS = [
    ("id", "ID"),
    ("fullName", "Client"),
    ("date", "Date"),
    ("orderTypeName", "Order type"),
    ("chairCount", "Guests"),
    ("totalPayment", "Total"),
    ("status", "Status"),
    ("offsite", "Offsite"),
]


def normalize_value(value: Any) -> str:
    if value is None:
        return EMPTY_VALUE
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, str):
        return value.strip() or EMPTY_VALUE
    return str(value)


def to_row(record: Any) -> dict[str, Any]:
    if isinstance(record, User):
        return {**record.to_wire(), "name": record.full_name}
    if isinstance(record, Restaurant):
        return {**record.to_wire(), "admin": record.admin_name}
    if isinstance(record, Order):
        return record.to_wire()
    return dict(record)


def print_table(title: str, rows: list[dict[str, Any]], columns: list[tuple[str, str]], stream: TextIO | None = None) -> None:
    out = stream or sys.stdout
    out.write(f"\n{title}\n")
    if not rows:
        out.write("(no results)\n")
        return

    widths = []
    for key, header in columns:
        max_cell = max(len(normalize_value(row.get(key))) for row in rows)
        widths.append(max(len(header), max_cell))

    out.write(" | ".join(header.ljust(widths[idx]) for idx, (_, header) in enumerate(columns)) + "\n")
    out.write("-+-".join("-" * width for width in widths) + "\n")
    for row in rows:
        out.write(" | ".join(normalize_value(row.get(key)).ljust(widths[idx]) for idx, (key, _) in enumerate(columns)) + "\n")
