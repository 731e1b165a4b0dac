from __future__ import annotations

import io

from resto_admin.models import Restaurant, User
from resto_admin.table_printer import EMPTY_VALUE, RESTAURANT_COLUMNS, normalize_value, print_table, to_row


def test_normalize_value_handles_blank_and_bool() -> None:
    assert normalize_value(None) == EMPTY_VALUE
    assert normalize_value("   ") == EMPTY_VALUE
    assert normalize_value(True) == "yes"
    assert normalize_value(12) == "12"


def test_rows_gain_display_columns() -> None:
    user = User.model_validate({"id": 1, "firstName": "Aylar", "lastName": "Orazova"})
    restaurant = Restaurant(id=2, name="Nusay", slug="nusay", user=user)

    assert to_row(user)["name"] == "Aylar Orazova"
    assert to_row(restaurant)["admin"] == "Aylar Orazova"


def test_print_table_aligns_columns() -> None:
    out = io.StringIO()
    rows = [to_row(Restaurant(id=2, name="Nusay", slug=None))]

    print_table("Restaurants", rows, RESTAURANT_COLUMNS, stream=out)

    lines = out.getvalue().splitlines()
    assert lines[1] == "Restaurants"
    assert lines[2].startswith("ID | Name  | Slug | Administrator")
    assert lines[4].split(" | ")[2].strip() == EMPTY_VALUE


def test_print_table_without_rows() -> None:
    out = io.StringIO()

    print_table("Users", [], [], stream=out)

    assert "(no results)" in out.getvalue()
