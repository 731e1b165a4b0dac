from __future__ import annotations

from datetime import date

import pytest

from resto_admin.listing.pages import ORDER_LIST_PAGE, ORDERS_PAGE, USERS_PAGE, group_orders_by_date, shift_months
from resto_admin.listing.query import (
    ListQueryState,
    OrderingState,
    PaginationState,
    build_query_params,
    clean_filters,
    goto_page,
    next_page,
    prev_page,
    set_limit,
    toggle_sort,
)
from resto_admin.models import Order, OrderStatus, SortDirection


def test_default_users_query_has_no_search_or_filters() -> None:
    params = build_query_params(USERS_PAGE.initial_state())

    assert params == {"page": 1, "limit": 20, "order_by": "id", "order_direction": "DESC"}


def test_search_and_restaurant_are_added_when_present() -> None:
    state = USERS_PAGE.initial_state()
    state.search = "ayl"

    params = build_query_params(state, restaurant_id=4)

    assert params["search"] == "ayl"
    assert params["restaurantId"] == 4


def test_toggling_same_column_twice_restores_direction() -> None:
    ordering = OrderingState(order_by="id")

    toggle_sort(ordering, "id")
    assert ordering.order_direction is SortDirection.ASC
    toggle_sort(ordering, "id")

    assert ordering == OrderingState(order_by="id", order_direction=SortDirection.DESC)


def test_toggling_new_column_starts_descending() -> None:
    ordering = OrderingState(order_by="id", order_direction=SortDirection.ASC)

    toggle_sort(ordering, "email")

    assert ordering == OrderingState(order_by="email", order_direction=SortDirection.DESC)


def test_page_never_goes_below_one() -> None:
    state = PaginationState()

    assert prev_page(state) is False
    assert goto_page(state, 0) is False
    assert goto_page(state, -3) is False
    assert state.page == 1


def test_page_navigation_reports_changes() -> None:
    state = PaginationState()

    assert next_page(state) is True
    assert goto_page(state, 2) is False
    assert prev_page(state) is True
    assert state.page == 1


def test_limit_accepts_only_known_sizes() -> None:
    state = PaginationState()

    assert set_limit(state, 50) is True
    assert set_limit(state, 50) is False
    with pytest.raises(ValueError):
        set_limit(state, 25)
    assert state.limit == 50


def test_only_blank_filter_values_are_dropped() -> None:
    filters = {"status": "all", "role": "", "owner": None, "minDate": date(2024, 3, 1), "kind": OrderStatus.ACCEPTED}

    assert clean_filters(filters) == {"status": "all", "minDate": "2024-03-01", "kind": "accepted"}


def test_filters_are_merged_into_params() -> None:
    state = ListQueryState(
        pagination=PaginationState(page=3, limit=10),
        ordering=OrderingState(order_by="date", order_direction=SortDirection.ASC),
        filters={"status": "prepayment", "minDate": date(2024, 1, 31)},
    )

    assert build_query_params(state, restaurant_id=2) == {
        "page": 3,
        "limit": 10,
        "order_by": "date",
        "order_direction": "ASC",
        "status": "prepayment",
        "minDate": "2024-01-31",
        "restaurantId": 2,
    }


def test_orders_page_defaults_to_upcoming_month() -> None:
    state = ORDERS_PAGE.initial_state(today=date(2024, 1, 31))

    assert state.ordering == OrderingState(order_by="date", order_direction=SortDirection.ASC)
    assert state.filters == {"status": "", "minDate": date(2024, 1, 31), "maxDate": date(2024, 2, 29)}


def test_order_list_page_defaults_to_past_month() -> None:
    state = ORDER_LIST_PAGE.initial_state(today=date(2024, 3, 15))

    assert state.ordering.order_direction is SortDirection.DESC
    assert state.filters["minDate"] == date(2024, 2, 15)
    assert state.filters["maxDate"] == date(2024, 3, 15)


def test_shift_months_crosses_year_boundaries() -> None:
    assert shift_months(date(2023, 12, 10), 1) == date(2024, 1, 10)
    assert shift_months(date(2024, 1, 10), -1) == date(2023, 12, 10)


def test_orders_are_grouped_by_date_in_input_order() -> None:
    orders = [
        Order(id=1, date="2024-05-01"),
        Order(id=2, date="2024-05-02"),
        Order(id=3, date="2024-05-01"),
    ]

    groups = group_orders_by_date(orders)

    assert list(groups) == ["2024-05-01", "2024-05-02"]
    assert [order.id for order in groups["2024-05-01"]] == [1, 3]
