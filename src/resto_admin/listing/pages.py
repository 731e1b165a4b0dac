from __future__ import annotations

import calendar
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import TYPE_CHECKING, Any

from ..models import Order, SortDirection
from ..notifications import NotificationCenter
from ..session import SessionStore
from .controller import Dispatcher, FetchFn, ListQueryController
from .query import ListQueryState, OrderingState, PaginationState

if TYPE_CHECKING:
    from ..api import ApiSession


def shift_months(value: date, months: int) -> date:
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def _upcoming_month(today: date) -> dict[str, Any]:
    return {"status": "", "minDate": today, "maxDate": shift_months(today, 1)}


def _past_month(today: date) -> dict[str, Any]:
    return {"status": "", "minDate": shift_months(today, -1), "maxDate": today}


@dataclass(frozen=True)
class ListPageSpec:
    name: str
    label: str
    sortable_fields: tuple[str, ...]
    default_order_by: str
    default_direction: SortDirection = SortDirection.DESC
    restaurant_scoped: bool = False
    filter_keys: tuple[str, ...] = ()
    default_filters: Callable[[date], dict[str, Any]] | None = None

    def initial_state(self, today: date | None = None) -> ListQueryState:
        filters = self.default_filters(today or date.today()) if self.default_filters else {}
        return ListQueryState(
            pagination=PaginationState(),
            ordering=OrderingState(order_by=self.default_order_by, order_direction=self.default_direction),
            filters=filters,
        )


USERS_PAGE = ListPageSpec(
    name="users",
    label="users",
    sortable_fields=("id", "firstName", "email", "role", "status"),
    default_order_by="id",
)

RESTAURANTS_PAGE = ListPageSpec(
    name="restaurants",
    label="restaurants",
    sortable_fields=("id", "name", "slug"),
    default_order_by="id",
)

ORDERS_PAGE = ListPageSpec(
    name="orders",
    label="orders",
    sortable_fields=("date",),
    default_order_by="date",
    default_direction=SortDirection.ASC,
    restaurant_scoped=True,
    filter_keys=("status", "minDate", "maxDate"),
    default_filters=_upcoming_month,
)

ORDER_LIST_PAGE = ListPageSpec(
    name="order-list",
    label="orders",
    sortable_fields=("id", "fullName", "date", "chairCount", "totalPayment"),
    default_order_by="date",
    restaurant_scoped=True,
    filter_keys=("status", "minDate", "maxDate"),
    default_filters=_past_month,
)

PAGES = {page.name: page for page in (USERS_PAGE, RESTAURANTS_PAGE, ORDERS_PAGE, ORDER_LIST_PAGE)}


def fetch_for(page: ListPageSpec, api: ApiSession) -> FetchFn:
    """Fetch function for a page; clients are built per call so they carry the current token."""
    if page.name == USERS_PAGE.name:
        return lambda query: api.users_client().list_users(query)
    if page.name == RESTAURANTS_PAGE.name:
        return lambda query: api.restaurants_client().list_restaurants(query)
    if page.restaurant_scoped:
        return lambda query: api.orders_client().list_orders(query)
    raise ValueError(f"No fetch function for page {page.name!r}")


def build_controller(
    page: ListPageSpec,
    api: ApiSession,
    *,
    notifications: NotificationCenter | None = None,
    dispatcher: Dispatcher | None = None,
    logger: logging.Logger | None = None,
    today: date | None = None,
) -> ListQueryController:
    session: SessionStore = api.session
    return ListQueryController(
        page,
        fetch_for(page, api),
        session=session,
        notifications=notifications,
        dispatcher=dispatcher,
        logger=logger,
        state=page.initial_state(today),
    )


class ViewState(str, Enum):
    SELECT_RESTAURANT = "select_restaurant"
    LOADING = "loading"
    EMPTY = "empty"
    READY = "ready"


def resolve_view_state(controller: ListQueryController) -> ViewState:
    if controller.needs_restaurant:
        return ViewState.SELECT_RESTAURANT
    if controller.is_loading:
        return ViewState.LOADING
    if not controller.rows:
        return ViewState.EMPTY
    return ViewState.READY


def group_orders_by_date(orders: Sequence[Order]) -> dict[str, list[Order]]:
    groups: dict[str, list[Order]] = {}
    for order in orders:
        groups.setdefault(order.date, []).append(order)
    return groups
