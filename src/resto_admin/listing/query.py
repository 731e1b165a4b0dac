from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any

from ..models import SortDirection

PAGE_SIZES = (10, 20, 50)
DEFAULT_LIMIT = 20


@dataclass
class PaginationState:
    page: int = 1
    limit: int = DEFAULT_LIMIT


@dataclass
class OrderingState:
    order_by: str
    order_direction: SortDirection = SortDirection.DESC


@dataclass
class ListQueryState:
    pagination: PaginationState
    ordering: OrderingState
    search: str = ""
    filters: dict[str, Any] = field(default_factory=dict)


def goto_page(state: PaginationState, page: int) -> bool:
    if page < 1 or page == state.page:
        return False
    state.page = page
    return True


def next_page(state: PaginationState) -> bool:
    return goto_page(state, state.page + 1)


def prev_page(state: PaginationState) -> bool:
    return goto_page(state, state.page - 1)


def set_limit(state: PaginationState, limit: int) -> bool:
    if limit not in PAGE_SIZES:
        raise ValueError(f"Unsupported page size {limit}; expected one of {PAGE_SIZES}")
    if limit == state.limit:
        return False
    state.limit = limit
    return True


def toggle_sort(ordering: OrderingState, column: str) -> OrderingState:
    if column == ordering.order_by:
        ordering.order_direction = ordering.order_direction.flipped()
    else:
        ordering.order_by = column
        ordering.order_direction = SortDirection.DESC
    return ordering


def is_applied(value: Any) -> bool:
    return value not in (None, "")


def _serialize(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    return value


def clean_filters(filters: dict[str, Any]) -> dict[str, Any]:
    return {key: _serialize(value) for key, value in filters.items() if is_applied(value)}


def build_query_params(state: ListQueryState, restaurant_id: int | None = None) -> dict[str, Any]:
    params: dict[str, Any] = {
        "page": state.pagination.page,
        "limit": state.pagination.limit,
        "order_by": state.ordering.order_by,
        "order_direction": state.ordering.order_direction.value,
    }
    if state.search:
        params["search"] = state.search
    params.update(clean_filters(state.filters))
    if restaurant_id is not None:
        params["restaurantId"] = restaurant_id
    return params
