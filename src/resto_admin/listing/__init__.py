from .controller import FetchTicket, ListQueryController, ListStatus
from .pages import (
    ORDER_LIST_PAGE,
    ORDERS_PAGE,
    PAGES,
    RESTAURANTS_PAGE,
    USERS_PAGE,
    ListPageSpec,
    ViewState,
    build_controller,
    resolve_view_state,
)
from .query import PAGE_SIZES, ListQueryState, OrderingState, PaginationState, build_query_params

__all__ = [
    "FetchTicket",
    "ListPageSpec",
    "ListQueryController",
    "ListQueryState",
    "ListStatus",
    "ORDERS_PAGE",
    "ORDER_LIST_PAGE",
    "OrderingState",
    "PAGES",
    "PAGE_SIZES",
    "PaginationState",
    "RESTAURANTS_PAGE",
    "USERS_PAGE",
    "ViewState",
    "build_controller",
    "build_query_params",
    "resolve_view_state",
]
