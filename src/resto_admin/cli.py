from __future__ import annotations

import argparse
import sys
from datetime import date
from typing import TextIO

from .api import ApiSession
from .config import ConfigError, load_config
from .exceptions import ApiError
from .listing.pages import PAGES, ListPageSpec, ViewState, build_controller, resolve_view_state
from .listing.query import PAGE_SIZES, ListQueryState, OrderingState, goto_page, set_limit
from .models import SortDirection
from .notifications import NotificationCenter
from .session import SessionStore
from .session_guard import SessionGuard
from .storage import FileStorage
from .table_printer import ORDER_COLUMNS, RESTAURANT_COLUMNS, USER_COLUMNS, print_table, to_row

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_LOGIN_REQUIRED = 2

COLUMNS_BY_PAGE = {
    "users": USER_COLUMNS,
    "restaurants": RESTAURANT_COLUMNS,
    "orders": ORDER_COLUMNS,
    "order-list": ORDER_COLUMNS,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="resto-admin", description="Restaurant operations admin console")
    parser.add_argument("--env-file", default=None, help="Optional .env file with RESTO_* settings")
    commands = parser.add_subparsers(dest="command", required=True)

    login = commands.add_parser("login", help="Sign in and store the session")
    login.add_argument("--email", required=True)
    login.add_argument("--password", required=True)

    commands.add_parser("logout", help="Forget the stored session")
    commands.add_parser("whoami", help="Show the signed-in user and restaurant")

    select = commands.add_parser("select-restaurant", help="Choose the active restaurant")
    select.add_argument("restaurant_id", type=int)

    for name, page in PAGES.items():
        listing = commands.add_parser(name, help=f"List {page.label}")
        listing.add_argument("--page", type=int, default=1)
        listing.add_argument("--limit", type=int, choices=PAGE_SIZES, default=None)
        listing.add_argument("--order-by", choices=page.sortable_fields, default=None)
        listing.add_argument("--direction", choices=[item.value for item in SortDirection], default=None)
        listing.add_argument("--search", default="")
        if page.filter_keys:
            listing.add_argument("--status", default=None)
            listing.add_argument("--min-date", type=date.fromisoformat, default=None)
            listing.add_argument("--max-date", type=date.fromisoformat, default=None)
    return parser


def apply_listing_args(state: ListQueryState, page: ListPageSpec, args: argparse.Namespace) -> None:
    goto_page(state.pagination, args.page)
    if args.limit is not None:
        set_limit(state.pagination, args.limit)
    if args.order_by or args.direction:
        order_by = args.order_by or state.ordering.order_by
        if args.direction:
            direction = SortDirection(args.direction)
        elif order_by == state.ordering.order_by:
            direction = state.ordering.order_direction
        else:
            direction = SortDirection.DESC
        state.ordering = OrderingState(order_by=order_by, order_direction=direction)
    state.search = args.search or ""
    if page.filter_keys:
        overrides = {"status": args.status, "minDate": args.min_date, "maxDate": args.max_date}
        state.filters.update({key: value for key, value in overrides.items() if value is not None})


def _run_listing(api: ApiSession, page: ListPageSpec, args: argparse.Namespace, out: TextIO) -> int:
    notifications = NotificationCenter()
    controller = build_controller(page, api, notifications=notifications)
    try:
        apply_listing_args(controller.state, page, args)
        controller.refresh()
    finally:
        controller.close()

    if resolve_view_state(controller) is ViewState.SELECT_RESTAURANT:
        out.write("Please select a restaurant first (resto-admin select-restaurant ID).\n")
        return EXIT_OK
    if controller.last_error is not None:
        for notice in notifications.drain():
            trace = f" (trace_id={notice.trace_id})" if notice.trace_id else ""
            out.write(f"[{notice.title}] {notice.description}{trace}\n")
        return EXIT_FAILED

    state = controller.state
    title = (
        f"{page.label.capitalize()} - page {state.pagination.page}, {state.pagination.limit} per page, "
        f"{state.ordering.order_by} {state.ordering.order_direction.value}"
    )
    print_table(title, [to_row(record) for record in controller.rows], COLUMNS_BY_PAGE[page.name], stream=out)
    return EXIT_OK


def _whoami(store: SessionStore, out: TextIO) -> int:
    user = store.user
    if user is None:
        out.write("Not signed in.\n")
        return EXIT_LOGIN_REQUIRED
    out.write(f"{user.full_name} <{user.email or '-'}> role={user.role or '-'} status={user.status or '-'}\n")
    selected_id = store.selected_restaurant.id if store.selected_restaurant else None
    for restaurant in user.restaurants:
        marker = "*" if restaurant.id == selected_id else " "
        out.write(f" {marker} {restaurant.id}: {restaurant.name}\n")
    return EXIT_OK


def main(argv: list[str] | None = None, out: TextIO | None = None) -> int:
    out = out or sys.stdout
    args = build_parser().parse_args(argv)
    try:
        config = load_config(args.env_file)
    except ConfigError as error:
        out.write(f"Configuration error: {error}\n")
        return EXIT_FAILED

    store = SessionStore(FileStorage(app_name=config.app_name))
    store.initialize()
    api = ApiSession(config=config, session=store)

    if args.command == "login":
        try:
            user = api.sign_in(args.email, args.password)
        except ApiError as error:
            out.write(f"Login failed: {error}\n")
            return EXIT_FAILED
        selected = store.selected_restaurant
        out.write(f"Signed in as {user.full_name or user.email}")
        out.write(f"; restaurant: {selected.name}\n" if selected else "\n")
        return EXIT_OK

    if args.command == "logout":
        api.sign_out()
        out.write("Signed out.\n")
        return EXIT_OK

    guard = SessionGuard(on_invalid_session=lambda reason: out.write(f"Session required ({reason}). Run: resto-admin login\n"))
    if not guard.require_session(store, args.command):
        return EXIT_LOGIN_REQUIRED

    if args.command == "whoami":
        return _whoami(store, out)

    if args.command == "select-restaurant":
        try:
            restaurant = store.select_restaurant_by_id(args.restaurant_id)
        except ValueError as error:
            out.write(f"{error}\n")
            return EXIT_FAILED
        out.write(f"Active restaurant: {restaurant.name}\n")
        return EXIT_OK

    return _run_listing(api, PAGES[args.command], args, out)


if __name__ == "__main__":
    sys.exit(main())
