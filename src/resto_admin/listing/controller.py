"""Pagination/sort/search/filter state for one list screen and the fetches it drives.

Every state change that alters the derived query issues exactly one fetch.
Fetches carry a sequence number; only the most recently issued one may replace
the displayed rows, so a slow response for an older query is dropped instead of
overwriting a newer result.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from ..error_mapper import describe_error
from ..exceptions import SessionContextError
from ..logger import get_logger, log_action
from ..notifications import NotificationCenter
from ..session import SessionEvent, SessionEventKind, SessionStore
from .query import ListQueryState, build_query_params, goto_page, next_page, prev_page, set_limit, toggle_sort

if TYPE_CHECKING:
    from .pages import ListPageSpec

FetchFn = Callable[[dict[str, Any]], Sequence[Any]]
Dispatcher = Callable[[Callable[[], None]], None]


class ListStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"


@dataclass(frozen=True)
class FetchTicket:
    sequence: int
    params: dict[str, Any]


def run_inline(job: Callable[[], None]) -> None:
    job()


class ListQueryController:
    def __init__(
        self,
        page: ListPageSpec,
        fetch: FetchFn,
        *,
        session: SessionStore | None = None,
        notifications: NotificationCenter | None = None,
        dispatcher: Dispatcher | None = None,
        logger: logging.Logger | None = None,
        state: ListQueryState | None = None,
    ) -> None:
        if page.restaurant_scoped and session is None:
            raise ValueError(f"{page.name} is restaurant-scoped and needs a session")
        self.page = page
        self.fetch = fetch
        self.session = session
        self.notifications = notifications or NotificationCenter()
        self.dispatcher = dispatcher or run_inline
        self.logger = logger or get_logger()
        self.state = state or page.initial_state()
        self.rows: list[Any] = []
        self.status = ListStatus.IDLE
        self.last_error: Exception | None = None
        self._sequence = 0
        self._latest: FetchTicket | None = None
        self._scope_id = self.restaurant_id
        self._unsubscribe = session.subscribe(self._on_session_event) if page.restaurant_scoped else None

    @property
    def restaurant_id(self) -> int | None:
        if not self.page.restaurant_scoped or self.session is None:
            return None
        selected = self.session.selected_restaurant
        return selected.id if selected else None

    @property
    def needs_restaurant(self) -> bool:
        return self.page.restaurant_scoped and self.restaurant_id is None

    @property
    def is_loading(self) -> bool:
        return self.status is ListStatus.LOADING

    def query_params(self) -> dict[str, Any]:
        return build_query_params(self.state, self.restaurant_id)

    def refresh(self) -> FetchTicket | None:
        return self._issue()

    def set_page(self, page: int) -> FetchTicket | None:
        if not goto_page(self.state.pagination, page):
            return None
        return self._issue()

    def next_page(self) -> FetchTicket | None:
        if not next_page(self.state.pagination):
            return None
        return self._issue()

    def prev_page(self) -> FetchTicket | None:
        if not prev_page(self.state.pagination):
            return None
        return self._issue()

    def set_limit(self, limit: int) -> FetchTicket | None:
        if not set_limit(self.state.pagination, limit):
            return None
        return self._issue()

    def toggle_sort(self, column: str) -> FetchTicket | None:
        if column not in self.page.sortable_fields:
            raise ValueError(f"{self.page.name} cannot be sorted by {column!r}")
        toggle_sort(self.state.ordering, column)
        return self._issue()

    def set_search(self, text: str | None) -> FetchTicket | None:
        text = text or ""
        if text == self.state.search:
            return None
        self.state.search = text
        return self._issue()

    def set_filter(self, key: str, value: Any) -> FetchTicket | None:
        return self.set_filters({key: value})

    def set_filters(self, values: dict[str, Any]) -> FetchTicket | None:
        unknown = sorted(set(values) - set(self.page.filter_keys))
        if unknown:
            raise ValueError(f"{self.page.name} has no filters named {unknown}")
        changed = {key: value for key, value in values.items() if self.state.filters.get(key) != value}
        if not changed:
            return None
        self.state.filters.update(changed)
        return self._issue()

    def is_current(self, ticket: FetchTicket) -> bool:
        return self._latest is not None and ticket.sequence == self._latest.sequence

    def complete(self, ticket: FetchTicket, rows: Sequence[Any]) -> bool:
        if not self.is_current(ticket):
            self._log(ticket, "stale")
            return False
        self.rows = list(rows)
        self.last_error = None
        self.status = ListStatus.IDLE
        self._log(ticket, "success")
        return True

    def fail(self, ticket: FetchTicket, error: Exception) -> bool:
        if not self.is_current(ticket):
            self._log(ticket, "stale")
            return False
        self.last_error = error
        self.status = ListStatus.IDLE
        trace_id = getattr(error, "trace_id", None)
        self.notifications.error(
            describe_error(error, fallback=f"Failed to load {self.page.label}"),
            trace_id=trace_id,
        )
        self._log(ticket, "error", trace_id=trace_id, level=logging.WARNING)
        return True

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _issue(self) -> FetchTicket | None:
        if self.needs_restaurant:
            self._latest = None
            self.status = ListStatus.IDLE
            return None
        self._sequence += 1
        ticket = FetchTicket(sequence=self._sequence, params=self.query_params())
        self._latest = ticket
        self.status = ListStatus.LOADING
        self.dispatcher(lambda: self._run(ticket))
        return ticket

    def _run(self, ticket: FetchTicket) -> None:
        try:
            rows = self.fetch(dict(ticket.params))
        except SessionContextError:
            raise
        except Exception as error:  # noqa: BLE001
            self.fail(ticket, error)
            return
        self.complete(ticket, rows)

    def _on_session_event(self, event: SessionEvent) -> None:
        selected_id = event.selected_restaurant.id if event.selected_restaurant else None
        # login refetches even when the restaurant id is unchanged
        if selected_id == self._scope_id and event.kind is not SessionEventKind.LOGIN:
            return
        self._scope_id = selected_id
        self.rows = []
        self.last_error = None
        self.state.pagination.page = 1
        self._issue()

    def _log(self, ticket: FetchTicket, outcome: str, trace_id: str | None = None, level: int = logging.INFO) -> None:
        user = self.session.user if self.session else None
        log_action(
            self.logger,
            self.page.name,
            f"fetch#{ticket.sequence}",
            user.id if user else None,
            ticket.params.get("restaurantId"),
            trace_id,
            outcome,
            level=level,
        )
