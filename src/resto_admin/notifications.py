from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Notice:
    title: str
    description: str
    variant: str = "default"
    trace_id: str | None = None


@dataclass
class NotificationCenter:
    """Transient notices shown to the operator; nothing here is persisted."""

    items: list[Notice] = field(default_factory=list)

    def toast(self, *, title: str, description: str, variant: str = "default", trace_id: str | None = None) -> Notice:
        notice = Notice(title=title, description=description, variant=variant, trace_id=trace_id)
        self.items.append(notice)
        return notice

    def error(self, description: str, *, trace_id: str | None = None) -> Notice:
        return self.toast(title="Error", description=description, variant="destructive", trace_id=trace_id)

    def drain(self) -> list[Notice]:
        pending = list(self.items)
        self.items.clear()
        return pending
