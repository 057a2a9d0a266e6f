# client/view.py
from datetime import date
from typing import Iterable, Optional

STATUSES = ["Applied", "Interview", "Offer", "Rejected"]
ALL = "All"


def _date_key(record: dict) -> date:
    return date.fromisoformat(record["date"])


def derive_view(
    applications: Iterable[dict],
    status_filter: str = ALL,
    search: str = "",
    sort_order: str = "desc",
) -> list[dict]:
    """Filter by status, search company/role, then sort by date."""
    visible = list(applications)

    if status_filter != ALL:
        visible = [a for a in visible if a["status"] == status_filter]

    if search:
        term = search.lower()
        visible = [
            a for a in visible
            if term in a["company"].lower() or term in a["role"].lower()
        ]

    return sorted(visible, key=_date_key, reverse=sort_order == "desc")


def count_by_status(applications: Iterable[dict]) -> dict:
    counts = {"total": 0}
    counts.update({s.lower(): 0 for s in STATUSES})
    for a in applications:
        counts["total"] += 1
        key = a["status"].lower()
        if key in counts:
            counts[key] += 1
    return counts


class TrackerView:
    """Holds the loaded collection and the list controls.

    `visible` is recomputed only after one of its inputs changed; `counts`
    always reflect the whole collection, whatever the filters.
    """

    def __init__(self, applications: Optional[list[dict]] = None):
        self._applications = list(applications or [])
        self._status_filter = ALL
        self._search = ""
        self._sort_order = "desc"
        self._cache_key = None
        self._visible: list[dict] = []
        self.recomputations = 0

    @property
    def applications(self) -> tuple[dict, ...]:
        # read-only; assign a new collection to change it
        return tuple(self._applications)

    @applications.setter
    def applications(self, value: list[dict]):
        self._applications = list(value)
        self._cache_key = None

    @property
    def status_filter(self) -> str:
        return self._status_filter

    @status_filter.setter
    def status_filter(self, value: str):
        if value != ALL and value not in STATUSES:
            raise ValueError(f"Unknown status filter: {value}")
        self._status_filter = value

    @property
    def search(self) -> str:
        return self._search

    @search.setter
    def search(self, value: str):
        self._search = value or ""

    @property
    def sort_order(self) -> str:
        return self._sort_order

    @sort_order.setter
    def sort_order(self, value: str):
        if value not in ("asc", "desc"):
            raise ValueError(f"Unknown sort order: {value}")
        self._sort_order = value

    def toggle_sort(self) -> str:
        self.sort_order = "asc" if self._sort_order == "desc" else "desc"
        return self._sort_order

    @property
    def visible(self) -> list[dict]:
        key = (self._status_filter, self._search, self._sort_order)
        if key != self._cache_key:
            self._visible = derive_view(
                self._applications, self._status_filter, self._search, self._sort_order
            )
            self._cache_key = key
            self.recomputations += 1
        return self._visible

    @property
    def counts(self) -> dict:
        return count_by_status(self._applications)
