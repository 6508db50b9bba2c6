"""
In-memory query engine for a list of domains.

The API returns the full table; clients narrow and order it locally.
Every operation returns a new immutable ViewState; earlier states stay
valid.

    state = ViewState()
    state = state.with_filters(status="sold", search="shop")
    state = state.toggle_sort("purchase_price")
    rows = state.visible(domains)
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from functools import cmp_to_key
from typing import Any, FrozenSet, Iterable, List, Optional, Sequence, Tuple, Union

from .entities import Domain, normalize_status

ASC = "asc"
DESC = "desc"

SORTABLE_FIELDS = (
    "name",
    "registrar",
    "category",
    "purchase_date",
    "expiration_date",
    "status",
    "purchase_price",
)

DateBound = Union[str, date, None]


def _as_date(value: DateBound) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(str(value)[:10], "%Y-%m-%d").date()


def _within(value: Optional[date], lower: DateBound, upper: DateBound) -> bool:
    lower_date = _as_date(lower)
    upper_date = _as_date(upper)
    if lower_date is None and upper_date is None:
        return True
    if value is None:
        return False
    if lower_date is not None and value < lower_date:
        return False
    if upper_date is not None and value > upper_date:
        return False
    return True


@dataclass(frozen=True)
class DomainFilters:
    """Filter fields; an empty value means the predicate is ignored."""

    search: str = ""
    status: str = ""
    registrar: str = ""
    category: str = ""
    purchase_date_from: DateBound = ""
    purchase_date_to: DateBound = ""
    expiration_date_from: DateBound = ""
    expiration_date_to: DateBound = ""

    @property
    def is_active(self) -> bool:
        return any(value not in ("", None) for value in self.__dict__.values())

    def matches(self, domain: Domain) -> bool:
        """True iff ``domain`` satisfies every non-empty predicate."""
        if self.search and self.search.lower() not in (domain.name or "").lower():
            return False
        # Same aliases as the API ("vendu", "en-vente")
        status = normalize_status(self.status) or self.status
        if status and domain.status != status:
            return False
        if self.registrar and domain.registrar != self.registrar:
            return False
        if self.category and domain.category != self.category:
            return False
        if not _within(
            domain.purchase_date, self.purchase_date_from, self.purchase_date_to
        ):
            return False
        if not _within(
            domain.expiration_date, self.expiration_date_from, self.expiration_date_to
        ):
            return False
        return True


def filter_domains(domains: Iterable[Domain], filters: DomainFilters) -> List[Domain]:
    """Return the subsequence of ``domains`` matching ``filters``."""
    return [domain for domain in domains if filters.matches(domain)]


def available_values(domains: Iterable[Domain], field_name: str) -> List[str]:
    """Distinct non-empty values of a field, sorted, for filter choices."""
    values = {getattr(domain, field_name, None) for domain in domains}
    return sorted((v for v in values if v), key=lambda v: str(v).lower())


@dataclass(frozen=True)
class SortKey:
    field: str
    direction: str = ASC


@dataclass(frozen=True)
class SortState:
    """Ordered sort keys, highest priority first, at most one per field."""

    keys: Tuple[SortKey, ...] = ()

    def direction_of(self, field_name: str) -> Optional[str]:
        for key in self.keys:
            if key.field == field_name:
                return key.direction
        return None

    def toggle(self, field_name: str) -> "SortState":
        """Cycle ``field_name`` through unsorted -> asc -> desc -> unsorted.

        A new field is appended with the lowest priority; flipping to desc
        keeps its position.
        """
        if field_name not in SORTABLE_FIELDS:
            raise ValueError(f"Cannot sort by {field_name!r}")

        current = self.direction_of(field_name)
        if current is None:
            return SortState(self.keys + (SortKey(field_name, ASC),))
        if current == ASC:
            return SortState(
                tuple(
                    SortKey(field_name, DESC) if key.field == field_name else key
                    for key in self.keys
                )
            )
        return SortState(tuple(key for key in self.keys if key.field != field_name))


def _compare_values(a: Any, b: Any) -> int:
    a = "" if a is None else a
    b = "" if b is None else b
    if isinstance(a, str) and isinstance(b, str):
        a, b = a.lower(), b.lower()
    try:
        return (a > b) - (a < b)
    except TypeError:
        # Mixed types (e.g. a missing date against a real one)
        a, b = str(a), str(b)
        return (a > b) - (a < b)


def sort_domains(domains: Iterable[Domain], sort: SortState) -> List[Domain]:
    """Sort by every key in priority order; ties keep their input order."""
    items = list(domains)
    if not sort.keys:
        return items

    def compare(left: Domain, right: Domain) -> int:
        for key in sort.keys:
            result = _compare_values(
                getattr(left, key.field, None), getattr(right, key.field, None)
            )
            if result:
                return -result if key.direction == DESC else result
        return 0

    # sorted() is stable
    return sorted(items, key=cmp_to_key(compare))


@dataclass(frozen=True)
class ViewState:
    """Filters, sort keys and selection of a domain list view."""

    filters: DomainFilters = field(default_factory=DomainFilters)
    sort: SortState = field(default_factory=SortState)
    selected: FrozenSet[int] = frozenset()

    def with_filters(self, **changes: Any) -> "ViewState":
        return replace(self, filters=replace(self.filters, **changes))

    def clear_filters(self) -> "ViewState":
        return replace(self, filters=DomainFilters())

    def toggle_sort(self, field_name: str) -> "ViewState":
        return replace(self, sort=self.sort.toggle(field_name))

    def toggle_selection(self, domain_id: int) -> "ViewState":
        if domain_id in self.selected:
            return replace(self, selected=self.selected - {domain_id})
        return replace(self, selected=self.selected | {domain_id})

    def select_all(self, domains: Sequence[Domain]) -> "ViewState":
        """Select every domain currently visible."""
        ids = frozenset(d.id for d in self.visible(domains) if d.id is not None)
        return replace(self, selected=ids)

    def clear_selection(self) -> "ViewState":
        return replace(self, selected=frozenset())

    def visible(self, domains: Iterable[Domain]) -> List[Domain]:
        return sort_domains(filter_domains(domains, self.filters), self.sort)

    def selected_visible(self, domains: Iterable[Domain]) -> List[Domain]:
        """Selected domains that are still visible, in display order."""
        return [d for d in self.visible(domains) if d.id in self.selected]
