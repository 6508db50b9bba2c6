"""
Bulk operations over the current selection of a domain view.

Only domains that are both selected and visible are sent, in one batch
request. Each id succeeds or fails on its own; a request that fails as a
whole marks every id as failed with the same message.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List

from portfolio.client.api_client import ApiClient, ApiError
from portfolio.domain.entities import Domain, ItemResult
from portfolio.domain.view import ViewState


@dataclass
class BulkOutcome:
    succeeded: List[int] = field(default_factory=list)
    failed: List[ItemResult] = field(default_factory=list)

    @property
    def has_failures(self) -> bool:
        return bool(self.failed)

    @property
    def errors(self) -> List[str]:
        return [f"#{item.id}: {item.error}" for item in self.failed]

    def summary(self) -> str:
        return f"{len(self.succeeded)} succeeded, {len(self.failed)} failed"

    def remaining_selection(self, view: ViewState) -> ViewState:
        """Keep only the failed ids selected so they can be retried."""
        return replace(view, selected=frozenset(item.id for item in self.failed))

    @classmethod
    def from_response(cls, body: Dict[str, Any]) -> "BulkOutcome":
        outcome = cls()
        for item in body.get("results", []):
            if item.get("success"):
                outcome.succeeded.append(item["id"])
            else:
                outcome.failed.append(
                    ItemResult(id=item["id"], success=False, error=item.get("error"))
                )
        return outcome

    @classmethod
    def all_failed(cls, ids: Iterable[int], error: str) -> "BulkOutcome":
        return cls(failed=[ItemResult(id=i, success=False, error=error) for i in ids])


def _target_ids(view: ViewState, domains: Iterable[Domain]) -> List[int]:
    return [d.id for d in view.selected_visible(domains)]


def bulk_delete(client: ApiClient, view: ViewState, domains: Iterable[Domain]) -> BulkOutcome:
    ids = _target_ids(view, domains)
    if not ids:
        return BulkOutcome()
    try:
        return BulkOutcome.from_response(client.bulk_delete(ids))
    except ApiError as exc:
        return BulkOutcome.all_failed(ids, exc.message)


def bulk_update(
    client: ApiClient,
    view: ViewState,
    domains: Iterable[Domain],
    changes: Dict[str, Any],
) -> BulkOutcome:
    """Apply ``changes`` (wire field names) to the selected visible domains."""
    ids = _target_ids(view, domains)
    if not ids:
        return BulkOutcome()
    try:
        return BulkOutcome.from_response(client.bulk_update(ids, changes))
    except ApiError as exc:
        return BulkOutcome.all_failed(ids, exc.message)
