"""Finding the most important item that is ready to be worked on."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping

from .item_status import ItemStatus
from .models import Filter


@dataclass
class MostImportantReadyAndBlocked:
    """The first ready item in priority order, and those blocked before reaching it."""

    ready: ItemStatus | None
    blocked: list[ItemStatus] = field(default_factory=list)


def recursive_get_most_important_and_ready(
    item_status: ItemStatus, all_item_status: Mapping[str, ItemStatus]
) -> ItemStatus | None:
    """The most important item at or below ``item_status`` that is ready, if any."""
    return recursive_get_most_important_both_ready_and_blocked(item_status, all_item_status).ready


def recursive_get_most_important_both_ready_and_blocked(
    item_status: ItemStatus,
    all_item_status: Mapping[str, ItemStatus],
    visited: Iterable[ItemStatus] = (),
) -> MostImportantReadyAndBlocked:
    """Walk children in priority order until a ready item is found."""
    blocked: list[ItemStatus] = []
    if not item_status.has_children(Filter.ACTIVE):
        if item_status.is_ready_to_be_worked_on():
            return MostImportantReadyAndBlocked(item_status, blocked)
        blocked.append(item_status)
        return MostImportantReadyAndBlocked(None, blocked)

    visited = [*visited, item_status]
    for child_node in item_status.get_children(Filter.ACTIVE):
        try:
            child = all_item_status[child_node.record_id]
        except KeyError:
            raise KeyError(f"item {child_node.record_id!r} has no status") from None
        if child in visited:
            if item_status.is_ready_to_be_worked_on():
                return MostImportantReadyAndBlocked(item_status, blocked)
            blocked.append(item_status)
        else:
            found = recursive_get_most_important_both_ready_and_blocked(
                child, all_item_status, visited
            )
            blocked.extend(found.blocked)
            if found.ready is not None:
                return MostImportantReadyAndBlocked(found.ready, blocked)
    return MostImportantReadyAndBlocked(None, blocked)