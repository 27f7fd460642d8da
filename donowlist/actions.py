"""Actions attached to item statuses, and the urgent actions found below an item."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping

from .item_links import ActionWithItemNode
from .item_node import ItemNode
from .item_status import ItemStatus
from .models import Action, ActionKind, Filter, Urgency, UrgencyKind


def _status(items_status: Mapping[str, ItemStatus], record_id: str) -> ItemStatus:
    try:
        return items_status[record_id]
    except KeyError:
        raise KeyError(f"item {record_id!r} has no status among the loaded items") from None


_FIXED_URGENCY = {
    ActionKind.PARENT_BACK_TO_A_MOTIVATION: UrgencyKind.MORE_URGENT_THAN_MODE,
    ActionKind.ITEM_NEEDS_A_CLASSIFICATION: UrgencyKind.MORE_URGENT_THAN_MODE,
    ActionKind.PICK_ITEM_REVIEW_FREQUENCY: UrgencyKind.IN_THE_MODE_MAYBE_URGENT,
    ActionKind.REVIEW_ITEM: UrgencyKind.IN_THE_MODE_MAYBE_URGENT,
    ActionKind.SET_READY_AND_URGENCY: UrgencyKind.IN_THE_MODE_DEFINITELY_URGENT,
}


@dataclass(frozen=True)
class ActionWithItemStatus:
    """An action together with the status of the item it concerns."""

    kind: ActionKind
    item_status: ItemStatus

    @classmethod
    def from_item_node_action(
        cls, action: ActionWithItemNode, items_status: Mapping[str, ItemStatus]
    ) -> ActionWithItemStatus:
        return cls(action.kind, _status(items_status, action.item_node.record_id))

    @classmethod
    def from_action(
        cls, action: Action, items_status: Mapping[str, ItemStatus]
    ) -> ActionWithItemStatus:
        return cls(action.kind, _status(items_status, action.record_id))

    def to_action(self) -> Action:
        return Action(self.kind, self.record_id)

    @property
    def record_id(self) -> str:
        return self.item_status.record_id

    def urgency_now(self) -> Urgency:
        """How urgent taking this action is right now."""
        if self.kind is ActionKind.MAKE_PROGRESS:
            urgency = self.item_status.urgency_now()
            return urgency if urgency is not None else Urgency(UrgencyKind.IN_THE_MODE_BY_IMPORTANCE)
        return Urgency(_FIXED_URGENCY[self.kind])

    @property
    def item_node(self) -> ItemNode:
        return self.item_status.item_node


def recursive_get_urgent_bullet_list(
    item_status: ItemStatus,
    all_item_status: Mapping[str, ItemStatus],
    visited: Iterable[ItemStatus] = (),
) -> Iterator[ActionWithItemStatus]:
    """The urgent actions of ``item_status`` followed by those of its active descendants."""
    visited = [*visited, item_status]
    for action in item_status.urgent_action_items:
        yield ActionWithItemStatus.from_item_node_action(action, all_item_status)
    for child_node in item_status.get_children(Filter.ACTIVE):
        child = _status(all_item_status, child_node.record_id)
        if child not in visited:
            yield from recursive_get_urgent_bullet_list(child, all_item_status, list(visited))