"""Item nodes linked to each other: the status of every item at a moment."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Iterable, Mapping, Sequence

from .item_links import (
    ActionWithItemNode,
    DependencyWithItemNode,
    UrgencyPlanWithItemNode,
)
from .item_node import ItemNode, ParentLookup
from .models import Event, Filter, Item, Scheduled, TimeSpent, Urgency


def _keep(filter: Filter, finished: bool) -> bool:
    if filter is Filter.ALL:
        return True
    if filter is Filter.ACTIVE:
        return not finished
    return finished


def _node(all_nodes: Mapping[str, ItemNode], record_id: str) -> ItemNode:
    try:
        return all_nodes[record_id]
    except KeyError:
        raise KeyError(f"item {record_id!r} has no node among the loaded nodes") from None


class ItemStatus:
    """An item node whose parents, children and dependencies are other item nodes."""

    def __init__(self, item_node: ItemNode, all_nodes: Mapping[str, ItemNode]) -> None:
        self.item_node = item_node
        self.dependencies: tuple[DependencyWithItemNode, ...] = tuple(
            DependencyWithItemNode.from_dependency(d, all_nodes)
            for d in item_node.get_dependencies(Filter.ALL)
        )
        self.children: tuple[ItemNode, ...] = tuple(
            _node(all_nodes, c.item.id) for c in item_node.get_children(Filter.ALL)
        )
        self.parents: tuple[ItemNode, ...] = tuple(
            _node(all_nodes, p.item.id) for p in item_node.get_parents(Filter.ALL)
        )
        self.urgency_plan: UrgencyPlanWithItemNode | None = UrgencyPlanWithItemNode.from_plan(
            item_node.urgency_plan, all_nodes
        )
        self.urgent_action_items: tuple[ActionWithItemNode, ...] = tuple(
            ActionWithItemNode.from_action(a, all_nodes) for a in item_node.urgent_action_items
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ItemStatus):
            return NotImplemented
        return self.item_node == other.item_node

    def __hash__(self) -> int:
        return hash(self.item_node)

    def __repr__(self) -> str:
        return f"ItemStatus({self.record_id!r}, {self.summary!r})"

    @property
    def item(self) -> Item:
        return self.item_node.item

    @property
    def record_id(self) -> str:
        return self.item_node.record_id

    @property
    def summary(self) -> str:
        return self.item_node.summary

    def is_finished(self) -> bool:
        return self.item_node.is_finished()

    def is_active(self) -> bool:
        return self.item_node.is_active()

    def get_children(self, filter: Filter) -> list[ItemNode]:
        return [c for c in self.children if _keep(filter, c.is_finished())]

    def get_parents(self, filter: Filter) -> list[ItemNode]:
        return [p for p in self.parents if _keep(filter, p.is_finished())]

    def has_children(self, filter: Filter) -> bool:
        return self.item_node.has_children(filter)

    def has_parents(self, filter: Filter) -> bool:
        return self.item_node.has_parents(filter)

    def get_dependencies(self, filter: Filter) -> list[DependencyWithItemNode]:
        return [d for d in self.dependencies if _keep(filter, not d.is_active())]

    def has_dependencies(self, filter: Filter) -> bool:
        return self.item_node.has_dependencies(filter)

    def urgency_now(self) -> Urgency | None:
        return self.item_node.urgency_now()

    def scheduled_now(self) -> Scheduled | None:
        return self.item_node.scheduled_now()

    def is_scheduled_now(self) -> bool:
        return self.item_node.is_scheduled_now()

    def is_ready_to_be_worked_on(self) -> bool:
        return self.item_node.is_ready_to_be_worked_on()


def build_items_status(
    items: Iterable[Item],
    now: datetime,
    events: Iterable[Event] | Mapping[str, Event] = (),
    time_spent_log: Sequence[TimeSpent] = (),
) -> dict[str, ItemStatus]:
    """The status of every item as seen at ``now``, keyed by record id."""
    all_items: dict[str, Item] = {}
    for item in items:
        if item.id in all_items:
            raise ValueError(f"item {item.id!r} appears more than once")
        all_items[item.id] = item if item.now == now else replace(item, now=now)

    event_list = events.values() if isinstance(events, Mapping) else events
    all_events = {event.id: event for event in event_list}
    log = tuple(time_spent_log)

    parent_lookup = ParentLookup(all_items)
    nodes = {
        record_id: ItemNode(item, all_items, parent_lookup, all_events, log)
        for record_id, item in all_items.items()
    }
    return {record_id: ItemStatus(node, nodes) for record_id, node in nodes.items()}