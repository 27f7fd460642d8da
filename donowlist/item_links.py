"""Dependencies, triggers, plans and actions resolved against item nodes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Mapping

from .item_node import ItemNode
from .models import ActionKind, Dependency, DependencyKind, Event, Urgency
from .triggers import (
    ActionWithItem,
    DependencyWithItem,
    ItemsInScopeWithItem,
    TriggerWithItem,
    UrgencyPlanWithItem,
)


def _node(all_nodes: Mapping[str, ItemNode], record_id: str) -> ItemNode:
    try:
        return all_nodes[record_id]
    except KeyError:
        raise KeyError(f"item {record_id!r} has no node among the loaded nodes") from None


_ITEM_KINDS = frozenset(
    {
        DependencyWithItem.Kind.AFTER_ITEM,
        DependencyWithItem.Kind.AFTER_CHILD_ITEM,
        DependencyWithItem.Kind.DURING_ITEM,
    }
)


@dataclass(frozen=True)
class DependencyWithItemNode:
    """Something an item waits on, with the referenced node or event attached."""

    Kind = DependencyWithItem.Kind

    kind: DependencyWithItem.Kind
    after: datetime | None = None
    active: bool = False
    item_node: ItemNode | None = None
    event: Event | None = None

    @classmethod
    def from_dependency(
        cls, dependency: DependencyWithItem, all_nodes: Mapping[str, ItemNode]
    ) -> DependencyWithItemNode:
        if dependency.kind in _ITEM_KINDS:
            return cls(dependency.kind, item_node=_node(all_nodes, dependency.item.id))
        return cls(
            dependency.kind,
            after=dependency.after,
            active=dependency.active,
            event=dependency.event,
        )

    def is_active(self) -> bool:
        kind = self.kind
        if kind in (self.Kind.AFTER_DATE_TIME, self.Kind.UNTIL_SCHEDULED):
            return self.active
        if kind in _ITEM_KINDS:
            return self.item_node.is_active()
        if kind is self.Kind.AFTER_EVENT:
            return self.event.is_active()
        return True

    def to_dependency(self) -> Dependency:
        """The stored form; derived dependencies have none and raise ValueError."""
        kind = self.kind
        if kind is self.Kind.AFTER_DATE_TIME:
            return Dependency(DependencyKind.AFTER_DATE_TIME, after=self.after)
        if kind is self.Kind.AFTER_ITEM:
            return Dependency(DependencyKind.AFTER_ITEM, record_id=self.item_node.record_id)
        if kind is self.Kind.DURING_ITEM:
            return Dependency(DependencyKind.DURING_ITEM, record_id=self.item_node.record_id)
        if kind is self.Kind.AFTER_EVENT:
            return Dependency(DependencyKind.AFTER_EVENT, record_id=self.event.id)
        raise ValueError(f"{kind.name} is derived and has no stored dependency form")


@dataclass(frozen=True)
class ItemsInScopeWithItemNode:
    """Which item nodes a logged trigger counts work towards."""

    Kind = ItemsInScopeWithItem.Kind

    kind: ItemsInScopeWithItem.Kind
    nodes: tuple[ItemNode, ...] = ()

    @classmethod
    def from_items_in_scope(
        cls, items_in_scope: ItemsInScopeWithItem, all_nodes: Mapping[str, ItemNode]
    ) -> ItemsInScopeWithItemNode:
        return cls(
            items_in_scope.kind,
            tuple(_node(all_nodes, item.id) for item in items_in_scope.items),
        )


@dataclass(frozen=True)
class TriggerWithItemNode:
    """An evaluated trigger whose scope refers to item nodes."""

    Kind = TriggerWithItem.Kind

    kind: TriggerWithItem.Kind
    starting: datetime
    reached: bool = False
    count_needed: int = 0
    current_count: int = 0
    duration_needed: timedelta = timedelta(0)
    current_duration: timedelta = timedelta(0)
    items_in_scope: ItemsInScopeWithItemNode | None = None

    @classmethod
    def from_trigger(
        cls, trigger: TriggerWithItem, all_nodes: Mapping[str, ItemNode]
    ) -> TriggerWithItemNode:
        scope = (
            ItemsInScopeWithItemNode.from_items_in_scope(trigger.items_in_scope, all_nodes)
            if trigger.items_in_scope is not None
            else None
        )
        return cls(
            trigger.kind,
            trigger.starting,
            reached=trigger.reached,
            count_needed=trigger.count_needed,
            current_count=trigger.current_count,
            duration_needed=trigger.duration_needed,
            current_duration=trigger.current_duration,
            items_in_scope=scope,
        )

    def is_triggered(self) -> bool:
        if self.kind is self.Kind.WALL_CLOCK_DATE_TIME:
            return self.reached
        if self.kind is self.Kind.LOGGED_INVOCATION_COUNT:
            return self.current_count >= self.count_needed
        return self.current_duration >= self.duration_needed


@dataclass(frozen=True)
class UrgencyPlanWithItemNode:
    """An urgency plan whose triggers refer to item nodes."""

    Kind = UrgencyPlanWithItem.Kind

    kind: UrgencyPlanWithItem.Kind
    initial: Urgency
    triggers: tuple[TriggerWithItemNode, ...] = ()
    later: Urgency | None = None

    @classmethod
    def from_plan(
        cls, plan: UrgencyPlanWithItem | None, all_nodes: Mapping[str, ItemNode]
    ) -> UrgencyPlanWithItemNode | None:
        if plan is None:
            return None
        triggers = tuple(TriggerWithItemNode.from_trigger(t, all_nodes) for t in plan.triggers)
        return cls(plan.kind, plan.initial, triggers, plan.later)


@dataclass(frozen=True)
class ActionWithItemNode:
    """An action an item calls for, attached to the item's node."""

    kind: ActionKind
    item_node: ItemNode

    @classmethod
    def from_action(
        cls, action: ActionWithItem, all_nodes: Mapping[str, ItemNode]
    ) -> ActionWithItemNode:
        return cls(action.kind, _node(all_nodes, action.item.id))