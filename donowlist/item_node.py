"""Items linked to their parents, children, dependencies and urgent actions."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence

from .models import (
    ActionKind,
    DependencyKind,
    Event,
    Filter,
    Item,
    ReviewGuidance,
    Scheduled,
    TimeSpent,
    Urgency,
    UrgencyKind,
    get_scheduled_now,
)
from .triggers import ActionWithItem, DependencyWithItem, UrgencyPlanWithItem

_URGENT_KINDS = frozenset(
    {
        UrgencyKind.MORE_URGENT_THAN_ANYTHING_INCLUDING_SCHEDULED,
        UrgencyKind.IN_THE_MODE_MAYBE_URGENT,
        UrgencyKind.MORE_URGENT_THAN_MODE,
        UrgencyKind.IN_THE_MODE_DEFINITELY_URGENT,
    }
)
_SCHEDULED_KINDS = frozenset({UrgencyKind.IN_THE_MODE_SCHEDULED, UrgencyKind.SCHEDULED_ANY_MODE})


def _keep(filter: Filter, finished: bool) -> bool:
    if filter is Filter.ALL:
        return True
    if filter is Filter.ACTIVE:
        return not finished
    return finished


def _lookup(mapping: Mapping[str, object], record_id: str, what: str):
    try:
        return mapping[record_id]
    except KeyError:
        raise KeyError(f"{what} {record_id!r} is not among the loaded {what}s") from None


class ParentLookup:
    """Finds the items that list a given item among their smaller items."""

    def __init__(self, items: Mapping[str, Item]) -> None:
        parents: dict[str, list[Item]] = defaultdict(list)
        for item in items.values():
            for child_id in dict.fromkeys(item.smaller_items):
                parents[child_id].append(item)
        self._parents = {child: tuple(found) for child, found in parents.items()}

    def parents_of(self, record_id: str) -> tuple[Item, ...]:
        return self._parents.get(record_id, ())


def _find_children(item: Item, all_items: Mapping[str, Item], visited: Iterable[str]) -> list[Item]:
    skip = frozenset(visited)
    return [all_items[c] for c in item.smaller_items if c in all_items and c not in skip]


@dataclass(frozen=True)
class GrowingItemNode:
    """A parent item together with its own parents."""

    item: Item
    larger: tuple[GrowingItemNode, ...] = ()

    def create_growing_parents(self, filter: Filter, levels_deep: int) -> list[tuple[int, Item]]:
        result: list[tuple[int, Item]] = []
        for parent in self.get_parents(filter):
            result.append((levels_deep, parent.item))
            result.extend(parent.create_growing_parents(filter, levels_deep + 1))
        return result

    def get_parents(self, filter: Filter) -> list[GrowingItemNode]:
        return [p for p in self.larger if _keep(filter, p.item.is_finished())]

    def get_self_and_parents(self, items: Sequence[Item]) -> list[Item]:
        """``items`` followed by every ancestor, outermost first, then this item."""
        result = list(items)
        for parent in self.larger:
            result = parent.get_self_and_parents(result)
        result.append(self.item)
        return result

    def is_finished(self) -> bool:
        return self.item.is_finished()


@dataclass(frozen=True)
class ShrinkingItemNode:
    """A child item together with its own children."""

    item: Item
    smaller: tuple[ShrinkingItemNode, ...] = ()

    def get_children(self, filter: Filter) -> list[ShrinkingItemNode]:
        return [c for c in self.smaller if _keep(filter, c.item.is_finished())]


def create_growing_nodes(
    items: Iterable[Item], parent_lookup: ParentLookup, visited: Iterable[str]
) -> list[GrowingItemNode]:
    """Parent trees for ``items``, stopping wherever a record id was already visited."""
    seen = frozenset(visited)
    return [
        _create_growing_node(item, parent_lookup, seen | {item.id})
        for item in items
        if item.id not in seen
    ]


def _create_growing_node(
    item: Item, parent_lookup: ParentLookup, visited: frozenset[str]
) -> GrowingItemNode:
    larger = create_growing_nodes(parent_lookup.parents_of(item.id), parent_lookup, visited)
    return GrowingItemNode(item, tuple(larger))


def create_shrinking_nodes(
    items: Iterable[Item], all_items: Mapping[str, Item], visited: Iterable[str]
) -> list[ShrinkingItemNode]:
    """Child trees for ``items``, stopping wherever a record id was already visited."""
    seen = frozenset(visited)
    return [
        _create_shrinking_node(item, all_items, seen | {item.id})
        for item in items
        if item.id not in seen
    ]


def _create_shrinking_node(
    item: Item, all_items: Mapping[str, Item], visited: frozenset[str]
) -> ShrinkingItemNode:
    children = _find_children(item, all_items, visited)
    return ShrinkingItemNode(item, tuple(create_shrinking_nodes(children, all_items, visited)))


def should_children_have_review_frequency_set(
    parents: Iterable[GrowingItemNode], visited: Iterable[GrowingItemNode] = ()
) -> bool:
    """Whether an item under these parents needs a review frequency of its own."""
    parents = tuple(parents)
    if not parents:
        return True
    return any(
        parent.item.review_guidance is not None and _node_wants_review(parent, list(visited))
        for parent in parents
    )


def _node_wants_review(node: GrowingItemNode, visited: list[GrowingItemNode]) -> bool:
    if node.is_finished() or node in visited:
        return False
    visited = [*visited, node]
    guidance = node.item.review_guidance
    if guidance is ReviewGuidance.REVIEW_CHILDREN_SEPARATELY:
        return True
    if guidance is ReviewGuidance.ALWAYS_REVIEW_CHILDREN_WITH_THIS_ITEM:
        return False
    return should_children_have_review_frequency_set(node.larger, visited)


class ItemNode:
    """An item placed in the item graph, with what it waits on and what it calls for."""

    def __init__(
        self,
        item: Item,
        all_items: Mapping[str, Item],
        parent_lookup: ParentLookup,
        all_events: Mapping[str, Event] | None = None,
        time_spent_log: Sequence[TimeSpent] = (),
    ) -> None:
        events = all_events if all_events is not None else {}
        self.item = item
        self.parents: tuple[GrowingItemNode, ...] = tuple(
            create_growing_nodes(parent_lookup.parents_of(item.id), parent_lookup, {item.id})
        )
        ancestors = {item.id}
        for parent in self.parents:
            ancestors.update(x.id for x in parent.get_self_and_parents([]))
        children = _find_children(item, all_items, ancestors)
        self.children: tuple[ShrinkingItemNode, ...] = tuple(
            create_shrinking_nodes(children, all_items, ancestors)
        )
        self.urgency_plan = UrgencyPlanWithItem.from_plan(
            item.urgency_plan, item.now, all_items, tuple(time_spent_log)
        )
        self.dependencies: tuple[DependencyWithItem, ...] = tuple(
            _calculate_dependencies(item, self.urgency_plan, all_items, events, self.children)
        )
        self.urgent_action_items: tuple[ActionWithItem, ...] = (
            tuple(
                _calculate_urgent_action_items(
                    item, self.parents, self.children, self.urgency_plan, self.dependencies
                )
            )
            if item.is_active()
            else ()
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ItemNode):
            return NotImplemented
        return self.item == other.item

    def __hash__(self) -> int:
        return hash(self.item)

    def __repr__(self) -> str:
        return f"ItemNode({self.item.id!r}, {self.item.summary!r})"

    @property
    def record_id(self) -> str:
        return self.item.id

    @property
    def summary(self) -> str:
        return self.item.summary

    def is_finished(self) -> bool:
        return self.item.is_finished()

    def is_active(self) -> bool:
        return not self.is_finished()

    def create_parent_chain(self, filter: Filter) -> list[tuple[int, Item]]:
        """Every ancestor with its distance from this item."""
        result: list[tuple[int, Item]] = []
        for parent in self.get_parents(filter):
            result.append((1, parent.item))
            result.extend(parent.create_growing_parents(filter, 2))
        return result

    def get_children(self, filter: Filter) -> list[ShrinkingItemNode]:
        return [c for c in self.children if _keep(filter, c.item.is_finished())]

    def get_parents(self, filter: Filter) -> list[GrowingItemNode]:
        return [p for p in self.parents if _keep(filter, p.item.is_finished())]

    def has_children(self, filter: Filter) -> bool:
        return bool(self.get_children(filter))

    def has_parents(self, filter: Filter) -> bool:
        return bool(self.get_parents(filter))

    def get_self_and_parents(self, filter: Filter) -> list[Item]:
        items: list[Item] = []
        for parent in self.get_parents(filter):
            items = parent.get_self_and_parents(items)
        items.append(self.item)
        return items

    def is_core_work_or_neither(self, filter: Filter) -> bool:
        return any(x.is_core_or_neither() for x in self.get_self_and_parents(filter))

    def is_non_core_work_or_neither(self, filter: Filter) -> bool:
        return any(x.is_non_core_or_neither() for x in self.get_self_and_parents(filter))

    def urgency_now(self) -> Urgency | None:
        return self.urgency_plan.urgency_now() if self.urgency_plan is not None else None

    def scheduled_now(self) -> Scheduled | None:
        return get_scheduled_now(self.urgency_now())

    def is_scheduled_now(self) -> bool:
        return self.scheduled_now() is not None

    def get_dependencies(self, filter: Filter) -> list[DependencyWithItem]:
        return [d for d in self.dependencies if _keep(filter, not d.is_active())]

    def has_dependencies(self, filter: Filter) -> bool:
        return bool(self.get_dependencies(filter))

    def is_ready_to_be_worked_on(self) -> bool:
        return not self.has_dependencies(Filter.ACTIVE)


def _calculate_dependencies(
    item: Item,
    urgency_plan: UrgencyPlanWithItem | None,
    all_items: Mapping[str, Item],
    all_events: Mapping[str, Event],
    children: Sequence[ShrinkingItemNode],
):
    kind = DependencyWithItem.Kind
    for dependency in item.dependencies:
        if dependency.kind is DependencyKind.AFTER_DATE_TIME:
            yield DependencyWithItem(
                kind.AFTER_DATE_TIME, after=dependency.after, active=item.now < dependency.after
            )
        elif dependency.kind is DependencyKind.AFTER_ITEM:
            yield DependencyWithItem(
                kind.AFTER_ITEM, item=_lookup(all_items, dependency.record_id, "item")
            )
        elif dependency.kind is DependencyKind.DURING_ITEM:
            yield DependencyWithItem(
                kind.DURING_ITEM, item=_lookup(all_items, dependency.record_id, "item")
            )
        else:
            yield DependencyWithItem(
                kind.AFTER_EVENT, event=_lookup(all_events, dependency.record_id, "event")
            )

    scheduled = urgency_plan.scheduled_now() if urgency_plan is not None else None
    if scheduled is not None:
        after = scheduled.earliest_start()
        yield DependencyWithItem(kind.UNTIL_SCHEDULED, after=after, active=after > item.now)

    for child in children:
        yield DependencyWithItem(kind.AFTER_CHILD_ITEM, item=child.item)

    if item.is_responsibility_reactive():
        yield DependencyWithItem(kind.WAITING_TO_BE_INTERRUPTED)


def _calculate_urgent_action_items(
    item: Item,
    parents: Sequence[GrowingItemNode],
    children: Sequence[ShrinkingItemNode],
    urgency_plan: UrgencyPlanWithItem | None,
    dependencies: Sequence[DependencyWithItem],
):
    if not any(p.item.is_active() for p in parents) and not item.is_type_motivation():
        yield ActionWithItem(ActionKind.PARENT_BACK_TO_A_MOTIVATION, item)

    if item.is_type_motivation_kind_not_set():
        yield ActionWithItem(ActionKind.ITEM_NEEDS_A_CLASSIFICATION, item)

    if not (
        item.has_review_frequency() and item.has_review_guidance()
    ) and should_children_have_review_frequency_set(parents):
        yield ActionWithItem(ActionKind.PICK_ITEM_REVIEW_FREQUENCY, item)

    if item.is_a_review_due():
        yield ActionWithItem(ActionKind.REVIEW_ITEM, item)

    urgency = urgency_plan.urgency_now() if urgency_plan is not None else None
    ready = not any(d.is_active() for d in dependencies)
    if urgency is None:
        has_active_children = any(c.item.is_active() for c in children)
        if not has_active_children and not item.is_responsibility_reactive():
            yield ActionWithItem(ActionKind.SET_READY_AND_URGENCY, item)
    elif urgency.kind in _URGENT_KINDS:
        if ready:
            yield ActionWithItem(ActionKind.MAKE_PROGRESS, item)
    elif urgency.kind in _SCHEDULED_KINDS:
        if ready and urgency.scheduled.earliest_start() <= item.now:
            yield ActionWithItem(ActionKind.MAKE_PROGRESS, item)