"""Stored dependencies, triggers and urgency plans resolved against loaded items."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Iterable, Iterator, Mapping, Sequence

from .models import (
    ActionKind,
    AmountOfTimeTrigger,
    Event,
    InvocationCountTrigger,
    Item,
    ItemsInScope,
    Scheduled,
    StaysTheSame,
    TimeSpent,
    Trigger,
    Urgency,
    UrgencyPlan,
    WallClockTrigger,
    WillEscalate,
    get_scheduled_now,
)


def _lookup(all_items: Mapping[str, Item], record_id: str) -> Item:
    try:
        return all_items[record_id]
    except KeyError:
        raise KeyError(f"item {record_id!r} is not among the loaded items") from None


@dataclass(frozen=True)
class DependencyWithItem:
    """Something an item waits on, with the referenced item or event attached."""

    class Kind(Enum):
        AFTER_DATE_TIME = "after_date_time"
        UNTIL_SCHEDULED = "until_scheduled"
        AFTER_ITEM = "after_item"
        AFTER_CHILD_ITEM = "after_child_item"
        DURING_ITEM = "during_item"
        AFTER_EVENT = "after_event"
        WAITING_TO_BE_INTERRUPTED = "waiting_to_be_interrupted"

    kind: DependencyWithItem.Kind
    after: datetime | None = None
    active: bool = False
    item: Item | None = None
    event: Event | None = None

    def is_active(self) -> bool:
        kind = self.kind
        if kind in (self.Kind.AFTER_DATE_TIME, self.Kind.UNTIL_SCHEDULED):
            return self.active
        if kind in (self.Kind.AFTER_ITEM, self.Kind.AFTER_CHILD_ITEM, self.Kind.DURING_ITEM):
            return self.item.is_active()
        if kind is self.Kind.AFTER_EVENT:
            return self.event.is_active()
        return True


@dataclass(frozen=True)
class ItemsInScopeWithItem:
    """Which items a logged trigger counts work towards."""

    class Kind(Enum):
        ALL = "all"
        INCLUDE = "include"
        EXCLUDE = "exclude"

    kind: ItemsInScopeWithItem.Kind
    items: tuple[Item, ...] = ()

    @classmethod
    def from_items_in_scope(
        cls, items_in_scope: ItemsInScope, all_items: Mapping[str, Item]
    ) -> ItemsInScopeWithItem:
        if items_in_scope.include is not None:
            return cls(cls.Kind.INCLUDE, tuple(_lookup(all_items, x) for x in items_in_scope.include))
        if items_in_scope.exclude is not None:
            return cls(cls.Kind.EXCLUDE, tuple(_lookup(all_items, x) for x in items_in_scope.exclude))
        return cls(cls.Kind.ALL)


def time_spent_on(
    starting: datetime,
    items_in_scope: ItemsInScopeWithItem,
    time_spent_log: Iterable[TimeSpent],
) -> Iterator[TimeSpent]:
    """Log entries started at or after ``starting`` that fall within the scope."""
    kind = items_in_scope.kind
    for entry in time_spent_log:
        if entry.started_at < starting:
            continue
        if kind is ItemsInScopeWithItem.Kind.INCLUDE and not entry.did_work_towards_any(items_in_scope.items):
            continue
        if kind is ItemsInScopeWithItem.Kind.EXCLUDE and entry.did_work_towards_any(items_in_scope.items):
            continue
        yield entry


@dataclass(frozen=True)
class TriggerWithItem:
    """A trigger evaluated at a moment: a wall-clock time or logged work so far."""

    class Kind(Enum):
        WALL_CLOCK_DATE_TIME = "wall_clock_date_time"
        LOGGED_INVOCATION_COUNT = "logged_invocation_count"
        LOGGED_AMOUNT_OF_TIME = "logged_amount_of_time"

    kind: TriggerWithItem.Kind
    starting: datetime
    reached: bool = False
    count_needed: int = 0
    current_count: int = 0
    duration_needed: timedelta = timedelta(0)
    current_duration: timedelta = timedelta(0)
    items_in_scope: ItemsInScopeWithItem | None = None

    @classmethod
    def from_trigger(
        cls,
        trigger: Trigger,
        now: datetime,
        all_items: Mapping[str, Item],
        time_spent_log: Sequence[TimeSpent],
    ) -> TriggerWithItem:
        if isinstance(trigger, WallClockTrigger):
            return cls(cls.Kind.WALL_CLOCK_DATE_TIME, trigger.after, reached=now >= trigger.after)
        scope = ItemsInScopeWithItem.from_items_in_scope(trigger.items_in_scope, all_items)
        spent = list(time_spent_on(trigger.starting, scope, time_spent_log))
        if isinstance(trigger, InvocationCountTrigger):
            return cls(
                cls.Kind.LOGGED_INVOCATION_COUNT,
                trigger.starting,
                count_needed=trigger.count,
                current_count=len(spent),
                items_in_scope=scope,
            )
        if isinstance(trigger, AmountOfTimeTrigger):
            return cls(
                cls.Kind.LOGGED_AMOUNT_OF_TIME,
                trigger.starting,
                duration_needed=trigger.duration,
                current_duration=sum((x.duration() for x in spent), timedelta(0)),
                items_in_scope=scope,
            )
        raise TypeError(f"unknown trigger {trigger!r}")

    def is_triggered(self) -> bool:
        if self.kind is self.Kind.WALL_CLOCK_DATE_TIME:
            return self.reached
        if self.kind is self.Kind.LOGGED_INVOCATION_COUNT:
            return self.count_needed <= self.current_count
        return self.duration_needed <= self.current_duration


def all_triggered(triggers: Sequence[TriggerWithItem]) -> bool:
    """True when there are no triggers or any one of them has fired."""
    return not triggers or any(trigger.is_triggered() for trigger in triggers)


@dataclass(frozen=True)
class UrgencyPlanWithItem:
    """An urgency plan with its triggers evaluated."""

    class Kind(Enum):
        WILL_ESCALATE = "will_escalate"
        STAYS_THE_SAME = "stays_the_same"

    kind: UrgencyPlanWithItem.Kind
    initial: Urgency
    triggers: tuple[TriggerWithItem, ...] = ()
    later: Urgency | None = None

    @classmethod
    def from_plan(
        cls,
        plan: UrgencyPlan | None,
        now: datetime,
        all_items: Mapping[str, Item],
        time_spent_log: Sequence[TimeSpent],
    ) -> UrgencyPlanWithItem | None:
        if plan is None:
            return None
        if isinstance(plan, StaysTheSame):
            return cls(cls.Kind.STAYS_THE_SAME, plan.urgency)
        if isinstance(plan, WillEscalate):
            triggers = tuple(
                TriggerWithItem.from_trigger(t, now, all_items, time_spent_log) for t in plan.triggers
            )
            return cls(cls.Kind.WILL_ESCALATE, plan.initial, triggers, plan.later)
        raise TypeError(f"unknown urgency plan {plan!r}")

    def urgency_now(self) -> Urgency:
        if self.kind is self.Kind.WILL_ESCALATE and all_triggered(self.triggers):
            return self.later
        return self.initial

    def scheduled_now(self) -> Scheduled | None:
        return get_scheduled_now(self.urgency_now())


@dataclass(frozen=True)
class ActionWithItem:
    """An action that an item currently calls for."""

    kind: ActionKind
    item: Item