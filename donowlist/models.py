"""Core records of the planner: items, urgency, dependencies, events and priorities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Iterable, Union


def _freeze(instance: object, *names: str) -> None:
    """Store the named sequence fields of a frozen dataclass as tuples."""
    for name in names:
        value = getattr(instance, name)
        if value is not None and not isinstance(value, tuple):
            object.__setattr__(instance, name, tuple(value))


class Filter(Enum):
    """Which related records to consider."""

    ALL = "all"
    ACTIVE = "active"
    FINISHED = "finished"


class Responsibility(Enum):
    PROACTIVE_ACTIONABLE = "proactive_actionable"
    REACTIVE_BE_AVAILABLE_TO_ACT = "reactive_be_available_to_act"
    WAITING_FOR = "waiting_for"
    TRACKING_TO_BE_AWARE_OF = "tracking_to_be_aware_of"


class MotivationKind(Enum):
    NOT_SET = "not_set"
    CORE_WORK = "core_work"
    NON_CORE_WORK = "non_core_work"
    NEITHER = "neither"


class ItemType(Enum):
    UNDECLARED = "undeclared"
    ACTION = "action"
    GOAL = "goal"
    MOTIVATION = "motivation"
    PERSON_OR_GROUP = "person_or_group"
    IDEA_OR_THOUGHT = "idea_or_thought"


class ReviewGuidance(Enum):
    ALWAYS_REVIEW_CHILDREN_WITH_THIS_ITEM = "always_review_children_with_this_item"
    REVIEW_CHILDREN_SEPARATELY = "review_children_separately"


@dataclass(frozen=True)
class ScheduledExact:
    """Must start at exactly ``start``."""

    start: datetime
    duration: timedelta

    def earliest_start(self) -> datetime:
        return self.start

    def is_valid_starting_time(self, proposed: datetime) -> bool:
        return proposed == self.start


@dataclass(frozen=True)
class ScheduledRange:
    """May start anywhere within ``start_range`` (inclusive)."""

    start_range: tuple[datetime, datetime]
    duration: timedelta

    def __post_init__(self) -> None:
        _freeze(self, "start_range")
        if len(self.start_range) != 2:
            raise ValueError("start_range must hold exactly a start and an end")

    def earliest_start(self) -> datetime:
        return self.start_range[0]

    def is_valid_starting_time(self, proposed: datetime) -> bool:
        start, end = self.start_range
        return start <= proposed <= end


Scheduled = Union[ScheduledExact, ScheduledRange]


class UrgencyKind(Enum):
    """Urgency levels, most urgent first."""

    MORE_URGENT_THAN_ANYTHING_INCLUDING_SCHEDULED = "more_urgent_than_anything_including_scheduled"
    SCHEDULED_ANY_MODE = "scheduled_any_mode"
    MORE_URGENT_THAN_MODE = "more_urgent_than_mode"
    IN_THE_MODE_SCHEDULED = "in_the_mode_scheduled"
    IN_THE_MODE_DEFINITELY_URGENT = "in_the_mode_definitely_urgent"
    IN_THE_MODE_MAYBE_URGENT = "in_the_mode_maybe_urgent"
    IN_THE_MODE_BY_IMPORTANCE = "in_the_mode_by_importance"


_SCHEDULED_KINDS = frozenset({UrgencyKind.SCHEDULED_ANY_MODE, UrgencyKind.IN_THE_MODE_SCHEDULED})


@dataclass(frozen=True)
class Urgency:
    """An urgency level; the scheduled kinds carry their schedule."""

    kind: UrgencyKind
    scheduled: Scheduled | None = None

    def __post_init__(self) -> None:
        if self.kind in _SCHEDULED_KINDS and self.scheduled is None:
            raise ValueError(f"{self.kind.name} urgency needs a schedule")
        if self.kind not in _SCHEDULED_KINDS and self.scheduled is not None:
            raise ValueError(f"{self.kind.name} urgency cannot carry a schedule")

    @staticmethod
    def scheduled_any_mode(scheduled: Scheduled) -> Urgency:
        return Urgency(UrgencyKind.SCHEDULED_ANY_MODE, scheduled)

    @staticmethod
    def in_the_mode_scheduled(scheduled: Scheduled) -> Urgency:
        return Urgency(UrgencyKind.IN_THE_MODE_SCHEDULED, scheduled)


def get_scheduled_now(urgency: Urgency | None) -> Scheduled | None:
    """The schedule of a scheduled urgency, otherwise None."""
    if urgency is None or urgency.kind not in _SCHEDULED_KINDS:
        return None
    return urgency.scheduled


@dataclass(frozen=True)
class ItemsInScope:
    """All items, only ``include``, or everything but ``exclude`` (record ids)."""

    include: tuple[str, ...] | None = None
    exclude: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        if self.include is not None and self.exclude is not None:
            raise ValueError("items in scope cannot both include and exclude")
        _freeze(self, "include", "exclude")


@dataclass(frozen=True)
class WallClockTrigger:
    after: datetime


@dataclass(frozen=True)
class InvocationCountTrigger:
    starting: datetime
    count: int
    items_in_scope: ItemsInScope = ItemsInScope()


@dataclass(frozen=True)
class AmountOfTimeTrigger:
    starting: datetime
    duration: timedelta
    items_in_scope: ItemsInScope = ItemsInScope()


Trigger = Union[WallClockTrigger, InvocationCountTrigger, AmountOfTimeTrigger]


@dataclass(frozen=True)
class StaysTheSame:
    urgency: Urgency


@dataclass(frozen=True)
class WillEscalate:
    initial: Urgency
    triggers: tuple[Trigger, ...]
    later: Urgency

    def __post_init__(self) -> None:
        _freeze(self, "triggers")


UrgencyPlan = Union[StaysTheSame, WillEscalate]


class DependencyKind(Enum):
    AFTER_DATE_TIME = "after_date_time"
    AFTER_ITEM = "after_item"
    DURING_ITEM = "during_item"
    AFTER_EVENT = "after_event"


@dataclass(frozen=True)
class Dependency:
    """A stored dependency: a date/time for AFTER_DATE_TIME, a record id otherwise."""

    kind: DependencyKind
    after: datetime | None = None
    record_id: str | None = None

    def __post_init__(self) -> None:
        if self.kind is DependencyKind.AFTER_DATE_TIME:
            if self.after is None or self.record_id is not None:
                raise ValueError("AFTER_DATE_TIME dependency needs only a date/time")
        elif self.record_id is None or self.after is not None:
            raise ValueError(f"{self.kind.name} dependency needs only a record id")


@dataclass(frozen=True, eq=False)
class Item:
    """A stored item as seen at the moment ``now``; items are equal when their ids are."""

    id: str
    summary: str
    now: datetime
    finished: datetime | None = None
    responsibility: Responsibility = Responsibility.PROACTIVE_ACTIONABLE
    item_type: ItemType = ItemType.UNDECLARED
    motivation_kind: MotivationKind = MotivationKind.NOT_SET
    created: datetime | None = None
    urgency_plan: UrgencyPlan | None = None
    dependencies: tuple[Dependency, ...] = ()
    smaller_items: tuple[str, ...] = ()
    last_reviewed: datetime | None = None
    review_frequency: timedelta | None = None
    review_guidance: ReviewGuidance | None = None

    def __post_init__(self) -> None:
        _freeze(self, "dependencies", "smaller_items")
        if self.created is None:
            object.__setattr__(self, "created", self.now)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Item):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def is_finished(self) -> bool:
        return self.finished is not None

    def is_active(self) -> bool:
        return not self.is_finished()

    def is_person_or_group(self) -> bool:
        return self.item_type is ItemType.PERSON_OR_GROUP

    def is_type_goal(self) -> bool:
        return self.item_type is ItemType.GOAL

    def is_type_motivation(self) -> bool:
        return self.item_type is ItemType.MOTIVATION

    def _is_motivation_of(self, *kinds: MotivationKind) -> bool:
        return self.is_type_motivation() and self.motivation_kind in kinds

    def is_type_motivation_kind_core(self) -> bool:
        return self._is_motivation_of(MotivationKind.CORE_WORK)

    def is_type_motivation_kind_non_core(self) -> bool:
        return self._is_motivation_of(MotivationKind.NON_CORE_WORK)

    def is_type_motivation_kind_neither(self) -> bool:
        return self._is_motivation_of(MotivationKind.NEITHER)

    def is_type_motivation_kind_not_set(self) -> bool:
        return self._is_motivation_of(MotivationKind.NOT_SET)

    def is_core_or_neither(self) -> bool:
        return self._is_motivation_of(MotivationKind.CORE_WORK, MotivationKind.NEITHER)

    def is_non_core_or_neither(self) -> bool:
        return self._is_motivation_of(MotivationKind.NON_CORE_WORK, MotivationKind.NEITHER)

    def is_responsibility_reactive(self) -> bool:
        return self.responsibility is Responsibility.REACTIVE_BE_AVAILABLE_TO_ACT

    def has_review_frequency(self) -> bool:
        return self.review_frequency is not None

    def has_review_guidance(self) -> bool:
        return self.review_guidance is not None

    def is_a_review_due(self) -> bool:
        """Due once a review frequency has elapsed since the last review (or creation)."""
        if self.review_frequency is None:
            return False
        since = self.last_reviewed if self.last_reviewed is not None else self.created
        return since + self.review_frequency <= self.now


@dataclass(frozen=True, eq=False)
class Event:
    """Something that may happen; waiting on it lasts until it is triggered."""

    id: str
    summary: str = ""
    triggered: bool = False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def is_active(self) -> bool:
        return not self.triggered


@dataclass(frozen=True)
class TimeSpent:
    """A logged stretch of work towards some items (record ids)."""

    worked_towards: tuple[str, ...]
    started_at: datetime
    stopped_at: datetime

    def __post_init__(self) -> None:
        _freeze(self, "worked_towards")

    def duration(self) -> timedelta:
        return self.stopped_at - self.started_at

    def did_work_towards_any(self, items: Iterable[Item]) -> bool:
        return any(item.id in self.worked_towards for item in items)


class ActionKind(Enum):
    SET_READY_AND_URGENCY = "set_ready_and_urgency"
    PARENT_BACK_TO_A_MOTIVATION = "parent_back_to_a_motivation"
    ITEM_NEEDS_A_CLASSIFICATION = "item_needs_a_classification"
    REVIEW_ITEM = "review_item"
    PICK_ITEM_REVIEW_FREQUENCY = "pick_item_review_frequency"
    MAKE_PROGRESS = "make_progress"


@dataclass(frozen=True)
class Action:
    """A stored action: what to do and which item it concerns."""

    kind: ActionKind
    record_id: str


class PriorityKind(Enum):
    HIGHEST_PRIORITY = "highest_priority"
    LOWEST_PRIORITY = "lowest_priority"


@dataclass(frozen=True)
class InTheMomentPriority:
    """A choice made between actions that holds until one of its end triggers."""

    id: str
    kind: PriorityKind
    choice: Action
    not_chosen: tuple[Action, ...] = ()
    in_effect_until: tuple[Trigger, ...] = ()

    def __post_init__(self) -> None:
        _freeze(self, "not_chosen", "in_effect_until")

    def is_active(self, now: datetime) -> bool:
        """Active until a wall-clock end trigger has been reached."""
        return not any(
            isinstance(trigger, WallClockTrigger) and now >= trigger.after
            for trigger in self.in_effect_until
        )