# donowlist

Work out what to do now. `donowlist` takes a set of items (motivations, goals
and actions linked into parent/child trees), their dependencies, urgency plans
and in-the-moment priorities. From these it finds which items are ready to be
worked on and which actions they call for, and groups those actions into
urgency levels.

The package uses only the standard library.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## The records (`donowlist.models`)

- `Item`: a frozen record with an `id` (a string record id), a `summary` and
  `now`, the moment it is looked at. It also carries optional fields:
  `finished`, `responsibility` (`Responsibility`), `item_type` (`ItemType`),
  `motivation_kind` (`MotivationKind`), `created` (defaults to `now`),
  `urgency_plan`, `dependencies`, `smaller_items`, `last_reviewed`,
  `review_frequency` and `review_guidance` (`ReviewGuidance`). Two items are
  equal when their ids are.
  `smaller_items` lists the ids of child items in priority order. This is what
  builds the parent/child graph.
- `Dependency`: a stored dependency of one of the kinds in `DependencyKind`.
  `AFTER_DATE_TIME` takes a date/time. `AFTER_ITEM`, `DURING_ITEM` and
  `AFTER_EVENT` each take a record id.
- Urgency plans: `StaysTheSame(urgency)` or `WillEscalate(initial, triggers, later)`.
  An `Urgency` has a kind from `UrgencyKind`, listed from most urgent to
  least. The two scheduled kinds carry a `ScheduledExact` or a
  `ScheduledRange`, best made with `Urgency.scheduled_any_mode(...)` or
  `Urgency.in_the_mode_scheduled(...)`.
- Triggers: `WallClockTrigger`, `InvocationCountTrigger` and `AmountOfTimeTrigger`.
  The two logged triggers count `TimeSpent` entries that start at or after
  their `starting` time and fall within their `ItemsInScope`.
- `Event`: something an item can wait on. It stays active until
  `triggered` is set.
- `Action` / `ActionKind`: an action and the record id of the item it concerns.
- `InTheMomentPriority`: a choice between actions, either
  `PriorityKind.HIGHEST_PRIORITY` or `PriorityKind.LOWEST_PRIORITY`.
  `is_active(now)` stays true until one of its `WallClockTrigger`s in
  `in_effect_until` is reached.

## Item status

`donowlist.item_status.build_items_status(items, now, events=(), time_spent_log=())`
builds the status of every item as seen at `now` and returns it keyed by
record id. It raises `ValueError` when an id appears twice. It raises
`KeyError` when a dependency names an item or event that is not loaded.

```python
from datetime import datetime, timezone

from donowlist.importance import recursive_get_most_important_and_ready
from donowlist.item_status import build_items_status
from donowlist.models import Filter, Item, ItemType, MotivationKind

now = datetime.now(timezone.utc)
items = [
    Item(
        id="item:core",
        summary="Core work",
        now=now,
        item_type=ItemType.MOTIVATION,
        motivation_kind=MotivationKind.CORE_WORK,
        smaller_items=("item:1", "item:2"),
    ),
    Item(id="item:1", summary="Write report", now=now),
    Item(id="item:2", summary="Review notes", now=now),
]
statuses = build_items_status(items, now)

for status in statuses.values():
    if status.is_active() and not status.has_parents(Filter.ACTIVE):
        ready = recursive_get_most_important_and_ready(status, statuses)
        if ready is not None:
            print(ready.summary)  # Write report
```

Each `ItemStatus` exposes the following:

- `record_id`, `summary` and `item`.
- `get_children(filter)`, `get_parents(filter)` and `get_dependencies(filter)`.
  The `filter` is one of `Filter.ALL`, `Filter.ACTIVE` or `Filter.FINISHED`.
- `has_children`, `has_parents` and `has_dependencies`.
- `urgency_now()`, `scheduled_now()` and `is_scheduled_now()`.
- `is_ready_to_be_worked_on()`: true when no dependency is active. Active
  children, a scheduled time not yet reached and a reactive responsibility
  all count as dependencies.
- `urgent_action_items`: the actions the item calls for now. These cover
  parenting it back to a motivation, classifying it, picking a review
  frequency, reviewing it, setting its readiness and urgency, and making
  progress on it.

`donowlist.importance.recursive_get_most_important_both_ready_and_blocked`
returns a `MostImportantReadyAndBlocked`. It holds the first ready item, taken
in priority order, and the items found blocked on the way to it.

## Building the urgency levels

1. `donowlist.actions.recursive_get_urgent_bullet_list(status, statuses)`
   yields `ActionWithItemStatus` values. The item's own urgent actions come
   first, followed by those of its active descendants. Each value has
   `urgency_now()`, `to_action()`, `record_id` and `item_node`.
2. Wrap each action in
   `donowlist.why_in_scope.WhyInScopeAndAction({WhyInScope.URGENCY}, action)`,
   or use `WhyInScope.IMPORTANCE` for actions found by importance. Two
   wrappers are equal when their actions are. `extend_why_in_scope` merges
   the reasons of two wrappers.
3. Put the wrappers into the lists of a
   `donowlist.urgency_lists.ActionListsByUrgency`, one list per urgency level.
   Then call `apply_in_the_moment_priorities(all_priorities, now)`.

The result lists the non-empty urgency levels, from most urgent to least.
Each level is a `SingleItem` when one action remains and a `MultipleItems`
when the user is left to pick between several.

`donowlist.priorities.apply_in_the_moment_priorities(choices, all_priorities, now)`
narrows a single level. A `HIGHEST_PRIORITY` whose choice is present removes
its `not_chosen` actions. A `LOWEST_PRIORITY` removes its own choice when one
of its `not_chosen` actions is present. The function raises `RuntimeError`
when the priorities remove every action from a level that held several.

## Other helpers

- `donowlist.triggers`: dependencies, triggers and urgency plans evaluated
  against the loaded items (`UrgencyPlanWithItem.urgency_now()`,
  `TriggerWithItem.is_triggered()`, `time_spent_on`).
- `donowlist.item_node`: the item graph (`ItemNode`, `ParentLookup`,
  `GrowingItemNode` and `ShrinkingItemNode`), with protection against
  circular references. `ItemNode.create_parent_chain(filter)` lists every
  ancestor together with its distance from the item.
- `donowlist.item_links`: the same records resolved against item nodes.
  `DependencyWithItemNode.to_dependency()` gives back the stored form. It
  raises `ValueError` for derived dependencies, which are after-child-item,
  until-scheduled and waiting-to-be-interrupted.
- `donowlist.lap_count.LapCountGreaterOrLess.from_number(value)` returns
  `GREATER_THAN` for a positive number or time span and `LESS_THAN` otherwise.

## What it does not do

`donowlist` is a library of calculations over records that you supply. It has
no storage: it does not load or save items, events, time logs or priorities.
It has no command line and no user interface. It does not decide the current
mode, so the caller sorts actions into the urgency lists itself. It does not
lay scheduled items out into an upcoming timetable.