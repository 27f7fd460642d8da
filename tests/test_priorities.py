from datetime import datetime, timedelta, timezone

import pytest

from donowlist.actions import ActionWithItemStatus
from donowlist.item_status import build_items_status
from donowlist.models import (
    Action,
    ActionKind,
    InTheMomentPriority,
    Item,
    ItemType,
    MotivationKind,
    PriorityKind,
    WallClockTrigger,
)
from donowlist.priorities import apply_in_the_moment_priorities
from donowlist.why_in_scope import MultipleItems, SingleItem, WhyInScope, WhyInScopeAndAction

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
IN_AN_HOUR = NOW + timedelta(hours=1)


def _default_why():
    return {WhyInScope.IMPORTANCE, WhyInScope.URGENCY}


def _item(number, summary=None, **kwargs):
    return Item(id=f"surreal_item:{number}", summary=summary or f"Item {number}", now=NOW, **kwargs)


def _make_progress(number):
    return Action(ActionKind.MAKE_PROGRESS, f"surreal_item:{number}")


def _priority(kind, choice, not_chosen, until=IN_AN_HOUR, pid="1"):
    return InTheMomentPriority(
        id=f"surreal_in_the_moment_priority:{pid}",
        kind=kind,
        choice=_make_progress(choice),
        not_chosen=tuple(_make_progress(n) for n in not_chosen),
        in_effect_until=(WallClockTrigger(until),),
    )


def _choices(statuses, numbers):
    return [
        WhyInScopeAndAction(
            _default_why(),
            ActionWithItemStatus(ActionKind.MAKE_PROGRESS, statuses[f"surreal_item:{n}"]),
        )
        for n in numbers
    ]


def _statuses(count, extra=()):
    items = [_item(n) for n in range(1, count + 1)] + list(extra)
    return build_items_status(items, NOW)


def test_only_one_item_with_no_priorities_returns_that_item():
    statuses = _statuses(1)
    choices = _choices(statuses, [1])
    result = apply_in_the_moment_priorities(choices, [], NOW)
    assert isinstance(result, SingleItem)
    assert result.item.to_action().record_id == "surreal_item:1"
    assert result.item.action == ActionWithItemStatus(
        ActionKind.MAKE_PROGRESS, statuses["surreal_item:1"]
    )


def test_two_items_with_no_priorities_are_returned_to_pick_between():
    statuses = _statuses(2)
    result = apply_in_the_moment_priorities(_choices(statuses, [1, 2]), [], NOW)
    assert isinstance(result, MultipleItems)
    assert len(result.items) == 2


def test_two_items_one_highest_priority_returns_that_one():
    statuses = _statuses(2)
    choices = _choices(statuses, [1, 2])
    priority = _priority(PriorityKind.HIGHEST_PRIORITY, 1, [2])
    result = apply_in_the_moment_priorities(choices, [priority], NOW)
    assert isinstance(result, SingleItem)
    assert result.item.action == choices[0].action


def test_two_items_one_lowest_priority_returns_the_other():
    statuses = _statuses(2)
    choices = _choices(statuses, [1, 2])
    priority = _priority(PriorityKind.LOWEST_PRIORITY, 1, [2])
    result = apply_in_the_moment_priorities(choices, [priority], NOW)
    assert isinstance(result, SingleItem)
    assert result.item.action == choices[1].action


def test_three_items_highest_priority_over_one_leaves_the_other_two():
    statuses = _statuses(3)
    choices = _choices(statuses, [1, 2, 3])
    priority = _priority(PriorityKind.HIGHEST_PRIORITY, 1, [2])
    result = apply_in_the_moment_priorities(choices, [priority], NOW)
    assert isinstance(result, MultipleItems)
    assert len(result.items) == 2
    assert result.items[0].action == choices[0].action
    assert result.items[1].action == choices[2].action


def test_three_items_lowest_priority_over_one_leaves_the_other_two():
    statuses = _statuses(3)
    choices = _choices(statuses, [1, 2, 3])
    priority = _priority(PriorityKind.LOWEST_PRIORITY, 1, [2])
    result = apply_in_the_moment_priorities(choices, [priority], NOW)
    assert isinstance(result, MultipleItems)
    assert len(result.items) == 2
    expected = [choices[1].action, choices[2].action]
    assert result.items[0].action in expected
    assert result.items[1].action in expected


def test_highest_and_lowest_priorities_together_return_the_highest():
    statuses = _statuses(3)
    choices = _choices(statuses, [1, 2, 3])
    highest = _priority(PriorityKind.HIGHEST_PRIORITY, 1, [2], pid="1")
    lowest = _priority(PriorityKind.LOWEST_PRIORITY, 3, [1], pid="3")
    result = apply_in_the_moment_priorities(choices, [highest, lowest], NOW)
    assert isinstance(result, SingleItem)
    assert result.item.action == choices[0].action


def _motivations():
    core = Item(
        id="surreal_item:core",
        summary="Core motivation",
        now=NOW,
        item_type=ItemType.MOTIVATION,
        motivation_kind=MotivationKind.CORE_WORK,
        smaller_items=("surreal_item:1", "surreal_item:2"),
    )
    non_core = Item(
        id="surreal_item:noncore",
        summary="Non core motivation",
        now=NOW,
        item_type=ItemType.MOTIVATION,
        motivation_kind=MotivationKind.NON_CORE_WORK,
        smaller_items=("surreal_item:3",),
    )
    return [core, non_core]


@pytest.mark.parametrize("kind", [PriorityKind.LOWEST_PRIORITY, PriorityKind.HIGHEST_PRIORITY])
def test_priority_out_of_mode_does_not_apply(kind):
    statuses = _statuses(3, extra=_motivations())
    choices = _choices(statuses, [1, 2])
    priority = _priority(kind, 3, [1, 2])
    result = apply_in_the_moment_priorities(choices, [priority], NOW)
    assert isinstance(result, MultipleItems)
    assert len(result.items) == 2
    assert result.items[0].action == choices[0].action
    assert result.items[1].action == choices[1].action


def test_expired_priority_is_ignored():
    statuses = _statuses(2)
    choices = _choices(statuses, [1, 2])
    expired = _priority(PriorityKind.HIGHEST_PRIORITY, 1, [2], until=NOW - timedelta(minutes=1))
    result = apply_in_the_moment_priorities(choices, [expired], NOW)
    assert isinstance(result, MultipleItems)
    assert [c.record_id for c in result.items] == ["surreal_item:1", "surreal_item:2"]


def test_no_choices_returns_none():
    assert apply_in_the_moment_priorities([], [], NOW) is None


def test_single_choice_removed_by_lowest_priority_returns_none():
    statuses = _statuses(1)
    choices = _choices(statuses, [1])
    priority = _priority(PriorityKind.LOWEST_PRIORITY, 1, [1])
    assert apply_in_the_moment_priorities(choices, [priority], NOW) is None


def test_removing_every_choice_from_several_raises():
    statuses = _statuses(2)
    choices = _choices(statuses, [1, 2])
    priority = _priority(PriorityKind.HIGHEST_PRIORITY, 1, [1, 2])
    with pytest.raises(RuntimeError):
        apply_in_the_moment_priorities(choices, [priority], NOW)