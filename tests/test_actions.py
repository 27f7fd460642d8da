from datetime import datetime, timezone

import pytest

from donowlist.actions import ActionWithItemStatus, recursive_get_urgent_bullet_list
from donowlist.item_status import build_items_status
from donowlist.models import (
    Action,
    ActionKind,
    Item,
    StaysTheSame,
    Urgency,
    UrgencyKind,
)

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _statuses(*items):
    return build_items_status(items, NOW)


def _parent_and_child():
    return _statuses(
        Item("p", "Parent", NOW, smaller_items=("c",)),
        Item("c", "Child", NOW),
    )


def test_single_item_bullet_list_order():
    statuses = _statuses(Item("a", "Only item", NOW))
    result = list(recursive_get_urgent_bullet_list(statuses["a"], statuses))
    assert [x.kind for x in result] == [
        ActionKind.PARENT_BACK_TO_A_MOTIVATION,
        ActionKind.PICK_ITEM_REVIEW_FREQUENCY,
        ActionKind.SET_READY_AND_URGENCY,
    ]
    assert all(x.item_status is statuses["a"] for x in result)


def test_bullet_list_includes_children_after_parent():
    statuses = _parent_and_child()
    result = list(recursive_get_urgent_bullet_list(statuses["p"], statuses))
    assert [(x.kind, x.record_id) for x in result] == [
        (ActionKind.PARENT_BACK_TO_A_MOTIVATION, "p"),
        (ActionKind.PICK_ITEM_REVIEW_FREQUENCY, "p"),
        (ActionKind.SET_READY_AND_URGENCY, "c"),
    ]


def test_visited_children_are_skipped():
    statuses = _parent_and_child()
    result = list(
        recursive_get_urgent_bullet_list(statuses["p"], statuses, [statuses["c"]])
    )
    assert {x.record_id for x in result} == {"p"}


def test_finished_child_is_skipped():
    statuses = _statuses(
        Item("p", "Parent", NOW, smaller_items=("c",)),
        Item("c", "Child", NOW, finished=NOW),
    )
    result = list(recursive_get_urgent_bullet_list(statuses["p"], statuses))
    assert all(x.record_id == "p" for x in result)


def test_to_action_and_from_action_round_trip():
    statuses = _statuses(Item("a", "Only item", NOW))
    action = ActionWithItemStatus(ActionKind.MAKE_PROGRESS, statuses["a"])
    stored = action.to_action()
    assert stored == Action(ActionKind.MAKE_PROGRESS, "a")
    assert ActionWithItemStatus.from_action(stored, statuses) == action


def test_from_action_unknown_record_raises():
    statuses = _statuses(Item("a", "Only item", NOW))
    with pytest.raises(KeyError):
        ActionWithItemStatus.from_action(Action(ActionKind.REVIEW_ITEM, "missing"), statuses)


def test_from_item_node_action_uses_status():
    statuses = _statuses(Item("a", "Only item", NOW))
    node_action = statuses["a"].urgent_action_items[0]
    result = ActionWithItemStatus.from_item_node_action(node_action, statuses)
    assert result.kind is node_action.kind
    assert result.item_status is statuses["a"]
    assert result.item_node is statuses["a"].item_node


def test_make_progress_urgency_defaults_to_by_importance():
    statuses = _statuses(Item("a", "Only item", NOW))
    action = ActionWithItemStatus(ActionKind.MAKE_PROGRESS, statuses["a"])
    assert action.urgency_now() == Urgency(UrgencyKind.IN_THE_MODE_BY_IMPORTANCE)


def test_make_progress_urgency_follows_plan():
    plan = StaysTheSame(Urgency(UrgencyKind.MORE_URGENT_THAN_MODE))
    statuses = _statuses(Item("a", "Urgent", NOW, urgency_plan=plan))
    action = ActionWithItemStatus(ActionKind.MAKE_PROGRESS, statuses["a"])
    assert action.urgency_now() == Urgency(UrgencyKind.MORE_URGENT_THAN_MODE)


@pytest.mark.parametrize(
    "kind, expected",
    [
        (ActionKind.PARENT_BACK_TO_A_MOTIVATION, UrgencyKind.MORE_URGENT_THAN_MODE),
        (ActionKind.ITEM_NEEDS_A_CLASSIFICATION, UrgencyKind.MORE_URGENT_THAN_MODE),
        (ActionKind.PICK_ITEM_REVIEW_FREQUENCY, UrgencyKind.IN_THE_MODE_MAYBE_URGENT),
        (ActionKind.REVIEW_ITEM, UrgencyKind.IN_THE_MODE_MAYBE_URGENT),
        (ActionKind.SET_READY_AND_URGENCY, UrgencyKind.IN_THE_MODE_DEFINITELY_URGENT),
    ],
)
def test_fixed_urgency_per_kind(kind, expected):
    plan = StaysTheSame(Urgency(UrgencyKind.MORE_URGENT_THAN_ANYTHING_INCLUDING_SCHEDULED))
    statuses = _statuses(Item("a", "Item", NOW, urgency_plan=plan))
    assert ActionWithItemStatus(kind, statuses["a"]).urgency_now().kind is expected


def test_equality_and_hash_depend_on_kind_and_item():
    statuses = _parent_and_child()
    first = ActionWithItemStatus(ActionKind.MAKE_PROGRESS, statuses["p"])
    same = ActionWithItemStatus(ActionKind.MAKE_PROGRESS, statuses["p"])
    other_kind = ActionWithItemStatus(ActionKind.REVIEW_ITEM, statuses["p"])
    other_item = ActionWithItemStatus(ActionKind.MAKE_PROGRESS, statuses["c"])
    assert first == same
    assert len({first, same, other_kind, other_item}) == 3
    assert first != other_kind
    assert first != other_item