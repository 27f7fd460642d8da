from datetime import datetime, timedelta, timezone

from donowlist.importance import (
    MostImportantReadyAndBlocked,
    recursive_get_most_important_and_ready,
    recursive_get_most_important_both_ready_and_blocked,
)
from donowlist.item_status import build_items_status
from donowlist.models import Dependency, DependencyKind, Item

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
TOMORROW = NOW + timedelta(days=1)


def _blocked(record_id, summary):
    return Item(
        record_id,
        summary,
        NOW,
        dependencies=(Dependency(DependencyKind.AFTER_DATE_TIME, after=TOMORROW),),
    )


def test_ready_leaf_is_its_own_answer():
    statuses = build_items_status([Item("a", "A", NOW)], NOW)
    result = recursive_get_most_important_both_ready_and_blocked(statuses["a"], statuses)
    assert result.ready == statuses["a"]
    assert result.blocked == []


def test_blocked_leaf_is_reported_blocked():
    statuses = build_items_status([_blocked("a", "A")], NOW)
    result = recursive_get_most_important_both_ready_and_blocked(statuses["a"], statuses)
    assert result.ready is None
    assert result.blocked == [statuses["a"]]
    assert recursive_get_most_important_and_ready(statuses["a"], statuses) is None


def test_first_ready_child_in_priority_order_wins():
    parent = Item("p", "Parent", NOW, smaller_items=("c1", "c2"))
    statuses = build_items_status([parent, Item("c1", "C1", NOW), Item("c2", "C2", NOW)], NOW)
    assert recursive_get_most_important_and_ready(statuses["p"], statuses) == statuses["c1"]


def test_blocked_child_is_skipped_and_reported():
    parent = Item("p", "Parent", NOW, smaller_items=("c1", "c2"))
    statuses = build_items_status([parent, _blocked("c1", "C1"), Item("c2", "C2", NOW)], NOW)
    result = recursive_get_most_important_both_ready_and_blocked(statuses["p"], statuses)
    assert result.ready == statuses["c2"]
    assert result.blocked == [statuses["c1"]]


def test_all_children_blocked_gives_nothing_ready():
    parent = Item("p", "Parent", NOW, smaller_items=("c1", "c2"))
    statuses = build_items_status([parent, _blocked("c1", "C1"), _blocked("c2", "C2")], NOW)
    result = recursive_get_most_important_both_ready_and_blocked(statuses["p"], statuses)
    assert result == MostImportantReadyAndBlocked(None, [statuses["c1"], statuses["c2"]])


def test_finished_children_are_ignored():
    parent = Item("p", "Parent", NOW, smaller_items=("c1", "c2"))
    statuses = build_items_status(
        [parent, Item("c1", "C1", NOW, finished=NOW), Item("c2", "C2", NOW)], NOW
    )
    assert recursive_get_most_important_and_ready(statuses["p"], statuses) == statuses["c2"]


def test_search_descends_through_grandchildren():
    top = Item("t", "Top", NOW, smaller_items=("m",))
    middle = Item("m", "Middle", NOW, smaller_items=("g",))
    statuses = build_items_status([top, middle, Item("g", "Grandchild", NOW)], NOW)
    assert recursive_get_most_important_and_ready(statuses["t"], statuses) == statuses["g"]