"""Narrowing the actions at one urgency level with in-the-moment priorities."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Sequence

from .models import InTheMomentPriority, PriorityKind
from .why_in_scope import MultipleItems, SingleItem, WhyInScopeAndAction


def _swap_remove(choices: list[WhyInScopeAndAction], index: int) -> None:
    """Remove ``choices[index]`` by moving the last element into its place."""
    last = choices.pop()
    if index < len(choices):
        choices[index] = last


def _position(choices: Sequence[WhyInScopeAndAction], action) -> int | None:
    return next((i for i, choice in enumerate(choices) if choice.to_action() == action), None)


def apply_in_the_moment_priorities(
    choices: Iterable[WhyInScopeAndAction],
    all_priorities: Iterable[InTheMomentPriority],
    now: datetime,
) -> SingleItem | MultipleItems | None:
    """Apply the priorities active at ``now`` and group what remains.

    Returns None when nothing is left, a SingleItem when one action remains and
    MultipleItems otherwise.
    """
    original = list(choices)
    remaining = list(original)

    for priority in all_priorities:
        if not priority.is_active(now):
            continue
        if priority.kind is PriorityKind.HIGHEST_PRIORITY:
            if _position(remaining, priority.choice) is not None:
                for lower in priority.not_chosen:
                    index = _position(remaining, lower)
                    if index is not None:
                        _swap_remove(remaining, index)
        elif priority.kind is PriorityKind.LOWEST_PRIORITY:
            index = _position(remaining, priority.choice)
            if index is not None and any(
                choice.to_action() in priority.not_chosen for choice in remaining
            ):
                _swap_remove(remaining, index)

    if len(original) > 1 and not remaining:
        raise RuntimeError(
            "in-the-moment priorities removed every choice from a list of several"
        )

    if not remaining:
        return None
    if len(remaining) == 1:
        return SingleItem(remaining[0])
    return MultipleItems(remaining)