"""Why an action is on the list, and the groups of actions at one urgency level."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable


class WhyInScope(Enum):
    IMPORTANCE = "importance"
    URGENCY = "urgency"
    MENU_NAVIGATION = "menu_navigation"

    @staticmethod
    def menu_navigation() -> set[WhyInScope]:
        return {WhyInScope.MENU_NAVIGATION}


class WhyInScopeAndAction:
    """An action with the reasons it is in scope; equal when the actions are equal."""

    def __init__(self, why_in_scope: Iterable[WhyInScope], action: Any) -> None:
        self.why_in_scope: set[WhyInScope] = set(why_in_scope)
        self.action = action

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WhyInScopeAndAction):
            return NotImplemented
        return self.action == other.action

    def __hash__(self) -> int:
        return hash(self.action)

    def __repr__(self) -> str:
        reasons = sorted(reason.name for reason in self.why_in_scope)
        return f"WhyInScopeAndAction({reasons}, {self.action!r})"

    def is_in_scope_for_importance(self) -> bool:
        return WhyInScope.IMPORTANCE in self.why_in_scope

    def urgency_now(self):
        return self.action.urgency_now()

    def extend_why_in_scope(self, why_in_scope: Iterable[WhyInScope]) -> None:
        self.why_in_scope.update(why_in_scope)

    @property
    def record_id(self) -> str:
        return self.action.record_id

    def to_action(self):
        return self.action.to_action()

    @property
    def item_node(self):
        return self.action.item_node


@dataclass
class SingleItem:
    """An urgency level with exactly one action to take."""

    item: WhyInScopeAndAction


@dataclass
class MultipleItems:
    """An urgency level with several actions to pick between."""

    items: list[WhyInScopeAndAction] = field(default_factory=list)