"""Actions sorted into urgency levels, narrowed by in-the-moment priorities."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Iterator

from .models import InTheMomentPriority
from .priorities import apply_in_the_moment_priorities
from .why_in_scope import MultipleItems, SingleItem, WhyInScopeAndAction


@dataclass
class ActionListsByUrgency:
    """One list of actions for each urgency level, most urgent first."""

    more_urgent_than_anything_including_scheduled: list[WhyInScopeAndAction] = field(
        default_factory=list
    )
    scheduled_any_mode: list[WhyInScopeAndAction] = field(default_factory=list)
    more_urgent_than_mode: list[WhyInScopeAndAction] = field(default_factory=list)
    in_the_mode_scheduled: list[WhyInScopeAndAction] = field(default_factory=list)
    in_the_mode_definitely_urgent: list[WhyInScopeAndAction] = field(default_factory=list)
    in_the_mode_maybe_urgent_and_by_importance: list[WhyInScopeAndAction] = field(
        default_factory=list
    )

    def _levels(self) -> Iterator[list[WhyInScopeAndAction]]:
        yield self.more_urgent_than_anything_including_scheduled
        yield self.scheduled_any_mode
        yield self.more_urgent_than_mode
        yield self.in_the_mode_scheduled
        yield self.in_the_mode_definitely_urgent
        yield self.in_the_mode_maybe_urgent_and_by_importance

    def apply_in_the_moment_priorities(
        self, all_priorities: Iterable[InTheMomentPriority], now: datetime
    ) -> list[SingleItem | MultipleItems]:
        """The non-empty urgency levels, in order, after applying the priorities."""
        priorities = tuple(all_priorities)
        ordered: list[SingleItem | MultipleItems] = []
        for level in self._levels():
            grouped = apply_in_the_moment_priorities(level, priorities, now)
            if grouped is not None:
                ordered.append(grouped)
        return ordered