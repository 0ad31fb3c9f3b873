"""Transient interaction state for one sketch editing session."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from deckcalc.core.geometry.kernel import Point


class ClickLatch(Enum):
    """One-shot guard that swallows the click fired by a drag release."""

    DISARMED = auto()
    ARMED = auto()


@dataclass
class EdgeLengthEdit:
    """An open length editor on one edge, holding the not-yet-applied value."""

    edge_index: int
    value: float
    anchor: Point  # where the presentation layer shows the input box

    def to_dict(self) -> dict:
        return {
            "edge_index": self.edge_index,
            "value": self.value,
            "anchor": list(self.anchor),
        }


@dataclass
class EditSession:
    selected: int | None = None
    dragging: bool = False
    edge_edit: EdgeLengthEdit | None = None
    click_latch: ClickLatch = field(default=ClickLatch.DISARMED)

    @property
    def editing_edge(self) -> bool:
        return self.edge_edit is not None

    def arm(self) -> None:
        self.click_latch = ClickLatch.ARMED

    def consume_latch(self) -> bool:
        """Disarm the latch; True if it was armed (the click must be ignored)."""
        if self.click_latch is ClickLatch.ARMED:
            self.click_latch = ClickLatch.DISARMED
            return True
        return False

    def to_dict(self) -> dict:
        return {
            "selected": self.selected,
            "dragging": self.dragging,
            "edge_edit": self.edge_edit.to_dict() if self.edge_edit else None,
            "click_latch": self.click_latch.name.lower(),
        }
