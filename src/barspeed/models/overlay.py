"""Overlay data model handed to the chart renderer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AnchorCorner(Enum):
    """Chart corner an overlay is positioned against."""

    TOP_LEFT = "top_left"
    TOP_RIGHT = "top_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_RIGHT = "bottom_right"


@dataclass(frozen=True)
class Font:
    family: str = "Consolas"
    size: int = 10


@dataclass(frozen=True)
class Overlay:
    """Text block positioned on the chart canvas.

    Attributes:
        text: Text to draw, lines separated by ``\\n``.
        anchor: Corner the offsets are measured from.
        x_offset: Horizontal distance from the anchor, in pixels.
        y_offset: Vertical distance from the anchor, in pixels.
        font: Font face and size.
        color: Text color name.
    """

    text: str
    anchor: AnchorCorner
    x_offset: int
    y_offset: int
    font: Font
    color: str

    @property
    def lines(self) -> list[str]:
        return self.text.split("\n")

    def position(self, width: int, height: int) -> tuple[int, int]:
        """Resolve pixel coordinates inside a ``width`` x ``height`` window."""
        x = self.x_offset
        y = self.y_offset
        if self.anchor in (AnchorCorner.TOP_RIGHT, AnchorCorner.BOTTOM_RIGHT):
            x = width - self.x_offset
        if self.anchor in (AnchorCorner.BOTTOM_LEFT, AnchorCorner.BOTTOM_RIGHT):
            y = height - self.y_offset
        return x, y
