"""
Axis-aligned rectangle primitive shared by nesting and toolpath code.

Coordinates are in millimetres with the origin at the bottom-left sheet
corner, x growing right and y growing up.
"""

from dataclasses import dataclass


# Tolerance for floating point comparisons of coordinates (mm)
EPS = 1e-9


@dataclass(frozen=True)
class Rect:
    """Rectangle given by its bottom-left corner and size."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def overlaps(self, other: 'Rect') -> bool:
        """True when the interiors intersect; touching edges do not overlap."""
        return (
            self.x < other.right - EPS and other.x < self.right - EPS and
            self.y < other.top - EPS and other.y < self.top - EPS
        )

    def contains(self, other: 'Rect') -> bool:
        return (
            other.x >= self.x - EPS and other.y >= self.y - EPS and
            other.right <= self.right + EPS and other.top <= self.top + EPS
        )

    def shrink(self, margin: float) -> 'Rect':
        """Rectangle shrunk by margin on all four sides (may become empty)."""
        return Rect(
            self.x + margin,
            self.y + margin,
            self.width - 2 * margin,
            self.height - 2 * margin
        )

    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0
