"""
Placement contract shared by the nesting strategies.

A strategy receives inflated items (piece size plus spacing) in placement
order and the size of the margin-shrunk region. It returns the bottom-left
corner, relative to the region origin, of every item it managed to place.
Items missing from the returned mapping did not fit.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple


@dataclass(frozen=True)
class PackItem:
    """Inflated footprint of one piece."""
    index: int
    width: float
    height: float


Positions = Dict[int, Tuple[float, float]]

Strategy = Callable[[List[PackItem], float, float], Positions]
