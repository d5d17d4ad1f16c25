"""
Nesting - rectangle placement on a single sheet.
"""

from cncbuilder.nesting.engine import place, resolve_method, order_pieces, STRATEGIES
from cncbuilder.nesting.items import PackItem
from cncbuilder.nesting.greedy import pack_greedy
from cncbuilder.nesting.shelf import pack_shelf
from cncbuilder.nesting.guillotine import pack_guillotine

__all__ = [
    'place',
    'resolve_method',
    'order_pieces',
    'STRATEGIES',
    'PackItem',
    'pack_greedy',
    'pack_shelf',
    'pack_guillotine',
]
