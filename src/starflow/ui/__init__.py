"""
StarFlow UI

Element factory and render targets over fastcore's `FT` element tree.
"""

from .elements import h, handlers, walk, find
from .root import Root, render_into

__all__ = [
    'h',
    'handlers',
    'walk',
    'find',
    'Root',
    'render_into',
]
