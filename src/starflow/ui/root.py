"""
Render targets

A render target is where a mount draws its view: any object with a
`render(tree)` method, or a plain callable taking the tree. `Root` is the
built-in in-memory target. It keeps the last drawn tree and its HTML, counts
draws, and delivers DOM-style events to the handlers `h()` attached to the
tree (this is how a browser bridge or a test clicks a button).
"""

import logging
from typing import Any, Callable, List, Optional

from fastcore.xml import FT, ft, to_xml

from ..core.errors import ElementNotFound
from .elements import find, handlers

logger = logging.getLogger(__name__)


def render_into(tree: Any, target: Any) -> None:
    """Draw `tree` into `target`."""
    render = getattr(target, 'render', None)
    if callable(render):
        render(tree)
    elif callable(target):
        target(tree)
    else:
        raise TypeError(f"{type(target).__name__} is not a render target: expected render(tree) or a callable")


class Root:
    """In-memory mount point."""

    def __init__(self, id: str = 'root'):
        self.id = id
        self.tree: Any = None
        self.draws = 0
        self._listeners: List[Callable[['Root'], None]] = []

    def render(self, tree: Any) -> None:
        self.tree = tree
        self.draws += 1
        logger.debug(f"root {self.id!r} drew frame #{self.draws}")
        for listener in list(self._listeners):
            listener(self)

    def on_render(self, listener: Callable[['Root'], None]) -> None:
        """Call `listener(root)` after every draw."""
        self._listeners.append(listener)

    @property
    def html(self) -> str:
        if self.tree is None:
            return ''
        return str(to_xml(self.tree, indent=False))

    def find(self, element_id: str) -> FT:
        node = find(self.tree, element_id)
        if node is None:
            raise ElementNotFound(f"no element with id {element_id!r} in root {self.id!r}")
        return node

    def dispatch_event(self, element_id: str, event: str, *args, **kwargs) -> None:
        """
        Deliver `event` (e.g. "click" or "onclick") to the element `element_id`.

        Extra arguments are passed to the handler as call-time arguments.

        Raises:
            ElementNotFound: no such element, or it has no handler for `event`
        """
        name = event.lower()
        if not name.startswith('on'):
            name = f"on{name}"

        handler: Optional[Callable] = handlers(self.find(element_id)).get(name)
        if handler is None:
            raise ElementNotFound(f"element {element_id!r} has no {name} handler")

        logger.debug(f"root {self.id!r} delivering {name} to {element_id!r}")
        handler(*args, **kwargs)

    def __ft__(self) -> FT:
        return ft('div', self.tree, id=self.id)

    def __repr__(self) -> str:
        return f"Root({self.id!r}, draws={self.draws})"
