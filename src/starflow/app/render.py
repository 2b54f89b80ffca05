"""
Render Scheduler

Coalesces model changes into at most one draw per frame.

The renderer is a two-state machine. Idle: the next `render(model, view)`
records the pair, switches to Pending and requests one frame. Pending:
further calls only overwrite the recorded pair. When the frame fires the
renderer goes back to Idle and draws `view(model, signal)` into the target,
so N changes within a frame cost a single draw of the latest model.
"""

import logging
from typing import Any, Callable, Optional

from ..ui.root import render_into
from .scheduler import AsyncioFrameScheduler, FrameScheduler

logger = logging.getLogger(__name__)

View = Callable[[Any, Any], Any]


class Renderer:
    """Frame-coalescing renderer bound to one target and the root signal."""

    def __init__(self, target: Any, signal, scheduler: FrameScheduler):
        self.target = target
        self.signal = signal
        self.scheduler = scheduler
        self._model: Any = None
        self._view: Optional[View] = None
        self._pending = False

    @property
    def pending(self) -> bool:
        return self._pending

    def __call__(self, model: Any, view: View) -> None:
        self._model = model
        self._view = view

        if self._pending:
            return

        self._pending = True
        self.scheduler.request_frame(self._on_frame)

    def _on_frame(self) -> None:
        self.flush()

    def draw(self, model: Any, view: View) -> None:
        """Record the pair and draw it now, without requesting a frame."""
        self._model = model
        self._view = view
        self._pending = True
        self.flush()

    def flush(self) -> bool:
        """
        Draw the recorded pair now if a draw is pending.

        Returns True if a draw happened. A frame that fires after an explicit
        flush finds nothing pending and does nothing.
        """
        if not self._pending:
            return False

        self._pending = False
        tree = self._view(self._model, self.signal)
        render_into(tree, self.target)
        logger.debug(f"flushed {getattr(self._view, '__name__', 'view')} into {self.target!r}")
        return True


def create_render(target: Any, signal, scheduler: Optional[FrameScheduler] = None) -> Renderer:
    """
    Create the frame-coalescing renderer for `target`.

    Args:
        target: Render target (object with render(tree), or a callable)
        signal: Root signal handed to the view on every draw
        scheduler: Frame scheduler; defaults to an `AsyncioFrameScheduler`
    """
    if scheduler is None:
        scheduler = AsyncioFrameScheduler()
    return Renderer(target, signal, scheduler)
