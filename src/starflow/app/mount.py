"""
Mount - composition root

Wires the model cell, the root signal, the render scheduler and the
application's channels together:

    program = mount(Root(), {'count': 0}, view, [ticker])

`mount` draws the initial model synchronously, then hands the root signal to
every channel (timers, sockets, HTTP routes...) which keep it and dispatch
actions later. From then on every dispatch replaces the model and asks the
renderer for a frame.
"""

import logging
from typing import Any, Callable, Iterable, Optional

from ..core.signals import Signal, create_signal
from .config import ApplicationConfig, get_config, make_scheduler
from .render import Renderer, View, create_render
from .scheduler import FrameScheduler

logger = logging.getLogger(__name__)

Channel = Callable[[Signal], None]


class Program:
    """
    A mounted application: the model cell plus everything bound to it.

    The model is only ever replaced through `set_model`, which every signal
    dispatch ends up calling.
    """

    def __init__(self, target: Any, model: Any, view: View, scheduler: FrameScheduler):
        self.target = target
        self.view = view
        self._model = model
        self.signal = create_signal(self.get_model, self.set_model)
        self.renderer: Renderer = create_render(target, self.signal, scheduler)

    @property
    def model(self) -> Any:
        return self._model

    def get_model(self) -> Any:
        return self._model

    def set_model(self, model: Any) -> None:
        self._model = model
        self.renderer(model, self.view)

    def __repr__(self) -> str:
        return f"Program(target={self.target!r}, view={getattr(self.view, '__name__', self.view)!r})"


def mount(
    target: Any,
    model: Any,
    view: View,
    channels: Iterable[Channel] = (),
    *,
    scheduler: Optional[FrameScheduler] = None,
    config: Optional[ApplicationConfig] = None,
) -> Program:
    """
    Mount `view` over `model` into `target` and start `channels`.

    Args:
        target: Render target (e.g. `starflow.ui.Root`)
        model: Initial model
        view: `view(model, signal) -> tree`
        channels: Callables receiving the root signal, invoked in order before returning
        scheduler: Frame scheduler; built from `config.render` when omitted
        config: Application configuration; defaults to the global configuration

    Returns:
        The mounted `Program`
    """
    if scheduler is None:
        scheduler = make_scheduler((config or get_config()).render)

    program = Program(target, model, view, scheduler)

    # Initial draw happens now, not on the next frame
    program.renderer.draw(model, view)

    channels = list(channels)
    for channel in channels:
        channel(program.signal)

    logger.info(f"mounted {getattr(view, '__name__', 'view')} into {target!r} with {len(channels)} channel(s)")
    return program
