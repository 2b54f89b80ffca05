"""
Signals - Action Dispatch Core

Signals map actions to models. A signal is created over a getter/setter pair
for the model it owns; calling it with an action returns a dispatcher, and
invoking the dispatcher applies the action to the current model and hands the
result to the setter:

    model = 0
    signal = create_signal(lambda: model, set_model)
    increment = signal(lambda m, amount: m + amount, 1)
    increment()                 # set_model(1)

`signal.map(key)` returns a signal scoped to one key of the parent model.
Actions dispatched through it receive `parent[key]` and their result is
written back into a copy of the parent, so sibling keys are never touched:

    signal.map('counter')(lambda c: c + 1)()
    # {'counter': 0, 'name': 'x'} -> {'counter': 1, 'name': 'x'}

Mapped signals compose (`signal.map('a').map('b')`) and support `.task()`
like the root signal.
"""

import logging
from typing import Any, Callable, Hashable, Optional, Tuple

from .lens import check_key, get_key, set_key
from .tasks import Task, task

logger = logging.getLogger(__name__)

Action = Callable[..., Any]


def _action_name(action: Action) -> str:
    return getattr(action, '__qualname__', None) or getattr(action, '__name__', None) or repr(action)


class Dispatcher:
    """
    An action bound to a signal (and optionally to leading arguments).

    Calling the dispatcher applies the action. Call-time positional arguments
    are appended after the bound ones; call-time keyword arguments override
    bound keyword arguments.
    """

    __slots__ = ('signal', 'action', 'args', 'kwargs')

    def __init__(self, signal: 'Signal', action: Action, args: tuple = (), kwargs: Optional[dict] = None):
        self.signal = signal
        self.action = action
        self.args = args
        self.kwargs = kwargs or {}

    def __call__(self, *call_args, **call_kwargs) -> None:
        self.signal.dispatch(self.action, *self.args, *call_args, **{**self.kwargs, **call_kwargs})

    def __repr__(self) -> str:
        return f"Dispatcher({_action_name(self.action)} on {self.signal.path_str})"


class Signal:
    """
    Root signal over a model getter/setter pair.

    The signal itself never renders; the setter is responsible for whatever
    should happen after the model changes.
    """

    def __init__(self, getter: Callable[[], Any], setter: Callable[[Any], None]):
        self._getter = getter
        self._setter = setter

    def __call__(self, action: Action, *args, **kwargs) -> Dispatcher:
        """Bind `action` (and leading arguments) into a dispatcher."""
        return Dispatcher(self, action, args, kwargs)

    @property
    def path(self) -> Tuple[Hashable, ...]:
        """Keys from the root model to the model this signal is scoped to."""
        return ()

    @property
    def path_str(self) -> str:
        return '.'.join(str(k) for k in self.path) or '<root>'

    def dispatch(self, action: Action, *args, **kwargs) -> None:
        """Apply `action` to the current model right away."""
        logger.debug(f"dispatch {_action_name(action)} on {self.path_str}")
        self._setter(action(self._getter(), *args, **kwargs))

    def map(self, key: Hashable) -> 'MappedSignal':
        """Return a signal scoped to `key` of this signal's model."""
        return map_signal(self, key)

    def task(self, command, succeed_action: Action, fail_action: Action, callback=None, *, loop=None) -> Task:
        """Wrap an asynchronous command; see `starflow.core.tasks.task`."""
        return task(self, command, succeed_action, fail_action, callback, loop=loop)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.path_str})"


class MappedSignal(Signal):
    """
    Signal scoped to one key of its parent's model.

    Dispatching goes through the parent with a wrapping action that reads the
    sub-model, applies the child action and patches the result into a copy of
    the parent model. Every level of a chain does its own one-level patch, so
    the root ends up rebuilt along the mapped path only.
    """

    def __init__(self, parent: Signal, key: Hashable):
        self.parent = parent
        self.key = key

    @property
    def path(self) -> Tuple[Hashable, ...]:
        return self.parent.path + (self.key,)

    def dispatch(self, action: Action, *args, **kwargs) -> None:
        key = self.key

        def patch(model):
            check_key(model, key)
            return set_key(model, key, action(get_key(model, key), *args, **kwargs))

        patch.__qualname__ = f"{_action_name(action)}@{key}"
        self.parent.dispatch(patch)


def create_signal(getter: Callable[[], Any], setter: Callable[[Any], None]) -> Signal:
    """Create a root signal over a model getter/setter pair."""
    return Signal(getter, setter)


def map_signal(signal: Signal, key: Hashable) -> MappedSignal:
    """Create a signal scoped to `key` of `signal`'s model."""
    return MappedSignal(signal, key)
