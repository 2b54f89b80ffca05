"""
StarFlow - Unidirectional Data Flow for fastcore/FastHTML element trees

A minimal binding layer between an immutable application model and a
virtual-DOM style view:

```python
from starflow import Root, h, mount

def increment(model, amount=1):
    return {**model, 'count': model['count'] + amount}

def view(model, signal):
    return h('div', {'id': 'counter'},
             h('span', str(model['count'])),
             h('button', {'id': 'inc', 'onclick': signal(increment)}, '+'))

program = mount(Root(), {'count': 0}, view, channels=[])
```

Actions are pure functions, signals bind them to (parts of) the model, tasks
bridge asynchronous commands back into actions, and renders are coalesced to
one draw per frame.
"""

from .core import (
    StarflowError, InvalidCommandResult, TaskCancelled, ElementNotFound, ConfigurationError,
    MissingEventLoop, InvalidKey,
    Model, Signal, MappedSignal, Dispatcher, Task,
    create_signal, map_signal, task, check_key, get_key, set_key,
)
from .app import (
    ApplicationConfig, Environment, LoggingConfig, RenderConfig,
    configure_logging, get_config, set_config,
    Program, mount, Renderer, create_render,
    AsyncioFrameScheduler, ManualFrameScheduler,
)
from .ui import h, handlers, Root, render_into

__version__ = "0.1.0"

__all__ = [
    # Core dispatch
    'Signal',
    'MappedSignal',
    'Dispatcher',
    'Task',
    'create_signal',
    'map_signal',
    'task',
    'check_key',
    'get_key',
    'set_key',
    'Model',

    # Errors
    'StarflowError',
    'InvalidCommandResult',
    'TaskCancelled',
    'ElementNotFound',
    'ConfigurationError',
    'MissingEventLoop',
    'InvalidKey',

    # Application
    'mount',
    'Program',
    'Renderer',
    'create_render',
    'AsyncioFrameScheduler',
    'ManualFrameScheduler',
    'ApplicationConfig',
    'Environment',
    'LoggingConfig',
    'RenderConfig',
    'configure_logging',
    'get_config',
    'set_config',

    # UI
    'h',
    'handlers',
    'Root',
    'render_into',
]
