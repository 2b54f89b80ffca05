"""
StarFlow Core Module

Dispatch core - framework-agnostic signals, mapped signals, tasks and the
model lens. No rendering and no scheduling happens here.
"""

from .errors import (
    StarflowError, InvalidCommandResult, TaskCancelled, ElementNotFound, ConfigurationError,
    MissingEventLoop, InvalidKey,
)
from .lens import check_key, get_key, set_key
from .model import Model
from .signals import Signal, MappedSignal, Dispatcher, create_signal, map_signal
from .tasks import Task, task

__all__ = [
    "StarflowError",
    "InvalidCommandResult",
    "TaskCancelled",
    "ElementNotFound",
    "ConfigurationError",
    "MissingEventLoop",
    "InvalidKey",
    "check_key",
    "get_key",
    "set_key",
    "Model",
    "Signal",
    "MappedSignal",
    "Dispatcher",
    "create_signal",
    "map_signal",
    "Task",
    "task",
]
