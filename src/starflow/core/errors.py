"""
StarFlow Errors

Exception types raised by the dispatch core, the render targets and the
configuration layer. Everything else (errors raised by application actions,
views or channels) propagates untouched.
"""


class StarflowError(Exception):
    """Base class for all StarFlow errors."""


class InvalidCommandResult(StarflowError, TypeError):
    """A task command returned something that is neither None, a future nor an awaitable."""

    def __init__(self, command, result):
        self.command = command
        self.result = result
        name = getattr(command, '__name__', repr(command))
        super().__init__(
            f"Command {name} returned {type(result).__name__!s} {result!r}; "
            "commands must return None, a future or an awaitable"
        )


class TaskCancelled(StarflowError):
    """Passed as `err` to the fail action when a command's future is cancelled."""


class ElementNotFound(StarflowError, LookupError):
    """No element (or no handler on it) matched an event delivered to a render target."""


class ConfigurationError(StarflowError, ValueError):
    """Invalid configuration value."""


class MissingEventLoop(StarflowError, RuntimeError):
    """An awaitable command was started with no running event loop and no `loop=`."""


class InvalidKey(StarflowError, TypeError):
    """A mapped key cannot be written on the model it addresses."""
