"""
Task Bridge

Executes an asynchronous command and signals either a succeed or a fail
action when it completes.

A command is called with a completion callback `complete(err, result)` and
may either call it itself (callback style) or return a future / awaitable
whose outcome is forwarded to it:

    def fetch_amount(complete):
        loop.call_later(1, complete, None, 5)

    def add(model, amount):
        return model + amount

    def failed(model, err):
        return model

    load = signal.task(fetch_amount, add, failed)
    load()                      # one second later: model == model + 5

    async def fetch_remote():
        return await client.get_amount()

    signal.task(lambda complete: fetch_remote(), add, failed)()

There is no cancellation and no staleness check: a completion that arrives
after the model has moved on is applied all the same.
"""

import asyncio
import concurrent.futures
import inspect
import logging
from typing import Any, Callable, Optional

from .errors import InvalidCommandResult, MissingEventLoop, TaskCancelled

logger = logging.getLogger(__name__)

Command = Callable[..., Any]
Observer = Callable[[Any, Any], None]


def _is_future(obj: Any) -> bool:
    return callable(getattr(obj, 'add_done_callback', None))


class Task:
    """
    Dispatcher for an asynchronous command.

    The succeed and fail actions are bound to the signal up front. Calling the
    task runs the command; its completion dispatches exactly one of them and
    then notifies the optional observer callback.
    """

    def __init__(
        self,
        signal,
        command: Command,
        succeed_action: Callable,
        fail_action: Callable,
        callback: Optional[Observer] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self.signal = signal
        self.command = command
        self.succeed = signal(succeed_action)
        self.fail = signal(fail_action)
        self.callback = callback
        self.loop = loop

    def complete(self, err: Any = None, result: Any = None) -> None:
        """Completion callback handed to the command."""
        if err:
            logger.info(f"task {self._name} on {self.signal.path_str} failed: {err!r}")
            self.fail(err)
        else:
            logger.debug(f"task {self._name} on {self.signal.path_str} succeeded")
            self.succeed(result)

        if self.callback is not None:
            self.callback(err, result)

    def __call__(self, *args, **kwargs) -> None:
        result = self.command(self.complete, *args, **kwargs)
        if result is None:
            return

        if isinstance(result, concurrent.futures.Future) and self.loop is not None:
            # Settle on the loop thread instead of the executor's worker thread
            result = asyncio.wrap_future(result, loop=self.loop)
        elif not _is_future(result):
            if not inspect.isawaitable(result):
                raise InvalidCommandResult(self.command, result)
            result = asyncio.ensure_future(result, loop=self._awaitable_loop(result))

        result.add_done_callback(self._settle)

    def _awaitable_loop(self, awaitable) -> asyncio.AbstractEventLoop:
        if self.loop is not None:
            return self.loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            close = getattr(awaitable, 'close', None)
            if callable(close):
                close()
            raise MissingEventLoop(
                f"command {self._name} returned an awaitable but no event loop is running; "
                "call the task from inside a running loop or pass loop="
            ) from None

    def _settle(self, future) -> None:
        if future.cancelled():
            self.complete(TaskCancelled(f"command {self._name} was cancelled"))
            return

        err = future.exception()
        if err is not None:
            self.complete(err)
        else:
            self.complete(None, future.result())

    @property
    def _name(self) -> str:
        return getattr(self.command, '__name__', repr(self.command))

    def __repr__(self) -> str:
        return f"Task({self._name} on {self.signal.path_str})"


def task(
    signal,
    command: Command,
    succeed_action: Callable,
    fail_action: Callable,
    callback: Optional[Observer] = None,
    *,
    loop: Optional[asyncio.AbstractEventLoop] = None,
) -> Task:
    """
    Wrap `command` into a dispatcher that signals `succeed_action` or `fail_action`.

    Args:
        signal: Signal (root or mapped) the actions are dispatched on
        command: `command(complete, *args, **kwargs)`; returns None, a future or an awaitable
        succeed_action: Action applied with the command's result
        fail_action: Action applied with the command's error
        callback: Optional observer called with `(err, result)` after the dispatch
        loop: Event loop used to schedule awaitables and settle thread futures;
            awaitables default to the loop running when the task is called

    Raises (when the returned task is called):
        InvalidCommandResult: the command returned any other value
        MissingEventLoop: the command returned an awaitable outside a running loop and no `loop` was given
    """
    return Task(signal, command, succeed_action, fail_action, callback, loop)
