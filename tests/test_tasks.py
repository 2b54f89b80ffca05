"""
Task bridge tests

Callback-style and future-style commands both end in exactly one succeed or
fail dispatch, followed by the observer callback.
"""

import asyncio
import concurrent.futures

import pytest

from starflow import InvalidCommandResult, MissingEventLoop, Task, TaskCancelled, task


def succeed(model, result):
    return ('ok', model, result)


def fail(model, err):
    return ('failed', model, err)


def callback_command(err, result):
    def command(complete):
        complete(err, result)
    return command


def test_callback_success(cell, signal):
    cell.model = 'M'
    dispatcher = task(signal, callback_command(None, 5), succeed, fail)

    assert isinstance(dispatcher, Task)
    dispatcher()
    assert cell.model == ('ok', 'M', 5)
    assert cell.writes == 1


def test_callback_failure(cell, signal):
    cell.model = 'M'
    err = ValueError('nope')
    task(signal, callback_command(err, None), succeed, fail)()
    assert cell.model == ('failed', 'M', err)


def test_falsy_err_counts_as_success(cell, signal):
    cell.model = 'M'
    task(signal, callback_command(0, 'value'), succeed, fail)()
    assert cell.model == ('ok', 'M', 'value')


def test_command_not_completing_never_dispatches(cell, signal):
    cell.model = 'M'
    task(signal, lambda complete: None, succeed, fail)()
    assert cell.writes == 0


def test_observer_runs_after_dispatch(cell, signal):
    cell.model = 'M'
    seen = []

    def observer(err, result):
        seen.append((err, result, cell.model))

    task(signal, callback_command(None, 5), succeed, fail, observer)()
    assert seen == [(None, 5, ('ok', 'M', 5))]


def test_observer_notified_on_failure(cell, signal):
    cell.model = 'M'
    seen = []
    err = RuntimeError('x')
    task(signal, callback_command(err, None), succeed, fail, lambda e, r: seen.append((e, r)))()
    assert seen == [(err, None)]


def test_action_error_propagates_to_caller(cell, signal):
    cell.model = 'M'

    def broken(model, result):
        raise KeyError('broken')

    seen = []
    with pytest.raises(KeyError):
        task(signal, callback_command(None, 1), broken, fail, lambda e, r: seen.append(e))()

    assert cell.writes == 0
    assert seen == []


def test_invalid_command_result(cell, signal):
    cell.model = 'M'

    def answer(complete):
        return 42

    with pytest.raises(InvalidCommandResult) as exc_info:
        task(signal, answer, succeed, fail)()

    assert exc_info.value.result == 42
    assert isinstance(exc_info.value, TypeError)
    assert cell.writes == 0


def test_call_args_are_forwarded_to_command(cell, signal):
    cell.model = 0

    def fetch(complete, amount, scale=1):
        complete(None, amount * scale)

    load = task(signal, fetch, lambda m, r: m + r, fail)
    load(3, scale=2)
    assert cell.model == 6


def test_task_on_mapped_signal(cell, signal):
    other = {'untouched': True}
    cell.model = {'count': 1, 'other': other}

    signal.map('count').task(callback_command(None, 4), lambda m, r: m + r, fail)()

    assert cell.model == {'count': 5, 'other': other}
    assert cell.model['other'] is other


def test_signal_task_method(cell, signal):
    cell.model = 'M'
    signal.task(callback_command(None, 1), succeed, fail)()
    assert cell.model == ('ok', 'M', 1)


def test_concurrent_future_resolved(cell, signal):
    cell.model = 'M'
    future = concurrent.futures.Future()

    dispatcher = task(signal, lambda complete: future, succeed, fail)
    dispatcher()
    assert cell.writes == 0

    future.set_result(7)
    assert cell.model == ('ok', 'M', 7)


def test_concurrent_future_rejected(cell, signal):
    cell.model = 'M'
    future = concurrent.futures.Future()
    err = ValueError('x')

    task(signal, lambda complete: future, succeed, fail)()
    future.set_exception(err)
    assert cell.model == ('failed', 'M', err)


def test_already_resolved_future_dispatches_immediately(cell, signal):
    cell.model = 'M'
    future = concurrent.futures.Future()
    future.set_result(1)

    task(signal, lambda complete: future, succeed, fail)()
    assert cell.model == ('ok', 'M', 1)


def test_cancelled_future_fails_with_task_cancelled(cell, signal):
    cell.model = 'M'
    future = concurrent.futures.Future()

    task(signal, lambda complete: future, succeed, fail)()
    future.cancel()

    status, model, err = cell.model
    assert status == 'failed'
    assert isinstance(err, TaskCancelled)


@pytest.mark.asyncio
async def test_asyncio_future_resolved(cell, signal):
    cell.model = 'M'
    loop = asyncio.get_running_loop()
    future = loop.create_future()
    done = asyncio.Event()

    task(signal, lambda complete: future, succeed, fail, lambda e, r: done.set())()
    future.set_result(7)
    await asyncio.wait_for(done.wait(), timeout=1)

    assert cell.model == ('ok', 'M', 7)


@pytest.mark.asyncio
async def test_coroutine_command_success(cell, signal):
    cell.model = 'M'
    done = asyncio.Event()

    async def fetch():
        await asyncio.sleep(0)
        return 7

    task(signal, lambda complete: fetch(), succeed, fail, lambda e, r: done.set())()
    await asyncio.wait_for(done.wait(), timeout=1)

    assert cell.model == ('ok', 'M', 7)


@pytest.mark.asyncio
async def test_coroutine_command_failure(cell, signal):
    cell.model = 'M'
    done = asyncio.Event()
    err = LookupError('x')

    async def fetch():
        raise err

    task(signal, lambda complete: fetch(), succeed, fail, lambda e, r: done.set())()
    await asyncio.wait_for(done.wait(), timeout=1)

    assert cell.model == ('failed', 'M', err)


def test_coroutine_command_without_running_loop(cell, signal):
    cell.model = 'M'
    started = []
    returned = []

    async def fetch():
        started.append(True)
        return 7

    def command(complete):
        returned.append(fetch())
        return returned[0]

    with pytest.raises(MissingEventLoop, match='no event loop is running'):
        task(signal, command, succeed, fail)()

    assert isinstance(MissingEventLoop('x'), RuntimeError)
    assert returned[0].cr_frame is None
    assert started == []
    assert cell.model == 'M'
    assert cell.writes == 0


@pytest.mark.asyncio
async def test_thread_future_settles_on_loop(cell, signal):
    cell.model = 'M'
    loop = asyncio.get_running_loop()
    done = asyncio.Event()

    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
        dispatcher = task(
            signal,
            lambda complete: pool.submit(lambda: 9),
            succeed,
            fail,
            lambda e, r: done.set(),
            loop=loop,
        )
        dispatcher()
        await asyncio.wait_for(done.wait(), timeout=2)

    assert cell.model == ('ok', 'M', 9)


@pytest.mark.asyncio
async def test_stale_completion_still_applies(cell, signal):
    cell.model = 0
    loop = asyncio.get_running_loop()
    future = loop.create_future()
    done = asyncio.Event()

    task(signal, lambda complete: future, lambda m, r: r, fail, lambda e, r: done.set())()
    signal(lambda m: 100)()
    future.set_result(1)
    await asyncio.wait_for(done.wait(), timeout=1)

    assert cell.model == 1
