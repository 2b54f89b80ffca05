#!/usr/bin/env python3
"""
Ticker - StarFlow without a web server

A timer channel dispatches a tick every 10ms while frames are drawn at most
every 100ms, so each printed frame coalesces several ticks. A thread-pool
command shows the task bridge settling a `concurrent.futures.Future` back on
the event loop.
"""

import asyncio
import time
from concurrent.futures import ThreadPoolExecutor

from starflow import AsyncioFrameScheduler, Model, Root, h, mount


class Clock(Model):
    ticks: int = 0
    status: str = "idle"


def tick(model):
    return model.set(ticks=model.ticks + 1)


def set_status(model, status):
    return model.set(status=status)


def view(model, signal):
    return h('pre', {'id': 'clock'}, f"ticks={model.ticks} status={model.status}")


def ticker(interval):
    def channel(signal):
        async def run():
            while True:
                await asyncio.sleep(interval)
                signal(tick)()

        asyncio.get_running_loop().create_task(run())
    return channel


def slow_status():
    time.sleep(0.3)
    return "computed in a worker thread"


async def main():
    loop = asyncio.get_running_loop()
    executor = ThreadPoolExecutor(max_workers=1)

    root = Root('clock')
    root.on_render(lambda r: print(r.html))

    program = mount(
        root,
        Clock(),
        view,
        [ticker(0.01)],
        scheduler=AsyncioFrameScheduler(loop, frame_interval=0.1),
    )

    status = program.signal.task(
        lambda complete: executor.submit(slow_status),
        set_status,
        lambda model, err: set_status(model, f"failed: {err}"),
        loop=loop,
    )
    status()

    await asyncio.sleep(1)
    print(f"{root.draws} draws for {program.model.ticks} ticks")
    executor.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
