"""
Counter App - Minimal StarFlow web application

Demonstrates:
- Pure actions on a dict model, scoped with `signal.map`
- Element handlers delivered through the events route
- An HTTP route channel and an asynchronous task
- Frame-coalesced rendering on the asyncio scheduler

Run `python main.py` from this directory and open http://localhost:8000.
"""

import asyncio
import random

from fasthtml.common import Div, FastHTML, Titled, serve

from starflow import Root, configure_logging, h, mount
from starflow.adapters.fasthtml import include_events, include_root, route_channel

app = FastHTML()
rt = app.route


# Actions

def add(count, amount=1):
    return count + int(amount)


def reset(model):
    return {**model, 'count': 0, 'error': None}


def loaded(model, amount):
    return {**model, 'count': model['count'] + amount, 'loading': False}


def load_failed(model, err):
    return {**model, 'error': str(err), 'loading': False}


def start_loading(model):
    return {**model, 'loading': True, 'error': None}


# Commands

async def fetch_amount():
    await asyncio.sleep(0.5)
    if random.random() < 0.2:
        raise ConnectionError("remote counter unavailable")
    return random.randint(1, 10)


# View

def post(element_id, event='click'):
    return {'hx_post': f'/events/{element_id}/{event}', 'hx_swap': 'none'}


def view(model, signal):
    count = signal.map('count')
    load = signal.task(lambda complete: fetch_amount(), loaded, load_failed)

    def load_remote():
        signal(start_loading)()
        load()

    return h('div', {'id': 'counter'},
             h('h2', {'id': 'count'}, str(model['count'])),
             h('button', {'id': 'dec', 'onclick': count(add, -1), **post('dec')}, '-'),
             h('button', {'id': 'inc', 'onclick': count(add, 1), **post('inc')}, '+'),
             h('button', {'id': 'load', 'onclick': load_remote, **post('load')},
               'Loading...' if model['loading'] else 'Load remote amount'),
             h('p', {'id': 'error', 'style': 'color: red'}, model['error']) if model['error'] else None)


root = Root('app')
program = mount(
    root,
    {'count': 0, 'loading': False, 'error': None},
    view,
    [route_channel(rt, '/reset', reset)],
)
include_root(rt, root, '/app')
include_events(rt, root)


@rt("/")
def home():
    return Titled(
        "StarFlow Counter",
        Div(hx_get="/app", hx_trigger="load, every 300ms"),
    )


if __name__ == "__main__":
    configure_logging()
    serve()
