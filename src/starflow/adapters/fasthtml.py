"""
FastHTML Web Adapter

Serves a mounted root over HTTP and turns HTTP requests into dispatches:

```python
from fasthtml.common import FastHTML
from starflow import Root, mount
from starflow.adapters.fasthtml import include_root, include_events, route_channel

app = FastHTML()
root = Root()
mount(root, {'count': 0}, view, [route_channel(app.route, '/reset', reset)])
include_root(app.route, root)
include_events(app.route, root)
```

Every function takes the FastHTML router (`app.route`, or the `rt` returned
by `fast_app()`), the same way entity routes are registered.
"""

import logging
from functools import partial
from typing import Any, Callable, Dict, Hashable, Optional

from fasthtml.common import HTMLResponse, HTTPException, Request, Response

from ..core.errors import ElementNotFound, StarflowError
from ..core.signals import Signal
from ..ui.root import Root

logger = logging.getLogger(__name__)


def _params(request: Request) -> Dict[str, Any]:
    return dict(request.query_params)


def _call_with_params(dispatch: Callable, params: Dict[str, Any]) -> None:
    """Call `dispatch(**params)`, turning a rejected argument set into a 400."""
    try:
        dispatch(**params)
    except StarflowError:
        raise
    except TypeError as e:
        logger.info(f"rejected parameters {sorted(params)}: {e}")
        raise HTTPException(400, f"invalid parameters: {e}") from None


def include_root(router, root: Root, path: str = "/") -> None:
    """Register a GET route at `path` serving the root's latest HTML."""
    async def root_page(request: Request):
        return HTMLResponse(f'<div id="{root.id}">{root.html}</div>')

    router(path, methods=["GET"])(root_page)


def include_events(router, root: Root, path: str = "/events/{element_id}/{event}") -> None:
    """
    Register a POST route delivering DOM events to the root's element handlers.

    Query parameters are passed to the handler as keyword arguments. Responds
    204, 404 when the element or its handler does not exist, or 400 when the
    handler rejects the parameters with a TypeError.
    """
    async def deliver_event(request: Request, element_id: str, event: str):
        try:
            _call_with_params(partial(root.dispatch_event, element_id, event), _params(request))
        except ElementNotFound as e:
            logger.info(f"rejected event {event!r} for {element_id!r}: {e}")
            raise HTTPException(404, str(e)) from None
        return Response(status_code=204)

    router(path, methods=["POST"])(deliver_event)


def route_channel(
    router,
    path: str,
    action: Callable,
    *,
    key: Optional[Hashable] = None,
    method: str = "post",
) -> Callable[[Signal], None]:
    """
    Channel that dispatches `action` whenever `path` is requested.

    The route is registered when the channel is started by `mount`. Query
    parameters become keyword arguments of the action (400 when it rejects
    them with a TypeError); with `key` the action runs on `signal.map(key)`
    instead of the root signal.
    """
    def channel(signal: Signal) -> None:
        scoped = signal.map(key) if key is not None else signal
        dispatch = scoped(action)

        async def dispatch_route(request: Request):
            _call_with_params(dispatch, _params(request))
            return Response(status_code=204)

        router(path, methods=[method.upper()])(dispatch_route)
        logger.debug(f"route channel {method.upper()} {path} -> {getattr(action, '__name__', action)}")

    return channel
