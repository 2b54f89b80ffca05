"""
Element factory

`h()` builds fastcore `FT` nodes, the element tree every StarFlow view
returns. Attributes named `on<event>` whose value is callable (usually a
dispatcher) are kept as event handlers: they are stored on the node under a
trailing-underscore key (`onclick_`), which fastcore leaves out of the
rendered HTML, and render targets look them up when an event is delivered.

    def view(model, signal):
        return h('div', {'id': 'counter'},
                 h('span', {'id': 'count'}, str(model['count'])),
                 h('button', {'id': 'inc', 'onclick': signal(increment)}, '+'))
"""

from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterator, Optional

from fastcore.xml import FT, ft, voids


def _is_handler(name: str, value: Any) -> bool:
    return name.lower().startswith('on') and callable(value)


def _flatten(children) -> tuple:
    flat = []
    for child in children:
        if isinstance(child, (list, tuple)):
            flat.extend(_flatten(child))
        elif child is not None:
            flat.append(child)
    return tuple(flat)


def h(tag: str, attrs: Optional[Mapping] = None, *children) -> FT:
    """
    Create an element with `tag`, `attrs` and `children`.

    `attrs` may be omitted: a non-mapping second argument is taken as the
    first child. Nested lists/tuples of children are flattened and None
    children are dropped.
    """
    if attrs is not None and not isinstance(attrs, Mapping):
        children = (attrs,) + children
        attrs = None

    attrs = dict(attrs or {})
    events = {name.lower(): value for name, value in attrs.items() if _is_handler(name, value)}
    plain = {name: value for name, value in attrs.items() if not _is_handler(name, value)}

    node = ft(tag, *_flatten(children), void_=tag.lower() in voids, **plain)
    for name, handler in events.items():
        node.attrs[f"{name}_"] = handler
    return node


def handlers(node: FT) -> Dict[str, Callable]:
    """Event handlers attached to `node` by `h()`, keyed by `on<event>`."""
    return {
        name[:-1]: value
        for name, value in node.attrs.items()
        if name.endswith('_') and name.startswith('on') and callable(value)
    }


def walk(tree) -> Iterator[FT]:
    """Yield every `FT` node of `tree`, depth first."""
    if isinstance(tree, FT):
        yield tree
        for child in tree.children:
            yield from walk(child)
    elif isinstance(tree, (list, tuple)):
        for item in tree:
            yield from walk(item)


def find(tree, element_id: str) -> Optional[FT]:
    """Return the first node of `tree` whose `id` attribute is `element_id`."""
    for node in walk(tree):
        if node.attrs.get('id') == element_id:
            return node
    return None
