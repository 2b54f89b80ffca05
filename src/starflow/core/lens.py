"""
Model Lens

Key-based read and copy-on-write write for application models.

Mapped signals scope an action to one key of the parent model. Reading goes
through `get_key`, writing through `set_key`, which never mutates the parent:
it returns a new parent equal to the old one except for `key`. Only one level
is copied; nested values are shared with the old parent.

Supported model shapes:
- Mappings (dict and dict-like)
- Pydantic models (including frozen ones)
- Dataclass instances (including frozen ones)
- Lists and tuples, addressed by integer index
- Any other object with attributes
"""

import copy
import dataclasses
from collections.abc import Mapping
from typing import Any, Hashable

from pydantic import BaseModel

from .errors import InvalidKey


def get_key(model: Any, key: Hashable) -> Any:
    """Return `model[key]`, or None when the key is absent."""
    if model is None:
        return None
    if isinstance(model, Mapping):
        return model.get(key)
    if isinstance(model, (list, tuple)):
        if isinstance(key, int) and -len(model) <= key < len(model):
            return model[key]
        return None
    if isinstance(key, str):
        return getattr(model, key, None)
    return None


def check_key(model: Any, key: Hashable) -> None:
    """
    Raise InvalidKey if `set_key(model, key, ...)` cannot succeed.

    Dataclass models cannot gain keys that are not fields, and sequences only
    take integer indices.
    """
    if dataclasses.is_dataclass(model) and not isinstance(model, type):
        if key not in {f.name for f in dataclasses.fields(model) if f.init}:
            raise InvalidKey(f"{type(model).__name__} has no field {key!r}; dataclass models cannot gain new keys")
    elif isinstance(model, (list, tuple)) and not isinstance(key, int):
        raise InvalidKey(f"{type(model).__name__} indices must be integers, not {type(key).__name__}")


def set_key(model: Any, key: Hashable, value: Any) -> Any:
    """Return a shallow copy of `model` with `key` replaced by `value`."""
    check_key(model, key)
    if isinstance(model, BaseModel):
        return model.model_copy(update={key: value})

    if dataclasses.is_dataclass(model) and not isinstance(model, type):
        return dataclasses.replace(model, **{key: value})

    if isinstance(model, Mapping):
        return _set_mapping_key(model, key, value)

    if isinstance(model, (list, tuple)):
        return _set_sequence_index(model, key, value)

    if model is None:
        # Absent sub-model: start a fresh mapping rather than failing deeper chains
        return {key: value}

    new_model = copy.copy(model)
    setattr(new_model, key, value)
    return new_model


def _set_mapping_key(model: Mapping, key: Hashable, value: Any) -> Mapping:
    updated = {**model, key: value}
    if type(model) is dict:
        return updated
    try:
        return type(model)(updated)
    except TypeError:
        # Mappings that cannot be rebuilt from a dict (e.g. defaultdict) become plain dicts
        return updated


def _set_sequence_index(model, key, value):
    items = list(model)
    items[key] = value
    return tuple(items) if isinstance(model, tuple) else items
