"""
Model base class

Optional base for application models. Instances are frozen pydantic models:
actions never mutate them, they return updated copies (`model.set(...)` or
`model_copy(update=...)`), which is also what mapped signals do through the
lens.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Immutable application model."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def set(self, **changes: Any) -> 'Model':
        """Return a copy with `changes` applied."""
        return self.model_copy(update=changes)

    def __getitem__(self, key: str) -> Any:
        # Allows views to treat models and dicts alike: model['count']
        try:
            return getattr(self, key)
        except AttributeError:
            raise KeyError(key) from None
