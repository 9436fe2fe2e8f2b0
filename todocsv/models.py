from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Task(BaseModel):
    """A single todo item as persisted in the backing file.

    - ``id`` is assigned once by the store and is frozen afterwards
    - the remaining fields are edited in place by ``TaskStore.edit``
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(frozen=True, min_length=1)
    title: str
    description: str
    is_done: bool = False


__all__ = ["Task"]
