# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Event Binding Model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from chaingen.models.model_binding_field import ModelBindingField
from chaingen.models.model_event_filter import ModelEventFilter


class ModelEventBinding(BaseModel):
    """Generated representation of one ABI event.

    Overloaded events share ``name`` and differ in ``class_name`` and
    ``snake_name``, which carry a numeric suffix from the second overload on.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    name: str
    class_name: str
    snake_name: str
    anonymous: bool = Field(default=False)
    fields: tuple[ModelBindingField, ...] = Field(default=())
    filter: ModelEventFilter


__all__ = ["ModelEventBinding"]
