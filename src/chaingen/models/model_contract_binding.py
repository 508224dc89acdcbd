# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Contract Binding Model.

Structured form of a contract binding, built before any source text is
rendered. The binding module is a projection of this model.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from chaingen.models.model_event_binding import ModelEventBinding
from chaingen.models.model_event_filter import ModelEventFilter
from chaingen.models.model_function_binding import ModelFunctionBinding
from chaingen.models.model_type_descriptor import ModelTypeDescriptor


class ModelContractBinding(BaseModel):
    """Typed binding for one contract.

    Attributes:
        contract_name: Contract name from the project configuration.
        module_name: snake_case module name of the generated binding.
        address: Canonical contract address.
        network: Network identifier.
        events: Event bindings in ABI declaration order.
        functions: Function bindings in ABI declaration order.
        structs: Synthesized tuple structs, dependencies before dependents.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    contract_name: str
    module_name: str
    address: str
    network: str
    events: tuple[ModelEventBinding, ...] = Field(default=())
    functions: tuple[ModelFunctionBinding, ...] = Field(default=())
    structs: tuple[ModelTypeDescriptor, ...] = Field(default=())

    @property
    def filters(self) -> tuple[ModelEventFilter, ...]:
        """Event filter descriptors, one per event."""
        return tuple(event.filter for event in self.events)


__all__ = ["ModelContractBinding"]
