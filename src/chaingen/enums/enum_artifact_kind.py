# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Generated Artifact Kind Enumeration."""

from enum import Enum


class EnumArtifactKind(str, Enum):
    """Source kind of a generated artifact.

    Attributes:
        BINDING: Contract binding module (event/call models, decoders, filters)
        HANDLER: Event handler stub, owned by the developer once written
        ENTITY: Entity persistence model derived from the schema
    """

    BINDING = "binding"
    HANDLER = "handler"
    ENTITY = "entity"


__all__ = ["EnumArtifactKind"]
