# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""chaingen - Code generation pipeline for blockchain data processors.

This package turns an entity schema and per-contract ABI definitions into
typed Python source for processor projects:

- Contract bindings: pydantic event/call models, log decoders, topic filters
- Handler stubs: one registration-ready module per contract event
- Entity models: persistence types derived from the GraphQL entity schema

Key Components:
    - GenerationOrchestrator: drives a full or single-contract generation run
    - AbiResolver: cached, registry-backed ABI resolution
    - ConflictResolver: manifest-gated writes that protect hand-edited files
"""

__version__ = "0.3.0"

__all__: list[str] = ["__version__"]
