# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Project Configuration Model.

Loads and saves ``chaingen.yaml``, the per-project file listing tracked
contracts and code generation settings.

File Format:
    .. code-block:: yaml

        name: my-processor
        version: 0.1.0
        target_network: "1"
        contracts:
          - address: "0x6b175474e89094c44da98b954eedeac495271d0f"
            name: Dai
            network: "1"
            added_at: "2026-01-05T10:00:00Z"
        codegen:
          schema_path: schema.graphql
          output_dir: src/generated

Environment Overrides:
    CHAINGEN_TARGET_NETWORK: Replaces ``target_network``
    CHAINGEN_REGISTRY_URL: Replaces ``codegen.registry_url``
    CHAINGEN_ABI_CACHE_DIR: Replaces ``codegen.abi_cache_dir``
    CHAINGEN_MAX_CONCURRENT_FETCHES: Replaces ``codegen.max_concurrent_fetches``

Overrides are applied on load only; ``save`` writes whatever the model
holds, so commands that modify the file load it with ``apply_env=False``.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Final

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from chaingen.errors import (
    GenerationIoError,
    ModelCodegenErrorContext,
    ProjectConfigurationError,
)
from chaingen.models.model_codegen_settings import ModelCodegenSettings
from chaingen.models.model_contract_config import ModelContractConfig
from chaingen.utils.util_address import normalize_address
from chaingen.utils.util_atomic_write import write_text_atomic

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME: Final[str] = "chaingen.yaml"

_ENV_TARGET_NETWORK: Final[str] = "CHAINGEN_TARGET_NETWORK"
_ENV_REGISTRY_URL: Final[str] = "CHAINGEN_REGISTRY_URL"
_ENV_ABI_CACHE_DIR: Final[str] = "CHAINGEN_ABI_CACHE_DIR"
_ENV_MAX_CONCURRENT_FETCHES: Final[str] = "CHAINGEN_MAX_CONCURRENT_FETCHES"


class ModelProjectConfig(BaseModel):
    """Project configuration: identity, tracked contracts and codegen settings.

    The contract list is ordered; generation processes contracts in this
    order, and the first contract claiming an output path wins.

    Attributes:
        name: Project name.
        version: Project version string.
        target_network: Default network for new contracts.
        contracts: Tracked contracts in configured order.
        codegen: Code generation settings.
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
    )

    name: str = Field(..., min_length=1)
    version: str = Field(default="0.1.0")
    target_network: str = Field(default="1", min_length=1)
    contracts: list[ModelContractConfig] = Field(default_factory=list)
    codegen: ModelCodegenSettings = Field(default_factory=ModelCodegenSettings)

    # ------------------------------------------------------------------
    # Loading and saving
    # ------------------------------------------------------------------

    @classmethod
    def load(
        cls,
        path: Path,
        *,
        apply_env: bool = True,
        environ: Mapping[str, str] | None = None,
    ) -> ModelProjectConfig:
        """Load a project configuration from a YAML file.

        Args:
            path: Path to ``chaingen.yaml``.
            apply_env: Whether to apply ``CHAINGEN_*`` environment overrides.
            environ: Environment mapping (defaults to ``os.environ``).

        Returns:
            Validated project configuration.

        Raises:
            ProjectConfigurationError: If the file is missing, is not valid
                YAML, or fails validation.
        """
        context = ModelCodegenErrorContext(
            operation="load_project_config",
            target_name=str(path),
        )
        if not path.exists():
            raise ProjectConfigurationError(
                f"Project configuration not found: {path}",
                context=context,
            )

        try:
            with path.open("r", encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ProjectConfigurationError(
                f"Invalid YAML in {path}: {e}",
                context=context,
            ) from e
        except OSError as e:
            raise ProjectConfigurationError(
                f"Failed to read {path}: {e}",
                context=context,
            ) from e

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ProjectConfigurationError(
                f"Project configuration must be a mapping, got {type(raw).__name__}",
                context=context,
            )

        try:
            config = cls.model_validate(raw)
        except ValidationError as e:
            raise ProjectConfigurationError(
                f"Invalid project configuration in {path}: {e}",
                context=context,
            ) from e

        config._check_unique_contracts(context)

        if apply_env:
            config = config.with_env_overrides(os.environ if environ is None else environ)

        logger.debug(
            "Loaded project configuration",
            extra={
                "path": str(path),
                "project": config.name,
                "contract_count": len(config.contracts),
            },
        )
        return config

    def save(self, path: Path) -> None:
        """Write the configuration to ``path`` deterministically.

        Raises:
            GenerationIoError: If the file cannot be written.
        """
        data = self.model_dump(mode="json", exclude_none=True)
        text = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
        try:
            write_text_atomic(path, text)
        except OSError as e:
            raise GenerationIoError(
                f"Failed to write project configuration {path}: {e}",
                context=ModelCodegenErrorContext(
                    operation="save_project_config",
                    target_name=str(path),
                ),
            ) from e

    def with_env_overrides(self, environ: Mapping[str, str]) -> ModelProjectConfig:
        """Return a copy with ``CHAINGEN_*`` environment overrides applied.

        Raises:
            ProjectConfigurationError: If an override value is invalid.
        """
        settings_update: dict[str, object] = {}
        if registry_url := environ.get(_ENV_REGISTRY_URL):
            settings_update["registry_url"] = registry_url
        if cache_dir := environ.get(_ENV_ABI_CACHE_DIR):
            settings_update["abi_cache_dir"] = cache_dir
        if max_fetches := environ.get(_ENV_MAX_CONCURRENT_FETCHES):
            settings_update["max_concurrent_fetches"] = max_fetches

        update: dict[str, object] = {}
        if target_network := environ.get(_ENV_TARGET_NETWORK):
            update["target_network"] = target_network
        if settings_update:
            try:
                update["codegen"] = ModelCodegenSettings.model_validate(
                    {**self.codegen.model_dump(), **settings_update}
                )
            except ValidationError as e:
                raise ProjectConfigurationError(
                    f"Invalid environment override: {e}",
                    context=ModelCodegenErrorContext(operation="apply_env_overrides"),
                ) from e

        if not update:
            return self
        logger.debug(
            "Applied environment overrides",
            extra={"overridden": sorted(update)},
        )
        return self.model_copy(update=update)

    @staticmethod
    def find_project_root(start: Path | None = None) -> Path | None:
        """Walk up from ``start`` to the first directory holding ``chaingen.yaml``.

        Returns:
            The project root, or None if no configuration file is found.
        """
        current = (start or Path.cwd()).resolve()
        for candidate in (current, *current.parents):
            if (candidate / CONFIG_FILE_NAME).is_file():
                return candidate
        return None

    # ------------------------------------------------------------------
    # Contract management
    # ------------------------------------------------------------------

    def add_contract(self, contract: ModelContractConfig) -> None:
        """Append a contract, rejecting a second entry for the same address and network.

        Raises:
            ProjectConfigurationError: If the (address, network) pair is already tracked.
        """
        if self.find_contracts(contract.address, contract.network):
            raise ProjectConfigurationError(
                f"Contract {contract.address} is already tracked on network {contract.network}",
                context=ModelCodegenErrorContext(
                    operation="add_contract",
                    target_name=contract.address,
                    contract_name=contract.name,
                ),
            )
        self.contracts = [*self.contracts, contract]
        logger.info(
            "Added contract",
            extra={
                "contract_name": contract.name,
                "address": contract.address,
                "network": contract.network,
            },
        )

    def remove_contract(
        self,
        address: str,
        network: str | None = None,
    ) -> list[ModelContractConfig]:
        """Remove the contracts at ``address`` (optionally only on ``network``).

        Returns:
            The removed contracts; empty if nothing matched.

        Raises:
            ProjectConfigurationError: If ``address`` is malformed.
        """
        matching = self.find_contracts(address, network)
        if matching:
            self.contracts = [c for c in self.contracts if c not in matching]
        return matching

    def find_contracts(
        self,
        address: str,
        network: str | None = None,
    ) -> list[ModelContractConfig]:
        """Return tracked contracts at ``address``, in configured order.

        Raises:
            ProjectConfigurationError: If ``address`` is malformed.
        """
        try:
            canonical = normalize_address(address)
        except ValueError as e:
            raise ProjectConfigurationError(
                str(e),
                context=ModelCodegenErrorContext(
                    operation="find_contracts",
                    target_name=address,
                ),
            ) from e
        return [c for c in self.contracts if c.matches(canonical, network)]

    def contracts_for_network(self, network: str) -> list[ModelContractConfig]:
        """Return tracked contracts deployed on ``network``, in configured order."""
        return [c for c in self.contracts if c.network == network]

    def _check_unique_contracts(self, context: ModelCodegenErrorContext) -> None:
        seen: set[tuple[str, str]] = set()
        for contract in self.contracts:
            key = (contract.address, contract.network)
            if key in seen:
                raise ProjectConfigurationError(
                    f"Duplicate contract {contract.address} on network {contract.network}",
                    context=context,
                    contract_name=contract.name,
                )
            seen.add(key)


__all__ = ["CONFIG_FILE_NAME", "ModelProjectConfig"]
