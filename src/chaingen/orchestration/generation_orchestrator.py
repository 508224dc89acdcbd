# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Generation run orchestration.

A run goes through these phases:

1. Load the generation manifest.
2. When entities are requested, load and validate the entity schema.
   Schema errors abort the whole run, since every origin shares the schema.
3. Resolve the ABIs of all selected contracts concurrently, bounded by
   ``max_concurrent_fetches``.
4. Process contracts one at a time in configured order. Each contract maps
   its types, renders its binding and handler stubs, then writes them
   through the ConflictResolver. The manifest is saved after each origin.
5. Generate the entity modules as a final origin.

Failures are scoped: any CodegenError raised while processing one contract
(or the schema origin) is recorded in that origin's result and the run moves
on. ``cancel()`` is honoured between origins; origins not yet processed are
reported as cancelled.

Example:
    >>> async with AbiRegistryClient(settings.registry_url) as client:
    ...     resolver = build_resolver(project, project_root, client)
    ...     orchestrator = GenerationOrchestrator(project, project_root, resolver)
    ...     report = await orchestrator.generate_all(ModelGenerationFlags())
"""

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta
from pathlib import Path
from uuid import UUID, uuid4

from chaingen.abi import AbiCache, AbiRegistryClient, AbiResolver
from chaingen.conflict import ConflictResolver, ManifestStore, PromptCallback
from chaingen.enums import EnumOriginStatus, EnumWriteAction
from chaingen.errors import (
    CodegenError,
    ModelCodegenErrorContext,
    ProjectConfigurationError,
    SchemaParseError,
)
from chaingen.generators import BindingGenerator, EntityGenerator, HandlerGenerator
from chaingen.models import (
    ModelAbiDefinition,
    ModelContractConfig,
    ModelEntitySchema,
    ModelGeneratedArtifact,
    ModelGenerationFlags,
    ModelGenerationReport,
    ModelOriginResult,
    ModelProjectConfig,
    ModelWriteResult,
)
from chaingen.rendering import TemplateEngine
from chaingen.schema import SchemaLoader, SchemaValidator

logger = logging.getLogger(__name__)


def build_resolver(
    project: ModelProjectConfig,
    project_root: Path,
    client: AbiRegistryClient,
) -> AbiResolver:
    """Create the ABI resolver configured by a project's codegen settings."""
    settings = project.codegen
    max_age = (
        timedelta(seconds=settings.abi_cache_max_age)
        if settings.abi_cache_max_age is not None
        else None
    )
    return AbiResolver(
        client=client,
        cache=AbiCache(settings.resolve_cache_dir()),
        max_age=max_age,
        project_root=project_root,
    )


class GenerationOrchestrator:
    """Runs code generation for a project.

    Args:
        project: Project configuration; contracts are processed in its order.
        project_root: Directory containing ``chaingen.yaml``.
        resolver: ABI resolver.
        engine: Template engine (package templates if omitted).
        prompt: Conflict prompt callback, used in PROMPT mode.
    """

    def __init__(
        self,
        project: ModelProjectConfig,
        project_root: Path,
        resolver: AbiResolver,
        *,
        engine: TemplateEngine | None = None,
        prompt: PromptCallback | None = None,
    ) -> None:
        self.project = project
        self.project_root = Path(project_root)
        self.resolver = resolver
        self.prompt = prompt
        self._cancel_requested = False

        settings = project.codegen
        engine = engine or TemplateEngine()
        self.binding_generator = BindingGenerator(engine, settings)
        self.handler_generator = HandlerGenerator(engine, settings, self.project_root)
        self.entity_generator = EntityGenerator(engine, settings)
        self.schema_loader = SchemaLoader()
        self.schema_validator = SchemaValidator()
        self.manifest_store = ManifestStore(self.project_root / settings.manifest_path)

    def cancel(self) -> None:
        """Stop the run before the next origin; pending origins are cancelled."""
        self._cancel_requested = True
        logger.info("Generation cancellation requested")

    @property
    def cancel_requested(self) -> bool:
        return self._cancel_requested

    async def generate_all(self, flags: ModelGenerationFlags) -> ModelGenerationReport:
        """Generate for every configured contract and the entity schema.

        Raises:
            SchemaParseError: If the schema is invalid.
            GenerationIoError: If the manifest cannot be loaded.
        """
        return await self._run(list(self.project.contracts), flags)

    async def generate_for_contract(
        self,
        address: str,
        flags: ModelGenerationFlags,
        network: str | None = None,
    ) -> ModelGenerationReport:
        """Generate for the contract(s) at ``address`` (optionally on ``network``).

        Entities are still generated when ``flags.include_entities`` is set.

        Raises:
            ProjectConfigurationError: If no configured contract matches.
            SchemaParseError: If the schema is invalid.
            GenerationIoError: If the manifest cannot be loaded.
        """
        contracts = self.project.find_contracts(address, network)
        if not contracts:
            where = f" on network {network}" if network else ""
            raise ProjectConfigurationError(
                f"No contract {address}{where} in the project configuration",
                context=ModelCodegenErrorContext(
                    operation="generate_for_contract",
                    target_name=address,
                ),
            )
        return await self._run(contracts, flags)

    # ------------------------------------------------------------------
    # run
    # ------------------------------------------------------------------

    async def _run(
        self,
        contracts: list[ModelContractConfig],
        flags: ModelGenerationFlags,
    ) -> ModelGenerationReport:
        correlation_id = uuid4()
        report = ModelGenerationReport(dry_run=flags.dry_run, correlation_id=correlation_id)
        logger.info(
            "Starting generation",
            extra={
                "correlation_id": str(correlation_id),
                "contracts": len(contracts),
                "dry_run": flags.dry_run,
                "conflict_mode": flags.conflict_mode.value,
            },
        )

        manifest = self.manifest_store.load()
        writer = ConflictResolver(
            self.project_root,
            manifest,
            mode=flags.conflict_mode,
            prompt=self.prompt,
            dry_run=flags.dry_run,
        )
        schema = self._load_schema(correlation_id) if flags.include_entities else None

        if not (flags.include_bindings or flags.include_handlers):
            contracts = []
        resolved = await self._resolve_all(contracts, flags, correlation_id)

        for index, contract in enumerate(contracts):
            if self._cancel_requested:
                report.results.extend(self._cancelled(c) for c in contracts[index:])
                break
            result = await self._process_contract(contract, resolved[index], flags, writer)
            report.results.append(result)

        if schema is not None:
            origin = self.project.codegen.schema_path
            if self._cancel_requested:
                report.results.append(
                    ModelOriginResult(origin=origin, status=EnumOriginStatus.CANCELLED)
                )
            else:
                report.results.append(await self._process_schema(schema, origin, writer))

        logger.info(
            "Generation finished",
            extra={
                "correlation_id": str(correlation_id),
                "succeeded": report.succeeded_count,
                "failed": report.failed_count,
                "cancelled": report.cancelled_count,
                "written": report.written_count,
            },
        )
        return report

    def _load_schema(self, correlation_id: UUID) -> ModelEntitySchema | None:
        path = self.project_root / self.project.codegen.schema_path
        if not path.exists():
            logger.info("No entity schema, skipping entities", extra={"path": str(path)})
            return None

        schema = self.schema_loader.load(path)
        validation = self.schema_validator.validate(schema)
        for warning in validation.warnings:
            logger.warning("Schema warning: %s", warning, extra={"path": str(path)})
        if not validation.is_valid:
            raise SchemaParseError(
                f"Schema {path} is invalid:\n  " + "\n  ".join(validation.errors),
                context=ModelCodegenErrorContext(
                    operation="validate_schema",
                    target_name=str(path),
                    correlation_id=correlation_id,
                ),
                error_count=len(validation.errors),
            )
        return schema

    async def _resolve_all(
        self,
        contracts: list[ModelContractConfig],
        flags: ModelGenerationFlags,
        correlation_id: UUID,
    ) -> list[ModelAbiDefinition | CodegenError]:
        semaphore = asyncio.Semaphore(self.project.codegen.max_concurrent_fetches)

        async def resolve(contract: ModelContractConfig) -> ModelAbiDefinition | CodegenError:
            async with semaphore:
                try:
                    return await self.resolver.resolve(
                        contract.address,
                        contract.network,
                        force_refresh=flags.force_refresh,
                        local_abi_path=contract.abi_path,
                        contract_name=contract.name,
                        correlation_id=correlation_id,
                    )
                except CodegenError as e:
                    return e

        return list(await asyncio.gather(*(resolve(c) for c in contracts)))

    async def _process_contract(
        self,
        contract: ModelContractConfig,
        resolved: ModelAbiDefinition | CodegenError,
        flags: ModelGenerationFlags,
        writer: ConflictResolver,
    ) -> ModelOriginResult:
        origin = contract.origin
        if isinstance(resolved, CodegenError):
            return self._failed(origin, resolved, contract=contract)

        warnings: list[str] = []
        if resolved.is_stale:
            warnings.append(
                f"registry unavailable, used cached ABI from {resolved.fetched_at.isoformat()}"
            )

        writes: list[ModelWriteResult] = []
        try:
            try:
                binding = self.binding_generator.build_binding(contract, resolved)
                artifacts: list[ModelGeneratedArtifact] = []
                if flags.include_bindings:
                    artifacts.append(self.binding_generator.render(binding, origin))
                if flags.include_handlers:
                    stubs, existing = self.handler_generator.generate(binding, origin)
                    artifacts.extend(stubs)
                    writes.extend(existing)
                for artifact in artifacts:
                    writes.append(await writer.write(artifact))
            finally:
                # Record files written before any failure.
                self._save_manifest(writer)
        except CodegenError as e:
            return self._failed(origin, e, contract=contract, writes=writes, warnings=warnings)

        return self._succeeded(origin, writes, warnings, contract=contract)

    async def _process_schema(
        self,
        schema: ModelEntitySchema,
        origin: str,
        writer: ConflictResolver,
    ) -> ModelOriginResult:
        writes: list[ModelWriteResult] = []
        try:
            try:
                for artifact in self.entity_generator.generate(schema):
                    writes.append(await writer.write(artifact))
            finally:
                self._save_manifest(writer)
        except CodegenError as e:
            return self._failed(origin, e, writes=writes)
        return self._succeeded(origin, writes, [])

    def _save_manifest(self, writer: ConflictResolver) -> None:
        if writer.dry_run or not writer.manifest_changed:
            return
        self.manifest_store.save(writer.manifest)
        writer.manifest_changed = False

    # ------------------------------------------------------------------
    # results
    # ------------------------------------------------------------------

    @staticmethod
    def _succeeded(
        origin: str,
        writes: list[ModelWriteResult],
        warnings: list[str],
        contract: ModelContractConfig | None = None,
    ) -> ModelOriginResult:
        all_warnings = list(warnings)
        all_warnings.extend(
            f"{w.path}: {w.detail}"
            for w in writes
            if w.action == EnumWriteAction.SKIPPED_DUPLICATE
        )
        conflicted = any(w.action == EnumWriteAction.SKIPPED_CONFLICT for w in writes)
        status = EnumOriginStatus.SKIPPED_CONFLICTS if conflicted else EnumOriginStatus.SUCCESS
        logger.info(
            "Origin processed",
            extra={"origin": origin, "status": status.value, "artifacts": len(writes)},
        )
        return ModelOriginResult(
            origin=origin,
            address=contract.address if contract else None,
            network=contract.network if contract else None,
            status=status,
            writes=tuple(writes),
            warnings=tuple(all_warnings),
        )

    @staticmethod
    def _failed(
        origin: str,
        error: CodegenError,
        contract: ModelContractConfig | None = None,
        writes: list[ModelWriteResult] | None = None,
        warnings: list[str] | None = None,
    ) -> ModelOriginResult:
        logger.error(
            "Origin failed",
            extra={
                "origin": origin,
                "error_type": type(error).__name__,
                "error_code": error.error_code.value,
                "error": error.message,
            },
        )
        return ModelOriginResult(
            origin=origin,
            address=contract.address if contract else None,
            network=contract.network if contract else None,
            status=EnumOriginStatus.FAILED,
            writes=tuple(writes or ()),
            error_type=type(error).__name__,
            error_message=error.message,
            warnings=tuple(warnings or ()),
        )

    @staticmethod
    def _cancelled(contract: ModelContractConfig) -> ModelOriginResult:
        return ModelOriginResult(
            origin=contract.origin,
            address=contract.address,
            network=contract.network,
            status=EnumOriginStatus.CANCELLED,
        )


__all__ = ["GenerationOrchestrator", "build_resolver"]
