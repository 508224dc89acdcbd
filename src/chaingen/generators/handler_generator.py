# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Event handler stub generation.

One stub per event at ``<handlers_dir>/<contract_snake>/<event_snake>.py``.
A stub is generated only while its path does not exist: once written it is
the developer's file, and its presence alone suppresses regeneration
regardless of what the manifest records.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

from chaingen.enums import EnumArtifactKind, EnumWriteAction
from chaingen.models import (
    ModelCodegenSettings,
    ModelContractBinding,
    ModelEventBinding,
    ModelGeneratedArtifact,
    ModelWriteResult,
)
from chaingen.rendering import TemplateEngine
from chaingen.utils.util_name_converter import NameConverter

logger = logging.getLogger(__name__)


class HandlerGenerator:
    """Generates handler stubs for events that do not have one yet.

    Args:
        engine: Template engine used to render ``handler.py.j2``.
        settings: Code generation settings (handlers dir, generated package).
        project_root: Directory relative artifact paths resolve against.
    """

    TEMPLATE_NAME = "handler.py.j2"

    def __init__(
        self,
        engine: TemplateEngine,
        settings: ModelCodegenSettings,
        project_root: Path,
    ) -> None:
        self.engine = engine
        self.settings = settings
        self.project_root = Path(project_root)

    def handler_path(self, binding: ModelContractBinding, event: ModelEventBinding) -> str:
        contract_dir = NameConverter.to_python_identifier(binding.contract_name)
        return (
            PurePosixPath(self.settings.handlers_dir) / contract_dir / f"{event.snake_name}.py"
        ).as_posix()

    def generate(
        self,
        binding: ModelContractBinding,
        origin: str,
    ) -> tuple[list[ModelGeneratedArtifact], list[ModelWriteResult]]:
        """Render stubs for events whose handler file is missing.

        Returns:
            Tuple of (artifacts to write, skipped-existing results), both in
            event declaration order.

        Raises:
            TemplateRenderError: If rendering a stub fails.
        """
        artifacts: list[ModelGeneratedArtifact] = []
        skipped: list[ModelWriteResult] = []
        for event in binding.events:
            path = self.handler_path(binding, event)
            if (self.project_root / path).exists():
                logger.debug(
                    "Handler stub exists, not regenerating",
                    extra={"path": path, "contract": binding.contract_name},
                )
                skipped.append(
                    ModelWriteResult(
                        path=path,
                        action=EnumWriteAction.SKIPPED_EXISTING,
                        kind=EnumArtifactKind.HANDLER,
                        origin=origin,
                    )
                )
                continue
            content = self.engine.render(self.TEMPLATE_NAME, self._variables(binding, event))
            artifacts.append(
                ModelGeneratedArtifact.create(
                    path=path,
                    content=content,
                    kind=EnumArtifactKind.HANDLER,
                    origin=origin,
                )
            )
        return artifacts, skipped

    def _variables(
        self,
        binding: ModelContractBinding,
        event: ModelEventBinding,
    ) -> dict[str, object]:
        return {
            "contract_name": binding.contract_name,
            "event_name": event.name,
            "binding_module": (
                f"{self.settings.generated_package}.bindings.{binding.module_name}"
            ),
            "topic_constant": f"{NameConverter.to_constant_case(event.snake_name)}_TOPIC",
            "event_class": event.class_name,
            "event_snake": event.snake_name,
            "signature": event.filter.signature,
        }


__all__ = ["HandlerGenerator"]
