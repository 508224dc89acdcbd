# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Tests for HandlerGenerator."""

from __future__ import annotations

from pathlib import Path

from chaingen.enums import EnumArtifactKind, EnumWriteAction
from chaingen.generators import BindingGenerator, HandlerGenerator
from chaingen.models import ModelAbiDefinition, ModelCodegenSettings, ModelContractConfig
from chaingen.rendering import TemplateEngine


def _generators(tmp_path: Path) -> tuple[BindingGenerator, HandlerGenerator]:
    engine = TemplateEngine()
    settings = ModelCodegenSettings()
    return BindingGenerator(engine, settings), HandlerGenerator(engine, settings, tmp_path)


class TestHandlerGenerator:
    def test_one_stub_per_event(
        self,
        tmp_path: Path,
        token_contract: ModelContractConfig,
        token_definition: ModelAbiDefinition,
    ) -> None:
        bindings, handlers = _generators(tmp_path)
        binding = bindings.build_binding(token_contract, token_definition)

        artifacts, skipped = handlers.generate(binding, token_contract.origin)

        assert skipped == []
        assert [a.path for a in artifacts] == [
            "src/handlers/token/transfer.py",
            "src/handlers/token/approval.py",
        ]
        assert {a.kind for a in artifacts} == {EnumArtifactKind.HANDLER}
        source = artifacts[0].content
        assert "from generated.bindings.token import (" in source
        assert "    TRANSFER_TOPIC," in source
        assert "async def handle_transfer(event: TransferEvent, context: Any) -> None:" in source
        assert '"signature": "Transfer(address,address,uint256)",' in source
        compile(source, artifacts[0].path, "exec")

    def test_existing_stub_is_left_alone(
        self,
        tmp_path: Path,
        token_contract: ModelContractConfig,
        token_definition: ModelAbiDefinition,
    ) -> None:
        bindings, handlers = _generators(tmp_path)
        binding = bindings.build_binding(token_contract, token_definition)
        existing = tmp_path / "src" / "handlers" / "token" / "transfer.py"
        existing.parent.mkdir(parents=True)
        existing.write_text("# mine\n", encoding="utf-8")

        artifacts, skipped = handlers.generate(binding, token_contract.origin)

        assert [a.path for a in artifacts] == ["src/handlers/token/approval.py"]
        assert [(r.path, r.action) for r in skipped] == [
            ("src/handlers/token/transfer.py", EnumWriteAction.SKIPPED_EXISTING)
        ]
        assert existing.read_text(encoding="utf-8") == "# mine\n"

    def test_custom_directories(
        self,
        tmp_path: Path,
        token_contract: ModelContractConfig,
        token_definition: ModelAbiDefinition,
    ) -> None:
        engine = TemplateEngine()
        settings = ModelCodegenSettings(handlers_dir="app/handlers", generated_package="app.gen")
        binding = BindingGenerator(engine, settings).build_binding(token_contract, token_definition)

        artifacts, _ = HandlerGenerator(engine, settings, tmp_path).generate(
            binding, token_contract.origin
        )

        assert artifacts[0].path == "app/handlers/token/transfer.py"
        assert "from app.gen.bindings.token import (" in artifacts[0].content
