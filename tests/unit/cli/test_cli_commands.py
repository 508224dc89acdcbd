# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Tests for the chaingen command line interface."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner, Result

from chaingen import __version__
from chaingen.cli.commands import cli, resolve_conflict_mode
from chaingen.enums import EnumConflictMode
from chaingen.models import CONFIG_FILE_NAME, ModelProjectConfig

VAULT_ADDRESS = "0x" + "ab" * 20


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def _invoke(runner: CliRunner, project_dir: Path, *args: str) -> Result:
    return runner.invoke(cli, ["--project-dir", str(project_dir), *args])


def _text(result: Result) -> str:
    """Command output with rich's line wrapping undone."""
    return " ".join(result.output.split())


def _reload(project_dir: Path) -> ModelProjectConfig:
    return ModelProjectConfig.load(project_dir / CONFIG_FILE_NAME, apply_env=False)


class TestCliGroup:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in _text(result)

    def test_missing_project(self, runner: CliRunner, tmp_path: Path) -> None:
        result = _invoke(runner, tmp_path, "contract", "list")
        assert result.exit_code == 1
        assert "No chaingen.yaml found" in _text(result)


class TestGenerateCommand:
    def test_generate(self, runner: CliRunner, project_dir: Path) -> None:
        result = _invoke(runner, project_dir, "generate")

        assert result.exit_code == 0, result.output
        assert "Generation Report" in _text(result)
        assert "0 failed" in _text(result)
        assert (project_dir / "src" / "generated" / "bindings" / "token.py").is_file()
        assert (project_dir / "src" / "handlers" / "pool" / "swap.py").is_file()
        assert (project_dir / "src" / "generated" / "entities" / "__init__.py").is_file()

    def test_generate_dry_run(self, runner: CliRunner, project_dir: Path) -> None:
        result = _invoke(runner, project_dir, "generate", "--dry-run")

        assert result.exit_code == 0, result.output
        assert "dry run" in _text(result)
        assert not (project_dir / "src").exists()

    def test_generate_single_contract(
        self, runner: CliRunner, project_dir: Path, token_address: str
    ) -> None:
        result = _invoke(
            runner, project_dir, "generate", "--contract", token_address, "--no-entities"
        )

        assert result.exit_code == 0, result.output
        assert (project_dir / "src" / "generated" / "bindings" / "token.py").is_file()
        assert not (project_dir / "src" / "generated" / "bindings" / "pool.py").exists()
        assert not (project_dir / "src" / "generated" / "entities").exists()

    def test_generate_reports_failed_origin(self, runner: CliRunner, project_dir: Path) -> None:
        (project_dir / "abis" / "pool.json").write_text("[1]", encoding="utf-8")

        result = _invoke(runner, project_dir, "generate")

        assert result.exit_code == 1
        assert "1 failed" in _text(result)

    def test_invalid_schema_fails_run(self, runner: CliRunner, project_dir: Path) -> None:
        (project_dir / "schema.graphql").write_text("type {", encoding="utf-8")

        result = _invoke(runner, project_dir, "generate")

        assert result.exit_code == 1
        assert "SchemaParseError" in _text(result)

    def test_interactive_without_terminal_is_ignored(
        self, runner: CliRunner, project_dir: Path
    ) -> None:
        result = _invoke(runner, project_dir, "generate", "--interactive")

        assert result.exit_code == 0, result.output
        assert "--interactive ignored" in _text(result)


class TestResolveConflictMode:
    @pytest.mark.parametrize(
        ("strict", "overwrite", "interactive", "is_tty", "expected"),
        [
            (False, False, False, True, EnumConflictMode.SKIP),
            (True, True, True, True, EnumConflictMode.STRICT),
            (False, True, True, True, EnumConflictMode.OVERWRITE),
            (False, False, True, True, EnumConflictMode.PROMPT),
            (False, False, True, False, EnumConflictMode.SKIP),
        ],
    )
    def test_precedence(
        self,
        strict: bool,
        overwrite: bool,
        interactive: bool,
        is_tty: bool,
        expected: EnumConflictMode,
    ) -> None:
        assert resolve_conflict_mode(strict, overwrite, interactive, is_tty) == expected


class TestContractCommands:
    def test_add(self, runner: CliRunner, project_dir: Path) -> None:
        result = _invoke(
            runner, project_dir, "contract", "add", VAULT_ADDRESS, "--name", "Vault"
        )

        assert result.exit_code == 0, result.output
        assert "Added Vault" in _text(result)
        project = _reload(project_dir)
        assert [c.name for c in project.contracts] == ["Token", "Pool", "Vault"]
        assert project.contracts[-1].network == "1"
        assert project.contracts[-1].abi_path is None

    def test_add_duplicate(self, runner: CliRunner, project_dir: Path, token_address: str) -> None:
        result = _invoke(
            runner, project_dir, "contract", "add", token_address, "--name", "Again"
        )

        assert result.exit_code == 1
        assert "already tracked" in _text(result)
        assert len(_reload(project_dir).contracts) == 2

    def test_add_invalid_address(self, runner: CliRunner, project_dir: Path) -> None:
        result = _invoke(runner, project_dir, "contract", "add", "0x123", "--name", "Bad")

        assert result.exit_code == 1
        assert "Invalid contract" in _text(result)

    def test_remove(self, runner: CliRunner, project_dir: Path, token_address: str) -> None:
        result = _invoke(runner, project_dir, "contract", "remove", token_address)

        assert result.exit_code == 0, result.output
        assert "Removed Token" in _text(result)
        assert [c.name for c in _reload(project_dir).contracts] == ["Pool"]

    def test_remove_unknown(self, runner: CliRunner, project_dir: Path) -> None:
        result = _invoke(runner, project_dir, "contract", "remove", VAULT_ADDRESS)

        assert result.exit_code == 1
        assert "No tracked contract" in _text(result)

    def test_list(self, runner: CliRunner, project_dir: Path) -> None:
        result = _invoke(runner, project_dir, "contract", "list")

        assert result.exit_code == 0, result.output
        assert "Tracked Contracts (2)" in _text(result)
        assert "Token" in _text(result)
        assert "Pool" in _text(result)

    def test_list_other_network(self, runner: CliRunner, project_dir: Path) -> None:
        result = _invoke(runner, project_dir, "contract", "list", "--network", "137")

        assert result.exit_code == 0
        assert "No contracts tracked" in _text(result)


class TestSchemaCommands:
    def test_validate_project_schema(self, runner: CliRunner, project_dir: Path) -> None:
        result = _invoke(runner, project_dir, "schema", "validate")

        assert result.exit_code == 0, result.output
        assert "Schema valid" in _text(result)
        assert "2 entities" in _text(result)

    def test_validate_explicit_path(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "other.graphql"
        path.write_text("type Thing @entity {\n  id: ID!\n}\n", encoding="utf-8")

        result = runner.invoke(cli, ["schema", "validate", str(path)])

        assert result.exit_code == 0, result.output
        assert "Schema valid" in _text(result)

    def test_validate_invalid_schema(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "broken.graphql"
        path.write_text("type Thing @entity {\n  name: String!\n}\n", encoding="utf-8")

        result = runner.invoke(cli, ["schema", "validate", str(path)])

        assert result.exit_code == 1
        assert "Schema valid" not in _text(result)
