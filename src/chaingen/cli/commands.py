# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""
chaingen CLI Commands.

Provides the command surface of the code generation pipeline: running
generation, managing tracked contracts and validating the entity schema.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from chaingen import __version__
from chaingen.abi import AbiRegistryClient
from chaingen.conflict import PromptCallback
from chaingen.enums import EnumConflictMode, EnumOriginStatus, EnumWriteAction
from chaingen.errors import CodegenError
from chaingen.models import (
    CONFIG_FILE_NAME,
    ModelContractConfig,
    ModelGenerationFlags,
    ModelGenerationReport,
    ModelProjectConfig,
)
from chaingen.orchestration import GenerationOrchestrator, build_resolver
from chaingen.schema import SchemaLoader, SchemaValidator

console = Console()
err_console = Console(stderr=True)

EXIT_INTERRUPTED = 130

_STATUS_STYLES: dict[EnumOriginStatus, str] = {
    EnumOriginStatus.SUCCESS: "green",
    EnumOriginStatus.SKIPPED_CONFLICTS: "yellow",
    EnumOriginStatus.FAILED: "red",
    EnumOriginStatus.CANCELLED: "dim",
}


@click.group()
@click.version_option(__version__, prog_name="chaingen")
@click.option(
    "--project-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help=f"Project directory (default: nearest parent holding {CONFIG_FILE_NAME})",
)
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (-v, -vv)")
@click.pass_context
def cli(ctx: click.Context, project_dir: Path | None, verbose: int) -> None:
    """chaingen: typed code generation for blockchain data processors."""
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )
    ctx.ensure_object(dict)
    ctx.obj["project_dir"] = project_dir


def _project_root(ctx: click.Context) -> Path:
    project_dir: Path | None = ctx.obj.get("project_dir")
    root = project_dir if project_dir is not None else ModelProjectConfig.find_project_root()
    if root is None or not (root / CONFIG_FILE_NAME).is_file():
        err_console.print(
            f"[bold red]No {CONFIG_FILE_NAME} found[/bold red] "
            f"(searched from {project_dir or Path.cwd()})"
        )
        raise SystemExit(1)
    return root


def _load_project(ctx: click.Context, apply_env: bool = True) -> tuple[ModelProjectConfig, Path]:
    root = _project_root(ctx)
    try:
        project = ModelProjectConfig.load(root / CONFIG_FILE_NAME, apply_env=apply_env)
    except CodegenError as e:
        _print_error(e)
        raise SystemExit(1) from e
    return project, root


def _print_error(error: CodegenError) -> None:
    err_console.print(f"[bold red]{type(error).__name__}:[/bold red] {escape(error.message)}")


# ----------------------------------------------------------------------
# generate
# ----------------------------------------------------------------------


def resolve_conflict_mode(
    strict: bool,
    overwrite: bool,
    interactive: bool,
    is_tty: bool,
) -> EnumConflictMode:
    """Pick the conflict policy from command-line flags.

    Precedence: ``--strict``, then ``--overwrite``, then ``--interactive``
    (only honoured on a terminal), otherwise skip.
    """
    if strict:
        return EnumConflictMode.STRICT
    if overwrite:
        return EnumConflictMode.OVERWRITE
    if interactive and is_tty:
        return EnumConflictMode.PROMPT
    return EnumConflictMode.SKIP


def _confirm_overwrite(path: str) -> bool:
    return click.confirm(
        f"{path} was modified since it was last generated. Overwrite?",
        default=False,
    )


async def _run_generation(
    project: ModelProjectConfig,
    root: Path,
    flags: ModelGenerationFlags,
    contract: str | None,
    network: str | None,
    prompt: PromptCallback | None,
) -> ModelGenerationReport:
    settings = project.codegen
    async with AbiRegistryClient(settings.registry_url, timeout=settings.request_timeout) as client:
        orchestrator = GenerationOrchestrator(
            project,
            root,
            build_resolver(project, root, client),
            prompt=prompt,
        )
        loop = asyncio.get_running_loop()
        # Not available on Windows event loops.
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(signal.SIGINT, orchestrator.cancel)
        try:
            if contract is not None:
                return await orchestrator.generate_for_contract(contract, flags, network)
            return await orchestrator.generate_all(flags)
        finally:
            with contextlib.suppress(NotImplementedError):
                loop.remove_signal_handler(signal.SIGINT)


@cli.command("generate")
@click.option("--no-handlers", is_flag=True, help="Do not generate handler stubs")
@click.option("--no-bindings", is_flag=True, help="Do not generate contract bindings")
@click.option("--no-entities", is_flag=True, help="Do not generate entity types")
@click.option("--contract", "contract", default=None, help="Only generate for this address")
@click.option("--network", default=None, help="Network of --contract (default: any)")
@click.option("--strict", is_flag=True, help="Fail on locally modified generated files")
@click.option("--interactive", is_flag=True, help="Ask before overwriting modified files")
@click.option("--overwrite", is_flag=True, help="Overwrite locally modified files")
@click.option("--force-refresh", is_flag=True, help="Bypass the ABI cache")
@click.option("--dry-run", is_flag=True, help="Report what would change without writing")
@click.pass_context
def generate_cmd(
    ctx: click.Context,
    no_handlers: bool,
    no_bindings: bool,
    no_entities: bool,
    contract: str | None,
    network: str | None,
    strict: bool,
    interactive: bool,
    overwrite: bool,
    force_refresh: bool,
    dry_run: bool,
) -> None:
    """Generate bindings, handler stubs and entity types."""
    project, root = _load_project(ctx)
    is_tty = click.get_text_stream("stdin").isatty()
    mode = resolve_conflict_mode(strict, overwrite, interactive, is_tty)
    if interactive and mode == EnumConflictMode.SKIP:
        err_console.print("[yellow]--interactive ignored: stdin is not a terminal[/yellow]")
    flags = ModelGenerationFlags(
        include_handlers=not no_handlers,
        include_bindings=not no_bindings,
        include_entities=not no_entities,
        force_refresh=force_refresh,
        dry_run=dry_run,
        conflict_mode=mode,
    )
    prompt = _confirm_overwrite if mode == EnumConflictMode.PROMPT else None

    console.print(f"[bold blue]Generating code for {project.name}...[/bold blue]")
    try:
        report = asyncio.run(_run_generation(project, root, flags, contract, network, prompt))
    except KeyboardInterrupt:
        err_console.print("[yellow]Interrupted[/yellow]")
        raise SystemExit(EXIT_INTERRUPTED) from None
    except CodegenError as e:
        _print_error(e)
        raise SystemExit(1) from e

    _print_report(report)
    raise SystemExit(report.exit_code)


def _print_report(report: ModelGenerationReport) -> None:
    title = "Generation Report (dry run)" if report.dry_run else "Generation Report"
    table = Table(title=title)
    table.add_column("Origin", style="cyan")
    table.add_column("Status", style="bold")
    table.add_column("Written", justify="right")
    table.add_column("Unchanged", justify="right")
    table.add_column("Skipped", justify="right")
    table.add_column("Details", style="dim")

    for result in report.results:
        style = _STATUS_STYLES[result.status]
        written = (
            result.count(EnumWriteAction.WRITTEN)
            + result.count(EnumWriteAction.OVERWRITTEN_CONFLICT)
            + result.count(EnumWriteAction.DRY_RUN)
        )
        skipped = (
            result.count(EnumWriteAction.SKIPPED_CONFLICT)
            + result.count(EnumWriteAction.SKIPPED_EXISTING)
            + result.count(EnumWriteAction.SKIPPED_DUPLICATE)
        )
        details = list(result.warnings)
        if result.error_message:
            details.insert(0, f"{result.error_type}: {result.error_message}")
        table.add_row(
            result.origin,
            f"[{style}]{result.status.value}[/{style}]",
            str(written),
            str(result.count(EnumWriteAction.UNCHANGED)),
            str(skipped),
            escape("\n".join(details)),
        )
    console.print(table)

    for result in report.results:
        for write in result.writes:
            if write.action == EnumWriteAction.SKIPPED_CONFLICT:
                console.print(
                    f"[yellow]Skipped modified file {write.path}[/yellow] "
                    "(use --overwrite or --interactive to replace it)"
                )

    summary_style = "green" if report.exit_code == 0 else "red"
    console.print(
        f"[{summary_style}]{report.succeeded_count} succeeded, "
        f"{report.failed_count} failed, {report.cancelled_count} cancelled, "
        f"{report.written_count} files written[/{summary_style}]"
    )


# ----------------------------------------------------------------------
# contract
# ----------------------------------------------------------------------


@cli.group()
def contract() -> None:
    """Manage tracked contracts."""


@contract.command("add")
@click.argument("address")
@click.option("--name", required=True, help="Contract name used for generated code")
@click.option("--network", default=None, help="Network (default: project target network)")
@click.option("--abi-path", default=None, help="Local ABI file relative to the project")
@click.pass_context
def contract_add_cmd(
    ctx: click.Context,
    address: str,
    name: str,
    network: str | None,
    abi_path: str | None,
) -> None:
    """Track the contract at ADDRESS."""
    project, root = _load_project(ctx, apply_env=False)
    try:
        entry = ModelContractConfig(
            address=address,
            name=name,
            network=network or project.target_network,
            abi_path=abi_path,
        )
    except ValidationError as e:
        err_console.print(f"[bold red]Invalid contract:[/bold red] {escape(str(e))}")
        raise SystemExit(1) from e

    try:
        project.add_contract(entry)
        project.save(root / CONFIG_FILE_NAME)
    except CodegenError as e:
        _print_error(e)
        raise SystemExit(1) from e
    console.print(
        f"[green]Added {entry.name}[/green] {entry.address} on network {entry.network}"
    )


@contract.command("remove")
@click.argument("address")
@click.option("--network", default=None, help="Only remove the entry on this network")
@click.pass_context
def contract_remove_cmd(ctx: click.Context, address: str, network: str | None) -> None:
    """Stop tracking the contract at ADDRESS."""
    project, root = _load_project(ctx, apply_env=False)
    try:
        removed = project.remove_contract(address, network)
        if removed:
            project.save(root / CONFIG_FILE_NAME)
    except CodegenError as e:
        _print_error(e)
        raise SystemExit(1) from e

    if not removed:
        err_console.print(f"[bold red]No tracked contract {address}[/bold red]")
        raise SystemExit(1)
    for entry in removed:
        console.print(
            f"[green]Removed {entry.name}[/green] {entry.address} on network {entry.network}"
        )


@contract.command("list")
@click.option("--network", default=None, help="Only list contracts on this network")
@click.pass_context
def contract_list_cmd(ctx: click.Context, network: str | None) -> None:
    """List tracked contracts."""
    project, _ = _load_project(ctx)
    contracts = (
        project.contracts_for_network(network) if network is not None else project.contracts
    )
    if not contracts:
        console.print("[yellow]No contracts tracked[/yellow]")
        return

    table = Table(title=f"Tracked Contracts ({len(contracts)})")
    table.add_column("Name", style="cyan")
    table.add_column("Address")
    table.add_column("Network", style="bold")
    table.add_column("ABI", style="dim")
    for entry in contracts:
        table.add_row(entry.name, entry.address, entry.network, entry.abi_path or "registry")
    console.print(table)


# ----------------------------------------------------------------------
# schema
# ----------------------------------------------------------------------


@cli.group()
def schema() -> None:
    """Entity schema commands."""


@schema.command("validate")
@click.argument(
    "path",
    required=False,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.pass_context
def schema_validate_cmd(ctx: click.Context, path: Path | None) -> None:
    """Validate the entity schema (default: the project's schema file)."""
    if path is None:
        project, root = _load_project(ctx)
        path = root / project.codegen.schema_path

    console.print(f"[bold blue]Validating schema {path}...[/bold blue]")
    try:
        parsed = SchemaLoader().load(path)
    except CodegenError as e:
        _print_error(e)
        raise SystemExit(1) from e

    result = SchemaValidator().validate(parsed)
    for warning in result.warnings:
        console.print(f"[yellow]warning:[/yellow] {escape(warning)}")
    for error in result.errors:
        console.print(f"[red]error:[/red] {escape(error)}")

    if result.is_valid:
        console.print(
            f"[green]Schema valid[/green]: {len(parsed.entities)} entities, "
            f"{len(parsed.declarations) - len(parsed.entities)} value types, "
            f"{len(result.warnings)} warnings"
        )
    raise SystemExit(0 if result.is_valid else 1)


__all__ = ["cli", "resolve_conflict_mode"]
