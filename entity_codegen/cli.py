"""
Command-line interface for entity code generation.

    entity-codegen generate entities.json --entity User --output ./generated
    entity-codegen generate --url http://localhost:8080/api/v1/projects/1/export --dry-run
    entity-codegen files User --with-migrations
    entity-codegen types
    entity-codegen languages
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from .codegen.core.config import ConfigError, GeneratorConfig, get_config_manager, load_config
from .codegen.core.context import ValidationError
from .codegen.core.generator import GeneratedArtifact, GenerationResult, GeneratorError
from .codegen.core.schema import DecodeError, FieldType
from .codegen.languages.go.sql import sql_type
from .codegen.languages.go.types import GoTypeMapper
from .codegen.registry import (
    RegistryError,
    get_generator,
    get_language_info,
    get_registry,
    list_supported_languages,
)
from .codegen.service import GeneratorService
from .codegen.store import InMemoryEntityStore, StoreError
from .logging_config import configure_logging, get_logger
from .utils import JSONLoaderError, load_entity_document

logger = get_logger(__name__)

console = Console()


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


HANDLED_ERRORS = (
    CLIError,
    ConfigError,
    DecodeError,
    GeneratorError,
    JSONLoaderError,
    RegistryError,
    StoreError,
    ValidationError,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="entity-codegen",
        description="Generate Go service layers and PostgreSQL migrations from entity definitions",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    verbosity.add_argument("--quiet", "-q", action="store_true", help="Only log warnings and errors")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    generate = subparsers.add_parser(
        "generate",
        help="Generate code for one entity or a whole project",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  entity-codegen generate entities.json
  entity-codegen generate entities.json --entity User --dry-run
  entity-codegen generate --url http://localhost:8080/export --output ./out
        """.strip(),
    )
    source_group = generate.add_mutually_exclusive_group(required=True)
    source_group.add_argument("source", nargs="?", help="JSON entity document")
    source_group.add_argument("--url", help="URL to fetch the entity document from")

    selector = generate.add_mutually_exclusive_group()
    selector.add_argument("--entity", metavar="NAME", help="Generate only the entity with this name")
    selector.add_argument("--entity-id", type=int, metavar="ID", help="Generate only the entity with this id")

    generate.add_argument(
        "--output", "-o", metavar="DIR", help="Output root directory (default: ./generated)"
    )
    generate.add_argument(
        "--dry-run", action="store_true", help="Print the generated code instead of writing files"
    )
    generate.add_argument("--config", metavar="FILE", help="JSON configuration file")
    generate.add_argument("--package-name", metavar="NAME", help="Go package name for models")
    generate.add_argument("--module-path", metavar="PATH", help="Go module path for cross-layer imports")
    generate.add_argument("--no-comments", action="store_true", help="Don't add comments to generated code")
    generate.add_argument("--language", "-l", default="go", help="Target language (default: go)")
    generate.set_defaults(func=_cmd_generate)

    files = subparsers.add_parser("files", help="List the files generated for an entity name")
    files.add_argument("name", help="Entity name in any casing style")
    files.add_argument("--with-migrations", action="store_true", help="Include the migration scripts")
    files.add_argument("--language", "-l", default="go", help="Target language (default: go)")
    files.set_defaults(func=_cmd_files)

    types = subparsers.add_parser("types", help="Show the field type mapping")
    types.set_defaults(func=_cmd_types)

    languages = subparsers.add_parser("languages", help="List supported target languages")
    languages.set_defaults(func=_cmd_languages)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return the exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        return args.func(args)
    except HANDLED_ERRORS as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        console.print(f"[red]✗ Error:[/red] {e}", markup=True, highlight=False)
        return 1


def _cmd_generate(args: argparse.Namespace) -> int:
    source, document = load_entity_document(file_path=args.source, url=args.url)
    console.print(f"📄 Loaded: {source}")

    store = InMemoryEntityStore.from_document(document)
    config = _build_config(args)
    service = GeneratorService(store, get_generator(args.language, config))

    output_root = None if args.dry_run else Path(args.output or config.output_root)

    if args.entity:
        entity_ids = [store.find_entity(args.entity).id]
    elif args.entity_id is not None:
        entity_ids = [store.load_entity(args.entity_id).id]
    else:
        entity_ids = []

    if entity_ids:
        results = [service.generate(entity_id, output_root) for entity_id in entity_ids]
    else:
        results = []
        for project in store.list_projects():
            results.extend(service.generate_project(project.id, output_root))

    for result in results:
        if output_root is None:
            _print_artifacts(result.artifacts)
        _print_result(result, output_root)

    return 0 if all(result.success for result in results) else 1


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    registry = get_registry()
    if not registry.is_supported(args.language):
        raise CLIError(
            f"Unsupported language '{args.language}'. "
            f"Supported languages: {', '.join(list_supported_languages())}"
        )

    overrides: dict[str, Any] = {}
    if args.package_name:
        overrides["package_name"] = args.package_name
    if args.module_path:
        overrides["module_path"] = args.module_path
    if args.no_comments:
        overrides["add_comments"] = False
    if args.output:
        overrides["output_root"] = args.output

    language = registry.resolve(args.language)
    config = load_config(language, overrides, args.config)

    for warning in get_config_manager().validate_config(config, language):
        console.print(f"[yellow]⚠️  {warning}[/yellow]")
    return config


def _print_artifacts(artifacts: list[GeneratedArtifact]) -> None:
    for artifact in artifacts:
        lexer = "sql" if artifact.kind.is_migration else "go"
        console.print(
            Panel(
                Syntax(artifact.content, lexer, theme="monokai", line_numbers=False),
                title=f"📄 {artifact.relative_path}",
                border_style="green",
            )
        )


def _print_result(result: GenerationResult, output_root: Path | None) -> None:
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold cyan")
    table.add_column("Layer", style="bold")
    table.add_column("Path", style="cyan")
    table.add_column("Status")

    for artifact in result.artifacts:
        if output_root is None:
            status = "[dim]preview[/dim]"
        elif artifact.relative_path in result.write_errors:
            status = f"[red]✗ {result.write_errors[artifact.relative_path]}[/red]"
        else:
            status = "[green]✓ written[/green]"
        table.add_row(artifact.layer, artifact.relative_path, status)

    console.print(table)

    if result.warnings:
        console.print("[yellow]⚠️  Warnings:[/yellow]")
        for warning in result.warnings:
            console.print(f"  [yellow]•[/yellow] {warning}")

    if result.success:
        target = f" under [cyan]{output_root}[/cyan]" if output_root is not None else ""
        console.print(f"[green]✓[/green] {result.message}{target}")
    else:
        console.print(f"[red]✗[/red] {result.message}")


def _cmd_files(args: argparse.Namespace) -> int:
    if not args.name.strip():
        raise CLIError("Entity name must not be empty")

    generator = get_generator(args.language)
    paths = generator.list_generated_paths(args.name, include_migrations=args.with_migrations)
    for path in paths:
        console.print(path, highlight=False)
    return 0


def _cmd_types(args: argparse.Namespace) -> int:
    mapper = GoTypeMapper()

    table = Table(title="Field types", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Tag", style="bold green", no_wrap=True)
    table.add_column("Go type", style="cyan")
    table.add_column("SQL type", style="magenta")

    for field_type in FieldType:
        table.add_row(field_type.value, mapper.map_type(field_type.value), sql_type(field_type))

    console.print(table)
    console.print("[dim]Unknown tags are generated as string.[/dim]")
    return 0


def _cmd_languages(args: argparse.Namespace) -> int:
    table = Table(title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for language in list_supported_languages():
        info = get_language_info(language)
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(info["name"], info["file_extension"], info["class"], aliases)

    console.print(table)
    return 0
