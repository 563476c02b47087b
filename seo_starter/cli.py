"""Typer CLI application for the SEO Starter Kit.

Provides commands to inspect merged SEO data, generate page schema,
validate pages, import content into the database, and check status.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

console = Console()
app = typer.Typer(
    name="seo-kit",
    help="SEO Starter Kit -- merge SEO data, build Schema.org markup, and validate pages.",
    add_completion=False,
    no_args_is_help=True,
)

_LEVEL_STYLES = {
    "error": "[red]✘ error[/red]",
    "warning": "[yellow]⚠ warning[/yellow]",
    "info": "[cyan]ℹ info[/cyan]",
}


def _setup_logging(verbose: bool = False) -> None:
    """Configure logging level and format."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _run_async(coro):
    """Run an async coroutine from synchronous CLI context."""
    return asyncio.run(coro)


def _get_kit(config_path: str):
    """Lazy-import, initialise and return an SEOStarterKit instance."""
    from seo_starter.app import SEOStarterKit
    kit = SEOStarterKit(config_path=config_path)
    kit.initialize()
    return kit


def _load_yaml_file(path: Path) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise typer.BadParameter(str(path) + " must contain a mapping")
    return data


def _print_json(data: Any) -> None:
    console.print(Syntax(json.dumps(data, indent=2, ensure_ascii=False), "json"))


def _print_report(report: dict[str, Any], title: str) -> None:
    """Pretty-print a validation report using Rich."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Level", min_width=10)
    table.add_column("Field", style="cyan", min_width=15)
    table.add_column("Message", max_width=60)
    table.add_column("Suggestion", max_width=50)

    for finding in report["results"]:
        table.add_row(
            _LEVEL_STYLES.get(finding.level, finding.level),
            finding.field,
            finding.message,
            finding.suggestion or "",
        )

    console.print(table)
    summary = report["summary"]
    status = "[green]✔ valid[/green]" if summary["valid"] else "[red]✘ has errors[/red]"
    console.print(
        f"\n[bold]{summary['total']} findings[/bold]: "
        f"{summary['errors']} errors, {summary['warnings']} warnings, "
        f"{summary['info']} info -- {status}"
    )


ConfigOption = typer.Option(
    "config/settings.yaml", "--config", "-c", help="Path to settings.yaml."
)
VerboseOption = typer.Option(False, "--verbose", "-v", help="Enable debug logging.")


# ------------------------------------------------------------------
# merge
# ------------------------------------------------------------------
@app.command()
def merge(
    page_key: str = typer.Argument(..., help="Page key in the seo collection (e.g. contact)."),
    strict: bool = typer.Option(False, "--strict", help="Fail instead of using fallback metadata."),
    config: str = ConfigOption,
    verbose: bool = VerboseOption,
) -> None:
    """Show merged SEO metadata and schema blocks for a page."""
    _setup_logging(verbose)
    from seo_starter.errors import SEODataError

    kit = _get_kit(config)
    merger = kit.get_merger()
    if strict:
        try:
            result = _run_async(merger.load_seo_data(page_key))
        except SEODataError as exc:
            console.print(f"[red]✘ {type(exc).__name__}:[/red] {exc}")
            raise typer.Exit(code=1)
    else:
        result = _run_async(merger.merge_seo_data(page_key))

    console.print(Panel(f"[bold cyan]SEO data: {page_key}[/bold cyan]"))
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Field", style="cyan", min_width=15)
    table.add_column("Value", max_width=80)
    for field_name, value in result["metadata"].items():
        table.add_row(field_name, value)
    console.print(table)
    console.print(f"\n[bold]Schema blocks ({len(result['schemaData'])}):[/bold]")
    _print_json(result["schemaData"])


# ------------------------------------------------------------------
# schema
# ------------------------------------------------------------------
@app.command()
def schema(
    page_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="YAML file describing the page."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write JSON-LD to this file."),
    config: str = ConfigOption,
    verbose: bool = VerboseOption,
) -> None:
    """Generate Schema.org JSON-LD for a page description."""
    _setup_logging(verbose)
    from seo_starter.modules.schema import to_json_ld, validate_schema

    kit = _get_kit(config)
    page_data = _load_yaml_file(page_file)
    schemas = kit.generate_page_schema(page_data)

    invalid = [s.get("@type", "?") for s in schemas if not validate_schema(s)]
    if invalid:
        console.print(f"[yellow]⚠ Incomplete blocks: {', '.join(invalid)}[/yellow]")

    payload = to_json_ld(schemas, indent=2)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(payload, encoding="utf-8")
        console.print(f"[green]✔[/green] Wrote {len(schemas)} schema blocks to {output}")
    else:
        console.print(Syntax(payload, "json"))


# ------------------------------------------------------------------
# validate
# ------------------------------------------------------------------
@app.command()
def validate(
    page_key: str = typer.Argument(..., help="Page key in the seo collection."),
    content_file: Optional[Path] = typer.Option(
        None, "--content", exists=True, dir_okay=False, help="HTML file with the page content.",
    ),
    page_file: Optional[Path] = typer.Option(
        None, "--page", exists=True, dir_okay=False,
        help="YAML page description; its generated schema is validated too.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON."),
    config: str = ConfigOption,
    verbose: bool = VerboseOption,
) -> None:
    """Validate a page's SEO metadata, content, and schema markup."""
    _setup_logging(verbose)
    from seo_starter.modules.validation import format_validation_report

    kit = _get_kit(config)
    seo = _run_async(kit.merge_seo_data(page_key))
    schemas = list(seo["schemaData"])
    if page_file:
        schemas.extend(kit.generate_page_schema(_load_yaml_file(page_file)))

    page_data: dict[str, Any] = {"seo": seo["metadata"], "schemas": schemas}
    if content_file:
        page_data["content"] = content_file.read_text(encoding="utf-8")

    report = kit.validate_page(page_data)
    if as_json:
        _print_json({
            "summary": report["summary"],
            "results": [r.to_dict() for r in report["results"]],
        })
    elif verbose:
        console.print(format_validation_report(report))
    else:
        _print_report(report, title="Validation: " + page_key)

    if not report["summary"]["valid"]:
        raise typer.Exit(code=1)


# ------------------------------------------------------------------
# import-content
# ------------------------------------------------------------------
@app.command("import-content")
def import_content(
    directory: Optional[Path] = typer.Argument(None, help="Content directory (defaults to app.content_dir)."),
    config: str = ConfigOption,
    verbose: bool = VerboseOption,
) -> None:
    """Load a YAML/JSON content directory into the database store."""
    _setup_logging(verbose)
    from seo_starter.database import init_db
    from seo_starter.modules.content import DatabaseContentStore, FileContentStore

    kit = _get_kit(config)
    source_dir = directory or Path(kit.content_dir)
    if not source_dir.is_dir():
        console.print(f"[red]✘ Not a directory: {source_dir}[/red]")
        raise typer.Exit(code=1)

    db_cfg = kit.config_section("database")
    init_db(database_url=db_cfg.get("url"), echo=db_cfg.get("echo", False))
    count = DatabaseContentStore().import_directory(FileContentStore(source_dir))
    console.print(f"[green]✔[/green] Imported {count} content entries from {source_dir}")


# ------------------------------------------------------------------
# status
# ------------------------------------------------------------------
@app.command()
def status(
    config: str = ConfigOption,
    verbose: bool = VerboseOption,
) -> None:
    """Show configuration and content store health."""
    _setup_logging(verbose)
    kit = _get_kit(config)
    table = Table(title="SEO Starter Kit Status", show_header=True, header_style="bold magenta")
    table.add_column("Component", style="cyan", min_width=12)
    table.add_column("Status", min_width=10)
    table.add_column("Details", max_width=60)

    for component, info in kit.get_status().items():
        state = info.get("status", "unknown")
        if state == "ok":
            display = "[green]✔ ok[/green]"
        elif state == "warning":
            display = "[yellow]○ warning[/yellow]"
        else:
            display = "[red]✘ error[/red]"
        table.add_row(component, display, info.get("details", ""))
    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
