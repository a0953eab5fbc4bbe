"""``bundlediff validate``: check JSON inputs against bundlediff schemas."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from bundlediff.cli.validation import load_json_file
from bundlediff.schemas import SCHEMAS, validate_data

logger = logging.getLogger("bundlediff.cli")


@click.command("validate")
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--schema", "-s", "schema_name", type=click.Choice(sorted(SCHEMAS)), default="report",
              help="Schema to validate against (default: report).")
@click.option("--format", "fmt", type=click.Choice(["table", "json"]), default="table",
              help="Output format.")
@click.option("--strict", is_flag=True, default=False,
              help="Exit with non-zero status if any file is invalid.")
def validate(files: tuple[str, ...], schema_name: str, fmt: str, strict: bool) -> None:
    """Validate bundle reports (or option files) against a bundlediff schema."""
    err_console = Console(stderr=True)

    results: list[dict[str, object]] = []
    total_errors = 0
    for filepath in files:
        errs = validate_data(schema_name, load_json_file(filepath))
        total_errors += len(errs)
        results.append({
            "file": filepath,
            "schema": schema_name,
            "status": "invalid" if errs else "valid",
            "errors": errs,
        })
        logger.debug("validated %s against %s: %d error(s)", filepath, schema_name, len(errs))

    if fmt == "json":
        click.echo(json.dumps({"results": results, "total_errors": total_errors}, indent=2))
    else:
        table = Table(title=f"Validation ({schema_name} schema)")
        table.add_column("File", style="cyan")
        table.add_column("Status")
        table.add_column("Errors", style="red")

        for r in results:
            errors: list[str] = r["errors"]  # type: ignore[assignment]
            status_style = "[green]valid[/green]" if r["status"] == "valid" else "[red]INVALID[/red]"
            err_text = "\n".join(errors[:3])
            if len(errors) > 3:
                err_text += f"\n... +{len(errors) - 3} more"
            table.add_row(Path(str(r["file"])).name, status_style, err_text)

        err_console.print(table)
        if total_errors:
            err_console.print(f"\n[red]{total_errors} validation error(s) found.[/red]")
        else:
            err_console.print("\n[green]All files are valid.[/green]")

    if strict and total_errors:
        raise SystemExit(1)
