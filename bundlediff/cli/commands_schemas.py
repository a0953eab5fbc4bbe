"""CLI commands for JSON schema export."""

from __future__ import annotations

import click
from rich.console import Console

console = Console()


@click.group("schemas")
def schemas_group() -> None:
    """JSON schema operations."""


@schemas_group.command("export")
@click.argument("out_dir", type=click.Path(file_okay=False))
def schemas_export(out_dir: str) -> None:
    """Write every bundlediff JSON schema to OUT_DIR."""
    from bundlediff.schemas import export_schemas

    written = export_schemas(out_dir)
    for fp in written:
        console.print(f"  {fp}")
    console.print(f"[green]✓ Exported {len(written)} schema(s) to {out_dir}/[/green]")
