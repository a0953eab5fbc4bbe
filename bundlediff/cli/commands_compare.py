"""CLI command for report comparison."""

from __future__ import annotations

import json
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from bundlediff.core.caching import sort_by_delta, sort_by_size
from bundlediff.core.diff import AssetDiff

console = Console()
_err_console = Console(stderr=True)


def _fmt_bytes(n: float, signed: bool = False) -> str:
    kb = n / 1000
    return f"{kb:+,.2f} kB" if signed else f"{kb:,.2f} kB"


def _fmt_ratio(ratio: float) -> str:
    return f"{ratio:+.2%}"


def _delta_table(title: str, assets: list[AssetDiff], *, with_budget: bool = False) -> Table:
    table = Table(title=title)
    table.add_column("Asset", style="cyan", no_wrap=True)
    table.add_column("Base size", justify="right")
    table.add_column("Head size", justify="right")
    table.add_column("Delta ▾", justify="right")
    table.add_column("Delta %", justify="right")
    if with_budget:
        table.add_column("Budget", justify="right", style="red")

    for a in sort_by_delta(assets):
        row = [a.name, _fmt_bytes(a.base_size), _fmt_bytes(a.head_size),
               _fmt_bytes(a.delta, signed=True), _fmt_ratio(a.ratio)]
        if with_budget:
            row.append(f"{a.budget}%")
        table.add_row(*row)
    return table


def _size_table(title: str, assets: list[AssetDiff], side: str) -> Table:
    table = Table(title=title)
    table.add_column("Asset", style="cyan", no_wrap=True)
    table.add_column("Size ▾", justify="right")
    for a in sort_by_size(assets, side):  # type: ignore[arg-type]
        table.add_row(a.name, _fmt_bytes(a.head_size if side == "head" else a.base_size))
    return table


def _print_text(result: dict) -> None:
    chunks = {
        key: [
            AssetDiff(
                name=a["name"], base_size=a["baseSize"], head_size=a["headSize"],
                delta=a["delta"], ratio=a["ratio"], budget=a.get("budget"),
            )
            for a in entries
        ]
        for key, entries in result["diff"]["chunks"].items()
    }

    if chunks["violations"]:
        console.print(_delta_table(
            f"🚨 {len(chunks['violations'])} bundle(s) exceeded their budget",
            chunks["violations"], with_budget=True,
        ))
    if chunks["bigger"]:
        console.print(_delta_table(f"⚠️ {len(chunks['bigger'])} bundle(s) got bigger", chunks["bigger"]))
    if chunks["smaller"]:
        console.print(_delta_table(f"🎉 {len(chunks['smaller'])} bundle(s) got smaller", chunks["smaller"]))
    if chunks["added"]:
        console.print(_size_table(f"🆕 {len(chunks['added'])} bundle(s) added", chunks["added"], "head"))
    if chunks["removed"]:
        console.print(_size_table(f"🗑️ {len(chunks['removed'])} bundle(s) removed", chunks["removed"], "base"))
    if not any(chunks[k] for k in ("bigger", "smaller", "added", "removed")):
        console.print("[green]✓ No significant bundle changes[/green]")
    if chunks["negligible"]:
        console.print(_delta_table(
            f"{len(chunks['negligible'])} bundle(s) with negligible changes", chunks["negligible"],
        ))

    total_bytes = result["diff"]["totalBytes"]
    downloaded = Table(title="Total downloaded")
    downloaded.add_column("Base", justify="right")
    downloaded.add_column("Head", justify="right")
    downloaded.add_column("Delta", justify="right")
    downloaded.add_row(
        _fmt_bytes(total_bytes["base"]),
        _fmt_bytes(total_bytes["head"]),
        _fmt_bytes(total_bytes["head"] - total_bytes["base"], signed=True),
    )
    console.print(downloaded)

    summary = result["summary"]
    totals = Table(title="Summary")
    totals.add_column("")
    totals.add_column("Delta", justify="right")
    for key in ("bigger", "smaller", "added", "removed"):
        totals.add_row(key.capitalize(), _fmt_bytes(summary[key], signed=True))
    totals.add_row("[bold]Total[/bold]", f"[bold]{_fmt_bytes(summary['total'], signed=True)}[/bold]")
    console.print(totals)

    caching = result["caching"]
    fractions = caching["fractions"]
    if result["affectsLongTermCaching"]:
        console.print(
            f"\n[yellow]{caching['invalidatedCount']} chunk(s) will be invalidated from "
            f"long-term caching, and {caching['addedCount']} chunk(s) will be added.[/yellow]"
        )
    else:
        console.print("\n[green]✓ Long-term caching is unaffected[/green]")

    cache_table = Table(title="Bytes to download after deploy")
    cache_table.add_column("")
    cache_table.add_column("Bytes", justify="right")
    cache_table.add_column("% of total", justify="right")
    cache_table.add_row("Invalidated", _fmt_bytes(caching["invalidatedBytes"]), f"{fractions['invalidated']:.2%}")
    cache_table.add_row("Added", _fmt_bytes(caching["addedBytes"]), f"{fractions['added']:.2%}")
    cache_table.add_row("[bold]Total uncached[/bold]", _fmt_bytes(caching["uncachedBytes"]), f"{fractions['uncached']:.2%}")
    cache_table.add_row("[bold]Total cached[/bold]", _fmt_bytes(caching["cachedBytes"]), f"{fractions['cached']:.2%}")
    cache_table.add_row("[bold]Total[/bold]", _fmt_bytes(caching["totalBytes"]), "100.00%" if caching["totalBytes"] else "0.00%")
    console.print(cache_table)


@click.command("compare")
@click.argument("base_report", type=click.Path(exists=True, dir_okay=False))
@click.argument("head_report", type=click.Path(exists=True, dir_okay=False))
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False), default=None,
              help="JSON options file (percentChangeMinimum, sizeChangeMinimum, bundleBudgets).")
@click.option("--percent-min", "percent_min", type=float, default=None,
              help="Minimum relative change as a fraction (0.05 = 5%).")
@click.option("--size-min", "size_min", type=float, default=None,
              help="Minimum absolute change in bytes.")
@click.option("--no-size-min", "no_size_min", is_flag=True, default=False,
              help="Disable the absolute change test, even if the config file sets one.")
@click.option("--budget", "-b", "budgets", multiple=True, metavar="NAME=PCT",
              help="Growth budget for one asset, e.g. app.js=10. Repeatable.")
@click.option("--format", "-f", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format: text (default) or json.")
@click.option("--out", "-o", "output", type=click.Path(dir_okay=False), default=None,
              help="Also write the JSON result to this file.")
@click.option("--fail-on-violation", is_flag=True, default=False,
              help="Exit with status 1 if any bundle budget is exceeded.")
def compare(
    base_report: str,
    head_report: str,
    config_path: str | None,
    percent_min: float | None,
    size_min: float | None,
    no_size_min: bool,
    budgets: tuple[str, ...],
    output_format: str,
    output: str | None,
    fail_on_violation: bool,
) -> None:
    """Compare the bundle analyzer reports of a base and a head build."""
    from bundlediff.api import compare_reports
    from bundlediff.config import ConfigError, DiffOptions, load_options, parse_budget_arg
    from bundlediff.core.report import ReportFormatError

    # In JSON mode every human-readable message goes to stderr so stdout is
    # pure, machine-parseable JSON.
    out = _err_console if output_format == "json" else console

    out.print("[bold blue]Bundle Size Comparison[/bold blue]")
    out.print(f"  Base: {escape(base_report)}")
    out.print(f"  Head: {escape(head_report)}")

    try:
        options = load_options(config_path) if config_path else DiffOptions()
        if no_size_min and size_min is not None:
            raise ConfigError("--size-min and --no-size-min are mutually exclusive")
        overrides: dict = {}
        if no_size_min:
            overrides["size_change_minimum"] = None
        elif size_min is not None:
            overrides["size_change_minimum"] = size_min
        options = options.replace(
            percent_change_minimum=percent_min,
            extra_budgets=[parse_budget_arg(b) for b in budgets],
            **overrides,
        )
        result = compare_reports(base_report, head_report, options, output=output)
    except (ConfigError, ReportFormatError, OSError) as exc:
        _err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(1)

    if output_format == "json":
        click.echo(json.dumps(result, indent=2))  # stdout only
    else:
        _print_text(result)
        if output:
            console.print(f"\n[green]Result written to {output}[/green]")

    violations = result["diff"]["chunks"]["violations"]
    if fail_on_violation and violations:
        out.print(f"[red]{len(violations)} bundle budget violation(s).[/red]")
        sys.exit(1)
