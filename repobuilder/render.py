"""
Rendering functions for repobuilder output.

Services return data; this module makes it human-readable.
"""

from rich.table import Table
from rich.console import Console
from rich import box
from typing import List

from .domain.operation import PackageResult, PackageStatus, RunSummary

console = Console(stderr=True)

STATUS_STYLES = {
    PackageStatus.PUBLISHED: "green",
    PackageStatus.UP_TO_DATE: "dim",
    PackageStatus.FAILED: "red",
    PackageStatus.NO_ARTIFACTS: "yellow",
}


def render_run_summary(summary: RunSummary) -> None:
    """
    Render a run's package results as a table followed by the totals.

    Args:
        summary: RunSummary collected by the pipeline
    """
    if not summary.details:
        console.print("[yellow]No packages processed.[/yellow]")
        return

    table = Table(
        title="Build results",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta"
    )
    table.add_column("Package")
    table.add_column("Status")
    table.add_column("Artifacts", justify="right")
    table.add_column("Error")

    for result in summary.details:
        table.add_row(*_result_row(result))

    console.print(table)
    console.print(
        f"[bold]{summary.total}[/bold] packages: "
        f"[green]{summary.published} published[/green], "
        f"{summary.up_to_date} up to date, "
        f"[red]{summary.failed} failed[/red], "
        f"{summary.no_artifacts} without artifacts"
    )


def _result_row(result: PackageResult) -> List[str]:
    style = STATUS_STYLES.get(result.status, "")
    status = f"[{style}]{result.status.value}[/{style}]" if style else result.status.value
    return [
        result.package,
        status,
        str(len(result.artifacts)),
        result.error or "",
    ]
