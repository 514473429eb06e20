"""Command-line interface for Cronsight."""

from datetime import datetime
from typing import Annotated, Optional

import typer

from cronsight.services.cron import parse
from cronsight.services.examples import CRON_EXAMPLES, format_occurrence

app = typer.Typer(
    name="cronsight",
    help="Explain 5-field cron expressions and preview when they fire",
    add_completion=False,
)


def _parse_now(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"Not an ISO 8601 timestamp: {value}", param_hint="--now")


@app.command(name="parse")
def parse_cmd(
    expression: Annotated[str, typer.Argument(help="Cron expression, quoted (e.g. '0 9 * * 1-5')")],
    count: Annotated[
        int,
        typer.Option("--count", "-n", min=1, max=100, help="Number of upcoming runs to show"),
    ] = 5,
    now: Annotated[
        Optional[str],
        typer.Option("--now", help="Reference time in ISO 8601 (defaults to the current time)"),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the full result as JSON"),
    ] = False,
) -> None:
    """Validate and describe a cron expression. Exits with 1 when it is invalid."""
    result = parse(expression, count=count, now=_parse_now(now))

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
        raise typer.Exit(0 if result.is_valid else 1)

    for field in result.fields:
        marker = "ok" if field.valid else "!!"
        detail = field.description if field.valid else field.error
        typer.echo(f"  [{marker}] {field.name:<13} {field.expression:<12} {detail}")

    if not result.is_valid:
        typer.echo(f"Error: {result.error}", err=True)
        raise typer.Exit(1)

    typer.echo(f"\n{result.description}\n")
    if not result.next_occurrences:
        typer.echo("No runs within the next year.")
    for run in result.next_occurrences:
        typer.echo(f"  {format_occurrence(run)}")


@app.command(name="examples")
def examples_cmd() -> None:
    """List common cron expressions."""
    for example in CRON_EXAMPLES:
        typer.echo(f"{example.expression:<16} {example.label:<24} {example.description}")


if __name__ == "__main__":
    app()
