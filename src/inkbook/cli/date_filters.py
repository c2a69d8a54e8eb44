"""CLI helpers for date range resolution."""

from datetime import date

import click

from inkbook.utils.date_parser import get_date_range, parse_date

PERIODS = ["this-month", "this-year", "this-week", "last-month", "last-year", "last-week"]


def period_options(command):
    """Add --start-date, --end-date and one flag per named period to a command.

    The flags arrive in the command as a ``periods`` dict keyed by period name.
    """

    def collect(ctx, param, value):
        ctx.params.setdefault("periods", {})[param.name.replace("_", "-")] = value
        return value

    for period in reversed(PERIODS):
        label = period.replace("-", " ")
        command = click.option(
            f"--{period}",
            is_flag=True,
            expose_value=False,
            callback=collect,
            help=f"Filter to {label}",
        )(command)
    command = click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")(command)
    command = click.option(
        "--start-date", help="Start date (YYYY-MM-DD or relative like 'this month')"
    )(command)
    return command


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    default_range: tuple[date, date] | None = None,
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from period flags or explicit dates."""
    chosen = [period for period, is_set in period_flags.items() if is_set]
    flags = ", ".join(f"--{period}" for period in PERIODS)

    if len(chosen) > 1:
        click.echo(f"Error: Only one period option ({flags}) can be specified at a time.", err=True)
        ctx.exit(1)

    if chosen and (start_date or end_date):
        click.echo(
            "Error: Period options cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if chosen:
        return get_date_range(chosen[0])

    start = None
    end = None
    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    if end_date:
        try:
            end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    if start is None and end is None and default_range is not None:
        start, end = default_range

    if start is not None and end is not None and start > end:
        click.echo("Error: Start date must not be after end date.", err=True)
        ctx.exit(1)

    return start, end
