"""Summary commands."""

from decimal import Decimal

import click
from inkbook.cli.date_filters import period_options, resolve_cli_date_range
from inkbook.cli.display import format_money
from inkbook.domain.entities import TransactionType
from inkbook.domain.transaction import TransactionService


def _display_breakdown(title: str, breakdown) -> None:
    if not breakdown:
        return
    click.echo(title)
    click.echo("*" * 80)
    for item in breakdown:
        share = f"{item.percentage:.1f}%"
        click.echo(
            f"    {item.category_name:<38} {item.count:>5}x {share:>8} {format_money(item.total):>20}"
        )
    click.echo("-" * 80)
    subtotal = sum((item.total for item in breakdown), Decimal("0"))
    click.echo(f"{title + ' Subtotal':<50} {format_money(subtotal):>29}")
    click.echo("=" * 80)
    click.echo()


@click.command("summary")
@period_options
@click.pass_context
def summary(ctx, start_date: str | None, end_date: str | None, periods: dict[str, bool]):
    """Show income, expenses and balance with a per-category breakdown."""
    service = TransactionService(ctx.obj["db"])

    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=periods
    )

    totals = service.get_summary(start_date=start, end_date=end)
    if totals.transaction_count == 0:
        click.echo("No transactions found.")
        return

    click.echo("\nCategory Summary:")
    click.echo("-" * 80)
    click.echo(f"{'Category':<42} {'Count':>6} {'Share':>8} {'Total':>20}")
    click.echo("-" * 80)

    _display_breakdown(
        "Income", service.get_category_breakdown(start, end, TransactionType.INCOME)
    )
    _display_breakdown(
        "Expense", service.get_category_breakdown(start, end, TransactionType.EXPENSE)
    )

    click.echo(f"{'Total income':<50} {format_money(totals.total_income):>29}")
    click.echo(f"{'Total expense':<50} {format_money(totals.total_expense):>29}")
    click.echo(f"{'BALANCE':<50} {format_money(totals.balance):>29}")


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)
