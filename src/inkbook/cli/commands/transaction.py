"""Transaction management commands."""

from datetime import datetime

import click
from inkbook.cli.date_filters import period_options, resolve_cli_date_range
from inkbook.cli.display import format_money
from inkbook.cli.error_handling import handle_domain_error
from inkbook.domain.category import CategoryService
from inkbook.domain.entities import TransactionType
from inkbook.domain.errors import DomainError
from inkbook.domain.transaction import TransactionService
from inkbook.utils.amount_parser import parse_amount
from inkbook.utils.date_parser import parse_date

TYPE_CHOICES = [t.value for t in TransactionType]


def _resolve_category_or_exit(ctx, category_service: CategoryService, category: str, transaction_type: str) -> int:
    """Resolve a category given by ID or by name within the transaction type."""
    if category.strip().isdigit():
        try:
            return category_service.require_category(int(category)).id
        except DomainError as e:
            handle_domain_error(ctx, e)

    found = category_service.get_category_by_name(category.strip(), transaction_type)
    if found is None:
        click.echo(f"Error: {transaction_type.capitalize()} category '{category}' not found", err=True)
        ctx.exit(1)
    return found.id


def _parse_booking_date_or_exit(ctx, value: str) -> datetime:
    try:
        return datetime.combine(parse_date(value), datetime.min.time())
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)


def _parse_amount_or_exit(ctx, value: str):
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)


@click.group()
def transaction_group():
    """Manage the studio ledger."""
    pass


@transaction_group.command("add")
@click.option("--type", "transaction_type", type=click.Choice(TYPE_CHOICES), required=True, help="income or expense")
@click.option("--amount", required=True, help="Amount (e.g., 120 or 'R$ 1.250,00')")
@click.option("--description", required=True, help="Description")
@click.option("--category", required=True, help="Category name or ID")
@click.option("--date", "date_str", default="today", help="Booking date (default: today)")
@click.pass_context
def add_transaction(ctx, transaction_type: str, amount: str, description: str, category: str, date_str: str):
    """Record a manual income or expense.

    Examples:
        inkbook transaction add --type expense --amount 180 --description "Tintas pretas" --category Tintas
        inkbook transaction add --type income --amount 90 --description "Piercing" --category Outros --date yesterday
    """
    db = ctx.obj["db"]
    service = TransactionService(db)

    category_id = _resolve_category_or_exit(ctx, CategoryService(db), category, transaction_type)
    txn_amount = _parse_amount_or_exit(ctx, amount)
    booking_date = _parse_booking_date_or_exit(ctx, date_str)

    try:
        transaction_id = service.create_transaction(
            transaction_type=transaction_type,
            amount=txn_amount,
            description=description,
            date=booking_date,
            category_id=category_id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {transaction_id}")


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--type", "transaction_type", type=click.Choice(TYPE_CHOICES), help="income or expense")
@click.option("--amount", help="Amount")
@click.option("--description", help="Description")
@click.option("--category", help="Category name or ID")
@click.option("--date", "date_str", help="Booking date")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    transaction_type: str | None,
    amount: str | None,
    description: str | None,
    category: str | None,
    date_str: str | None,
) -> None:
    """Update a manual transaction.

    Updates only the fields that are provided. Entries booked automatically
    from appointments cannot be edited.
    """
    db = ctx.obj["db"]
    service = TransactionService(db)

    try:
        current = service.require_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    category_id = None
    if category is not None:
        lookup_type = transaction_type or current.transaction_type.value
        category_id = _resolve_category_or_exit(ctx, CategoryService(db), category, lookup_type)

    try:
        service.update_transaction(
            transaction_id=transaction_id,
            transaction_type=transaction_type,
            amount=_parse_amount_or_exit(ctx, amount) if amount is not None else None,
            description=description,
            date=_parse_booking_date_or_exit(ctx, date_str) if date_str is not None else None,
            category_id=category_id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.pass_context
def delete_transaction(ctx, transaction_id: int):
    """Delete a manual transaction."""
    service = TransactionService(ctx.obj["db"])
    try:
        service.delete_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {transaction_id}")


@transaction_group.command("list")
@period_options
@click.option("--type", "transaction_type", type=click.Choice(TYPE_CHOICES), help="Only income or expense")
@click.option("--category", help="Category name or ID (requires --type when given by name)")
@click.option("--appointment", "appointment_id", type=int, help="Only entries of this appointment")
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    periods: dict[str, bool],
    transaction_type: str | None,
    category: str | None,
    appointment_id: int | None,
):
    """List transactions, newest first."""
    db = ctx.obj["db"]
    service = TransactionService(db)
    category_service = CategoryService(db)

    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=periods
    )

    category_id = None
    if category is not None:
        if transaction_type is None and not category.strip().isdigit():
            click.echo("Error: --type is required when --category is a name", err=True)
            ctx.exit(1)
        category_id = _resolve_category_or_exit(ctx, category_service, category, transaction_type)

    transactions = service.list_transactions(
        start_date=start,
        end_date=end,
        transaction_type=transaction_type,
        category_id=category_id,
        appointment_id=appointment_id,
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    names = {c.id: c.name for c in category_service.list_categories()}
    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 110)
    click.echo(f"{'ID':<5} {'Date':<12} {'Type':<8} {'Amount':>14}  {'Category':<20} {'Description':<40}")
    click.echo("-" * 110)
    for txn in transactions:
        marker = " (auto)" if txn.is_automatic else ""
        click.echo(
            f"{txn.id:<5} {txn.date:%Y-%m-%d}   {txn.transaction_type.value:<8} "
            f"{format_money(txn.amount):>14}  {names.get(txn.category_id, '')[:20]:<20} "
            f"{txn.description[:40]}{marker}"
        )


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
