"""Add transaction command."""

from pathlib import Path

import click
from walletbook.cli.account_resolution import resolve_account_or_exit
from walletbook.cli.error_handling import exit_on_domain_error
from walletbook.domain.account import AccountService
from walletbook.domain.entities import ALLOCATE_TO, TRANSFER_CATEGORY, TransactionDraft
from walletbook.domain.transaction import TransactionService
from walletbook.utils.amount_parser import parse_amount
from walletbook.utils.date_parser import parse_date


@click.command("add")
@click.option("--account", required=True, help="Account the money leaves or enters (name or ID)")
@click.option(
    "--date",
    default="today",
    show_default=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--amount", required=True, help="Transaction amount as a positive number (e.g., 150000)")
@click.option("--category", required=True, help="Category: Income, Expense, Transfer or another root category")
@click.option("--subcategory", help="Subcategory (e.g., 'Groceries', 'Withdraw cash from')")
@click.option("--description", required=True, help="Transaction description")
@click.option("--to", "destination", help="Destination account for transfers (name or ID)")
@click.option(
    "--receipt",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Receipt image or document to attach",
)
@click.pass_context
def add_transaction(
    ctx,
    account: str,
    date: str,
    amount: str,
    category: str,
    subcategory: str | None,
    description: str,
    destination: str | None,
    receipt: Path | None,
):
    """Record a transaction and update account balances.

    Amounts are always entered as positive numbers; the category decides
    whether money comes in or goes out. Transfers need --to, except
    "Withdraw cash from", which always moves money to your Cash account.

    Examples:
        walletbook add --account BCA --amount 50000 --category Expense --subcategory Groceries --description "Weekly shop"
        walletbook add --account BCA --amount 8000000 --category Income --subcategory Salary --description "June salary"
        walletbook add --account BCA --amount 1000000 --category Transfer --to "Emergency Fund" --description "Top up"
        walletbook add --account BCA --amount 300000 --category Transfer --subcategory "Withdraw cash from" --description "ATM"
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]
    account_service = AccountService(db, user_id)
    transaction_service = TransactionService(db, user_id, store=ctx.obj.get("store"))

    account_id = resolve_account_or_exit(ctx, account_service, account)
    destination_id = None
    if destination is not None:
        destination_id = resolve_account_or_exit(ctx, account_service, destination)

    try:
        txn_date = parse_date(date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    if subcategory is None and category == TRANSFER_CATEGORY:
        subcategory = ALLOCATE_TO

    draft = TransactionDraft(
        date=txn_date,
        description=description,
        category=category,
        subcategory=subcategory or "",
        amount=txn_amount,
        account_id=account_id,
        destination_account_id=destination_id,
    )

    with exit_on_domain_error(ctx):
        if receipt is not None:
            txn = transaction_service.create_transaction(
                draft, receipt_name=receipt.name, receipt_data=receipt.read_bytes()
            )
        else:
            txn = transaction_service.create_transaction(draft)

    click.echo(f"Created transaction {txn.id}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Amount: {txn.amount:,.2f}")
    click.echo(f"  Category: {txn.category}" + (f" > {txn.subcategory}" if txn.subcategory else ""))
    for acc_id in (txn.account_id, txn.destination_account_id):
        if acc_id is None:
            continue
        acc = account_service.get_account(acc_id)
        if acc is not None:
            click.echo(f"  {acc.name} balance: {acc.balance:,.2f}")
    if txn.receipt_url:
        click.echo(f"  Receipt: {txn.receipt_url}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
