"""Transaction management commands."""

import click
from walletbook.cli.account_resolution import account_label, resolve_account_or_exit
from walletbook.cli.error_handling import exit_on_domain_error
from walletbook.domain.account import AccountService
from walletbook.domain.classification import classify
from walletbook.domain.entities import TransactionType
from walletbook.domain.transaction import SORT_FIELDS, TransactionService
from walletbook.utils.amount_parser import parse_amount
from walletbook.utils.date_parser import parse_date


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--account", help="Account name or ID")
@click.option("--to", "destination", help="Destination account for transfers (name or ID)")
@click.option("--date", help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option("--amount", help="Transaction amount as a positive number")
@click.option("--category", help="Category label (e.g., 'Expense')")
@click.option("--subcategory", help="Subcategory label (e.g., 'Groceries')")
@click.option("--description", help="Transaction description")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    account: str | None,
    destination: str | None,
    date: str | None,
    amount: str | None,
    category: str | None,
    subcategory: str | None,
    description: str | None,
) -> None:
    """Update a transaction.

    Updates only the fields that are provided. Balances are corrected: the
    old effect is undone and the new one applied.

    Examples:
        walletbook transaction update 1 --amount 75000
        walletbook transaction update 1 --account "BCA" --subcategory "Groceries"
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]
    transaction_service = TransactionService(db, user_id)
    account_service = AccountService(db, user_id)

    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, account_service, account)

    destination_id = None
    if destination is not None:
        destination_id = resolve_account_or_exit(ctx, account_service, destination)

    txn_date = None
    if date is not None:
        try:
            txn_date = parse_date(date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    txn_amount = None
    if amount is not None:
        try:
            txn_amount = parse_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    with exit_on_domain_error(ctx):
        transaction_service.update_transaction(
            transaction_id=transaction_id,
            date=txn_date,
            description=description,
            category=category,
            subcategory=subcategory,
            amount=txn_amount,
            account_id=account_id,
            destination_account_id=destination_id,
        )
    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today', 'this month')")
@click.option("--category", help="Category label (e.g., 'Expense')")
@click.option("--type", "transaction_type", type=click.Choice([t.value for t in TransactionType]), help="Transaction type")
@click.option("--account", help="Account name or ID (as source or destination)")
@click.option("--search", help="Text to look for in descriptions")
@click.option("--sort", "sort_by", type=click.Choice(SORT_FIELDS), default="date", show_default=True, help="Sort field")
@click.option("--asc", "ascending", is_flag=True, help="Sort ascending instead of descending")
@click.option("--verbose", "-v", is_flag=True, help="Show all fields of each transaction")
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    category: str | None,
    transaction_type: str | None,
    account: str | None,
    search: str | None,
    sort_by: str,
    ascending: bool,
    verbose: bool,
):
    """View transactions with optional filters.

    Use --verbose to show every field, including receipts.
    Account can be specified by name or ID.
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]
    service = TransactionService(db, user_id)
    account_service = AccountService(db, user_id)

    start = None
    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    end = None
    if end_date:
        try:
            end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    account_id = None
    if account:
        account_id = resolve_account_or_exit(ctx, account_service, account)

    with exit_on_domain_error(ctx):
        transactions = service.list_transactions(
            account_id=account_id,
            category=category,
            transaction_type=transaction_type,
            start_date=start,
            end_date=end,
            search=search,
            sort_by=sort_by,
            ascending=ascending,
        )

    if not transactions:
        click.echo("No transactions found.")
        return

    accounts = {acc.id: acc for acc in account_service.list_accounts()}

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    if verbose:
        click.echo("=" * 100)
        for txn in transactions:
            click.echo(f"\nTransaction ID: {txn.id}")
            click.echo(f"  Date: {txn.date}")
            click.echo(f"  Amount: {txn.amount:,.2f}")
            click.echo(f"  Category: {txn.category}")
            if txn.subcategory:
                click.echo(f"  Subcategory: {txn.subcategory}")
            click.echo(f"  Account: {account_label(accounts, txn.account_id)} (ID: {txn.account_id})")
            if txn.destination_account_id is not None:
                click.echo(
                    f"  To: {account_label(accounts, txn.destination_account_id)} "
                    f"(ID: {txn.destination_account_id})"
                )
            click.echo(f"  Description: {txn.description}")
            if txn.receipt_url:
                click.echo(f"  Receipt: {txn.receipt_url}")
            if txn.struck:
                click.echo("  Struck: yes")
            click.echo("-" * 100)
    else:
        click.echo("-" * 100)
        click.echo(
            f"{'ID':<6} {'Date':<12} {'Amount':>15}  {'Account':<18} {'Category':<24} {'Description':<22}"
        )
        click.echo("-" * 100)
        for txn in transactions:
            account_name = account_label(accounts, txn.account_id)
            if txn.destination_account_id is not None:
                account_name = f"{account_name} > {account_label(accounts, txn.destination_account_id)}"
            category_name = txn.category + (f" > {txn.subcategory}" if txn.subcategory else "")
            marker = "~" if txn.struck else " "
            click.echo(
                f"{txn.id:<6} {str(txn.date):<12} {txn.amount:>15,.2f}{marker} {account_name[:18]:<18} "
                f"{category_name[:24]:<24} {txn.description[:22]:<22}"
            )

    total_expenses = sum(-txn.amount for txn in transactions if classify(txn.category) == TransactionType.EXPENSE)
    total_income = sum(txn.amount for txn in transactions if classify(txn.category) == TransactionType.INCOME)
    click.echo("-" * 100)
    click.echo(
        f"{'TOTAL':<6} Expenses: {total_expenses:,.2f} | "
        f"Income: {total_income:,.2f} | Count: {len(transactions)}"
    )


@transaction_group.command("strike")
@click.argument("transaction_id", type=int)
@click.pass_context
def strike_transaction(ctx, transaction_id: int) -> None:
    """Toggle the struck-through marker on a transaction.

    Striking is cosmetic and leaves balances untouched.
    """
    service = TransactionService(ctx.obj["db"], ctx.obj["user_id"])
    with exit_on_domain_error(ctx):
        txn = service.toggle_struck(transaction_id)
    click.echo(f"Transaction {transaction_id} {'struck' if txn.struck else 'unstruck'}")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool) -> None:
    """Delete a transaction and undo its effect on balances.

    Examples:
        walletbook transaction delete 1
    """
    transaction_service = TransactionService(ctx.obj["db"], ctx.obj["user_id"])

    txn = transaction_service.get_transaction(transaction_id)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Are you sure you want to delete transaction {transaction_id}?"):
        click.echo("Deletion cancelled.")
        return

    with exit_on_domain_error(ctx):
        transaction_service.delete_transaction(transaction_id)
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
