"""Account management commands."""

import click
from walletbook.cli.account_resolution import resolve_account_or_exit
from walletbook.cli.error_handling import exit_on_domain_error
from walletbook.domain.account import ACCOUNT_TYPES, AccountService
from walletbook.utils.amount_parser import parse_amount


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES),
    default="Bank Account",
    show_default=True,
    help="Kind of account",
)
@click.option("--balance", default="0", help="Opening balance")
@click.option("--savings", is_flag=True, help="Count this account's balance as savings")
@click.option("--color", default="blue", show_default=True, help="Display color tag")
@click.pass_context
def create_account(ctx, name: str, account_type: str, balance: str, savings: bool, color: str):
    """Create a new account.

    Examples:
        walletbook account create "BCA"
        walletbook account create "Wallet" --type Cash --balance 200000
        walletbook account create "Emergency Fund" --savings
    """
    service = AccountService(ctx.obj["db"], ctx.obj["user_id"])

    try:
        opening = parse_amount(balance)
    except ValueError as e:
        click.echo(f"Error: Invalid balance: {e}", err=True)
        ctx.exit(1)

    with exit_on_domain_error(ctx):
        account = service.create_account(
            name=name,
            account_type=account_type,
            balance=opening,
            is_savings=savings,
            color=color,
        )
    click.echo(f"Created account '{account.name}' (ID: {account.id})")


@account_group.command("list")
@click.option("--type", "account_type", type=click.Choice(ACCOUNT_TYPES), help="Only show accounts of this kind")
@click.pass_context
def list_accounts(ctx, account_type: str | None):
    """List all accounts with their balances."""
    service = AccountService(ctx.obj["db"], ctx.obj["user_id"])

    accounts = service.list_accounts(account_type=account_type)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 72)
    for acc in accounts:
        savings = " (savings)" if acc.is_savings else ""
        click.echo(f"ID: {acc.id:3d} | {acc.name:20s} | {acc.account_type:12s} | {acc.balance:>15,.2f}{savings}")


@account_group.command("show")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def show_account(ctx, account: str):
    """Show an account with its income and expense statistics.

    ACCOUNT can be an account name or ID.
    """
    service = AccountService(ctx.obj["db"], ctx.obj["user_id"])
    account_id = resolve_account_or_exit(ctx, service, account)

    with exit_on_domain_error(ctx):
        acc = service.require_account(account_id)
        stats = service.get_account_stats(account_id)

    click.echo(f"{acc.name} ({acc.account_type})")
    click.echo(f"  Balance: {acc.balance:,.2f}")
    click.echo(f"  Savings: {'yes' if acc.is_savings else 'no'}")
    click.echo(f"  Income: {stats.income:,.2f}")
    click.echo(f"  Expense: {stats.expense:,.2f}")
    click.echo(f"  Transactions: {stats.transaction_count}")


@account_group.command("rename")
@click.argument("account", metavar="ACCOUNT")
@click.argument("new_name", metavar="NEW_NAME")
@click.pass_context
def rename_account(ctx, account: str, new_name: str) -> None:
    """Rename an account.

    ACCOUNT can be an account name or ID. Transactions follow the account
    automatically.

    Examples:
        walletbook account rename "BCA" "BCA Payroll"
        walletbook account rename 1 "Main Account"
    """
    service = AccountService(ctx.obj["db"], ctx.obj["user_id"])
    account_id = resolve_account_or_exit(ctx, service, account)

    with exit_on_domain_error(ctx):
        service.rename_account(account_id=account_id, name=new_name)
    click.echo(f"Renamed account to '{new_name}'")


@account_group.command("update")
@click.argument("account", metavar="ACCOUNT")
@click.option("--type", "account_type", type=click.Choice(ACCOUNT_TYPES), help="Kind of account")
@click.option("--savings/--no-savings", default=None, help="Count the balance as savings")
@click.option("--color", help="Display color tag")
@click.pass_context
def update_account(ctx, account: str, account_type: str | None, savings: bool | None, color: str | None) -> None:
    """Change an account's type, savings flag or color."""
    service = AccountService(ctx.obj["db"], ctx.obj["user_id"])
    account_id = resolve_account_or_exit(ctx, service, account)

    with exit_on_domain_error(ctx):
        acc = service.update_account(account_id, account_type=account_type, is_savings=savings, color=color)
    click.echo(f"Updated account '{acc.name}'")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account name or ID.

    Transactions recorded against the account are kept and show the
    account as "Unknown" afterwards.

    Examples:
        walletbook account delete "Old Wallet"
        walletbook account delete 3 --yes
    """
    service = AccountService(ctx.obj["db"], ctx.obj["user_id"])
    account_id = resolve_account_or_exit(ctx, service, account)
    account_obj = service.get_account(account_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    with exit_on_domain_error(ctx):
        service.delete_account(account_id)
    click.echo(f"Deleted account '{account_obj.name}'")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
