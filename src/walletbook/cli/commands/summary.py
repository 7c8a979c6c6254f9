"""Summary commands."""

import click
from walletbook.cli.error_handling import exit_on_domain_error
from walletbook.domain.account import AccountService
from walletbook.domain.entities import Period
from walletbook.domain.summary import SummaryService
from walletbook.utils.date_parser import parse_date


@click.command("summary")
@click.option(
    "--period",
    type=click.Choice([p.value for p in Period]),
    default=Period.MONTHLY.value,
    show_default=True,
    help="Aggregation period",
)
@click.option("--date", "reference", help="Anchor date of the period (default: today)")
@click.option(
    "--month-start",
    type=click.IntRange(1, 31),
    help="Day a monthly period starts on (default: payroll date from settings)",
)
@click.option("--accounts", "show_accounts", is_flag=True, help="Also show per-account income and expense")
@click.pass_context
def summary(ctx, period: str, reference: str | None, month_start: int | None, show_accounts: bool):
    """Show income, expenses and balances for a period.

    Periods run from their start (today, last Sunday, the month start or
    January 1) up to now. Transfers are not counted as income or expense.

    Examples:
        walletbook summary
        walletbook summary --period weekly
        walletbook summary --period monthly --date 2024-06-15 --month-start 25
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]
    service = SummaryService(db, user_id)

    ref_date = None
    if reference:
        try:
            ref_date = parse_date(reference)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    with exit_on_domain_error(ctx):
        result = service.dashboard(period=period, reference=ref_date, month_start_day=month_start)

    click.echo(f"\nSummary ({result.period.value}, since {result.start_date}):")
    click.echo("-" * 50)
    click.echo(f"{'Income':<20} {result.totals.income_total:>25,.2f}")
    click.echo(f"{'Expenses':<20} {result.totals.expense_total:>25,.2f}")
    click.echo("-" * 50)
    click.echo(f"{'Total balance':<20} {result.balances.total_balance:>25,.2f}")
    click.echo(f"{'Savings':<20} {result.balances.savings_balance:>25,.2f}")
    click.echo(f"{'Daily balance':<20} {result.balances.daily_balance:>25,.2f}")

    if show_accounts and result.account_stats:
        accounts = {acc.id: acc for acc in AccountService(db, user_id).list_accounts()}
        click.echo("\nAccounts (all time):")
        click.echo("-" * 70)
        for account_id, stats in result.account_stats.items():
            name = accounts[account_id].name if account_id in accounts else "Unknown"
            click.echo(
                f"{name:<20} In: {stats.income:>15,.2f}  Out: {stats.expense:>15,.2f}  "
                f"({stats.transaction_count} transactions)"
            )


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)
