"""Budget commands."""

import click
from walletbook.cli.error_handling import exit_on_domain_error
from walletbook.domain.budget import BudgetService
from walletbook.domain.entities import BudgetState
from walletbook.utils.amount_parser import parse_amount
from walletbook.utils.date_parser import parse_date

STATE_COLORS = {
    BudgetState.OK: "green",
    BudgetState.WARNING: "yellow",
    BudgetState.OVER: "red",
}


def _parse_amount_or_exit(ctx, amount: str):
    try:
        return parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)


@click.group()
def budget_group():
    """Manage monthly budgets."""
    pass


@budget_group.command("create")
@click.argument("subcategory")
@click.argument("amount")
@click.pass_context
def create_budget(ctx, subcategory: str, amount: str):
    """Create a monthly budget for an expense subcategory.

    Examples:
        walletbook budget create Groceries 1500000
    """
    service = BudgetService(ctx.obj["db"], ctx.obj["user_id"])
    limit = _parse_amount_or_exit(ctx, amount)

    with exit_on_domain_error(ctx):
        budget = service.create_budget(subcategory=subcategory, amount=limit)
    click.echo(f"Created budget for '{budget.subcategory}' of {budget.amount:,.2f} (ID: {budget.id})")


@budget_group.command("list")
@click.option("--date", "reference", help="Measure spending in the month of this date (default: today)")
@click.pass_context
def list_budgets(ctx, reference: str | None):
    """Show budgets with this month's spending."""
    service = BudgetService(ctx.obj["db"], ctx.obj["user_id"])

    ref_date = None
    if reference:
        try:
            ref_date = parse_date(reference)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    statuses = service.budget_statuses(reference=ref_date)
    if not statuses:
        click.echo("No budgets found.")
        return

    click.echo("\nBudgets:")
    click.echo("-" * 90)
    click.echo(f"{'ID':<5} {'Subcategory':<22} {'Budget':>14} {'Spent':>14} {'Remaining':>14} {'Used':>7}")
    click.echo("-" * 90)
    for status in statuses:
        budget = status.budget
        used = click.style(f"{status.percentage:6.1f}%", fg=STATE_COLORS[status.status])
        click.echo(
            f"{budget.id:<5} {budget.subcategory[:22]:<22} {budget.amount:>14,.2f} "
            f"{status.spent:>14,.2f} {status.remaining:>14,.2f} {used} {status.status.value}"
        )


@budget_group.command("update")
@click.argument("budget_id", type=int)
@click.option("--subcategory", help="Expense subcategory")
@click.option("--amount", help="Monthly limit")
@click.pass_context
def update_budget(ctx, budget_id: int, subcategory: str | None, amount: str | None):
    """Update a budget; it then covers the current month."""
    service = BudgetService(ctx.obj["db"], ctx.obj["user_id"])
    limit = _parse_amount_or_exit(ctx, amount) if amount is not None else None

    with exit_on_domain_error(ctx):
        service.update_budget(budget_id, subcategory=subcategory, amount=limit)
    click.echo(f"Updated budget {budget_id}")


@budget_group.command("delete")
@click.argument("budget_id", type=int)
@click.pass_context
def delete_budget(ctx, budget_id: int):
    """Delete a budget."""
    service = BudgetService(ctx.obj["db"], ctx.obj["user_id"])

    with exit_on_domain_error(ctx):
        service.delete_budget(budget_id)
    click.echo(f"Deleted budget {budget_id}")


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group, name="budget")
