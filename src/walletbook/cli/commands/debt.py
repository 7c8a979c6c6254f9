"""Debt commands."""

import click
from walletbook.cli.error_handling import exit_on_domain_error
from walletbook.domain.debt import DebtService, progress_percentage
from walletbook.utils.amount_parser import parse_amount
from walletbook.utils.date_parser import parse_date


def _parse_optional(ctx, value: str | None, parser, label: str):
    if value is None:
        return None
    try:
        return parser(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


@click.group()
def debt_group():
    """Manage debts."""
    pass


@debt_group.command("create")
@click.argument("name")
@click.argument("total")
@click.option("--remaining", help="Amount still owed (default: the total)")
@click.option("--interest", default="0", help="Interest rate in percent")
@click.option("--minimum", default="0", help="Minimum payment")
@click.option("--due-date", help="Next payment due date")
@click.option("--description", help="Notes about the debt")
@click.pass_context
def create_debt(ctx, name, total, remaining, interest, minimum, due_date, description):
    """Record a debt.

    Examples:
        walletbook debt create "Credit card" 5000000 --remaining 3200000 --interest 2.25 --due-date 2024-07-05
    """
    service = DebtService(ctx.obj["db"], ctx.obj["user_id"])

    with exit_on_domain_error(ctx):
        debt = service.create_debt(
            name=name,
            total=_parse_optional(ctx, total, parse_amount, "total"),
            remaining=_parse_optional(ctx, remaining, parse_amount, "remaining amount"),
            interest=_parse_optional(ctx, interest, parse_amount, "interest"),
            minimum=_parse_optional(ctx, minimum, parse_amount, "minimum payment"),
            due_date=_parse_optional(ctx, due_date, parse_date, "due date"),
            description=description,
        )
    click.echo(f"Created debt '{debt.name}' (ID: {debt.id})")


@debt_group.command("list")
@click.pass_context
def list_debts(ctx):
    """List debts by due date."""
    service = DebtService(ctx.obj["db"], ctx.obj["user_id"])

    debts = service.list_debts()
    if not debts:
        click.echo("No debts found.")
        return

    click.echo("\nDebts:")
    click.echo("-" * 90)
    for debt in debts:
        due = str(debt.due_date) if debt.due_date else "-"
        click.echo(
            f"ID: {debt.id:3d} | {debt.name:20s} | Remaining {debt.remaining:,.2f} of {debt.total:,.2f} "
            f"({progress_percentage(debt):.1f}% paid) | {debt.interest}% | Min {debt.minimum:,.2f} | Due: {due}"
        )


@debt_group.command("update")
@click.argument("debt_id", type=int)
@click.option("--name", help="Debt name")
@click.option("--total", help="Amount originally owed")
@click.option("--remaining", help="Amount still owed")
@click.option("--interest", help="Interest rate in percent")
@click.option("--minimum", help="Minimum payment")
@click.option("--due-date", help="Next payment due date")
@click.option("--description", help="Notes about the debt")
@click.pass_context
def update_debt(ctx, debt_id, name, total, remaining, interest, minimum, due_date, description):
    """Update a debt, e.g. after a payment."""
    service = DebtService(ctx.obj["db"], ctx.obj["user_id"])

    with exit_on_domain_error(ctx):
        service.update_debt(
            debt_id,
            name=name,
            total=_parse_optional(ctx, total, parse_amount, "total"),
            remaining=_parse_optional(ctx, remaining, parse_amount, "remaining amount"),
            interest=_parse_optional(ctx, interest, parse_amount, "interest"),
            minimum=_parse_optional(ctx, minimum, parse_amount, "minimum payment"),
            due_date=_parse_optional(ctx, due_date, parse_date, "due date"),
            description=description,
        )
    click.echo(f"Updated debt {debt_id}")


@debt_group.command("delete")
@click.argument("debt_id", type=int)
@click.pass_context
def delete_debt(ctx, debt_id: int):
    """Delete a debt."""
    service = DebtService(ctx.obj["db"], ctx.obj["user_id"])

    with exit_on_domain_error(ctx):
        service.delete_debt(debt_id)
    click.echo(f"Deleted debt {debt_id}")


def register_commands(cli):
    """Register debt commands with main CLI."""
    cli.add_command(debt_group, name="debt")
