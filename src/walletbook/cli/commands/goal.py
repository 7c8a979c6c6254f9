"""Savings goal commands."""

import click
from walletbook.cli.error_handling import exit_on_domain_error
from walletbook.domain.goal import GoalService, progress_percentage
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
def goal_group():
    """Manage savings goals."""
    pass


@goal_group.command("create")
@click.argument("name")
@click.argument("target")
@click.option("--current", default="0", help="Amount already saved")
@click.option("--deadline", help="Target date")
@click.option("--description", help="Notes about the goal")
@click.pass_context
def create_goal(ctx, name: str, target: str, current: str, deadline: str | None, description: str | None):
    """Create a savings goal.

    Examples:
        walletbook goal create "New laptop" 15000000 --deadline 2025-12-31
    """
    service = GoalService(ctx.obj["db"], ctx.obj["user_id"])

    with exit_on_domain_error(ctx):
        goal = service.create_goal(
            name=name,
            target=_parse_optional(ctx, target, parse_amount, "target"),
            current=_parse_optional(ctx, current, parse_amount, "amount"),
            deadline=_parse_optional(ctx, deadline, parse_date, "deadline"),
            description=description,
        )
    click.echo(f"Created goal '{goal.name}' (ID: {goal.id})")


@goal_group.command("list")
@click.pass_context
def list_goals(ctx):
    """List goals by deadline with their progress."""
    service = GoalService(ctx.obj["db"], ctx.obj["user_id"])

    goals = service.list_goals()
    if not goals:
        click.echo("No goals found.")
        return

    click.echo("\nGoals:")
    click.echo("-" * 80)
    for goal in goals:
        deadline = str(goal.deadline) if goal.deadline else "-"
        click.echo(
            f"ID: {goal.id:3d} | {goal.name:20s} | {goal.current:,.2f} / {goal.target:,.2f} "
            f"({progress_percentage(goal):.1f}%) | Due: {deadline}"
        )


@goal_group.command("update")
@click.argument("goal_id", type=int)
@click.option("--name", help="Goal name")
@click.option("--target", help="Target amount")
@click.option("--current", help="Amount saved so far")
@click.option("--deadline", help="Target date")
@click.option("--description", help="Notes about the goal")
@click.pass_context
def update_goal(ctx, goal_id: int, name, target, current, deadline, description):
    """Update a goal."""
    service = GoalService(ctx.obj["db"], ctx.obj["user_id"])

    with exit_on_domain_error(ctx):
        service.update_goal(
            goal_id,
            name=name,
            target=_parse_optional(ctx, target, parse_amount, "target"),
            current=_parse_optional(ctx, current, parse_amount, "amount"),
            deadline=_parse_optional(ctx, deadline, parse_date, "deadline"),
            description=description,
        )
    click.echo(f"Updated goal {goal_id}")


@goal_group.command("delete")
@click.argument("goal_id", type=int)
@click.pass_context
def delete_goal(ctx, goal_id: int):
    """Delete a goal."""
    service = GoalService(ctx.obj["db"], ctx.obj["user_id"])

    with exit_on_domain_error(ctx):
        service.delete_goal(goal_id)
    click.echo(f"Deleted goal {goal_id}")


def register_commands(cli):
    """Register goal commands with main CLI."""
    cli.add_command(goal_group, name="goal")
