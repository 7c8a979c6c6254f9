"""Initialize default categories."""

import click
from walletbook.cli.error_handling import exit_on_domain_error
from walletbook.domain.category import CategoryService


@click.command("init-categories")
@click.pass_context
def init_categories(ctx):
    """Initialize database with default category tree.

    Existing categories are kept; only missing defaults are added.
    """
    service = CategoryService(ctx.obj["db"], ctx.obj["user_id"])

    click.echo("Creating default category tree...")
    with exit_on_domain_error(ctx):
        created = service.initialize_defaults()

    if created == 0:
        click.echo("Default categories already exist.")
    else:
        click.echo(f"Successfully created {created} categories.")


def register_commands(cli):
    """Register init-categories command with main CLI."""
    cli.add_command(init_categories)
