"""Main CLI entry point."""

import click
from walletbook.config import get_settings
from walletbook.database.factories import create_database, create_sqlite_database
from walletbook.logging_setup import configure_logging
from walletbook.storage.local import LocalObjectStore

# Import and register all commands at module level
from walletbook.cli.commands import (
    account,
    add,
    budget,
    category,
    debt,
    goal,
    init_categories,
    profile,
    summary,
    transaction,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides WALLETBOOK_DB_PATH environment variable)",
    envvar="WALLETBOOK_DB_PATH",
)
@click.option(
    "--user",
    "user_id",
    help="User the data belongs to (overrides WALLETBOOK_USER environment variable)",
    envvar="WALLETBOOK_USER",
)
@click.option(
    "--storage-dir",
    type=click.Path(file_okay=False),
    help="Directory for receipts and avatars (overrides WALLETBOOK_STORAGE_DIR)",
    envvar="WALLETBOOK_STORAGE_DIR",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level (overrides WALLETBOOK_LOG_LEVEL environment variable)",
    envvar="WALLETBOOK_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, user_id: str | None, storage_dir: str | None, log_level: str | None):
    """Walletbook - Personal finance tracking.

    Record income, expenses and transfers across your bank accounts,
    e-wallets and cash, and keep every balance in step with its history.
    """
    ctx.ensure_object(dict)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        settings = get_settings()
        configure_logging(log_level or settings.log_level)

        if db_path is not None:
            db = create_sqlite_database(database_path=db_path)
        else:
            db = create_database(settings.database_url)
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)

        ctx.obj["db"] = db
        ctx.obj["user_id"] = user_id or settings.user_id
        ctx.obj["store"] = LocalObjectStore(storage_dir or settings.storage_dir, settings.public_url)


# Register all commands
account.register_commands(cli)
add.register_commands(cli)
budget.register_commands(cli)
category.register_commands(cli)
debt.register_commands(cli)
goal.register_commands(cli)
init_categories.register_commands(cli)
profile.register_commands(cli)
summary.register_commands(cli)
transaction.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
