"""Category management commands."""

import click
from walletbook.cli.error_handling import exit_on_domain_error
from walletbook.domain.category import CATEGORY_TYPES, CategoryService
from walletbook.domain.entities import CategoryTreeNode


def print_category_tree(tree: list[CategoryTreeNode]) -> None:
    """Print root categories with their subcategories."""
    for node in tree:
        root_id = f"ID: {node.id}" if node.id is not None else "built-in"
        click.echo(f"{node.name} [{node.category_type}] ({root_id})")
        for sub in node.subcategories:
            if isinstance(sub, str):
                click.echo(f"  {sub}")
            else:
                click.echo(f"  {sub.name} (ID: {sub.id})")


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List all categories in tree format."""
    service = CategoryService(ctx.obj["db"], ctx.obj["user_id"])

    tree = service.get_category_tree()
    if len(tree) == 1:
        click.echo("No categories found. Run 'init-categories' to create default categories.")

    click.echo("\nCategories:")
    print_category_tree(tree)


@category_group.command("create")
@click.argument("name")
@click.option("--parent", type=int, help="Parent category ID")
@click.option(
    "--type",
    "category_type",
    type=click.Choice(CATEGORY_TYPES, case_sensitive=False),
    default="expense",
    help="Category type (default: expense)",
)
@click.pass_context
def create_category(ctx, name: str, parent: int | None, category_type: str):
    """Create a new category.

    Subcategories must share their parent's type.

    Examples:
        walletbook category create "Pets" --parent 1
        walletbook category create "Freelance" --type income --parent 13
    """
    service = CategoryService(ctx.obj["db"], ctx.obj["user_id"])

    with exit_on_domain_error(ctx):
        category = service.create_category(name=name, category_type=category_type.lower(), parent_id=parent)
    parent_str = f" under category {parent}" if parent else ""
    click.echo(f"Created category '{category.name}'{parent_str} (ID: {category.id})")


@category_group.command("rename")
@click.argument("category_id", type=int)
@click.argument("new_name")
@click.pass_context
def rename_category(ctx, category_id: int, new_name: str):
    """Rename a category."""
    service = CategoryService(ctx.obj["db"], ctx.obj["user_id"])

    with exit_on_domain_error(ctx):
        service.rename_category(category_id, new_name)
    click.echo(f"Renamed category {category_id} to '{new_name}'")


@category_group.command("delete")
@click.argument("category_id", type=int)
@click.pass_context
def delete_category(ctx, category_id: int):
    """Remove a category from lists and pickers.

    Default categories cannot be deleted. Transactions keep their labels.
    """
    service = CategoryService(ctx.obj["db"], ctx.obj["user_id"])

    with exit_on_domain_error(ctx):
        service.delete_category(category_id)
    click.echo(f"Deleted category {category_id}")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
