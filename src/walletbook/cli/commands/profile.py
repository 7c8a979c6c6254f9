"""Profile and settings commands."""

from pathlib import Path

import click
from walletbook.cli.error_handling import exit_on_domain_error
from walletbook.domain.profile import (
    LANGUAGES,
    PAYROLL_DATE_RANGE,
    THEMES,
    WARNING_THRESHOLD_RANGE,
    ProfileService,
    default_avatars,
)
from walletbook.utils.date_parser import parse_date


def _service(ctx) -> ProfileService:
    return ProfileService(ctx.obj["db"], ctx.obj["user_id"], store=ctx.obj.get("store"))


@click.group()
def profile_group():
    """Manage your profile."""
    pass


@profile_group.command("show")
@click.pass_context
def show_profile(ctx):
    """Show your profile."""
    profile = _service(ctx).get_profile()
    if profile is None:
        click.echo("No profile saved yet. Use 'profile update' to create one.")
        return

    click.echo(f"Name: {profile.full_name or '-'}")
    click.echo(f"Phone: {profile.phone_number or '-'}")
    click.echo(f"Location: {profile.location or '-'}")
    click.echo(f"Birth date: {profile.birth_date or '-'}")
    click.echo(f"Avatar: {profile.avatar_url or '-'}")


@profile_group.command("update")
@click.option("--name", "full_name", help="Full name")
@click.option("--phone", "phone_number", help="Phone number")
@click.option("--location", help="Location")
@click.option("--birth-date", help="Birth date (YYYY-MM-DD)")
@click.option("--avatar", "avatar_url", help="Avatar URL, e.g. one of 'profile avatars'")
@click.pass_context
def update_profile(ctx, full_name, phone_number, location, birth_date, avatar_url):
    """Create or update your profile."""
    birth = None
    if birth_date is not None:
        try:
            birth = parse_date(birth_date)
        except ValueError as e:
            click.echo(f"Error: Invalid birth date: {e}", err=True)
            ctx.exit(1)

    with exit_on_domain_error(ctx):
        _service(ctx).update_profile(
            full_name=full_name,
            phone_number=phone_number,
            location=location,
            birth_date=birth,
            avatar_url=avatar_url,
        )
    click.echo("Profile updated")


@profile_group.command("avatars")
def list_default_avatars():
    """List the bundled avatars."""
    for url in default_avatars():
        click.echo(url)


@profile_group.command("upload-avatar")
@click.argument("image", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def upload_avatar(ctx, image: Path):
    """Upload an avatar image, replacing the current one."""
    with exit_on_domain_error(ctx):
        url = _service(ctx).upload_avatar(image.name, image.read_bytes())
    click.echo(f"Avatar uploaded: {url}")


@profile_group.command("delete-avatar")
@click.pass_context
def delete_avatar(ctx):
    """Remove your avatar."""
    with exit_on_domain_error(ctx):
        removed = _service(ctx).delete_avatar()
    if removed:
        click.echo("Avatar removed")
    else:
        click.echo("No avatar to remove")


@click.group()
def settings_group():
    """Manage your preferences."""
    pass


@settings_group.command("show")
@click.pass_context
def show_settings(ctx):
    """Show your settings."""
    settings = _service(ctx).get_settings()
    click.echo(f"Language: {settings.language}")
    click.echo(f"Theme: {settings.theme}")
    click.echo(f"Payroll date: {settings.payroll_date or 'not set'}")
    click.echo(f"Budget warning threshold: {settings.budget_warning_threshold}%")


@settings_group.command("set")
@click.option("--language", type=click.Choice(LANGUAGES), help="Interface language")
@click.option("--theme", type=click.Choice(THEMES), help="Color theme")
@click.option(
    "--payroll-date",
    type=click.IntRange(*PAYROLL_DATE_RANGE),
    help="Day of month your salary arrives; monthly summaries start on it",
)
@click.option(
    "--warning-threshold",
    type=click.IntRange(*WARNING_THRESHOLD_RANGE),
    help="Budget usage percentage that triggers a warning",
)
@click.pass_context
def set_settings(ctx, language, theme, payroll_date, warning_threshold):
    """Change your settings."""
    with exit_on_domain_error(ctx):
        _service(ctx).update_settings(
            language=language,
            theme=theme,
            payroll_date=payroll_date,
            budget_warning_threshold=warning_threshold,
        )
    click.echo("Settings updated")


def register_commands(cli):
    """Register profile and settings commands with main CLI."""
    cli.add_command(profile_group, name="profile")
    cli.add_command(settings_group, name="settings")
