"""Organization management commands."""

import click
from yottaerp.domain.organization import OrganizationService


@click.group()
def organization_group():
    """Manage organizations (tenants)."""
    pass


@organization_group.command("create")
@click.argument("code", metavar="CODE")
@click.argument("name", metavar="NAME")
@click.pass_context
def create_organization(ctx, code: str, name: str):
    """Create a new organization.

    Examples:
        yottaerp org create ACME "Acme S.r.l."
    """
    db = ctx.obj["db"]
    service = OrganizationService(db)

    try:
        organization_id = service.create_organization(code=code, name=name)
        click.echo(f"Created organization '{code}' (ID: {organization_id})")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@organization_group.command("list")
@click.pass_context
def list_organizations(ctx):
    """List all organizations."""
    db = ctx.obj["db"]
    service = OrganizationService(db)

    organizations = service.list_organizations()
    if not organizations:
        click.echo("No organizations found.")
        return

    click.echo("\nOrganizations:")
    click.echo("-" * 60)
    for org in organizations:
        click.echo(f"ID: {org.id:3d} | {org.code:12s} | {org.name}")


def register_commands(cli):
    """Register organization commands with main CLI."""
    cli.add_command(organization_group, name="org")
