"""Warehouse management commands."""

import click
from yottaerp.cli.organization_resolution import require_tenant
from yottaerp.domain.warehouse import WarehouseService


@click.group()
def warehouse_group():
    """Manage warehouses."""
    pass


@warehouse_group.command("create")
@click.argument("code", metavar="CODE")
@click.argument("name", metavar="NAME")
@click.pass_context
def create_warehouse(ctx, code: str, name: str):
    """Create a warehouse in the current organization.

    Examples:
        yottaerp --org ACME warehouse create MAG1 "Magazzino Centrale"
    """
    service = WarehouseService(ctx.obj["db"], require_tenant(ctx))

    try:
        warehouse_id = service.create_warehouse(code=code, name=name)
        click.echo(f"Created warehouse '{code}' (ID: {warehouse_id})")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@warehouse_group.command("list")
@click.pass_context
def list_warehouses(ctx):
    """List warehouses of the current organization."""
    service = WarehouseService(ctx.obj["db"], require_tenant(ctx))

    warehouses = service.list_warehouses()
    if not warehouses:
        click.echo("No warehouses found.")
        return

    click.echo("\nWarehouses:")
    click.echo("-" * 60)
    for warehouse in warehouses:
        click.echo(f"ID: {warehouse.id:3d} | {warehouse.code:12s} | {warehouse.name}")


def register_commands(cli):
    """Register warehouse commands with main CLI."""
    cli.add_command(warehouse_group, name="warehouse")
