"""Stock commands."""

import click
from yottaerp.cli.organization_resolution import require_tenant
from yottaerp.domain.product import ProductService
from yottaerp.domain.stock import StockService
from yottaerp.domain.warehouse import WarehouseService


@click.group()
def stock_group():
    """Inspect stock movements."""
    pass


@stock_group.command("movements")
@click.option("--product", help="Product code or ID")
@click.option("--warehouse", help="Warehouse code or ID")
@click.option("--document", "document_id", type=int, help="Document ID")
@click.pass_context
def list_movements(ctx, product: str | None, warehouse: str | None, document_id: int | None):
    """List stock movements, oldest first."""
    db = ctx.obj["db"]
    tenant = require_tenant(ctx)

    try:
        product_id = ProductService(db, tenant).resolve_product(product).id if product else None
        warehouse_id = WarehouseService(db, tenant).resolve_warehouse(warehouse)
        movements = StockService(db, tenant).list_movements(
            product_id=product_id, warehouse_id=warehouse_id, document_id=document_id
        )
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    if not movements:
        click.echo("No stock movements found.")
        return

    click.echo(f"\nFound {len(movements)} movement(s):")
    click.echo("-" * 80)
    for movement in movements:
        click.echo(
            f"ID: {movement.id:4d} | {movement.movement_type.value:15s} | "
            f"{movement.quantity:+12.4f} | product {movement.product_id} | "
            f"warehouse {movement.warehouse_id} | doc {movement.document_number or '-'}"
            f" line {movement.line_number or '-'}"
        )


def register_commands(cli):
    """Register stock commands with main CLI."""
    cli.add_command(stock_group, name="stock")
