"""Product and product type commands."""

import click
from yottaerp.cli.line_options import parse_vat_rate
from yottaerp.cli.organization_resolution import require_tenant
from yottaerp.domain.product import ProductService
from yottaerp.domain.stock import StockService
from yottaerp.domain.warehouse import WarehouseService
from yottaerp.utils.amount_parser import parse_amount
from yottaerp.utils.decimal_utils import format_currency, round4


@click.group()
def product_type_group():
    """Manage product types."""
    pass


@product_type_group.command("create")
@click.argument("code", metavar="CODE")
@click.argument("description", metavar="DESCRIPTION")
@click.option(
    "--no-stock",
    is_flag=True,
    help="Products of this type do not move stock (services)",
)
@click.pass_context
def create_product_type(ctx, code: str, description: str, no_stock: bool):
    """Create a product type.

    Examples:
        yottaerp --org ACME product-type create MERCE "Merce"
        yottaerp --org ACME product-type create SERVIZIO "Servizi" --no-stock
    """
    service = ProductService(ctx.obj["db"], require_tenant(ctx))

    try:
        type_id = service.create_product_type(
            code=code, description=description, manage_stock=not no_stock
        )
        click.echo(f"Created product type '{code}' (ID: {type_id})")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@product_type_group.command("list")
@click.pass_context
def list_product_types(ctx):
    """List product types."""
    service = ProductService(ctx.obj["db"], require_tenant(ctx))

    product_types = service.list_product_types()
    if not product_types:
        click.echo("No product types found.")
        return

    click.echo("\nProduct types:")
    click.echo("-" * 60)
    for product_type in product_types:
        stock = "stock" if product_type.manage_stock else "no stock"
        click.echo(
            f"ID: {product_type.id:3d} | {product_type.code:12s} | "
            f"{product_type.description:30s} | {stock}"
        )


@click.group()
def product_group():
    """Manage products."""
    pass


@product_group.command("create")
@click.argument("code", metavar="CODE")
@click.argument("name", metavar="NAME")
@click.option("--price", required=True, help="Net price (e.g., 10.50 or 1.234,56)")
@click.option("--vat", required=True, help="VAT rate as fraction or percentage (0.22 or 22%)")
@click.option("--description", help="Product description")
@click.option("--type", "product_type", help="Product type code or ID")
@click.option("--warehouse", help="Default warehouse code or ID")
@click.pass_context
def create_product(
    ctx,
    code: str,
    name: str,
    price: str,
    vat: str,
    description: str | None,
    product_type: str | None,
    warehouse: str | None,
):
    """Create a product.

    Examples:
        yottaerp --org ACME product create VITE-M8 "Vite M8" --price 0,35 --vat 22% --type MERCE
    """
    db = ctx.obj["db"]
    tenant = require_tenant(ctx)
    service = ProductService(db, tenant)

    try:
        product_id = service.create_product(
            code=code,
            name=name,
            price=parse_amount(price),
            vat_rate=parse_vat_rate(vat),
            description=description,
            product_type_id=service.resolve_product_type(product_type),
            default_warehouse_id=WarehouseService(db, tenant).resolve_warehouse(warehouse),
        )
        click.echo(f"Created product '{code}' (ID: {product_id})")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@product_group.command("list")
@click.pass_context
def list_products(ctx):
    """List products with price and VAT rate."""
    service = ProductService(ctx.obj["db"], require_tenant(ctx))

    products = service.list_products()
    if not products:
        click.echo("No products found.")
        return

    click.echo("\nProducts:")
    click.echo("-" * 80)
    for product in products:
        click.echo(
            f"ID: {product.id:3d} | {product.code:12s} | {product.name:25s} | "
            f"{format_currency(product.price):>12s} | VAT {product.vat_rate * 100:.2f}%"
        )


@product_group.command("stock")
@click.argument("product", metavar="PRODUCT")
@click.option("--warehouse", help="Warehouse code or ID (default: all warehouses)")
@click.pass_context
def product_stock(ctx, product: str, warehouse: str | None):
    """Show the calculated stock of a product.

    PRODUCT can be a product code or ID.
    """
    db = ctx.obj["db"]
    tenant = require_tenant(ctx)

    try:
        product_obj = ProductService(db, tenant).resolve_product(product)
        warehouse_id = WarehouseService(db, tenant).resolve_warehouse(warehouse)
        quantity = StockService(db, tenant).get_stock(product_obj.id, warehouse_id)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    where = f" in warehouse {warehouse}" if warehouse else ""
    click.echo(f"Stock of {product_obj.code}{where}: {round4(quantity)}")


def register_commands(cli):
    """Register product commands with main CLI."""
    cli.add_command(product_type_group, name="product-type")
    cli.add_command(product_group, name="product")
