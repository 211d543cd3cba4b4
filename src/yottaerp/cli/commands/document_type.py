"""Document type configuration commands."""

import click
from yottaerp.cli.organization_resolution import require_tenant
from yottaerp.domain.document_type import DocumentTypeService

SIGN_CHOICES = {"+1": 1, "1": 1, "-1": -1}


def _format_sign(sign: int | None) -> str:
    if sign is None:
        return " "
    return "+" if sign > 0 else "-"


@click.group()
def document_type_group():
    """Manage document types."""
    pass


@document_type_group.command("create")
@click.argument("code", metavar="CODE")
@click.argument("description", metavar="DESCRIPTION")
@click.option("--numerator", help="Numbering series (default: the code)")
@click.option(
    "--stock-sign",
    type=click.Choice(list(SIGN_CHOICES)),
    help="Move stock: +1 loads, -1 unloads",
)
@click.option(
    "--valuation-sign",
    type=click.Choice(list(SIGN_CHOICES)),
    help="Affect valuation with this sign",
)
@click.option("--inactive", is_flag=True, help="Create the type as inactive")
@click.pass_context
def create_document_type(
    ctx,
    code: str,
    description: str,
    numerator: str | None,
    stock_sign: str | None,
    valuation_sign: str | None,
    inactive: bool,
):
    """Create a document type.

    A stock sign turns on inventory movement, a valuation sign turns on
    valuation impact.

    Examples:
        yottaerp --org ACME document-type create FAI "Fattura Immediata" --numerator FAT --stock-sign -1 --valuation-sign +1
    """
    service = DocumentTypeService(ctx.obj["db"], require_tenant(ctx))
    sign_stock = SIGN_CHOICES[stock_sign] if stock_sign else None
    sign_valuation = SIGN_CHOICES[valuation_sign] if valuation_sign else None

    try:
        type_id = service.create_document_type(
            code=code,
            description=description,
            numerator_code=numerator,
            active=not inactive,
            inventory_movement=sign_stock is not None,
            valuation_impact=sign_valuation is not None,
            operation_sign_stock=sign_stock,
            operation_sign_valuation=sign_valuation,
        )
        click.echo(f"Created document type '{code.upper()}' (ID: {type_id})")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@document_type_group.command("list")
@click.pass_context
def list_document_types(ctx):
    """List document types."""
    service = DocumentTypeService(ctx.obj["db"], require_tenant(ctx))

    document_types = service.list_document_types()
    if not document_types:
        click.echo("No document types found. Run 'document-type seed' to create the standard ones.")
        return

    click.echo("\nDocument types:")
    click.echo("-" * 80)
    click.echo(f"{'ID':>3s} | {'Code':6s} | {'Description':25s} | {'Series':6s} | Stock | Value")
    for doc_type in document_types:
        status = "" if doc_type.active else " (inactive)"
        click.echo(
            f"{doc_type.id:3d} | {doc_type.code:6s} | {doc_type.description:25s} | "
            f"{doc_type.numerator_code:6s} |   {_format_sign(doc_type.operation_sign_stock)}   |"
            f"   {_format_sign(doc_type.operation_sign_valuation)}{status}"
        )


@document_type_group.command("seed")
@click.pass_context
def seed_document_types(ctx):
    """Create the standard Italian document types.

    Types that already exist are left untouched.
    """
    service = DocumentTypeService(ctx.obj["db"], require_tenant(ctx))

    try:
        created = service.seed_standard_types()
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    click.echo(f"Created {len(created)} document type(s)")


def register_commands(cli):
    """Register document type commands with main CLI."""
    cli.add_command(document_type_group, name="document-type")
