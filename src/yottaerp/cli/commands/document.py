"""Document management commands."""

import click
from yottaerp.cli.date_filters import parse_date_option, resolve_cli_date_range
from yottaerp.cli.line_options import build_line_inputs
from yottaerp.cli.organization_resolution import require_tenant
from yottaerp.domain.document import UNSET, DocumentService
from yottaerp.domain.document_type import DocumentTypeService
from yottaerp.domain.entities import Document
from yottaerp.domain.payment_calculator import format_deadline
from yottaerp.domain.payment_condition import PaymentConditionService
from yottaerp.domain.product import ProductService
from yottaerp.domain.stock import StockService
from yottaerp.domain.warehouse import WarehouseService
from yottaerp.utils.date_parser import format_date_italian
from yottaerp.utils.decimal_utils import format_currency

LINE_HELP = (
    "Document line as key=value pairs: qty, price, vat, code, desc, product, warehouse "
    "(e.g. 'product=VITE-M8,qty=10' or 'desc=Consulenza,qty=1,price=150,vat=22%'). "
    "Repeat for more lines."
)


def _print_totals(document: Document) -> None:
    click.echo(
        f"Net: {format_currency(document.net_total)} | "
        f"VAT: {format_currency(document.vat_total)} | "
        f"Total: {format_currency(document.gross_total)}"
    )
    for deadline in document.deadlines:
        click.echo(f"  {format_deadline(deadline)}")


@click.group()
def document_group():
    """Manage documents (quotes, delivery notes, invoices, credit notes)."""
    pass


@document_group.command("create")
@click.argument("document_type", metavar="TYPE")
@click.option("--line", "lines", multiple=True, required=True, help=LINE_HELP)
@click.option("--date", "document_date", help="Document date (default: today)")
@click.option("--number", help="Document number (default: next in the series)")
@click.option("--warehouse", help="Main warehouse code or ID")
@click.option("--payment-condition", help="Payment condition name or ID")
@click.option("--notes", help="Notes")
@click.pass_context
def create_document(
    ctx,
    document_type: str,
    lines: tuple[str, ...],
    document_date: str | None,
    number: str | None,
    warehouse: str | None,
    payment_condition: str | None,
    notes: str | None,
):
    """Create a document.

    TYPE is a document type code or ID. Totals, payment deadlines and stock
    movements are computed from the lines.

    Examples:
        yottaerp --org ACME document create FAI --line "product=VITE-M8,qty=100" --warehouse MAG1
        yottaerp --org ACME document create FAD --line "desc=Consulenza,qty=1,price=1.000,00,vat=22%" \\
            --payment-condition "RB 30-60 FM" --date 2024-01-15
    """
    db = ctx.obj["db"]
    tenant = require_tenant(ctx)
    service = DocumentService(db, tenant)
    warehouse_service = WarehouseService(db, tenant)
    doc_date = parse_date_option(ctx, document_date)

    try:
        doc_type = DocumentTypeService(db, tenant).resolve_document_type(document_type)
        line_inputs = build_line_inputs(lines, ProductService(db, tenant), warehouse_service)
        document_id = service.create_document(
            document_type_id=doc_type.id,
            lines=line_inputs,
            document_date=doc_date,
            number=number,
            main_warehouse_id=warehouse_service.resolve_warehouse(warehouse),
            payment_condition_id=PaymentConditionService(db, tenant).resolve_payment_condition(
                payment_condition
            ),
            notes=notes,
        )
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    document = service.get_document(document_id)
    click.echo(f"Created document {doc_type.code} {document.number} (ID: {document_id})")
    _print_totals(document)


@document_group.command("update")
@click.argument("document_id", type=int)
@click.option("--line", "lines", multiple=True, help=LINE_HELP + " Replaces all lines.")
@click.option("--date", "document_date", help="Document date")
@click.option("--warehouse", help="Main warehouse code or ID, or empty string to clear")
@click.option("--payment-condition", help="Payment condition name or ID, or empty string to clear")
@click.option("--notes", help="Notes, or empty string to clear")
@click.pass_context
def update_document(
    ctx,
    document_id: int,
    lines: tuple[str, ...],
    document_date: str | None,
    warehouse: str | None,
    payment_condition: str | None,
    notes: str | None,
):
    """Update a document.

    Only the given options change. Giving --line replaces the whole line set
    and recomputes totals, deadlines and stock movements.

    Examples:
        yottaerp --org ACME document update 1 --line "product=VITE-M8,qty=120"
        yottaerp --org ACME document update 1 --payment-condition ""  # Clear condition
    """
    db = ctx.obj["db"]
    tenant = require_tenant(ctx)
    service = DocumentService(db, tenant)
    warehouse_service = WarehouseService(db, tenant)
    doc_date = parse_date_option(ctx, document_date)

    try:
        line_inputs = None
        if lines:
            line_inputs = build_line_inputs(lines, ProductService(db, tenant), warehouse_service)

        main_warehouse_id = UNSET
        if warehouse is not None:
            main_warehouse_id = warehouse_service.resolve_warehouse(warehouse)

        payment_condition_id = UNSET
        if payment_condition is not None:
            payment_condition_id = PaymentConditionService(
                db, tenant
            ).resolve_payment_condition(payment_condition)

        service.update_document(
            document_id,
            lines=line_inputs,
            document_date=doc_date,
            main_warehouse_id=main_warehouse_id,
            payment_condition_id=payment_condition_id,
            notes=UNSET if notes is None else (notes or None),
        )
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    document = service.get_document(document_id)
    click.echo(f"Updated document {document.number} (ID: {document_id})")
    _print_totals(document)


@document_group.command("show")
@click.argument("document_id", type=int)
@click.pass_context
def show_document(ctx, document_id: int):
    """Show a document with lines, deadlines and stock movements."""
    db = ctx.obj["db"]
    tenant = require_tenant(ctx)

    try:
        document = DocumentService(db, tenant).get_document(document_id)
        doc_type = DocumentTypeService(db, tenant).get_document_type(document.document_type_id)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    click.echo(f"\n{doc_type.description} {document.number} del {format_date_italian(document.date)}")
    click.echo(f"  Type: {doc_type.code} ({document.category.value})")
    if document.notes:
        click.echo(f"  Notes: {document.notes}")

    click.echo("\nLines:")
    click.echo("-" * 100)
    for line in document.lines:
        click.echo(
            f"{line.line_number:3d} | {line.product_code:12s} | {line.description:30s} | "
            f"{line.quantity:>10.4f} x {format_currency(line.unit_price):>10s} | "
            f"VAT {line.vat_rate * 100:5.2f}% | {format_currency(line.gross_amount):>12s}"
        )
    click.echo("-" * 100)
    _print_totals(document)

    movements = StockService(db, tenant).list_movements(document_id=document_id)
    if movements:
        click.echo("\nStock movements:")
        for movement in movements:
            click.echo(
                f"  Line {movement.line_number}: {movement.movement_type.value} "
                f"{movement.quantity:+.4f} (product {movement.product_id}, "
                f"warehouse {movement.warehouse_id})"
            )


@document_group.command("list")
@click.option("--type", "document_type", help="Document type code or ID")
@click.option("--start-date", help="Start date (YYYY-MM-DD or DD/MM/YYYY)")
@click.option("--end-date", help="End date (YYYY-MM-DD or DD/MM/YYYY)")
@click.pass_context
def list_documents(ctx, document_type: str | None, start_date: str | None, end_date: str | None):
    """List documents, newest first."""
    db = ctx.obj["db"]
    tenant = require_tenant(ctx)
    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date)
    type_service = DocumentTypeService(db, tenant)

    try:
        document_type_id = None
        if document_type:
            document_type_id = type_service.resolve_document_type(document_type).id
        documents = DocumentService(db, tenant).list_documents(
            document_type_id=document_type_id, start_date=start, end_date=end
        )
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    if not documents:
        click.echo("No documents found.")
        return

    type_codes = {t.id: t.code for t in type_service.list_document_types()}
    click.echo(f"\nFound {len(documents)} document(s):")
    click.echo("-" * 80)
    for document in documents:
        click.echo(
            f"ID: {document.id:4d} | {type_codes.get(document.document_type_id, '?'):6s} | "
            f"{document.number} | {format_date_italian(document.date)} | "
            f"{format_currency(document.gross_total):>14s}"
        )


@document_group.command("delete")
@click.argument("document_id", type=int)
@click.pass_context
def delete_document(ctx, document_id: int):
    """Delete a document with its lines, deadlines and stock movements."""
    service = DocumentService(ctx.obj["db"], require_tenant(ctx))

    try:
        document = service.get_document(document_id)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    if not click.confirm(f"Are you sure you want to delete document {document.number} (ID: {document_id})?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_document(document_id)
        click.echo(f"Deleted document {document.number}")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@document_group.command("deadlines")
@click.option("--start-date", help="First due date to include")
@click.option("--end-date", help="Last due date to include")
@click.pass_context
def list_deadlines(ctx, start_date: str | None, end_date: str | None):
    """List payment deadlines of all documents by due date."""
    db = ctx.obj["db"]
    service = DocumentService(db, require_tenant(ctx))
    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date)

    deadlines = service.list_deadlines(start_date=start, end_date=end)
    if not deadlines:
        click.echo("No deadlines found.")
        return

    numbers = {d.id: d.number for d in service.list_documents()}
    for deadline in deadlines:
        click.echo(f"Doc {numbers.get(deadline.document_id, '?')} | {format_deadline(deadline)}")


def register_commands(cli):
    """Register document commands with main CLI."""
    cli.add_command(document_group, name="document")
