"""Main CLI entry point."""

import logging

import click
from yottaerp.database.factories import create_sqlite_database

# Import and register all commands at module level
from yottaerp.cli.commands import (
    organization,
    warehouse,
    product,
    payment_condition,
    document_type,
    document,
    stock,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides YOTTAERP_DB_PATH environment variable)",
    envvar="YOTTAERP_DB_PATH",
)
@click.option(
    "--org",
    help="Organization code or ID to act for (overrides YOTTAERP_ORGANIZATION)",
    envvar="YOTTAERP_ORGANIZATION",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, org: str | None, verbose: bool):
    """YottaErp - Italian ERP core.

    Manage organizations, warehouses, products, payment conditions and
    documents (quotes, delivery notes, invoices, credit notes). Documents
    compute their VAT totals, payment deadlines and stock movements.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj["org"] = org

    # Open the database only when a command actually runs (not for --help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
organization.register_commands(cli)
warehouse.register_commands(cli)
product.register_commands(cli)
payment_condition.register_commands(cli)
document_type.register_commands(cli)
document.register_commands(cli)
stock.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
