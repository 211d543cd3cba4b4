"""Payment condition commands."""

import click
from yottaerp.cli.date_filters import parse_date_option
from yottaerp.cli.organization_resolution import require_tenant
from yottaerp.domain.payment_calculator import format_deadline
from yottaerp.domain.payment_condition import PaymentConditionService
from yottaerp.utils.amount_parser import parse_amount


@click.group()
def payment_condition_group():
    """Manage payment conditions."""
    pass


@payment_condition_group.command("create")
@click.argument("name", metavar="NAME")
@click.option("--days", "days_to_first_due", type=int, default=0, help="Days to the first due date")
@click.option("--gap", "gap_between_dues", type=int, default=0, help="Days between due dates")
@click.option("--dues", "number_of_dues", type=int, default=1, help="Number of installments")
@click.option("--end-of-month", is_flag=True, help="Move due dates to the end of the month")
@click.option("--inactive", is_flag=True, help="Create the condition as inactive")
@click.pass_context
def create_payment_condition(
    ctx,
    name: str,
    days_to_first_due: int,
    gap_between_dues: int,
    number_of_dues: int,
    end_of_month: bool,
    inactive: bool,
):
    """Create a payment condition.

    Examples:
        yottaerp --org ACME payment-condition create "Rimessa diretta"
        yottaerp --org ACME payment-condition create "RB 30-60 FM" --days 30 --gap 30 --dues 2 --end-of-month
    """
    service = PaymentConditionService(ctx.obj["db"], require_tenant(ctx))

    try:
        condition_id = service.create_payment_condition(
            name=name,
            days_to_first_due=days_to_first_due,
            gap_between_dues=gap_between_dues,
            number_of_dues=number_of_dues,
            is_end_of_month=end_of_month,
            active=not inactive,
        )
        click.echo(f"Created payment condition '{name}' (ID: {condition_id})")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@payment_condition_group.command("list")
@click.option("--active-only", is_flag=True, help="Hide inactive conditions")
@click.pass_context
def list_payment_conditions(ctx, active_only: bool):
    """List payment conditions."""
    service = PaymentConditionService(ctx.obj["db"], require_tenant(ctx))

    conditions = service.list_payment_conditions(active_only=active_only)
    if not conditions:
        click.echo("No payment conditions found.")
        return

    click.echo("\nPayment conditions:")
    click.echo("-" * 80)
    for condition in conditions:
        eom = " FM" if condition.is_end_of_month else ""
        status = "" if condition.active else " (inactive)"
        click.echo(
            f"ID: {condition.id:3d} | {condition.name:25s} | "
            f"{condition.number_of_dues} due(s), first at {condition.days_to_first_due} days, "
            f"every {condition.gap_between_dues} days{eom}{status}"
        )


@payment_condition_group.command("preview")
@click.argument("condition", metavar="CONDITION")
@click.argument("amount", metavar="AMOUNT")
@click.option("--date", "base_date", help="Base date (default: today)")
@click.pass_context
def preview_deadlines(ctx, condition: str, amount: str, base_date: str | None):
    """Show the deadlines a condition produces for an amount.

    CONDITION can be a condition name or ID. Nothing is saved.

    Examples:
        yottaerp --org ACME payment-condition preview "RB 30-60 FM" 1.000,00 --date 2024-01-15
    """
    service = PaymentConditionService(ctx.obj["db"], require_tenant(ctx))
    start = parse_date_option(ctx, base_date)

    try:
        condition_id = service.resolve_payment_condition(condition)
        deadlines = service.preview_deadlines(condition_id, parse_amount(amount), start)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    for deadline in deadlines:
        click.echo(format_deadline(deadline))


def register_commands(cli):
    """Register payment condition commands with main CLI."""
    cli.add_command(payment_condition_group, name="payment-condition")
