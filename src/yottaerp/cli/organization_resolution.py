"""CLI helpers for resolving the acting organization."""

from __future__ import annotations

import click
from yottaerp.domain.organization import OrganizationService
from yottaerp.domain.tenant import TenantContext


def require_tenant(ctx: click.Context) -> TenantContext:
    """Resolve the --org option to a tenant context, or exit with a CLI error.

    Every command that reads or writes organization data goes through here,
    so the error for a missing or unknown organization is the same everywhere.
    """
    org = ctx.obj.get("org")
    if not org:
        click.echo(
            "Error: No organization selected. Use --org or set YOTTAERP_ORGANIZATION.",
            err=True,
        )
        ctx.exit(1)

    try:
        organization = OrganizationService(ctx.obj["db"]).resolve_organization(org)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
    return TenantContext(organization.id)
