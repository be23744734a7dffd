"""Resolve the capability the CLI acts with."""

from __future__ import annotations

import click

from budgetit.domain.auth import AuthService, Capability
from budgetit.domain.party import PartyService


def resolve_capability_or_exit(ctx: click.Context) -> Capability:
    """Capability of ``--as-user``, or full access when it is not given."""
    as_user = ctx.obj.get("as_user")
    if not as_user:
        return Capability.FULL

    db = ctx.obj["db"]
    try:
        user = PartyService(db).resolve_user(as_user)
        return AuthService(db).capability_for_user(user.uuid)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
