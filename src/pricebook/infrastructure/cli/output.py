"""Shared output helpers for CLI commands."""

from __future__ import annotations

import dataclasses
import json
from datetime import datetime
from decimal import Decimal

import click

from pricebook.domain.exceptions import DomainException, TransientError


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def to_contract(value):
    """Convert DTOs to plain JSON-ready data with camelCase keys."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            _camel(f.name): to_contract(getattr(value, f.name))
            for f in dataclasses.fields(value)
        }
    if isinstance(value, dict):
        return {k: to_contract(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_contract(v) for v in value]
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def echo_json(payload: dict) -> None:
    click.echo(json.dumps(to_contract(payload), indent=2))


def fail(exc: DomainException) -> click.ClickException:
    """Map a domain error to a CLI error (non-zero exit)."""
    if isinstance(exc, TransientError):
        return click.ClickException(f"{exc} (temporary, retry later)")
    return click.ClickException(str(exc))


def money(amount: Decimal | None, currency: str) -> str:
    if amount is None:
        return ""
    return f"{amount:.2f} {currency}"
