"""Command: validate one registration from flags and/or a JSON file."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import click

from regform.commands._base import RegformCommand

if TYPE_CHECKING:
    from regform.commands._context import AppContext


@click.command(
    cls=RegformCommand,
    examples="""\
  regform validate --name "Ana Perez" --email ana@example.com --phone 8095551234 \\
      --password secret1 --confirm-password secret1
  regform --json validate --from-json registration.json
  regform validate --from-json registration.json --password other1 --trace""",
)
@click.option("--name", default=None, help="Full name.")
@click.option("--email", default=None, help="Email address.")
@click.option("--phone", default=None, help="Phone number, e.g. 8095551234.")
@click.option("--password", default=None, help="Password.")
@click.option("--confirm-password", default=None, help="Password confirmation.")
@click.option(
    "--from-json",
    "json_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON object of field values; flags override its entries.",
)
@click.option("--trace", is_flag=True, help="Include the notification log in the output.")
@click.pass_obj
def validate(
    app: AppContext,
    name: str | None,
    email: str | None,
    phone: str | None,
    password: str | None,
    confirm_password: str | None,
    json_path: Path | None,
    trace: bool,
) -> None:
    """Fill a registration form and report every field's errors."""
    from regform.services.registration import RegistrationService

    values: dict[str, str | None] = {}
    if json_path is not None:
        values.update(_read_values(json_path))

    flags = {
        "name": name,
        "email": email,
        "phone": phone,
        "password": password,
        "confirmPassword": confirm_password,
    }
    values.update({k: v for k, v in flags.items() if v is not None})

    svc = RegistrationService(app.settings.form, plugins=app.plugins)
    app.emit(svc.validate(values, trace=trace))


def _read_values(path: Path) -> dict[str, str | None]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"Invalid JSON in {path}: {exc}", param_hint="--from-json") from exc
    if not isinstance(data, dict):
        raise click.BadParameter(f"{path} must contain a JSON object", param_hint="--from-json")
    for key, value in data.items():
        if value is not None and not isinstance(value, str):
            raise click.BadParameter(
                f"Value of {key!r} in {path} must be a string", param_hint="--from-json"
            )
    return data
