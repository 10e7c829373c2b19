"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich table of fields) or
machines (--json).  The formatter layer adapts ServiceResult to the
requested output mode.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from regform.output.console import create_console, get_output

if TYPE_CHECKING:
    from regform.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Rendering switches taken from the global CLI flags."""

    json_output: bool = False
    quiet: bool = False
    no_color: bool = False


def _fields_table(fields: dict[str, dict[str, Any]]) -> Table:
    table = Table(show_header=True, header_style="rf.op", box=None, pad_edge=False)
    table.add_column("field", style="rf.field")
    table.add_column("status")
    table.add_column("message", style="rf.message")
    for name, info in fields.items():
        status = Text("ok", style="rf.ok") if info.get("valid") else Text("invalid", "rf.error")
        table.add_row(name, status, info.get("error", ""))
    return table


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)

    console = create_console(no_color=settings.no_color)
    if result.ok:
        console.print(Text.assemble(("OK", "rf.ok"), ": ", (result.op, "rf.op")))
        fields = result.data.get("fields")
    else:
        message = result.error.message if result.error else "Unknown error"
        console.print(
            Text.assemble(("ERROR", "rf.error"), ": ", (result.op, "rf.op"), f" - {message}")
        )
        fields = result.error.detail.get("fields") if result.error else None

    if not settings.quiet and fields:
        console.print(_fields_table(fields))

    events = (result.meta or {}).get("events")
    if events and not settings.quiet:
        for event in events:
            console.print(Text(f"  {event}", style="rf.event"))

    return get_output(console).rstrip("\n")
