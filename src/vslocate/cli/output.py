"""Rich output formatting helpers for the vslocate CLI.

Instance states are colour-coded: complete instances in green, launchable
but incomplete ones in yellow, and anything else in red.
"""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

from vslocate.core.instance import InstanceRecord
from vslocate.core.state import InstanceState

console = Console()


def state_text(state: InstanceState | None) -> Text:
    """Render an installation state as a coloured label."""
    if state is None:
        return Text("-", style="dim")
    if state.is_complete:
        return Text("complete", style="bold green")
    if state.is_launchable:
        return Text("launchable", style="yellow")
    return Text(f"incomplete ({int(state):#x})", style="bold red")


def print_instances(records: list[InstanceRecord]) -> None:
    """Print a table of discovered instances.

    Args:
        records: Decoded instances, already in presentation order.
    """
    if not records:
        console.print("[dim]No instances found.[/dim]")
        return

    table = Table(title="Visual Studio Instances", show_header=True, header_style="bold")
    table.add_column("Instance", style="bold")
    table.add_column("Display Name")
    table.add_column("Version", justify="right")
    table.add_column("State", justify="center")
    table.add_column("Path", style="dim")

    for record in records:
        table.add_row(
            record.instance_id,
            record.display_name or "-",
            str(record.installation_version),
            state_text(record.state),
            str(record.installation_path),
        )

    console.print(table)
    console.print(f"[bold]{len(records)}[/bold] instance(s) found")


def instances_to_json(records: list[InstanceRecord]) -> str:
    """Serialise instances for ``--output json``."""
    payload: list[dict[str, Any]] = [record.to_dict() for record in records]
    return json.dumps(payload, indent=2, ensure_ascii=False)
