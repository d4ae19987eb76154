"""
Render views as a table (rich) or as JSON.
"""

from __future__ import annotations

import io
import json
from dataclasses import asdict, fields
from typing import Sequence

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from batteries.core.views import FullRecord, Record, SummaryRecord

def _columns(records: Sequence[Record], full: bool) -> list[str]:
    record_type = type(records[0]) if records else (FullRecord if full else SummaryRecord)
    return [f.name for f in fields(record_type)]

def _cell(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)

def render_json(records: Sequence[Record]) -> str:
    """Pretty-printed JSON array, fields in record order"""
    return json.dumps([asdict(r) for r in records], indent=2, ensure_ascii=False)

def render_table(records: Sequence[Record], full: bool = False, color: bool = False) -> str:
    """
    Aligned table with one header row (the record field names) and one row
    per record, in view order.

    Args:
        records: View records
        full: Which header to use when records is empty (full vs summary)
        color: Emit ANSI styles (terminals only)
    """
    columns = _columns(records, full)

    table = Table(box=box.ROUNDED, header_style="bold cyan" if color else "")
    for name in columns:
        table.add_column(name, no_wrap=True)
    for r in records:
        # Text cells: device names are shown verbatim, never parsed as markup
        table.add_row(*(Text(_cell(getattr(r, name))) for name in columns))

    buf = io.StringIO()
    console = Console(
        file=buf,
        width=10_000,
        force_terminal=color,
        color_system="standard" if color else None,
        highlight=False,
        markup=False,
        emoji=False,
    )
    console.print(table)
    return buf.getvalue().rstrip("\n")

def render(records: Sequence[Record], as_json: bool, full: bool = False, color: bool = False) -> str:
    if as_json:
        return render_json(records)
    return render_table(records, full=full, color=color)
