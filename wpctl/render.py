"""Output rendering and formatting utilities.

This module renders entities returned by the client as tables, JSON, or
YAML.
"""

import sys
import json
import os
from typing import Any, Dict, List, Optional, Sequence

import yaml
from pydantic import BaseModel
from rich.console import Console
from rich.table import Table
from rich import box

from .exceptions import ValidationError

FORMATS = ("table", "json", "yaml")


def to_data(data: Any) -> Any:
    """Convert models (or lists of them) into plain JSON-compatible data."""
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", exclude_none=True)
    if isinstance(data, (list, tuple)):
        return [to_data(item) for item in data]
    if isinstance(data, dict):
        return {key: to_data(value) for key, value in data.items()}
    return data


def _cell(value: Any) -> str:
    if value is None:
        return ""
    # {raw, rendered} pairs show their rendered form
    if isinstance(value, dict) and "rendered" in value:
        return str(value.get("rendered") or "")
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


class OutputFormatter:
    """Main output formatter that handles multiple output formats."""

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize output formatter.

        Args:
            console: Rich console instance. If None, creates a new one.
        """
        self.console = console or Console()

    def determine_format(self, format_override: Optional[str] = None) -> str:
        """Determine the output format to use.

        Args:
            format_override: Explicit format override

        Returns:
            Format name (table, json, yaml)
        """
        if format_override:
            return format_override.lower()

        env_format = os.environ.get("WPCTL_OUTPUT_FORMAT")
        if env_format:
            return env_format.lower()

        # Auto-detect based on terminal
        if sys.stdout.isatty():
            return "table"
        return "json"

    def render(
        self,
        data: Any,
        format: Optional[str] = None,
        columns: Optional[Sequence[str]] = None,
        title: Optional[str] = None,
    ) -> None:
        """Render data in the specified format.

        Args:
            data: Model, list of models, or plain data
            format: Output format (table, json, yaml)
            columns: Columns to show in table format
            title: Table title
        """
        format_name = self.determine_format(format)
        plain = to_data(data)

        if format_name == "table":
            self.render_table(plain, columns=columns, title=title)
        elif format_name == "json":
            self.render_json(plain)
        elif format_name == "yaml":
            self.render_yaml(plain)
        else:
            raise ValidationError(f"Unknown output format: {format_name}")

    def render_table(
        self,
        data: Any,
        columns: Optional[Sequence[str]] = None,
        title: Optional[str] = None,
    ) -> None:
        """Render data as a table using Rich."""
        if not data:
            self.console.print("[dim]No data to display[/dim]")
            return

        rows: List[Dict[str, Any]] = data if isinstance(data, list) else [data]

        if not columns:
            columns = []
            for row in rows:
                for key in row:
                    if key not in columns:
                        columns.append(key)

        table = Table(title=title, box=box.ROUNDED)
        for col in columns:
            table.add_column(col.replace("_", " ").title(), overflow="fold")

        for row in rows:
            table.add_row(*[_cell(row.get(col)) for col in columns])

        self.console.print(table)

    def render_json(self, data: Any, indent: int = 2) -> None:
        """Render data as JSON."""
        try:
            print(json.dumps(data, indent=indent, ensure_ascii=False, default=str))
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Failed to serialize data to JSON: {e}")

    def render_yaml(self, data: Any) -> None:
        """Render data as YAML."""
        try:
            print(yaml.safe_dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False), end="")
        except yaml.YAMLError as e:
            raise ValidationError(f"Failed to serialize data to YAML: {e}")
