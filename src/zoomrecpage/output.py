"""
Output formatters for the CLI (JSON, TSV, human-readable)
"""

import json
from typing import Any

from rich.console import Console
from rich.table import Table

ENTRY_COLUMNS = ["meeting_id", "start_time", "label", "url"]


class OutputFormatter:
    """Format output in different modes"""

    def __init__(self, mode: str = "human"):
        """
        Initialize formatter

        Args:
            mode: Output mode (human, json, tsv)
        """
        self.mode = mode.lower()
        self.console = Console()

    def output_entries(self, entries: list[dict[str, Any]], title: str = "Zoom Recordings") -> None:
        """
        Output the linked files that the page would show

        Args:
            entries: Rows with meeting_id, start_time, label and url
            title: Table title in human mode
        """
        if self.mode == "json":
            self._output_json({"entries": entries, "total_entries": len(entries)})
        elif self.mode == "tsv":
            self._output_tsv(entries)
        else:
            self._output_human_entries(entries, title)

    def output_error(self, message: str) -> None:
        """Output error message"""
        if self.mode == "json":
            self._output_json({"status": "error", "error": message})
        else:
            self.console.print(f"[bold red]Error:[/bold red] {message}")

    def output_success(self, message: str) -> None:
        """Output success message"""
        if self.mode == "json":
            self._output_json({"status": "success", "message": message})
        else:
            self.console.print(f"[bold green]✓[/bold green] {message}")

    def _output_json(self, data: Any) -> None:
        print(json.dumps(data, indent=2))

    def _output_tsv(self, data: list[dict[str, Any]]) -> None:
        """Output as TSV with a fixed column order"""
        print("\t".join(ENTRY_COLUMNS))
        for item in data:
            print("\t".join(str(item.get(key, "")) for key in ENTRY_COLUMNS))

    def _output_human_entries(self, entries: list[dict[str, Any]], title: str) -> None:
        if not entries:
            self.console.print("[yellow]No recordings found[/yellow]")
            return

        table = Table(title=title)
        table.add_column("Meeting ID", style="cyan")
        table.add_column("Start Time", style="blue")
        table.add_column("File", style="green")
        table.add_column("URL", style="magenta", overflow="fold")

        for entry in entries:
            table.add_row(
                str(entry.get("meeting_id", "")),
                entry.get("start_time", ""),
                entry.get("label", ""),
                entry.get("url", ""),
            )

        self.console.print(table)
