"""Rich-based logger with playpen theming.

Compile sessions produce per-file statuses, error traces and generated code.
This logger keeps them readable with:
- Semantic colors (cyan=info, green=success, amber=warning, red=error)
- Structured output (tables, panels, key-value pairs)
- Syntax-highlighted code listings for compiled artifacts
"""
from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from playpen.compiler.result import CompileOutcome, CompileResult


PLAYPEN_THEME = Theme(
    {
        "info": "bold #7dcfff",
        "success": "bold #9ece6a",
        "warning": "bold #e0af68",
        "error": "bold #f7768e",
        "highlight": "bold #bb9af7",
        "muted": "dim #565f89",
        "metric": "#7aa2f7",
        "path": "italic #73daca",
    }
)

OUTCOME_STYLES = {
    CompileOutcome.COMPILED: "success",
    CompileOutcome.SKIPPED: "muted",
    CompileOutcome.ABORTED: "error",
}


class Logger:
    """Unified logging interface with rich console output."""

    def __init__(self) -> None:
        self.console = Console(theme=PLAYPEN_THEME)

    # ─────────────────────────────────────────────────────────────────────
    # Basic Logging
    # ─────────────────────────────────────────────────────────────────────

    def info(self, message: str) -> None:
        """Log an informational message (cyan ℹ)."""
        self.console.print(f"[info]ℹ[/info] {message}")

    def success(self, message: str) -> None:
        """Log a success message (green ✓)."""
        self.console.print(f"[success]✓[/success] {message}")

    def warning(self, message: str) -> None:
        """Log a warning message (amber ⚠)."""
        self.console.print(f"[warning]⚠[/warning] {message}")

    def error(self, message: str) -> None:
        """Log an error message (red ✗)."""
        self.console.print(f"[error]✗[/error] {message}")

    # ─────────────────────────────────────────────────────────────────────
    # Structured Output
    # ─────────────────────────────────────────────────────────────────────

    def header(self, title: str, subtitle: str | None = None) -> None:
        """Print a prominent section header."""
        header_text = Text()
        header_text.append("━" * 3 + " ", style="muted")
        header_text.append(title, style="highlight")
        if subtitle:
            header_text.append(f" • {subtitle}", style="muted")
        header_text.append(" " + "━" * 40, style="muted")
        self.console.print()
        self.console.print(header_text)
        self.console.print()

    def subheader(self, text: str) -> None:
        self.console.print(f"[muted]──[/muted] [highlight]{text}[/highlight]")

    def table(self, title: str | None = None) -> Table:
        """Create a styled table for manual population."""
        return Table(
            title=title,
            title_style="highlight",
            header_style="info",
            border_style="muted",
            row_styles=["", "dim"],
        )

    def key_value(self, data: dict[str, Any], title: str | None = None) -> None:
        """Display key-value pairs in a clean format."""
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("Key", style="muted")
        table.add_column("Value", style="metric")

        for key, value in data.items():
            table.add_row(f"{key}:", str(value))

        if title:
            self.subheader(title)
        self.console.print(table)

    # ─────────────────────────────────────────────────────────────────────
    # Compile-Specific Helpers
    # ─────────────────────────────────────────────────────────────────────

    def code(self, source: str, lexer: str = "javascript", title: str | None = None) -> None:
        """Print a syntax-highlighted code listing in a panel."""
        syntax = Syntax(source, lexer, line_numbers=True, word_wrap=True)
        self.console.print(Panel(syntax, title=title, border_style="muted"))

    def compile_results(self, results: list[CompileResult]) -> None:
        """Summarize a batch of compile results as a table, then list problems."""
        table = self.table(title="Compile results")
        table.add_column("File", style="path")
        table.add_column("Outcome")
        table.add_column("Errors", justify="right")
        table.add_column("SSR warnings", justify="right")
        for result in results:
            style = OUTCOME_STYLES[result.outcome]
            table.add_row(
                result.filename,
                f"[{style}]{result.outcome.value}[/{style}]",
                str(len(result.errors)),
                str(len(result.warnings)),
            )
        self.console.print(table)

        for result in results:
            for message in result.errors:
                self.error(f"[path]{escape(result.filename)}[/path]")
                self.console.print(Panel(Text(message), border_style="error"))
            for message in result.warnings:
                first_line = escape(message.splitlines()[0]) if message else ""
                self.warning(f"[path]{escape(result.filename)}[/path] SSR: {first_line}")


# ─────────────────────────────────────────────────────────────────────────────
# Module-Level Singleton
# ─────────────────────────────────────────────────────────────────────────────

_logger: Logger | None = None


def get_logger() -> Logger:
    """Get or create the singleton Logger instance.

    Using a singleton ensures consistent theming and avoids creating
    multiple Console instances.
    """
    global _logger
    if _logger is None:
        _logger = Logger()
    return _logger
