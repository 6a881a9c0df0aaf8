"""Console output and tracebacks with Rich"""

from typing import Optional

import structlog
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.theme import Theme
from rich.traceback import install as install_rich_traceback

from ..core.config import CodecConfig
from ..models.document import TableBlock

RELDOC_THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "block": "blue",
        "relation": "magenta",
        "count": "green",
    }
)


class ReldocConsole:
    """Singleton console with the reldoc theme"""

    _instance: Optional["ReldocConsole"] = None

    def __new__(cls) -> "ReldocConsole":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not hasattr(self, "initialized"):
            self.console = Console(theme=RELDOC_THEME)
            self.err_console = Console(theme=RELDOC_THEME, stderr=True)
            self.initialized = True

    def print_banner(self, version: str):
        self.console.print(
            Panel.fit(
                f"[bold cyan]reldoc[/bold cyan] {version}\n"
                "[dim]Relational document notation codec[/dim]",
                border_style="cyan",
            )
        )

    def print_config_summary(self, config: CodecConfig):
        """Print configuration summary table"""
        table = Table(title="Configuration", show_header=False, border_style="cyan")
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="yellow")

        table.add_row("Relation Policy", str(config.relation_policy))
        table.add_row("Foreign Key Suffix", config.foreign_key_suffix)
        table.add_row("Null Literal", config.null_literal)
        table.add_row("Strip Whitespace", "yes" if config.strip_whitespace else "no")
        table.add_row("Default Root Name", config.default_root_name)
        table.add_row("Log Level", str(config.log_level))
        table.add_row("Log File", str(config.log_file) if config.log_file else "disabled")

        self.console.print(table)

    def print_blocks(self, blocks: list[TableBlock]):
        """Print one row per block: name, relation, declared/actual rows, keys"""
        table = Table(title="Document Blocks", show_header=True, border_style="cyan")
        table.add_column("#", style="dim", justify="right")
        table.add_column("Block", style="block", no_wrap=True)
        table.add_column("Relation", style="relation", no_wrap=True)
        table.add_column("Rows", style="count", justify="right")
        table.add_column("Keys", style="dim")

        for index, block in enumerate(blocks, start=1):
            if block.relation is not None:
                relation = str(block.relation)
            elif block.raw_relation is not None:
                relation = f"[error]{block.raw_relation} (invalid)[/error]"
            else:
                relation = "[dim]root[/dim]"

            rows = str(len(block.rows))
            if len(block.rows) != block.declared_count:
                rows = f"{rows} [warning](declared {block.declared_count})[/warning]"

            table.add_row(str(index), block.name, relation, rows, ", ".join(block.keys))

        self.console.print(table)

    def print_success(self, message: str):
        self.err_console.print(f"[success]✓[/success] {message}")

    def print_error(self, message: str):
        self.err_console.print(f"[error]✗[/error] {message}")

    def print_warning(self, message: str):
        self.err_console.print(f"[warning]⚠[/warning] {message}")


# Global console instance
console = ReldocConsole()


def setup_rich_logging() -> None:
    """
    Install Rich's traceback handler globally.

    Call once at application startup (the CLI does). structlog configuration
    is handled separately in utils/logging.py.
    """
    install_rich_traceback(
        show_locals=False,
        width=120,
        extra_lines=3,
        theme="monokai",
        word_wrap=False,
        suppress=[structlog],
    )
