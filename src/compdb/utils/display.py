from typing import Optional
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..parsing import CompilationDatabase, CompileCommand

# Theme Colors
C_TEXT = "#191A1A"
C_ACCENT1 = "#45d3ee" # Cyan
C_ACCENT2 = "#9FBFC5" # Muted Blue
C_ACCENT3 = "#94bfc1" # Teal
C_ACCENT4 = "#fecd91" # Orange


def format_argv(entry: CompileCommand, driver: Optional[str] = None) -> Text:
    """argv of an entry as styled text, with the executable highlighted."""
    try:
        argv = entry.argv(driver)
    except ValueError:
        # Flags without a driver to run them with
        argv = None

    if argv is None:
        if entry.arguments is not None:
            return Text(" ".join(entry.arguments), style=C_ACCENT3)
        return Text("<no arguments or command>", style=f"italic {C_ACCENT2}")
    if not argv:
        return Text("<empty>", style=f"italic {C_ACCENT2}")

    text = Text(argv[0], style=f"bold {C_ACCENT4}")
    if len(argv) > 1:
        text.append(" " + " ".join(argv[1:]), style=C_TEXT)
    return text


def build_table(database: CompilationDatabase, title: str = "Compilation Database",
                driver: Optional[str] = None) -> Table:
    table = Table(
        title=title,
        title_style=f"bold {C_ACCENT3}",
        header_style=f"bold {C_ACCENT1}",
        box=None,
        expand=True,
    )

    table.add_column("#", style=C_ACCENT2, no_wrap=True)
    table.add_column("File", style=f"bold {C_ACCENT1}", no_wrap=True)
    table.add_column("Directory", style=C_ACCENT3)
    table.add_column("Output", style=C_ACCENT4)
    table.add_column("Command")

    for idx, entry in enumerate(database):
        table.add_row(
            str(idx),
            str(entry.file),
            str(entry.directory),
            str(entry.output) if entry.output is not None else "",
            format_argv(entry, driver),
        )

    return table


def display_database(database: CompilationDatabase, title: str = "Compilation Database",
                     driver: Optional[str] = None, raw: bool = False,
                     console: Optional[Console] = None):
    """
    Prints the database as a table, or as the per-entry debug rendering when raw is set.
    """
    console = console or Console()

    if raw:
        for entry in database:
            # Rendered values may contain [brackets], so keep rich markup off
            console.print(str(entry), markup=False, highlight=False)
        return

    console.print(build_table(database, title=title, driver=driver))
    console.print(f"[{C_ACCENT2}]{len(database)} entries[/{C_ACCENT2}]")
