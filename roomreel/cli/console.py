from rich.console import Console
from rich.table import Table

console = Console()


def info(message: str) -> None:
    console.print(f"[bold blue]{message}[/bold blue]")


def success(message: str) -> None:
    console.print(f"[green]✓[/green] {message}")


def error(message: str) -> None:
    console.print(f"[red]✗[/red] {message}")


def warn(message: str) -> None:
    console.print(f"[yellow]⊘[/yellow] {message}")


def table(title: str, headers: list[str], rows: list[list[str]]) -> None:
    t = Table(title=title)
    for header in headers:
        t.add_column(header)
    for row in rows:
        t.add_row(*row)
    console.print(t)
