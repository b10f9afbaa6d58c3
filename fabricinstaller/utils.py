from rich.console import Console

console = Console()


def warn(message: str) -> None:
    console.print(f"[yellow]Warning: {message}[/]")
