"""CLI for the pocketcalc calculator engine.

Usage:
    python -m pocketcalc keys                      # Show the keypad and aliases
    python -m pocketcalc run 2 + 3 = =             # Replay keys, print display
    python -m pocketcalc run "200+10%=" --trace    # Display after every key
    python -m pocketcalc run 5 MS 7 M+ Mv --json   # Dump the session snapshot
    python -m pocketcalc repl                      # Interactive session
"""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from pocketcalc.config import configure_logging
from pocketcalc.keys import KEY_ROWS, MEMORY_ROW, UnknownKeyError, aliases
from pocketcalc.models import Step
from pocketcalc.session import Calculator

app = typer.Typer(
    name="pocketcalc",
    help="Pocket calculator engine driven by key presses",
    no_args_is_help=True,
)
console = Console(stderr=True)
out = Console(highlight=False)

_QUIT_WORDS = ("q", "quit", "exit")


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING (default: $POCKETCALC_LOG_LEVEL)"),
) -> None:
    configure_logging(log_level)


def _render_memory(calc: Calculator) -> None:
    table = Table(title="Memory", show_header=False)
    table.add_column("Value", justify="right", min_width=16)
    for line in calc.memory_lines():
        table.add_row(line)
    out.print(table)


def _render_trace(steps: list[Step]) -> None:
    table = Table(title="Key trace", show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Key", style="cyan")
    table.add_column("Display", justify="right", min_width=16)
    show_memory = any(step.memory for step in steps)
    if show_memory:
        table.add_column("Memory", justify="right")
    for i, step in enumerate(steps, 1):
        row = [str(i), step.token, step.display]
        if show_memory:
            row.append(" ".join(step.memory) if step.memory else "[dim]--[/dim]")
        table.add_row(*row)
    out.print(table)


@app.command("keys")
def cmd_keys() -> None:
    """Show the keypad layout and the tokens each key accepts."""
    pad = Table(title="Keypad", show_header=False)
    for _ in range(4):
        pad.add_column(justify="center", min_width=5)
    pad.add_row(*MEMORY_ROW[:4])
    pad.add_row(*MEMORY_ROW[4:], "", "")
    pad.add_section()
    for row in KEY_ROWS:
        pad.add_row(*row)
    out.print(pad)

    table = Table(title="Accepted tokens", show_header=True, header_style="bold")
    table.add_column("Key", style="green")
    table.add_column("Tokens")
    table.add_row("0-9", "0 1 2 3 4 5 6 7 8 9")
    for label, names in aliases().items():
        table.add_row(label, " ".join(names))
    out.print(table)


@app.command("run")
def cmd_run(
    keys: list[str] = typer.Argument(help="Keys to press, e.g. '2 + 3 =' or '12*3='"),
    trace: bool = typer.Option(False, "--trace", "-t", help="Show the display after every key"),
    as_json: bool = typer.Option(False, "--json", help="Print the final session snapshot as JSON"),
) -> None:
    """Replay a sequence of keys and print the final display."""
    calc = Calculator()
    try:
        steps = calc.run(" ".join(keys))
    except UnknownKeyError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if trace:
        _render_trace(steps)
    if as_json:
        out.print_json(data=calc.snapshot())
        return
    if calc.memory_expanded:
        _render_memory(calc)
    out.print(calc.display)


@app.command("repl")
def cmd_repl() -> None:
    """Interactive session: type keys, see the display. 'q' quits."""
    calc = Calculator()
    console.print("[dim]Keys separated by spaces; 'keys' lists them, 'q' quits.[/dim]")
    out.print(calc.display)
    while True:
        try:
            line = console.input("[bold]>[/bold] ")
        except (EOFError, KeyboardInterrupt):
            break
        text = line.strip()
        if not text:
            continue
        if text.lower() in _QUIT_WORDS:
            break
        if text.lower() == "keys":
            cmd_keys()
            continue
        try:
            calc.run(text)
        except UnknownKeyError as e:
            console.print(f"[red]{e}[/red]")
            continue
        if calc.memory_expanded:
            _render_memory(calc)
        out.print(calc.display)


if __name__ == "__main__":
    app()
