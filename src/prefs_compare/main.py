"""Main entry point for prefs-compare CLI."""

import sys
from pathlib import Path
from typing import Optional

import typer
from InquirerPy import inquirer
from InquirerPy.base.control import Choice
from rich.console import Console
from rich.text import Text

from prefs_compare import __version__

console = Console()
app = typer.Typer(
    help="Compare two preference files and report the differences.",
    no_args_is_help=False,
    invoke_without_command=True,
)

TITLE_COLOR = "#0E7490"
ACCENT_COLOR = "#7C3AED"
QMARK = "»"

SEPARATOR = "[dim]────────────────────────────────────────────────────────[/dim]"


def show_welcome() -> None:
    """Display the welcome banner with the current settings."""
    from prefs_compare.config import get_hide_mask, get_output_file

    console.print()
    title = Text()
    title.append("  prefs", style=f"bold {TITLE_COLOR}")
    title.append("-compare", style=f"bold {ACCENT_COLOR}")
    title.append(" v" + __version__, style="dim")
    title.append("  ◦  ", style="dim")
    title.append("Preference file comparison", style="dim italic")
    console.print(title)

    settings = Text()
    settings.append("  Report: ", style="dim")
    settings.append(str(get_output_file()), style=f"bold {ACCENT_COLOR}")
    hide_mask = get_hide_mask()
    if hide_mask:
        settings.append(f"  (hidden sections mask {hide_mask})", style="dim")
    console.print(settings)
    console.print()


def show_main_menu() -> str | None:
    """Display the main menu and return the selected option."""
    choices = [
        Choice(value="compare", name="Compare files"),
        Choice(value="set_output", name="Set report file"),
        Choice(value="set_hidden", name="Choose hidden report sections"),
        Choice(value=None, name="Exit"),
    ]

    return inquirer.rawlist(
        message="Select an option:",
        choices=choices,
        default="compare",
        qmark=QMARK,
        amark=QMARK,
        instruction="(↑↓ or type number)",
    ).execute()


def _prompt_path(message: str) -> str | None:
    try:
        path_str = inquirer.filepath(
            message=message,
            default="",
            qmark=QMARK,
            amark=QMARK,
            instruction="(ctrl+c to go back)",
        ).execute()
    except KeyboardInterrupt:
        return None

    if path_str:
        path_str = path_str.strip()
    return path_str or None


def _ask_write_mode(output_path: Path, append: bool, force: bool) -> str | None:
    """Decide whether to overwrite or append to the report file.

    Returns:
        "overwrite", "append", or None when the user cancels.
    """
    if append:
        return "append"
    if force or not output_path.exists():
        return "overwrite"
    if not sys.stdin.isatty():
        return "overwrite"

    console.print(f"[yellow]Report file already exists:[/yellow] {output_path}")
    try:
        return inquirer.select(
            message="What should happen to it?",
            choices=[
                Choice(value="overwrite", name="Overwrite"),
                Choice(value="append", name="Append"),
                Choice(value=None, name="Cancel"),
            ],
            default="overwrite",
            qmark=QMARK,
            amark=QMARK,
        ).execute()
    except KeyboardInterrupt:
        return None


def _print_summary(result, label_a: str, label_b: str) -> None:
    from prefs_compare.compare import CATEGORY_ORDER, category_label

    counts = result.counts()
    console.print(f"[bold]{label_a}[/bold] [dim]<>[/dim] [bold]{label_b}[/bold]")
    console.print(f"  [dim]•[/dim] {label_a}: {result.unique_a} unique declarations")
    console.print(f"  [dim]•[/dim] {label_b}: {result.unique_b} unique declarations")
    for category in CATEGORY_ORDER:
        if counts[category]:
            console.print(f"  [dim]•[/dim] {counts[category]} {category_label(category, label_a, label_b)}")

    broken_a = len(result.broken_a)
    broken_b = len(result.broken_b)
    if broken_a or broken_b:
        console.print(
            f"[yellow]Broken syntax:[/yellow] {label_a}={broken_a}, {label_b}={broken_b}"
        )


def run_compare(
    path_a: str,
    path_b: str,
    output: Path | None = None,
    append: bool = False,
    force: bool = False,
    hide_mask: int | None = None,
    parse_comments_a: bool = True,
    parse_comments_b: bool = True,
    json_output: Path | None = None,
    to_stdout: bool = False,
) -> None:
    """Run the compare workflow for two sides.

    Raises:
        typer.Exit: With code 1 on invalid input or write failure.
    """
    from prefs_compare.compare import compare, render_report, write_json_report, write_report
    from prefs_compare.config import get_hide_mask, get_output_file
    from prefs_compare.parse import parse_declarations
    from prefs_compare.utils import find_input_files, load_side, make_side_labels

    files_a = find_input_files(path_a)
    files_b = find_input_files(path_b)
    for path_str, files in ((path_a, files_a), (path_b, files_b)):
        if not files:
            console.print(f"[red]Error:[/red] No files found for {path_str}")
            raise typer.Exit(1)

    label_a, label_b = make_side_labels(path_a, files_a, path_b, files_b)

    try:
        text_a = load_side(files_a)
        text_b = load_side(files_b)
    except RuntimeError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1)

    if not to_stdout:
        for label, files, parse_comments in (
            (label_a, files_a, parse_comments_a),
            (label_b, files_b, parse_comments_b),
        ):
            mode = "" if parse_comments else " (comments ignored)"
            console.print(f"[dim]Parsing {label}: {len(files)} file(s){mode}[/dim]")

    records_a = parse_declarations(text_a, parse_comments=parse_comments_a)
    records_b = parse_declarations(text_b, parse_comments=parse_comments_b)
    result = compare(records_a, records_b)

    if hide_mask is None:
        hide_mask = get_hide_mask()
    report = render_report(result, label_a, label_b, suppress_mask=hide_mask)

    if json_output is not None:
        try:
            write_json_report(result, label_a, label_b, json_output)
        except OSError as exc:
            console.print(f"[red]Error:[/red] Failed to write {json_output}: {exc}")
            raise typer.Exit(1)

    if to_stdout:
        typer.echo(report, nl=False)
        return

    output_path = output if output is not None else get_output_file()
    mode = _ask_write_mode(output_path, append, force)
    if mode is None:
        console.print("[dim]Cancelled[/dim]\n")
        return

    try:
        write_report(report, output_path, append=(mode == "append"))
    except OSError as exc:
        console.print(f"[red]Error:[/red] Failed to write {output_path}: {exc}")
        raise typer.Exit(1)

    console.print(SEPARATOR)
    _print_summary(result, label_a, label_b)
    console.print(SEPARATOR)
    action = "Appended to" if mode == "append" else "Report written to"
    console.print(f"[green]{action}[/green] [cyan]{output_path}[/cyan]")
    if json_output is not None:
        console.print(f"[dim]JSON:[/dim] [cyan]{json_output}[/cyan]")
    console.print()


def handle_compare() -> None:
    """Handle the Compare files option (interactive)."""
    from prefs_compare.utils import validate_path

    console.print()

    sides = []
    for side in ("A", "B"):
        path_str = _prompt_path(f"Enter file, folder or pattern for side {side}:")
        if not path_str:
            console.print("[dim]Cancelled[/dim]\n")
            return
        # Shell-escaped paths from tab-completion; patterns are used as typed
        path = validate_path(path_str)
        sides.append(str(path) if path is not None else path_str)

    run_compare(sides[0], sides[1])


def handle_set_output() -> None:
    """Handle the Set report file option (interactive)."""
    from prefs_compare.config import get_output_file, set_output_file

    console.print()
    console.print(f"[dim]Current report file:[/dim] [cyan]{get_output_file()}[/cyan]")
    path_str = _prompt_path("Enter report file path:")
    if not path_str:
        console.print("[dim]Cancelled[/dim]\n")
        return

    set_output_file(Path(path_str))
    console.print(f"[green]Done![/green] Reports will be written to {get_output_file()}\n")


def handle_set_hidden() -> None:
    """Handle the Choose hidden report sections option (interactive)."""
    from prefs_compare.compare import BROKEN, CATEGORY_ORDER, SECTION_BITS
    from prefs_compare.config import get_hide_mask, set_hide_mask

    current = get_hide_mask()
    choices = [
        Choice(value=SECTION_BITS[section], name=section, enabled=bool(current & SECTION_BITS[section]))
        for section in (*CATEGORY_ORDER, BROKEN)
    ]

    console.print()
    try:
        selected = inquirer.checkbox(
            message="Sections to hide from the detailed report:",
            choices=choices,
            qmark=QMARK,
            amark=QMARK,
            instruction="(space to toggle, enter to confirm)",
        ).execute()
    except KeyboardInterrupt:
        console.print("[dim]Cancelled[/dim]\n")
        return

    mask = sum(selected)
    set_hide_mask(mask)
    console.print(f"[green]Done![/green] Hidden sections mask is now {mask}\n")


def interactive_mode() -> None:
    """Run the interactive menu loop."""
    show_welcome()

    handlers = {
        "compare": handle_compare,
        "set_output": handle_set_output,
        "set_hidden": handle_set_hidden,
    }

    while True:
        try:
            choice = show_main_menu()
            if choice is None:
                console.print("[dim]Goodbye![/dim]")
                break
            handlers[choice]()
        except KeyboardInterrupt:
            console.print("\n[dim]Cancelled[/dim]\n")
            continue
        except typer.Exit:
            # Errors are already printed; stay in the menu
            continue


# =============================================================================
# CLI Commands
# =============================================================================

@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show prefs-compare version and exit",
    ),
) -> None:
    """Preference file comparison tool.

    Run without arguments for interactive mode.
    """
    if version:
        console.print(__version__)
        raise typer.Exit(0)
    if ctx.invoked_subcommand is None:
        interactive_mode()


@app.command("compare")
def cmd_compare(
    path_a: str = typer.Argument(..., help="Side A: file, folder or glob pattern"),
    path_b: str = typer.Argument(..., help="Side B: file, folder or glob pattern"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Report file (defaults to the configured one)"
    ),
    append: bool = typer.Option(False, "--append", "-a", help="Append to an existing report"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing report without asking"),
    hide: Optional[int] = typer.Option(
        None,
        "--hide",
        "-H",
        help="Bitmask of detail sections to hide: 1 match, 2 value-diff, 4 missing-in-a, "
        "8 missing-in-b, 16 inactive-in-a, 32 inactive-in-b, 64 fully-mismatched, 128 broken",
    ),
    no_comments_a: bool = typer.Option(
        False, "--no-comments-a", help="Treat every declaration in side A as active (faster)"
    ),
    no_comments_b: bool = typer.Option(
        False, "--no-comments-b", help="Treat every declaration in side B as active (faster)"
    ),
    json_output: Optional[Path] = typer.Option(
        None, "--json", help="Also write the comparison as JSON to this path"
    ),
    to_stdout: bool = typer.Option(False, "--stdout", help="Print the report instead of writing it"),
) -> None:
    """Compare two preference files and write a difference report."""
    from prefs_compare.compare import ALL_SECTIONS_MASK

    if append and force:
        console.print("[red]Error:[/red] --append and --force cannot be combined")
        raise typer.Exit(1)

    if hide is not None and not 0 <= hide <= ALL_SECTIONS_MASK:
        console.print(f"[red]Error:[/red] --hide must be between 0 and {ALL_SECTIONS_MASK}")
        raise typer.Exit(1)

    run_compare(
        path_a,
        path_b,
        output=output,
        append=append,
        force=force,
        hide_mask=hide,
        parse_comments_a=not no_comments_a,
        parse_comments_b=not no_comments_b,
        json_output=json_output,
        to_stdout=to_stdout,
    )


@app.command("config")
def cmd_config(
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Default report file"),
    hide: Optional[int] = typer.Option(None, "--hide", "-H", help="Default hidden sections bitmask"),
    reset: bool = typer.Option(False, "--reset", help="Reset all settings to defaults"),
) -> None:
    """Show or change saved defaults."""
    from prefs_compare.compare import ALL_SECTIONS_MASK
    from prefs_compare.config import (
        clear_config,
        get_config_file,
        get_hide_mask,
        get_output_file,
        set_hide_mask,
        set_output_file,
    )

    if reset:
        clear_config()
        console.print("[green]Settings reset to defaults[/green]")

    if hide is not None:
        if not 0 <= hide <= ALL_SECTIONS_MASK:
            console.print(f"[red]Error:[/red] --hide must be between 0 and {ALL_SECTIONS_MASK}")
            raise typer.Exit(1)
        set_hide_mask(hide)

    if output is not None:
        set_output_file(output)

    console.print(f"[dim]Config file:[/dim] {get_config_file()}")
    console.print(f"[dim]Report file:[/dim] [cyan]{get_output_file()}[/cyan]")
    console.print(f"[dim]Hidden sections mask:[/dim] {get_hide_mask()}")


def main() -> None:
    """Entry point for the console script."""
    app()


if __name__ == "__main__":
    main()
