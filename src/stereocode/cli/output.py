"""
CLI Output Utilities

Machine-aware output functions that adapt based on machine mode.
"""

import json
import re
from typing import Any, Optional

import typer
from rich.console import Console as RichConsole
from rich.table import Table

from stereocode.cli.config import CLIConfig


class MachineAwareConsole:
    """
    A Console wrapper that automatically adapts output based on machine mode.
    Acts as a drop-in replacement for rich.console.Console.
    """

    def __init__(self):
        self._rich_console = RichConsole()

    def print(self, *args, **kwargs):
        """Print that respects machine mode."""
        if CLIConfig.is_machine_mode():
            for arg in args:
                if isinstance(arg, str):
                    # Remove rich markup
                    plain = re.sub(r'\[.*?\]', '', arg).strip()
                    if plain:
                        print(plain)
                elif isinstance(arg, Table) or hasattr(arg, '__rich__'):
                    # Tables are for humans; machine mode uses JSON
                    pass
                elif arg:
                    print(arg)
        else:
            self._rich_console.print(*args, **kwargs)

    def __getattr__(self, name):
        """Delegate all other attributes to the rich console."""
        return getattr(self._rich_console, name)


_console = MachineAwareConsole()


def echo(message: str = "", **kwargs) -> None:
    """Print a message respecting machine mode."""
    if CLIConfig.is_machine_mode():
        print(message, **kwargs)
    else:
        typer.echo(message, **kwargs)


def print_json(data: Any, minified: Optional[bool] = None) -> None:
    """
    Print JSON data respecting machine mode.
    In machine mode, always minifies. In human mode, pretty prints.
    """
    if minified is None:
        minified = CLIConfig.is_machine_mode()

    if minified:
        echo(json.dumps(data, separators=(',', ':')))
    else:
        echo(json.dumps(data, indent=2))


def structured_error(code: str, message: str, input_value: Optional[str] = None,
                     suggestions: Optional[list] = None) -> dict:
    """
    Create a structured error object for machine mode.

    Args:
        code: Error code (e.g., "FACTS_INVALID", "UNKNOWN_QUERY")
        message: Human-readable error message
        input_value: The input that caused the error
        suggestions: List of alternative suggestions

    Returns:
        Structured error dictionary
    """
    error_obj = {
        "status": "error",
        "code": code,
        "message": message
    }
    if input_value:
        error_obj["input"] = input_value
    if suggestions:
        error_obj["suggestions"] = suggestions
    return error_obj


def print_error(code: str, message: str, input_value: Optional[str] = None,
                suggestions: Optional[list] = None) -> None:
    """
    Print an error respecting machine mode.
    In machine mode, outputs a structured JSON error on stdout.
    """
    if CLIConfig.is_machine_mode():
        print_json(structured_error(code, message, input_value, suggestions))
    else:
        _console.print(f"[red]Error:[/red] {message}")
        if suggestions:
            _console.print(f"[dim]Suggestions: {', '.join(suggestions)}[/dim]")


def get_console() -> MachineAwareConsole:
    """Get the console instance for advanced usage."""
    return _console
