"""
CLI Reference Commands

query: Show the structural query the fact extractor runs for a name
primitives: List the built-in types of a language
"""

import typer

from stereocode.config import PRIMITIVE_TYPES, resolve_language
from stereocode.exceptions import ConfigError
from stereocode.queries import available_queries, get_query
from .config import CLIConfig
from .output import echo, get_console, print_error, print_json

console = get_console()


def query_cmd(
    language: str = typer.Argument(..., help="Language: C++, C# or Java."),
    name: str = typer.Argument(..., help="Symbolic query name, e.g. attribute_name."),
):
    """
    Print the structural query template for a language.
    """
    try:
        query = get_query(language, name)
    except ConfigError as e:
        suggestions = None
        try:
            suggestions = available_queries(language)
        except ConfigError:
            pass
        print_error("UNKNOWN_QUERY", str(e), input_value=name, suggestions=suggestions)
        raise typer.Exit(code=1)

    if CLIConfig.is_machine_mode():
        print_json({"language": language, "name": name, "query": query})
    else:
        console.print(f"[cyan]{name}[/cyan] ({language}):")
        echo(query)


def primitives_cmd(
    language: str = typer.Argument(..., help="Language: C++, C# or Java."),
):
    """
    List the type names treated as primitive for a language.
    """
    try:
        lang = resolve_language(language)
    except ConfigError as e:
        print_error("UNKNOWN_LANGUAGE", str(e), input_value=language)
        raise typer.Exit(code=1)

    names = sorted(PRIMITIVE_TYPES[lang])
    if CLIConfig.is_machine_mode():
        print_json({"language": lang.value, "primitives": names})
    else:
        console.print(f"[cyan]{lang.value}[/cyan] primitive types:")
        echo(", ".join(names))
