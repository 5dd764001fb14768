"""
CLI Classification Commands

classify: Label the classes and methods described by a facts file
"""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from stereocode.config import StereotypeConfig, load_primitives_file
from stereocode.exceptions import (
    ClassificationError,
    ConfigError,
    FactContractError,
    FactsLoadError,
)
from stereocode.logging_config import logger
from stereocode.stereotype import classify_facts_file
from .config import CLIConfig
from .output import get_console, print_error, print_json

console = get_console()


def classify_cmd(
    facts: Path = typer.Argument(
        ..., help="Facts JSON produced by the fact extractor.", exists=True, dir_okay=False, readable=True
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Also write the results registry to this JSON file."
    ),
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON."),
    threshold: Optional[int] = typer.Option(
        None, "--threshold", help="Method count a class must exceed to be a large-class."
    ),
    primitives: Optional[Path] = typer.Option(
        None, "--primitives", help="JSON file of extra primitive types per language.", exists=True, dir_okay=False
    ),
    workers: Optional[int] = typer.Option(
        None, "--workers", "-w", help="Threads used to classify classes."
    ),
):
    """
    Assign method and class stereotypes from a facts file.

    Examples:
        stereocode classify facts.json
        stereocode classify facts.json --output stereotypes.json
        stereocode -H classify facts.json --threshold 30
    """
    try:
        config = StereotypeConfig()
        if primitives is not None:
            config = load_primitives_file(primitives, config)
        if threshold is not None:
            config = config.with_threshold(threshold)
        if workers is not None:
            config = config.with_max_workers(workers)

        registry = classify_facts_file(facts, config)
    except ConfigError as e:
        print_error("CONFIG_INVALID", str(e))
        raise typer.Exit(code=1)
    except FactsLoadError as e:
        print_error("FACTS_INVALID", e.message, input_value=e.file_path)
        raise typer.Exit(code=1)
    except (FactContractError, ClassificationError) as e:
        logger.error(str(e))
        print_error("CLASSIFICATION_FAILED", str(e), input_value=e.location)
        raise typer.Exit(code=1)

    if output is not None:
        registry.write_json(output)

    if CLIConfig.is_machine_mode() or json_output:
        print_json({
            "status": "success",
            "count": len(registry),
            "results": {str(unit_id): entries for unit_id, entries in sorted(registry.to_dict().items())},
        })
        return

    table = Table(title=f"Stereotypes for '{facts.name}'")
    table.add_column("Unit", justify="right", style="magenta")
    table.add_column("Location", style="cyan")
    table.add_column("Stereotype", style="green")
    for unit_id, location, stereotype in registry.items():
        table.add_row(str(unit_id), location, stereotype)

    console.print(table)
    console.print(f"[dim]{len(registry)} results[/dim]")
