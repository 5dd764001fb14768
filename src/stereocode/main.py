import typer

from stereocode import __version__
from stereocode.logging_config import setup_logging
from stereocode.cli import classify, reference
from stereocode.cli.config import CLIConfig

app = typer.Typer()


# Global CLI callback for flags that apply to all commands
@app.callback()
def global_options(
    human: bool = typer.Option(
        False,
        "--human",
        "-H",
        help="Enable human mode: tables and colors (also via STEREOCODE_HUMAN_MODE env var)"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log debug output to stderr"
    ),
):
    """
    Stereocode: method and class stereotypes from structural facts.

    Machine mode is DEFAULT (pure data, no formatting).
    Use --human/-H for pretty output.
    """
    if human:
        CLIConfig.set_machine_mode(False)
        setup_logging(level="DEBUG" if verbose else "INFO", suppress_console=False, force=True)
    else:
        CLIConfig.set_machine_mode(None)
        # Machine mode keeps stderr quiet unless asked
        setup_logging(level="DEBUG", suppress_console=not verbose, force=True)


app.command(name="classify")(classify.classify_cmd)
app.command(name="query")(reference.query_cmd)
app.command(name="primitives")(reference.primitives_cmd)


@app.command()
def version():
    """
    Prints the current version of Stereocode.
    """
    typer.echo(f"Stereocode v{__version__}")
