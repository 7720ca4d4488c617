"""Main CLI entry point."""

import logging

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from .analyze import analyze, check_llm
from .scan import rate_limit, scan, status

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="issue-digest",
    help="GitHub open issue caching and AI analysis",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    """Configure logging for all commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


app.command(name="scan")(scan)
app.command(name="analyze")(analyze)
app.command(name="status")(status)
app.command(name="rate-limit")(rate_limit)
app.command(name="check-llm")(check_llm)


@app.command()
def version() -> None:
    """Show version information."""
    from issue_digest import __version__

    console.print(f"Issue Digest v{__version__}")


if __name__ == "__main__":
    app()
