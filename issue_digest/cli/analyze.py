"""CLI commands for LLM analysis of cached issues."""

import asyncio

import typer
from rich.console import Console
from rich.markdown import Markdown

from ..ai.agents import create_analysis_agent
from ..ai.analysis import analyze_issues, check_connection
from ..config import DigestConfig
from ..exceptions import IssueDigestError
from ..storage.manager import IssueCache

console = Console()


def analyze(
    repo: str = typer.Argument(..., help="Repository as owner/name"),
    prompt: str = typer.Option(
        ..., "--prompt", "-p", help="What you want to know about the issues"
    ),
    db: str | None = typer.Option(
        None, "--db", help="SQLite cache file (defaults to ISSUE_DIGEST_DB)"
    ),
    model: str | None = typer.Option(
        None,
        "--model",
        "-m",
        help="Gemini model (defaults to ISSUE_DIGEST_MODEL or gemini-2.0-flash)",
        rich_help_panel="AI Configuration",
    ),
    concurrency: int = typer.Option(
        1,
        "--concurrency",
        help="Concurrent chunk summary requests",
        rich_help_panel="AI Configuration",
    ),
    descriptions: bool = typer.Option(
        False,
        "--descriptions",
        help="Include truncated issue bodies in the prompt",
        rich_help_panel="AI Configuration",
    ),
) -> None:
    """Analyze the cached issues of a repository.

    Run ``scan`` first; the analysis only reads the local cache.

    Examples:
        issue-digest analyze octo/demo -p "What are the most common bugs?"
    """
    try:
        config = DigestConfig.from_env(
            database_path=db,
            model=model,
            max_concurrency=concurrency,
            include_descriptions=descriptions,
        )
    except ValueError as e:
        console.print(f"[red]❌ Invalid configuration: {e}[/red]")
        raise typer.Exit(1)

    cache = IssueCache(config.database_path)
    issues = cache.get_issues(repo)
    if not issues:
        if cache.get_scan_info(repo) is None:
            console.print(
                f"[red]No cached issues for {repo}. Run 'issue-digest scan {repo}' "
                "first.[/red]"
            )
            raise typer.Exit(1)
        console.print(f"[yellow]{repo} has no open issues to analyze.[/yellow]")
        return

    console.print(f"[blue]Analyzing {len(issues)} issues with {config.model}[/blue]")

    try:
        agent = create_analysis_agent(config)
        result = asyncio.run(analyze_issues(agent, issues, prompt, config))
    except IssueDigestError as e:
        console.print(f"[red]❌ {e.message}[/red]")
        raise typer.Exit(1)

    console.print(Markdown(result))


def check_llm(
    model: str | None = typer.Option(None, "--model", "-m", help="Gemini model"),
) -> None:
    """Verify that the LLM service is reachable."""
    config = DigestConfig.from_env(model=model)

    try:
        agent = create_analysis_agent(config)
    except IssueDigestError as e:
        console.print(f"[red]❌ {e.message}[/red]")
        raise typer.Exit(1)

    if asyncio.run(check_connection(agent, config)):
        console.print(f"[green]✅ {config.model} is reachable[/green]")
    else:
        console.print(f"[red]❌ Could not reach {config.model}[/red]")
        raise typer.Exit(1)
