"""CLI commands for scanning repositories into the local cache."""

import typer
from rich.console import Console
from rich.table import Table

from ..config import DigestConfig
from ..exceptions import IssueDigestError
from ..github_client.client import GitHubClient
from ..storage.manager import IssueCache

console = Console()


def scan(
    repo: str = typer.Argument(..., help="Repository as owner/name"),
    db: str | None = typer.Option(
        None, "--db", help="SQLite cache file (defaults to ISSUE_DIGEST_DB)"
    ),
    token: str | None = typer.Option(
        None, "--token", help="GitHub API token (defaults to GITHUB_TOKEN env var)"
    ),
) -> None:
    """Fetch all open issues of a repository and replace its cached copy.

    Examples:
        issue-digest scan octo/demo
        issue-digest scan microsoft/vscode --db data/issues.db
    """
    config = DigestConfig.from_env(github_token=token, database_path=db)

    try:
        console.print(f"🔍 Fetching open issues from {repo}")
        client = GitHubClient.from_config(config)
        issues = client.fetch_open_issues(repo)
        console.print(f"✅ Found {len(issues)} open issues")

        console.print("💾 Saving issues to cache...")
        cache = IssueCache(config.database_path)
        saved = cache.save_issues(repo, issues)
    except IssueDigestError as e:
        console.print(f"[red]❌ {e.message}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Cached {saved} issues for {repo}[/green]")


def status(
    repo: str | None = typer.Argument(None, help="Only show this repository"),
    db: str | None = typer.Option(
        None, "--db", help="SQLite cache file (defaults to ISSUE_DIGEST_DB)"
    ),
) -> None:
    """Show which repositories are cached and when they were scanned."""
    config = DigestConfig.from_env(database_path=db)
    cache = IssueCache(config.database_path)

    if repo:
        info = cache.get_scan_info(repo)
        scans = [info] if info else []
    else:
        scans = cache.list_repositories()

    if not scans:
        console.print("[yellow]No scanned repositories found[/yellow]")
        return

    table = Table(title="Cached Repositories")
    table.add_column("Repository", style="cyan")
    table.add_column("Open Issues", style="green", justify="right")
    table.add_column("Scanned At", style="yellow")

    for info in scans:
        table.add_row(
            info.repo,
            str(info.issue_count),
            info.scanned_at.strftime("%Y-%m-%d %H:%M:%S UTC"),
        )

    console.print(table)


def rate_limit(
    token: str | None = typer.Option(
        None, "--token", help="GitHub API token (defaults to GITHUB_TOKEN env var)"
    ),
) -> None:
    """Show the remaining GitHub API quota."""
    config = DigestConfig.from_env(github_token=token)

    try:
        limits = GitHubClient.from_config(config).get_rate_limit()
    except IssueDigestError as e:
        console.print(f"[red]❌ {e.message}[/red]")
        raise typer.Exit(1)

    console.print(
        f"GitHub API rate limit: {limits.remaining}/{limits.limit} requests "
        f"remaining (resets {limits.reset:%H:%M:%S})"
    )
