#!/usr/bin/env python3
"""
Command-line interface for running scrape jobs.

Uses typer for clean CLI with subcommands.
"""

import json
import sys
from pathlib import Path
from typing import List, Optional

import typer

# Add project root to path so we can import oxyjobs
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from oxyjobs.contexts.jobs.client import ScraperClient
from oxyjobs.contexts.jobs.orchestration import LOGS_PATH, run_scrapes
from oxyjobs.contexts.payloads.options import ScrapeOptions
from oxyjobs.contexts.payloads.sources import SOURCES, TARGET_QUERY, TARGET_URL

app = typer.Typer(
    add_completion=False,
    help="Scrape job runner for the push-pull scraper API",
)


def _parse_context(pairs: Optional[List[str]]) -> dict:
    """Turn KEY=VALUE pairs into a context dict. Values are read as JSON when possible."""
    context = {}
    for pair in pairs or []:
        if "=" not in pair:
            raise typer.BadParameter(f"Context entries must be KEY=VALUE, got '{pair}'")
        key, raw = pair.split("=", 1)
        try:
            context[key] = json.loads(raw)
        except ValueError:
            context[key] = raw
    return context


def _check_source(source: str, target_kind: str) -> None:
    spec = SOURCES.get(source)
    if spec is None or spec.target != target_kind:
        valid = sorted(name for name, s in SOURCES.items() if s.target == target_kind)
        typer.secho(f"Error: '{source}' is not a {target_kind} source", fg=typer.colors.RED, err=True)
        typer.echo(f"\nAvailable {target_kind} sources: {', '.join(valid)}", err=True)
        raise typer.Exit(code=1)


def _run(targets, source, options, quiet, output, log_dir) -> None:
    try:
        client = ScraperClient.from_env()
    except EnvironmentError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    try:
        results = run_scrapes(
            client,
            source,
            targets,
            options=options,
            verbose=not quiet,
            log_dir=log_dir,
        )
    except KeyboardInterrupt:
        typer.secho("\n\nInterrupted by user", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=130)

    if output is not None:
        dump = {
            target: r["response"].to_dict() if r["response"] else {"error": r["error"]}
            for target, r in results.items()
        }
        output.write_text(json.dumps(dump, indent=2, default=str))
        typer.echo(f"Wrote {len(dump)} result(s) to {output}")

    # Exit with error code if any scrape failed
    failures = sum(1 for r in results.values() if r["status"] == "failed")
    if failures > 0:
        raise typer.Exit(code=1)


@app.command("search")
def search_command(
    queries: List[str] = typer.Argument(..., help="Search query or queries"),
    source: str = typer.Option("google_search", "--source", "-s", help="Query source to use"),
    domain: Optional[str] = typer.Option(None, "--domain", "-d", help="Domain suffix (default: com)"),
    start_page: Optional[int] = typer.Option(None, "--start-page", "-p", min=1),
    pages: Optional[int] = typer.Option(None, "--pages", "-n", min=1),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", min=1),
    locale: Optional[str] = typer.Option(None, "--locale"),
    geo_location: Optional[str] = typer.Option(None, "--geo-location", "-g"),
    user_agent: Optional[str] = typer.Option(None, "--user-agent", "-u", help="User agent class (default: desktop)"),
    render: Optional[str] = typer.Option(None, "--render", help="html or png"),
    parse: bool = typer.Option(False, "--parse", help="Ask the service for parsed results"),
    context: Optional[List[str]] = typer.Option(None, "--context", "-c", help="Context entry KEY=VALUE (repeatable)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write decoded responses to a JSON file"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress verbose output (errors still logged)"),
    log_dir: Path = typer.Option(LOGS_PATH, "--log-dir", help="Directory for timestamped log files"),
):
    """
    Scrape one or more search queries.

    Examples:

        # Google search, parsed
        $ run_scrape.py search "adidas shoes" --parse

        # Bing, three pages from page 2
        $ run_scrape.py search nike -s bing_search -p 2 -n 3

        # Google shopping sorted by price
        $ run_scrape.py search "running shoes" -s google_shopping_search -c sort_by=p
    """
    _check_source(source, TARGET_QUERY)
    options = ScrapeOptions(
        domain=domain,
        start_page=start_page,
        pages=pages,
        limit=limit,
        locale=locale,
        geo_location=geo_location,
        user_agent_type=user_agent,
        render=render,
        parse=parse,
        context=_parse_context(context),
    )
    _run(queries, source, options, quiet, output, log_dir)


@app.command("url")
def url_command(
    urls: List[str] = typer.Argument(..., help="URL or URLs to scrape"),
    source: str = typer.Option("google", "--source", "-s", help="URL source to use"),
    geo_location: Optional[str] = typer.Option(None, "--geo-location", "-g"),
    user_agent: Optional[str] = typer.Option(None, "--user-agent", "-u", help="User agent class (default: desktop)"),
    render: Optional[str] = typer.Option(None, "--render", help="html or png"),
    parse: bool = typer.Option(False, "--parse", help="Ask the service for parsed results"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write decoded responses to a JSON file"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress verbose output (errors still logged)"),
    log_dir: Path = typer.Option(LOGS_PATH, "--log-dir", help="Directory for timestamped log files"),
):
    """
    Scrape one or more URLs.

    Examples:

        $ run_scrape.py url "https://www.google.com/search?q=adidas" --parse

        $ run_scrape.py url "https://www.bing.com/search?q=nike" -s bing
    """
    _check_source(source, TARGET_URL)
    options = ScrapeOptions(
        geo_location=geo_location,
        user_agent_type=user_agent,
        render=render,
        parse=parse,
    )
    _run(urls, source, options, quiet, output, log_dir)


@app.command("sources")
def sources_command():
    """List all supported sources."""
    typer.secho(f"Supported sources ({len(SOURCES)}):", fg=typer.colors.BLUE, bold=True)
    for name, spec in sorted(SOURCES.items()):
        typer.echo(f"  • {name} ({spec.target})")


if __name__ == "__main__":
    app()
