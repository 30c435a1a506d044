"""
Scrape orchestration with logging.

Provides functionality to:
- Run one scrape job end to end and summarise it
- Run several targets one after another
- Log execution details to timestamped files
- Return structured results instead of raising
"""

import os
import time
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Optional

from dotenv import load_dotenv
from loguru import logger

from oxyjobs.contexts.jobs.client import ScraperClient
from oxyjobs.contexts.payloads.options import ScrapeOptions

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))


def _setup_logger(log_dir: Path = LOGS_PATH) -> Path:
    """
    Configure loguru to write to timestamped log file.

    Args:
        log_dir: Directory for log files (default: LOGS_PATH from environment)

    Returns:
        Path to the created log file
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"scrape_{timestamp}.txt"

    logger.remove()  # Remove default stderr handler
    logger.add(log_file, format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}")
    logger.add(
        lambda msg: print(msg, end=""),  # Also print to console
        format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}\n",
        level="INFO",
    )

    return log_file


def run_scrape(
    client: ScraperClient,
    source: str,
    target: str,
    options: Optional[ScrapeOptions] = None,
    verbose: bool = True,
) -> dict[str, Any]:
    """
    Run a single scrape job and return a summary.

    Args:
        client: Client to submit with
        source: Source name (e.g., "google_search")
        target: Query or URL
        options: Scrape options (default: all defaults)
        verbose: Log the traceback of failures at debug level

    Returns:
        Dict with keys:
            - status: "success" or "failed"
            - target: The query or URL
            - results: Number of result entries (if successful)
            - time_elapsed: Time in seconds
            - response: The ScrapeResponse (if successful)
            - error: Error message (if failed)
            - error_type: Exception class name (if failed)
            - traceback: Full traceback (if failed)
    """
    start_time = time.time()
    result = {
        "status": "failed",
        "target": target,
        "results": 0,
        "time_elapsed": 0.0,
        "response": None,
        "error": None,
        "error_type": None,
        "traceback": None,
    }

    try:
        logger.info(f"[{source}] Starting scrape of {target!r}")
        response = client.scrape(source, target, options)
        elapsed = time.time() - start_time

        result.update(
            {
                "status": "success",
                "results": len(response.results),
                "time_elapsed": elapsed,
                "response": response,
            }
        )
        logger.success(
            f"[{source}] Completed: {len(response.results)} result(s) for {target!r} ({elapsed:.1f}s)"
        )

    except Exception as e:
        elapsed = time.time() - start_time
        error_traceback = traceback.format_exc()

        result.update(
            {
                "time_elapsed": elapsed,
                "error": str(e),
                "error_type": type(e).__name__,
                "traceback": error_traceback,
            }
        )
        logger.error(f"[{source}] Failed for {target!r}: {type(e).__name__}: {e} ({elapsed:.1f}s)")

        if verbose:
            logger.debug(f"[{source}] Traceback:\n{error_traceback}")

    return result


def run_scrapes(
    client: ScraperClient,
    source: str,
    targets: str | Iterable[str],
    options: Optional[ScrapeOptions] = None,
    verbose: bool = True,
    log_dir: Optional[Path] = LOGS_PATH,
) -> dict[str, dict[str, Any]]:
    """
    Orchestrator: scrape one or more targets of the same source in turn.

    Args:
        client: Client to submit with
        source: Source name shared by all targets
        targets: Query/URL or list of them; repeated targets run once
        options: Scrape options applied to every target
        verbose: Print progress information (default: True)
        log_dir: Directory for log files; None keeps the current loguru sinks

    Returns:
        Dict mapping target -> result dict (see run_scrape)
    """
    if log_dir is not None:
        log_file = _setup_logger(log_dir)
        logger.info(f"Logging to: {log_file}")

    if isinstance(targets, str):
        targets = [targets]
    # Results are keyed by target, so each distinct target is scraped once
    targets = list(dict.fromkeys(targets))

    if not targets:
        logger.warning("No targets to scrape")
        return {}

    logger.info(f"Running {len(targets)} {source} scrape(s)")

    results = {}
    for target in targets:
        results[target] = run_scrape(client, source, target, options=options, verbose=verbose)

    successes = sum(1 for r in results.values() if r["status"] == "success")
    logger.info(
        f"Orchestration complete: {successes}/{len(targets)} scrapes succeeded, "
        f"{len(targets) - successes} failed"
    )

    if verbose and successes > 0:
        total_results = sum(r["results"] for r in results.values())
        total_time = sum(r["time_elapsed"] for r in results.values())
        logger.info(f"Total: {total_results} result(s) across all scrapes ({total_time:.1f}s)")

    return results
