"""
Command-line entry point.

Dry-run by default. Use --execute to perform cancels and --force-delete to
DELETE runs whose cancel is refused with 409 (admin only).
"""
import argparse
import logging
import sys
from typing import List, Optional

from run_canceller.agents.run_canceller import RunCanceller
from run_canceller.agents.run_poller import RunPoller
from run_canceller.core import config
from run_canceller.core.constants import MAX_PER_PAGE, VERSION
from run_canceller.services.github_client import GitHubAPIError, GitHubClient
from run_canceller.services.report_writer import ReportWriter
from run_canceller.utils.logging_config import setup_logging
from run_canceller.utils.repo_path import extract_repo_path

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cancel-queued-runs",
        description="Cancel queued and in-progress GitHub Actions runs of a repository.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""examples:
  %(prog)s --repo owner/repo                        Dry-run: list what would be cancelled
  %(prog)s --repo owner/repo --execute              Cancel queued/in-progress runs
  %(prog)s --execute --force-delete                 Delete runs that refuse to cancel (409)
  %(prog)s --execute --max-wait 60 --all-pages      Poll longer, walk every page

GITHUB_TOKEN (repo + workflow scopes) must be set in the environment or .env.
""",
    )
    parser.add_argument(
        "--execute",
        action="store_true",
        help="Actually send cancel requests (default is dry-run)",
    )
    parser.add_argument(
        "--force-delete",
        action="store_true",
        help="DELETE runs whose cancel returns 409 (admin only)",
    )
    parser.add_argument(
        "--repo",
        default=config.GITHUB_REPOSITORY,
        help="Repository (owner/repo or GitHub URL). Defaults to $GITHUB_REPOSITORY",
    )
    parser.add_argument(
        "--max-wait",
        type=int,
        default=config.CANCEL_MAX_WAIT,
        help=f"Seconds to poll a pre-queue run (default: {config.CANCEL_MAX_WAIT})",
    )
    parser.add_argument(
        "--poll-interval",
        type=int,
        default=config.CANCEL_POLL_INTERVAL,
        help=f"Seconds between polls (default: {config.CANCEL_POLL_INTERVAL})",
    )
    parser.add_argument(
        "--per-page",
        type=int,
        default=config.RUNS_PER_PAGE,
        help=f"Runs per list page, 1-{MAX_PER_PAGE} (default: {config.RUNS_PER_PAGE})",
    )
    parser.add_argument(
        "--all-pages",
        action="store_true",
        help="Walk every page of runs instead of only the first",
    )
    parser.add_argument(
        "--report",
        metavar="PATH",
        help="Write a JSON summary of the pass to PATH",
    )
    parser.add_argument(
        "--log-level",
        default=config.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help=f"Diagnostic log level (default: {config.LOG_LEVEL})",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {VERSION}",
    )
    return parser


def _validate(args: argparse.Namespace) -> Optional[str]:
    if args.poll_interval <= 0:
        return "--poll-interval must be at least 1"
    if args.max_wait < 0:
        return "--max-wait must be 0 or greater"
    if not 1 <= args.per_page <= MAX_PER_PAGE:
        return f"--per-page must be between 1 and {MAX_PER_PAGE}"
    return None


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point. Returns exit code."""
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level, log_file=config.LOG_FILE)

    error = _validate(args)
    if error:
        print(f"ERROR: {error}", file=sys.stderr)
        return 1

    token = config.GITHUB_TOKEN
    if not token:
        print("ERROR: please set GITHUB_TOKEN (repo + workflow scopes)", file=sys.stderr)
        return 1

    if not args.repo:
        print("ERROR: no repository given (use --repo or set GITHUB_REPOSITORY)", file=sys.stderr)
        return 1
    try:
        repo = extract_repo_path(args.repo)
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    dry_run = not args.execute
    if dry_run and args.force_delete:
        logger.warning("--force-delete has no effect without --execute")

    with GitHubClient(token, repo) as client:
        poller = RunPoller(client, max_wait=args.max_wait, poll_interval=args.poll_interval)
        canceller = RunCanceller(
            client,
            dry_run=dry_run,
            force_delete=args.force_delete,
            poller=poller,
            per_page=args.per_page,
            all_pages=args.all_pages,
        )
        try:
            summary = canceller.run()
        except GitHubAPIError as e:
            logger.error("Failed to list workflow runs for %s: %s", repo, e)
            if e.body:
                logger.debug("Response body: %s", e.body)
            return 1

    if args.report:
        ReportWriter.write_report(summary, args.report)

    return 1 if summary.has_failures else 0


def run() -> None:
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(130)
