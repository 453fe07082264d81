"""Command-line interface for the sitemap inspector."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import TYPE_CHECKING

from colorama import Fore, Style, just_fix_windows_console

from .config import InspectorConfig
from .errors import InspectorError
from .inspector import inspect_sitemap

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .report import BrokenLink, CrawlReport

EXIT_OK = 0
EXIT_BROKEN = 1


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="sitemap-inspector",
        description="Check that every page in a sitemap, and every link on those "
        "pages, can be fetched.",
    )
    parser.add_argument(
        "sitemap",
        help="URL of the sitemap, e.g. http://localhost:8080/sitemap.xml",
    )
    parser.add_argument(
        "--max-active-pages",
        help="Maximum number of pages fetched at the same time (default: 100)",
    )
    parser.add_argument(
        "--timeout",
        help="Timeout in seconds for each request (default: 10)",
    )
    parser.add_argument(
        "--connect-timeout",
        help="Connection timeout in seconds for each request (default: 5)",
    )
    parser.add_argument("--user-agent", help="User-Agent header to send")
    parser.add_argument(
        "--no-follow-redirects",
        dest="follow_redirects",
        action="store_false",
        help="Report redirects as broken links instead of following them",
    )
    parser.add_argument(
        "--fail-on-foreign",
        action="store_true",
        help="Also exit with an error when only links to other sites are broken",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the report as JSON",
    )
    parser.add_argument("--verbose", action="store_true", help="Log progress")
    parser.add_argument("--debug", action="store_true", help="Log every request")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> InspectorConfig:
    """Build the run configuration from parsed arguments."""
    return InspectorConfig.from_options(
        {
            "max_active_pages": args.max_active_pages,
            "timeout": args.timeout,
            "connect_timeout": args.connect_timeout,
            "user_agent": args.user_agent,
            "follow_redirects": args.follow_redirects,
        },
    )


def _configure_logging(args: argparse.Namespace) -> None:
    level = logging.WARNING
    if args.debug:
        level = logging.DEBUG
    elif args.verbose:
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def format_broken_link(link: BrokenLink, base_url: str) -> str:
    """Format a broken link with its parent page and error."""
    return f"{link.link} [parent: {link.parent_page or base_url}]\n   ==> {link.error}"


def print_report(report: CrawlReport) -> None:
    """Print broken links grouped by origin."""
    if not report.broken_links:
        print(f"{Fore.GREEN}\nAll links working\n{Style.RESET_ALL}")
        return

    for link in report.foreign_broken_links:
        print(f"{Fore.YELLOW}{format_broken_link(link, report.base_url)}{Style.RESET_ALL}")

    same_origin = report.same_origin_broken_links
    if same_origin:
        print("\n\n---------------")
        print(
            f"{Fore.RED}Following urls have issues. These are from your own domain "
            f'"{report.base_url}" and must be fixed.\n{Style.RESET_ALL}',
        )
        for link in same_origin:
            print(f"{Fore.RED}{format_broken_link(link, report.base_url)}{Style.RESET_ALL}")


def main(argv: Sequence[str] | None = None) -> int:
    """
    Run the inspector from the command line.

    Args:
        argv: Arguments without the program name, defaults to sys.argv

    Returns:
        Process exit code
    """
    args = parse_arguments(argv)
    _configure_logging(args)
    just_fix_windows_console()

    try:
        config = build_config(args)
        if not args.json:
            print(f"Inspecting sitemap from {args.sitemap}...")
        report = inspect_sitemap(args.sitemap, config)
    except InspectorError as e:
        print(f"{Fore.RED}{e}\n{Style.RESET_ALL}", file=sys.stderr)
        return EXIT_BROKEN

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        print_report(report)

    if report.same_origin_broken_links:
        return EXIT_BROKEN
    if args.fail_on_foreign and report.foreign_broken_links:
        return EXIT_BROKEN
    return EXIT_OK


def run() -> None:
    """Console script entry point."""
    sys.exit(main())
