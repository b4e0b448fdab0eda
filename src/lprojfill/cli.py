"""Command-line entry point.

Usage:
    lprojfill --proj MyApp/Resources --target de [--exclude PATTERN]... [PHRASE ...]

Discovers the project's locales, seeds the target locale directory if it is
missing, and resolves each phrase (or, with no phrases given, every phrase
of the base locale) into the target locale.

Credentials default to environment variables so they need not appear in
shell history:
    GITHUB_TOKEN            - enables the GitHub code search fallback
    LIBRETRANSLATE_URL      - enables the machine-translation fallback
    LIBRETRANSLATE_API_KEY  - API key for the translation service

Exit Codes:
    0: Run completed (individual phrases may still be unresolved)
    1: Project path missing or not a directory, no localizations found,
       or base locale directory absent
    2: Invalid command-line arguments

Python 3.13+.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from collections.abc import Sequence

import httpx

from lprojfill.collaborators import FileSystemCopier, GitHubCodeSearch, LibreTranslateTranslator
from lprojfill.config import GitHubConfig, TranslatorConfig
from lprojfill.constants import DEFAULT_BASE_LOCALE, DEFAULT_TIMEOUT
from lprojfill.diagnostics import ProjectError
from lprojfill.locale_utils import describe_locale
from lprojfill.project import Project
from lprojfill.resolution import BatchResult, Deadline, Resolver

__all__ = ["build_parser", "main"]

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="lprojfill",
        description="Fill missing .strings translations for a target locale.",
    )
    parser.add_argument("phrases", nargs="*", metavar="PHRASE", help="Phrases to resolve")
    parser.add_argument("-p", "--proj", required=True, help="Path to the project to translate")
    parser.add_argument(
        "-e",
        "--exclude",
        action="append",
        metavar="PATTERN",
        help=(
            "Ignore string tables whose path contains PATTERN (case-insensitive); "
            "repeat for several patterns"
        ),
    )
    parser.add_argument("-t", "--target", required=True, help="Target locale code (e.g. de)")
    parser.add_argument(
        "-b",
        "--base",
        default=DEFAULT_BASE_LOCALE,
        help=f"Base locale code (default: {DEFAULT_BASE_LOCALE})",
    )
    parser.add_argument(
        "--token",
        default=os.environ.get("GITHUB_TOKEN"),
        help="GitHub access token (default: $GITHUB_TOKEN)",
    )
    parser.add_argument(
        "--translate-url",
        default=os.environ.get("LIBRETRANSLATE_URL"),
        help="LibreTranslate service URL (default: $LIBRETRANSLATE_URL)",
    )
    parser.add_argument(
        "--translate-key",
        default=os.environ.get("LIBRETRANSLATE_API_KEY"),
        help="LibreTranslate API key (default: $LIBRETRANSLATE_API_KEY)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f"Per-request network timeout in seconds (default: {DEFAULT_TIMEOUT})",
    )
    parser.add_argument(
        "--deadline",
        type=float,
        default=None,
        help="Overall time budget in seconds for network fallbacks",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _format_result(result: BatchResult) -> str:
    if result.resolution is None:
        return f"{result.phrase}: no result"
    resolution = result.resolution
    return f"{result.phrase} -> {resolution.value} ({resolution.origin})"


async def _run(args: argparse.Namespace, project: Project, phrases: Sequence[str]) -> int:
    async with httpx.AsyncClient() as client:
        search = None
        if args.token:
            search = GitHubCodeSearch(GitHubConfig(token=args.token, timeout=args.timeout), client)
        translator = None
        if args.translate_url or args.translate_key:
            config = TranslatorConfig(
                url=args.translate_url or TranslatorConfig().url,
                api_key=args.translate_key,
                timeout=args.timeout,
            )
            translator = LibreTranslateTranslator(config, client)

        resolver = Resolver(
            project,
            base_locale=args.base,
            search=search,
            translator=translator,
            copier=FileSystemCopier(),
        )
        deadline = Deadline.after(args.deadline) if args.deadline else Deadline.never()
        results = await resolver.resolve_many(phrases, args.target, deadline=deadline)

    for result in results:
        print(_format_result(result))
    resolved = sum(1 for r in results if r.ok)
    logger.info("Resolved %d of %d phrase(s)", resolved, len(results))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line tool.

    Args:
        argv: Arguments excluding the program name (default: sys.argv[1:])

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    project = Project(args.proj, exclude=args.exclude or ())
    try:
        project.validate()
        locales = project.available_locales()
    except ProjectError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if not locales:
        print(f"Failed to find localizable files in {project.root}", file=sys.stderr)
        return 1
    print("Found localizations: " + ", ".join(describe_locale(code) for code in locales))

    if args.base not in locales:
        print(
            f"error: base locale directory not found: {project.locale_dir(args.base)}",
            file=sys.stderr,
        )
        return 1

    phrases = args.phrases or list(project.base_phrases(args.base))
    try:
        return asyncio.run(_run(args, project, phrases))
    except ProjectError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
