"""CLI entry point for the portfolio job matcher."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any

import yaml

from jobmatch.core.config import SearchConfig, Settings
from jobmatch.core.schemas import STRATEGIES
from jobmatch.pipeline.orchestrator import SearchReport, export_results_json, run_search
from jobmatch.profile.parser import parse_portfolio
from jobmatch.search.providers import SearchProvider, available_providers, get_provider
from jobmatch.search.query_builder import build_queries, default_filters

DEFAULT_CONFIG = "config/settings.yaml"

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Portfolio job matcher - find and rank job postings for a candidate portfolio",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- search subcommand ---
    search_parser = subparsers.add_parser("search", help="Search and rank jobs for a portfolio")
    _add_common_arguments(search_parser)
    _add_filter_arguments(search_parser)
    search_parser.add_argument(
        "--provider",
        choices=available_providers(),
        help="Search provider (overrides provider.name in the config)",
    )
    search_parser.add_argument(
        "--max-results",
        type=int,
        help="Maximum number of ranked jobs to return",
    )
    search_parser.add_argument(
        "--export",
        choices=["json"],
        help="Export results to format (json)",
    )

    # --- show-queries subcommand ---
    queries_parser = subparsers.add_parser(
        "show-queries",
        help="Print the queries a search would send, without calling a provider",
    )
    _add_common_arguments(queries_parser)
    _add_filter_arguments(queries_parser)

    # --- parse-profile subcommand ---
    profile_parser = subparsers.add_parser(
        "parse-profile",
        help="Parse a portfolio and print the derived candidate profile as YAML",
    )
    _add_common_arguments(profile_parser)
    profile_parser.add_argument(
        "--output",
        help="Write the profile YAML to this path instead of stdout",
    )

    return parser.parse_args(argv)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("portfolio", help="Path to the portfolio YAML or JSON file")
    parser.add_argument(
        "--config",
        help=f"Path to settings YAML file (default: {DEFAULT_CONFIG} when present)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )


def _add_filter_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--location", help="Preferred job location")
    parser.add_argument(
        "--remote",
        action="store_true",
        default=None,
        help="Only favour remote positions",
    )
    parser.add_argument("--job-type", help="Job type, e.g. full-time or contract")
    parser.add_argument(
        "--strategy",
        action="append",
        choices=list(STRATEGIES),
        help="Search strategy to run (repeatable; default: all)",
    )


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def load_settings(path: str | None) -> Settings:
    """Settings from ``path``, else the default config file when present, else defaults."""
    if path is not None:
        return Settings.from_yaml(path)
    if Path(DEFAULT_CONFIG).exists():
        return Settings.from_yaml(DEFAULT_CONFIG)
    logger.debug("No config file, using default settings")
    return Settings()


def load_portfolio(path: str | Path) -> Any:
    """Read portfolio content from a YAML (or JSON) file."""
    path = Path(path)
    if not path.exists():
        msg = f"Portfolio file not found: {path}"
        raise FileNotFoundError(msg)
    return yaml.safe_load(path.read_text()) or {}


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Fold CLI search options into the settings."""
    search_updates: dict[str, Any] = {}
    if getattr(args, "strategy", None):
        search_updates["strategies"] = args.strategy
    if getattr(args, "max_results", None) is not None:
        search_updates["max_results"] = args.max_results

    updates: dict[str, Any] = {}
    if search_updates:
        search = settings.search.model_dump() | search_updates
        updates["search"] = SearchConfig.model_validate(search)
    if getattr(args, "provider", None):
        updates["provider"] = settings.provider.model_copy(update={"name": args.provider})
    return settings.model_copy(update=updates) if updates else settings


def filter_overrides(settings: Settings, args: argparse.Namespace) -> dict[str, Any]:
    """Filter fields set in the config file, then on the command line."""
    overrides = settings.filters.model_dump(exclude_unset=True)
    if args.location:
        overrides["location"] = args.location
    if args.remote is not None:
        overrides["remote"] = args.remote
    if args.job_type:
        overrides["job_type"] = args.job_type
    return overrides


def print_report(report: SearchReport) -> None:
    print(f"\nSearch {report.status}: {report.raw_count} raw, {report.unique_count} unique, "
          f"{len(report.jobs)} returned from {len(report.queries)} queries.")

    for failure in report.failed_queries:
        print(f"  FAILED {failure.strategy}/{failure.label}: {failure.error}")

    for i, job in enumerate(report.jobs, start=1):
        print(f"{i:3d}. [{job.relevance_score:.2f}] {job.title} - {job.company} ({job.location})")
        print(f"     {job.url}")
        print(f"     {job.recommendation_reason}")


async def run(provider: SearchProvider, settings: Settings, portfolio: Any,
              overrides: dict[str, Any], export_format: str | None) -> int:
    """Run the full search pipeline; returns the process exit code."""
    async with provider:
        report = await run_search(portfolio, provider, overrides, settings=settings)

    print_report(report)

    if export_format == "json":
        print(f"\n{export_results_json(report)}")

    return 2 if report.unavailable else 0


def cmd_show_queries(settings: Settings, portfolio: Any, args: argparse.Namespace) -> None:
    """Handle show-queries subcommand."""
    tables = settings.load_tables()
    profile = parse_portfolio(
        portfolio, tables=tables, max_recent_projects=settings.search.max_recent_projects,
    )
    filters = default_filters(profile, **filter_overrides(settings, args))
    queries = build_queries(
        profile, filters, settings.search.strategies, settings=settings.search, tables=tables,
    )

    print(f"{len(queries)} queries for {profile.name or 'anonymous candidate'}")
    for query in queries:
        print(f"\n[{query.strategy}/{query.label}] mode={query.mode} cap={query.result_cap}")
        print(f"  {query.text}")
        if query.domain_allow_list:
            print(f"  Domains: {', '.join(query.domain_allow_list)}")
        if query.include_terms:
            print(f"  Include: {query.include_terms}")
        if query.exclude_terms:
            print(f"  Exclude: {query.exclude_terms}")


def cmd_parse_profile(settings: Settings, portfolio: Any, args: argparse.Namespace) -> None:
    """Handle parse-profile subcommand."""
    profile = parse_portfolio(
        portfolio,
        tables=settings.load_tables(),
        max_recent_projects=settings.search.max_recent_projects,
    )
    if args.output:
        profile.to_yaml(args.output)
        print(f"Profile written to {args.output}")
        print(f"  Level: {profile.experience.level} ({profile.experience.total_years} years)")
        print(f"  Skills: {len(profile.skills.all)}")
        print(f"  Preferred roles: {profile.preferences.preferred_roles}")
    else:
        print(profile.dump_yaml())


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = apply_overrides(load_settings(args.config), args)
        portfolio = load_portfolio(args.portfolio)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    if args.command == "parse-profile":
        cmd_parse_profile(settings, portfolio, args)
    elif args.command == "show-queries":
        cmd_show_queries(settings, portfolio, args)
    else:
        try:
            provider = get_provider(
                settings.provider.name,
                settings.provider,
                timeout_seconds=settings.search.timeout_seconds,
            )
        except (FileNotFoundError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        code = asyncio.run(
            run(provider, settings, portfolio, filter_overrides(settings, args), args.export),
        )
        sys.exit(code)


if __name__ == "__main__":
    main()
