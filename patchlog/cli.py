"""Command-line interface for patchlog."""

import argparse
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from patchlog.config import Settings, load_environment
from patchlog.constants import ABILITY_MATCH_POLICIES
from patchlog.filters.criteria import FilterCriteria
from patchlog.filters.visibility import (
    filter_changelogs,
    filtered_general_notes,
    show_general_notes,
    visible_hero_names,
    visible_item_names,
)
from patchlog.models import Changelog
from patchlog.processor.builder import Announcement, build_changelogs
from patchlog.registry import load_catalog
from patchlog.utils.logger import setup_logger


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog='patchlog',
        description='Classify and filter Deadlock patch notes'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # classify <html>
    classify_parser = subparsers.add_parser('classify', help='Classify an announcement HTML file')
    classify_parser.add_argument('html_file', help='Announcement body HTML')
    classify_parser.add_argument('--catalog', help='Catalog JSON (default: $PATCHLOG_CATALOG_PATH)')
    classify_parser.add_argument('--id', dest='post_id', help='Changelog id (default: file stem)')
    classify_parser.add_argument('--title', default='', help='Announcement title')
    classify_parser.add_argument('--author', default='', help='Announcement author')
    classify_parser.add_argument('--date', help='Publication date, ISO 8601 (default: now)')
    classify_parser.add_argument(
        '--policy',
        choices=sorted(ABILITY_MATCH_POLICIES),
        help='Ability match policy (default: $PATCHLOG_ABILITY_MATCH or registry_order)'
    )

    # filter <changelogs.json>
    filter_parser = subparsers.add_parser('filter', help='Filter classified changelogs')
    filter_parser.add_argument('changelogs_file', help='JSON list of changelog records')
    filter_parser.add_argument('--hero', help='Comma-separated hero names')
    filter_parser.add_argument('--item', help='Comma-separated item names')
    filter_parser.add_argument('-q', '--query', default='', help='Free-text search')
    filter_parser.add_argument('--catalog', help='Catalog JSON used to normalise name casing')

    return parser


def handle_classify(args: argparse.Namespace, settings: Settings) -> int:
    """Handle the classify command.

    Returns:
        Exit code.
    """
    catalog_path = args.catalog or settings.catalog_path
    if not catalog_path:
        print("Error: No catalog given (use --catalog or set PATCHLOG_CATALOG_PATH)")
        return 1

    html_path = Path(args.html_file)
    try:
        registry = load_catalog(catalog_path)
        html = html_path.read_text(encoding='utf-8')
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    if args.date:
        try:
            pub_date = datetime.fromisoformat(args.date)
        except ValueError:
            print(f"Error: Invalid date '{args.date}'")
            return 1
    else:
        pub_date = datetime.now(timezone.utc)

    announcement = Announcement(
        post_id=args.post_id or html_path.stem,
        title=args.title,
        author=args.author,
        pub_date=pub_date,
        html=html,
    )
    policy = args.policy or settings.ability_match_policy
    changelog = build_changelogs(announcement, registry, policy)[0]

    print(json.dumps(changelog.to_dict(), indent=2, ensure_ascii=False))
    return 0


def handle_filter(args: argparse.Namespace, settings: Settings) -> int:
    """Handle the filter command.

    Returns:
        Exit code.
    """
    try:
        records = json.loads(Path(args.changelogs_file).read_text(encoding='utf-8'))
        if isinstance(records, dict):
            records = [records]
        changelogs = [Changelog.from_dict(record) for record in records]
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    criteria = FilterCriteria.from_params(hero=args.hero, item=args.item, q=args.query)

    catalog_path = args.catalog or settings.catalog_path
    if catalog_path:
        try:
            criteria = criteria.canonicalized(load_catalog(catalog_path))
        except (OSError, ValueError) as e:
            print(f"Error: {e}")
            return 1

    results = []
    for changelog in filter_changelogs(changelogs, criteria):
        general = filtered_general_notes(changelog, criteria)
        results.append({
            "id": changelog.id,
            "title": changelog.title,
            "visibleHeroes": _sorted_or_none(visible_hero_names(changelog, criteria)),
            "visibleItems": _sorted_or_none(visible_item_names(changelog, criteria)),
            "showGeneralNotes": show_general_notes(changelog, criteria),
            "generalNotes": None if general is None else [n.to_dict() for n in general],
        })

    print(json.dumps({"changelogs": results, "total": len(results)}, indent=2, ensure_ascii=False))
    return 0


def _sorted_or_none(names) -> Optional[List[str]]:
    return None if names is None else sorted(names)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv).

    Returns:
        Exit code (0 for success).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    load_environment()
    settings = Settings.from_env()
    setup_logger(level=settings.level, log_file=settings.log_file)

    if args.command == 'classify':
        return handle_classify(args, settings)
    if args.command == 'filter':
        return handle_filter(args, settings)

    parser.print_help()
    return 1


if __name__ == '__main__':
    sys.exit(main())
