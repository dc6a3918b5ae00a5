"""
Command line for checking matcher behavior by hand.

Usage:
    menu-matcher normalize "can i have a expresso please"
    menu-matcher similarity "latte vanilla" "Vanilla Latte"
    menu-matcher match americano "Hot Americano" "Iced Latte" --all
    menu-matcher verify --restaurant "micro dose" "2 x quickie" "no onions"
    menu-matcher resolve --restaurant "my crow dose" --category drinks

Every command prints JSON on stdout.
"""

import argparse
import json
import logging
import os
import re
import sys
from typing import Any, Sequence

from dotenv import load_dotenv

from .catalog import MenuCatalog
from .logging_config import setup_logging
from .matching import (
    find_all_matches,
    find_best_match,
    normalize_string,
    string_similarity,
    verify_order_items,
)
from .models import RequestedLine

logger = logging.getLogger(__name__)

_QUANTITY_PREFIX = re.compile(r"^\s*(\d+)\s*x\s+(.+)$", re.IGNORECASE)


def parse_requested_line(text: str) -> RequestedLine:
    """Parse "2 x latte" (or just "latte") into a RequestedLine."""
    match = _QUANTITY_PREFIX.match(text)
    if match:
        return RequestedLine(name=match.group(2).strip(), quantity=int(match.group(1)))
    return RequestedLine(name=text.strip())


def _menu_dir(args: argparse.Namespace) -> str | None:
    # .env is loaded after config is imported, so read the variable again here
    return args.menu_dir or os.getenv("MENU_DATA_DIR")


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2))


def _cmd_normalize(args: argparse.Namespace) -> int:
    _print_json({"input": args.text, "normalized": normalize_string(args.text)})
    return 0


def _cmd_similarity(args: argparse.Namespace) -> int:
    _print_json({"a": args.a, "b": args.b, "similarity": round(string_similarity(args.a, args.b), 4)})
    return 0


def _cmd_match(args: argparse.Namespace) -> int:
    if args.all:
        matches = find_all_matches(args.query, args.candidates, args.threshold)
        _print_json([match.model_dump() for match in matches])
        return 0

    if args.threshold is None:
        best = find_best_match(args.query, args.candidates)
    else:
        best = find_best_match(args.query, args.candidates, base_threshold=args.threshold)
    _print_json(best.model_dump() if best else None)
    return 0


def _cmd_verify(args: argparse.Namespace) -> int:
    catalog = MenuCatalog(_menu_dir(args))
    restaurant = catalog.get_restaurant(args.restaurant)
    if restaurant is None:
        print(f"Restaurant not found: {args.restaurant}", file=sys.stderr)
        return 1

    entries = catalog.catalog_entries(restaurant.restaurant_id)
    lines = [parse_requested_line(item) for item in args.items]
    logger.debug("Verifying %s lines against %s menu items", len(lines), len(entries))
    results = verify_order_items(lines, entries, args.threshold)
    _print_json({
        "restaurant_id": restaurant.restaurant_id,
        "lines": [result.model_dump(mode="json") for result in results],
    })
    return 0


def _cmd_resolve(args: argparse.Namespace) -> int:
    catalog = MenuCatalog(_menu_dir(args))
    restaurant = catalog.get_restaurant(args.restaurant)
    if restaurant is None:
        print(f"Restaurant not found: {args.restaurant}", file=sys.stderr)
        return 1

    payload: dict[str, Any] = {
        "restaurant_id": restaurant.restaurant_id,
        "restaurant_name": restaurant.restaurant_name,
    }
    if args.category:
        items = catalog.get_menu_items_by_category(restaurant.restaurant_id, args.category)
        payload["category"] = args.category
        payload["items"] = [item.name for item in items]
    _print_json(payload)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="menu-matcher",
        description="Fuzzy matching and order line verification for spoken orders",
    )
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR or CRITICAL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    normalize_parser = subparsers.add_parser("normalize", help="Normalize spoken text")
    normalize_parser.add_argument("text")
    normalize_parser.set_defaults(handler=_cmd_normalize)

    similarity_parser = subparsers.add_parser("similarity", help="Score two strings")
    similarity_parser.add_argument("a")
    similarity_parser.add_argument("b")
    similarity_parser.set_defaults(handler=_cmd_similarity)

    match_parser = subparsers.add_parser("match", help="Match a query against candidates")
    match_parser.add_argument("query")
    match_parser.add_argument("candidates", nargs="+")
    match_parser.add_argument("--all", action="store_true", help="Return every match above the threshold")
    match_parser.add_argument("--threshold", type=float, default=None)
    match_parser.set_defaults(handler=_cmd_match)

    verify_parser = subparsers.add_parser("verify", help="Verify order lines against a restaurant menu")
    verify_parser.add_argument("items", nargs="+", help='Order lines such as "latte" or "2 x latte"')
    verify_parser.add_argument("--restaurant", required=True)
    verify_parser.add_argument("--menu-dir", default=None)
    verify_parser.add_argument("--threshold", type=float, default=None)
    verify_parser.set_defaults(handler=_cmd_verify)

    resolve_parser = subparsers.add_parser("resolve", help="Resolve a restaurant and category")
    resolve_parser.add_argument("--restaurant", required=True)
    resolve_parser.add_argument("--category", default=None)
    resolve_parser.add_argument("--menu-dir", default=None)
    resolve_parser.set_defaults(handler=_cmd_resolve)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    threshold = getattr(args, "threshold", None)
    if threshold is not None and not 0 <= threshold <= 1:
        parser.error("--threshold must be between 0 and 1")

    setup_logging(args.log_level)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
