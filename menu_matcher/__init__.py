"""
Menu Matcher
============

Fuzzy text matching and order line verification for spoken ordering
dialogues. Reconciles noisy voice-transcribed text (restaurant names, menu
categories, item names and ad-hoc remarks) against a fixed catalog, and
classifies each requested order line as a priced menu item or a special
instruction.

Usage:
------
    from menu_matcher import verify_order_items

    results = verify_order_items(
        [{"name": "quickie", "quantity": 2}, {"name": "no onions", "quantity": 1}],
        [{"id": "q1", "name": "The Quickie", "price": "5.99"}],
    )
"""

from .matching import (
    extract_modifiers,
    find_all_matches,
    find_best_match,
    find_menu_item_by_name,
    get_dynamic_threshold,
    levenshtein_distance,
    normalize_string,
    string_similarity,
    suggest_menu_item,
    verify_order_items,
)
from .models import (
    CatalogEntry,
    MatchResult,
    MenuItemMatch,
    RequestedLine,
    VerifiedLine,
)
from .resolver import CatalogResolver
from .catalog import MenuCatalog

__version__ = "0.1.0"

__all__ = [
    "extract_modifiers",
    "find_all_matches",
    "find_best_match",
    "find_menu_item_by_name",
    "get_dynamic_threshold",
    "levenshtein_distance",
    "normalize_string",
    "string_similarity",
    "suggest_menu_item",
    "verify_order_items",
    "CatalogEntry",
    "MatchResult",
    "MenuItemMatch",
    "RequestedLine",
    "VerifiedLine",
    "CatalogResolver",
    "MenuCatalog",
]
