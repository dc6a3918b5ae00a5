"""
Matching Package.

Fuzzy text matching and order line verification for spoken orders.

Exports:
- Normalizer: normalize_string
- Similarity: string_similarity, levenshtein_distance, phonetic_similarity,
  abbreviation_match, word_order_flexibility_match
- Candidate matching: get_dynamic_threshold, find_best_match, find_all_matches
- Order verification: extract_modifiers, is_likely_special_instruction,
  find_menu_item_by_name, suggest_menu_item, verify_order_items
"""

from .normalizer import normalize_string

from .similarity import (
    abbreviation_match,
    levenshtein_distance,
    phonetic_similarity,
    string_similarity,
    word_order_flexibility_match,
)

from .candidates import (
    find_all_matches,
    find_best_match,
    get_dynamic_threshold,
)

from .verifier import (
    extract_modifiers,
    find_menu_item_by_name,
    is_likely_special_instruction,
    suggest_menu_item,
    verify_order_items,
)

__all__ = [
    "normalize_string",
    "abbreviation_match",
    "levenshtein_distance",
    "phonetic_similarity",
    "string_similarity",
    "word_order_flexibility_match",
    "find_all_matches",
    "find_best_match",
    "get_dynamic_threshold",
    "extract_modifiers",
    "find_menu_item_by_name",
    "is_likely_special_instruction",
    "suggest_menu_item",
    "verify_order_items",
]
