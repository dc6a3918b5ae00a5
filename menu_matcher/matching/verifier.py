"""
Order Item Verifier.

Verifies spoken order lines against a menu catalog. For each requested line
the verifier:

1. extracts embedded modifiers ("no onions", "extra cheese")
2. decides whether the line is a special instruction rather than an item
3. resolves the remaining name against the catalog
4. emits a VerifiedLine with the catalog name, price and confidence, or an
   unverified line with an optional suggestion

Nothing is ever dropped: unmatched lines are returned so the order flow can
decide whether to ask the customer or reject the order.
"""

import logging
import re
from decimal import Decimal
from typing import Any, Iterable, Optional, Sequence

from pydantic import ValidationError

from ..config import (
    MATCH_BASE_THRESHOLD,
    SPECIAL_INSTRUCTION_THRESHOLD_BOOST,
    SUGGESTION_MARGIN,
    SUGGESTION_THRESHOLD_DROP,
    SUGGESTION_THRESHOLD_FLOOR,
)
from ..models import CatalogEntry, MatchResult, MenuItemMatch, RequestedLine, VerifiedLine
from .candidates import find_all_matches, find_best_match, get_dynamic_threshold
from .constants import MODIFIER_PATTERNS, SPECIAL_INSTRUCTION_PATTERN
from .normalizer import normalize_string
from .similarity import abbreviation_match, string_similarity

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


# =============================================================================
# Modifier extraction and classification
# =============================================================================

def extract_modifiers(item_name: str) -> tuple[str, list[str]]:
    """
    Split modifier phrases out of a requested line name.

    Args:
        item_name: The requested name, e.g. "Burger no onions extra cheese"

    Returns:
        Tuple of (base_name, modifiers), e.g.
        ("Burger", ["no onions", "extra cheese"]).
    """
    base_name = item_name or ""
    modifiers: list[str] = []

    for pattern in MODIFIER_PATTERNS:
        found = [match.group(0) for match in pattern.finditer(base_name)]
        if not found:
            continue
        modifiers.extend(found)
        base_name = pattern.sub(" ", base_name)

    return _WHITESPACE.sub(" ", base_name).strip(), modifiers


def is_likely_special_instruction(base_name: str) -> bool:
    """Check whether a name reads like a request rather than a menu item."""
    return bool(SPECIAL_INSTRUCTION_PATTERN.search(base_name.lower()))


# =============================================================================
# Catalog lookup
# =============================================================================

def _coerce_catalog(catalog: Iterable[Any], require_price: bool = False) -> list[CatalogEntry]:
    """Validate catalog entries, skipping malformed ones."""
    entries = []
    for raw in catalog or []:
        try:
            entry = raw if isinstance(raw, CatalogEntry) else CatalogEntry.model_validate(raw)
        except ValidationError:
            continue
        if not entry.name.strip():
            continue
        if require_price and entry.price is None:
            continue
        entries.append(entry)
    return entries


def _find_exact_match(query: str, entries: Sequence[CatalogEntry]) -> Optional[CatalogEntry]:
    """
    Look for a direct hit on an already normalized query.

    Passes run in priority order so a plain name match beats a longer item
    that merely contains the query.
    """
    names = [entry.name.lower().strip() for entry in entries]

    # Pass 1: equal, either raw or normalized
    for entry, name in zip(entries, names):
        if name == query or normalize_string(entry.name) == query:
            return entry

    # Pass 2: a leading "the" on either side
    for entry, name in zip(entries, names):
        if name.startswith("the ") and name[4:] == query:
            return entry
        if query.startswith("the ") and query[4:] == name:
            return entry

    # Pass 3: query contained in the item name, shortest name wins
    if len(query) > 3:
        containing = [entry for entry, name in zip(entries, names) if query in name]
        if containing:
            return min(containing, key=lambda entry: len(entry.name))

    # Pass 4: query abbreviates the item name
    for entry, name in zip(entries, names):
        if abbreviation_match(query, name) > 0.8:
            return entry

    return None


def find_menu_item_by_name(
    item_name: str,
    catalog: Iterable[Any],
    threshold: float | None = None,
) -> Optional[MenuItemMatch]:
    """
    Resolve a spoken item name to a catalog entry.

    Tries an exact pass first, then fuzzy matching against every item name.

    Args:
        item_name: Name as spoken
        catalog: CatalogEntry objects or dicts with at least a name
        threshold: Minimum fuzzy score. Defaults to the dynamic threshold
            for the normalized name. The fuzzy search also applies its own
            dynamic threshold, so this can raise the bar but not lower it.

    Returns:
        MenuItemMatch, or None if nothing matches confidently.
    """
    entries = _coerce_catalog(catalog)
    query = normalize_string(item_name)
    if not query or not entries:
        return None

    exact = _find_exact_match(query, entries)
    if exact is not None:
        similarity = string_similarity(query, exact.name)
        logger.debug("Exact match found for '%s': '%s'", item_name, exact.name)
        return MenuItemMatch(entry=exact, similarity=similarity, exact=True)

    if threshold is None:
        threshold = get_dynamic_threshold(query, MATCH_BASE_THRESHOLD)

    best = find_best_match(query, [entry.name for entry in entries])
    if best is not None and best.similarity >= threshold:
        entry = entries[best.index]
        logger.debug(
            "Fuzzy match found for '%s': '%s' (similarity: %.2f, threshold: %.2f)",
            item_name, entry.name, best.similarity, threshold,
        )
        return MenuItemMatch(entry=entry, similarity=best.similarity)

    logger.debug(
        "No menu item match found for '%s' (normalized: '%s', threshold: %.2f)",
        item_name, query, threshold,
    )
    return None


def suggest_menu_item(
    item_name: str,
    catalog: Iterable[Any],
    threshold: float | None = None,
) -> Optional[MatchResult]:
    """
    Find a non-authoritative "did you mean" candidate for an unmatched name.

    Uses a lenient threshold and only suggests a candidate that clearly beats
    the runner-up.

    Args:
        item_name: Name as spoken
        catalog: CatalogEntry objects or dicts with at least a name
        threshold: The threshold the regular lookup used. Defaults to the
            dynamic threshold for the normalized name.

    Returns:
        MatchResult whose index points into the valid catalog entries, or
        None.
    """
    entries = _coerce_catalog(catalog)
    query = normalize_string(item_name)
    if not query or not entries:
        return None

    if threshold is None:
        threshold = get_dynamic_threshold(query, MATCH_BASE_THRESHOLD)
    lenient = max(threshold - SUGGESTION_THRESHOLD_DROP, SUGGESTION_THRESHOLD_FLOOR)

    matches = find_all_matches(query, [entry.name for entry in entries], lenient)
    if not matches:
        return None

    best = matches[0]
    if len(matches) > 1 and best.similarity - matches[1].similarity <= SUGGESTION_MARGIN:
        logger.debug(
            "No clear suggestion for '%s': '%s' (%.2f) vs '%s' (%.2f)",
            item_name, best.matched_text, best.similarity,
            matches[1].matched_text, matches[1].similarity,
        )
        return None
    return best


# =============================================================================
# Order verification
# =============================================================================

def _special_instruction(line: RequestedLine, modifiers: list[str]) -> VerifiedLine:
    logger.info("Identified '%s' as a special instruction, not a menu item", line.name)
    return VerifiedLine(
        name=line.name,
        quantity=line.quantity,
        price=Decimal("0"),
        id=line.id,
        verified=False,
        is_special_instruction=True,
        confidence=0.0,
        modifiers=modifiers,
        special_instructions=line.name,
    )


def _verify_modifier_only_line(
    line: RequestedLine,
    entries: list[CatalogEntry],
    modifiers: list[str],
    threshold: float | None,
) -> VerifiedLine:
    """
    Verify a line whose whole name reads as modifiers ("double espresso").

    The full name is looked up instead of the empty base name. Only a hit
    from the exact pass counts: fuzzy scoring pairs "no onions" with any
    name whose first word ends in "no".
    """
    effective = threshold if threshold is not None else get_dynamic_threshold(line.name, MATCH_BASE_THRESHOLD)
    strict = min(effective + SPECIAL_INSTRUCTION_THRESHOLD_BOOST, 1.0)
    match = find_menu_item_by_name(line.name, entries, strict)
    if match is None or not match.exact:
        return _special_instruction(line, modifiers)

    logger.debug("Modifier phrase '%s' names menu item '%s'", line.name, match.entry.name)
    return VerifiedLine(
        name=match.entry.name,
        quantity=line.quantity,
        price=match.entry.price,
        id=match.entry.id or line.id,
        verified=True,
        confidence=match.similarity,
    )


def _verify_line(
    line: RequestedLine,
    entries: list[CatalogEntry],
    threshold: float | None,
) -> VerifiedLine:
    base_name, modifiers = extract_modifiers(line.name)
    if not base_name and modifiers:
        return _verify_modifier_only_line(line, entries, modifiers, threshold)

    special_instructions = ", ".join(modifiers) if modifiers else None
    effective = threshold if threshold is not None else get_dynamic_threshold(base_name, MATCH_BASE_THRESHOLD)

    if is_likely_special_instruction(base_name):
        strict = min(effective + SPECIAL_INSTRUCTION_THRESHOLD_BOOST, 1.0)
        if find_menu_item_by_name(base_name, entries, strict) is None:
            return _special_instruction(line, modifiers)

    match = find_menu_item_by_name(base_name, entries, effective)
    if match is not None:
        return VerifiedLine(
            name=match.entry.name,
            quantity=line.quantity,
            price=match.entry.price,
            id=match.entry.id or line.id,
            verified=True,
            confidence=match.similarity,
            modifiers=modifiers,
            special_instructions=special_instructions,
        )

    suggestion = suggest_menu_item(base_name, entries, effective)
    if suggestion is not None:
        logger.info(
            "No match for '%s', suggesting '%s' (confidence: %.2f)",
            line.name, suggestion.matched_text, suggestion.similarity,
        )

    return VerifiedLine(
        name=line.name,
        quantity=line.quantity,
        price=line.price_hint if line.price_hint is not None else Decimal("0"),
        id=line.id,
        verified=False,
        confidence=suggestion.similarity if suggestion else 0.0,
        suggestion=suggestion.matched_text if suggestion else None,
        modifiers=modifiers,
        special_instructions=special_instructions,
    )


def verify_order_items(
    requested_items: Iterable[Any],
    catalog: Iterable[Any],
    threshold: float | None = None,
) -> list[VerifiedLine]:
    """
    Verify requested order lines against a menu catalog.

    Args:
        requested_items: RequestedLine objects or dicts with at least a name
        catalog: CatalogEntry objects or dicts; entries without a name or
            price are skipped
        threshold: Match threshold for every line. Defaults to the dynamic
            threshold of each line's base name. Like find_menu_item_by_name,
            it can raise the fuzzy bar but not lower it; a lower value still
            widens the suggestion search.

    Returns:
        One VerifiedLine per requested line, in request order.
    """
    entries = _coerce_catalog(catalog, require_price=True)
    results = []
    for raw in requested_items or []:
        line = raw if isinstance(raw, RequestedLine) else RequestedLine.model_validate(raw)
        results.append(_verify_line(line, entries, threshold))

    verified = sum(1 for result in results if result.verified)
    logger.debug("Verified %s of %s order lines", verified, len(results))
    return results
