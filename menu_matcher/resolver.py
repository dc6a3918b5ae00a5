"""
Catalog Resolver.

Resolves spoken restaurant and menu category references to catalog
identities. Each lookup walks a chain from cheap and exact to fuzzy:

    exact id -> known alias -> canonical id form -> substring -> fuzzy name

Used by menu_matcher.catalog; callers holding their own restaurant list can
use it directly.
"""

import logging
import re
from typing import Iterable, Optional, Sequence

from .matching import find_best_match, normalize_string
from .matching.constants import RESTAURANT_ALIASES
from .models import RestaurantSummary

logger = logging.getLogger(__name__)

_ID_SEPARATORS = re.compile(r"[\s\-]+")


def _canonical_id(text: str) -> str:
    """Convert spoken text into id form: "micro dose" -> "micro_dose"."""
    return _ID_SEPARATORS.sub("_", text.strip().lower())


class CatalogResolver:
    """
    Resolves restaurant ids and category names from noisy spoken text.

    Args:
        restaurants: Known restaurants (id and display name).
        aliases: Extra alias -> restaurant id mappings, merged over the
            built-in alias table. Aliases for unknown ids are dropped.
    """

    def __init__(
        self,
        restaurants: Iterable[RestaurantSummary],
        aliases: dict[str, str] | None = None,
    ):
        self._restaurants = list(restaurants)
        self._ids_by_lower = {r.id.lower(): r.id for r in self._restaurants}

        merged = dict(RESTAURANT_ALIASES)
        merged.update(aliases or {})
        self._aliases: dict[str, str] = {}
        for alias, restaurant_id in merged.items():
            known_id = self._ids_by_lower.get(restaurant_id.lower())
            if known_id is None:
                continue
            self._aliases[alias.lower().strip()] = known_id
            normalized = normalize_string(alias)
            if normalized:
                self._aliases.setdefault(normalized, known_id)

    @property
    def restaurant_ids(self) -> list[str]:
        return [r.id for r in self._restaurants]

    def resolve_restaurant_id(self, raw_id: str | None) -> Optional[str]:
        """
        Resolve a spoken restaurant reference to a known restaurant id.

        Args:
            raw_id: An id, a name, or a misheard version of either

        Returns:
            The restaurant id, or None if nothing matches.
        """
        text = (raw_id or "").strip().lower()
        if not text or not self._restaurants:
            return None

        # Step 1: exact id
        if text in self._ids_by_lower:
            return self._ids_by_lower[text]

        # Step 2: known alias, raw or normalized
        normalized = normalize_string(text)
        for key in (text, normalized):
            if key in self._aliases:
                logger.debug("Restaurant '%s' resolved by alias to '%s'", raw_id, self._aliases[key])
                return self._aliases[key]

        # Step 3: canonical id form
        canonical = _canonical_id(text)
        if canonical in self._ids_by_lower:
            return self._ids_by_lower[canonical]

        # Step 4: substring of a known id, or a known id inside the text
        if len(canonical) > 3:
            for lower_id, restaurant_id in self._ids_by_lower.items():
                if canonical in lower_id or lower_id in canonical:
                    logger.info(
                        "Restaurant id '%s' not known, using close match '%s'",
                        raw_id, restaurant_id,
                    )
                    return restaurant_id

        # Step 5: fuzzy match against display names, then ids spelled out
        names = [r.name for r in self._restaurants]
        spelled_ids = [r.id.replace("_", " ") for r in self._restaurants]
        best = find_best_match(normalized or text, names + spelled_ids)
        if best is not None:
            restaurant_id = self._restaurants[best.index % len(self._restaurants)].id
            logger.info(
                "Restaurant '%s' fuzzy matched to '%s' (similarity: %.2f)",
                raw_id, restaurant_id, best.similarity,
            )
            return restaurant_id

        logger.debug("No restaurant found for '%s'", raw_id)
        return None

    @staticmethod
    def resolve_category(raw_name: str | None, categories: Sequence[str]) -> Optional[str]:
        """
        Resolve a spoken category name to one of a restaurant's categories.

        Args:
            raw_name: The category as spoken, e.g. "lattes" or "rx latte"
            categories: The restaurant's category names

        Returns:
            The matching category name, or None.
        """
        text = (raw_name or "").strip().lower()
        if not text or not categories:
            return None

        for category in categories:
            if category.lower() == text:
                return category

        normalized = normalize_string(text)
        if normalized:
            for category in categories:
                if normalize_string(category) == normalized:
                    return category

        if len(text) > 3:
            containing = [
                category for category in categories
                if text in category.lower() or category.lower() in text
            ]
            if containing:
                return min(containing, key=len)

        best = find_best_match(normalized or text, list(categories))
        if best is not None:
            logger.debug(
                "Category '%s' fuzzy matched to '%s' (similarity: %.2f)",
                raw_name, best.matched_text, best.similarity,
            )
            return best.matched_text
        return None

    @staticmethod
    def resolve_category_group(
        raw_name: str | None,
        groups: dict[str, list[str]],
    ) -> Optional[list[str]]:
        """
        Map a generic category request ("drinks") to concrete categories.

        Returns:
            The categories in the group, or None if the name is not a group.
        """
        text = (raw_name or "").strip().lower()
        if not text or not groups:
            return None

        normalized = normalize_string(text)
        for group, members in groups.items():
            group_lower = group.strip().lower()
            if group_lower == text or (normalized and normalize_string(group_lower) == normalized):
                return list(members)
        return None
