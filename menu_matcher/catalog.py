"""
Menu Catalog - read-only restaurant menus loaded from JSON files.

Each restaurant lives in its own JSON file inside the menu data directory.
Files are loaded lazily on first use and cached in memory; the cache is
shared between threads and can be dropped with refresh().

Usage:
    from menu_matcher.catalog import MenuCatalog

    catalog = MenuCatalog("menu_data")
    restaurant = catalog.get_restaurant("micro dose")
    entries = catalog.catalog_entries(restaurant.restaurant_id)
"""

import json
import logging
import threading
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .config import MENU_DATA_DIR
from .models import CatalogEntry, MenuItem, Restaurant, RestaurantSummary
from .resolver import CatalogResolver

logger = logging.getLogger(__name__)


class MenuCatalog:
    """
    Supplies immutable menu snapshots to the matching engine.

    Restaurant lookups go through CatalogResolver, so callers can pass ids,
    names or misheard versions of either.
    """

    def __init__(self, menu_data_dir: Path | str | None = None):
        self._menu_data_dir = Path(menu_data_dir) if menu_data_dir else MENU_DATA_DIR
        self._lock = threading.Lock()
        self._restaurants: dict[str, Restaurant] | None = None
        self._resolver: CatalogResolver | None = None

    @property
    def menu_data_dir(self) -> Path:
        return self._menu_data_dir

    def refresh(self) -> None:
        """Drop cached menus so the next lookup reloads them from disk."""
        with self._lock:
            self._restaurants = None
            self._resolver = None
        logger.info("Menu catalog cache cleared")

    def _read_directory(self) -> dict[str, Restaurant]:
        restaurants: dict[str, Restaurant] = {}
        if not self._menu_data_dir.is_dir():
            logger.error("Menu data directory not found: %s", self._menu_data_dir)
            return restaurants

        for path in sorted(self._menu_data_dir.glob("*.json")):
            try:
                restaurant = Restaurant.model_validate(json.loads(path.read_text(encoding="utf-8")))
            except (OSError, json.JSONDecodeError, ValidationError) as e:
                logger.error("Error reading restaurant data from %s: %s", path, e)
                continue

            if restaurant.restaurant_id in restaurants:
                logger.warning(
                    "Duplicate restaurant id '%s' in %s, keeping the first file",
                    restaurant.restaurant_id, path.name,
                )
                continue
            restaurants[restaurant.restaurant_id] = restaurant
            logger.debug("Loaded restaurant: %s (ID: %s)", restaurant.restaurant_name, restaurant.restaurant_id)

        logger.info("Loaded %s restaurants from %s", len(restaurants), self._menu_data_dir)
        return restaurants

    def _ensure_loaded(self) -> tuple[dict[str, Restaurant], CatalogResolver]:
        with self._lock:
            if self._restaurants is None or self._resolver is None:
                restaurants = self._read_directory()
                aliases = {
                    alias: restaurant.restaurant_id
                    for restaurant in restaurants.values()
                    for alias in restaurant.aliases
                }
                self._resolver = CatalogResolver(
                    [restaurant.summary() for restaurant in restaurants.values()],
                    aliases,
                )
                self._restaurants = restaurants
            return self._restaurants, self._resolver

    # -------------------------------------------------------------------------
    # Restaurants
    # -------------------------------------------------------------------------

    def get_restaurants(self) -> list[RestaurantSummary]:
        """Get a summary of every available restaurant."""
        restaurants, _ = self._ensure_loaded()
        return [restaurant.summary() for restaurant in restaurants.values()]

    def resolve_restaurant_id(self, raw_id: str | None) -> Optional[str]:
        _, resolver = self._ensure_loaded()
        return resolver.resolve_restaurant_id(raw_id)

    def get_restaurant(self, raw_id: str | None) -> Optional[Restaurant]:
        """
        Get a restaurant by id, name, or a misheard version of either.

        Returns:
            The Restaurant, or None if it can't be resolved.
        """
        restaurants, resolver = self._ensure_loaded()
        restaurant_id = resolver.resolve_restaurant_id(raw_id)
        if restaurant_id is None:
            logger.warning("Restaurant not found for '%s'", raw_id)
            return None
        return restaurants[restaurant_id]

    # -------------------------------------------------------------------------
    # Menus
    # -------------------------------------------------------------------------

    def get_menu_categories(self, restaurant_id: str) -> list[str]:
        """Get the menu category names for a restaurant."""
        restaurant = self.get_restaurant(restaurant_id)
        if restaurant is None:
            return []
        return [category.category for category in restaurant.menu_categories]

    def _category_names(self, restaurant: Restaurant, category_name: str) -> list[str]:
        """
        Resolve a requested category to the restaurant's category names.

        Generic names that the restaurant defines as a category group (for
        example "drinks") expand to every category in the group. Other names
        are resolved fuzzily against the category list.
        """
        group = CatalogResolver.resolve_category_group(category_name, restaurant.category_groups)
        if group is not None:
            members = {name.lower() for name in group}
            return [
                category.category for category in restaurant.menu_categories
                if category.category.lower() in members
            ]

        resolved = CatalogResolver.resolve_category(
            category_name,
            [category.category for category in restaurant.menu_categories],
        )
        if resolved is None:
            logger.info("No category '%s' at %s", category_name, restaurant.restaurant_name)
            return []
        return [resolved]

    def get_menu_items_by_category(self, restaurant_id: str, category_name: str) -> list[MenuItem]:
        """Get the menu items of one category or category group."""
        items_by_category = self._items_by_category(restaurant_id, category_name)
        return [item for items in items_by_category.values() for item in items]

    def _items_by_category(self, restaurant_id: str, category_name: str | None) -> dict[str, list[MenuItem]]:
        restaurant = self.get_restaurant(restaurant_id)
        if restaurant is None:
            return {}

        if category_name:
            wanted = set(self._category_names(restaurant, category_name))
        else:
            wanted = {category.category for category in restaurant.menu_categories}
        return {
            category.category: list(category.items)
            for category in restaurant.menu_categories
            if category.category in wanted
        }

    def get_all_menu_items(self, restaurant_id: str) -> dict[str, list[MenuItem]]:
        """Get every menu item of a restaurant, keyed by category name."""
        return self._items_by_category(restaurant_id, None)

    def catalog_entries(self, restaurant_id: str, category_name: str | None = None) -> list[CatalogEntry]:
        """
        Build the catalog snapshot the verifier matches order lines against.

        Args:
            restaurant_id: Restaurant id or spoken reference
            category_name: Limit the snapshot to one category (or group)

        Returns:
            List of CatalogEntry, one per menu item.
        """
        return [
            CatalogEntry(id=item.id, name=item.name, price=item.price, category=category)
            for category, items in self._items_by_category(restaurant_id, category_name).items()
            for item in items
        ]
