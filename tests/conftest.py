import json

import pytest

from menu_matcher.models import CatalogEntry

# Sample coffee shop menu shared by the matcher and verifier tests
SAMPLE_MENU = [
    {"id": "1", "name": "Cappuccino", "price": "4.50"},
    {"id": "2", "name": "Espresso", "price": "3.00"},
    {"id": "3", "name": "Caramel Macchiato", "price": "5.25"},
    {"id": "4", "name": "Vanilla Latte", "price": "4.75"},
    {"id": "5", "name": "Iced Americano", "price": "3.50"},
    {"id": "6", "name": "Hot Chocolate", "price": "3.75"},
    {"id": "7", "name": "Frappuccino", "price": "5.50"},
    {"id": "8", "name": "The Quickie", "price": "6.00"},
    {"id": "9", "name": "Croissant Sandwich", "price": "7.25"},
    {"id": "10", "name": "Blueberry Muffin", "price": "3.25"},
]

MICRO_DOSE_MENU = {
    "coffee_shop_id": "micro_dose",
    "coffee_shop_name": "Micro Dose Coffee",
    "description": "Small batch coffee bar",
    "location": {
        "address": "12 Main St",
        "phone": "555-0100",
        "hours": "7am-3pm",
    },
    "aliases": ["mikeys"],
    "category_groups": {"drinks": ["RX Lattes", "Teas"]},
    "menu_categories": [
        {
            "category": "RX Lattes",
            "items": [
                {"id": "md1", "name": "Vanilla Latte", "price": 5.5, "calories": 200},
                {"id": "md2", "name": "The Quickie", "price": 5.99},
            ],
        },
        {
            "category": "Teas",
            "items": [{"id": "md3", "name": "Chai Tea", "price": 4.0}],
        },
        {
            "category": "Bakery",
            "items": [{"id": "md4", "name": "Blueberry Muffin", "price": 3.25}],
        },
    ],
}

BURGER_JOINT_MENU = {
    "restaurant_id": "burger_joint",
    "restaurant_name": "Burger Joint",
    "description": "Smash burgers",
    "menu_categories": [
        {
            "category": "Burgers",
            "items": [
                {"id": "bj1", "name": "Classic Burger", "price": 9.5},
                {"id": "bj2", "name": "Double Cheeseburger", "price": 12.0},
            ],
        },
        {
            "category": "Sides",
            "items": [{"id": "bj3", "name": "French Fries", "price": 3.5}],
        },
    ],
}


@pytest.fixture
def sample_menu():
    """Coffee shop menu as CatalogEntry objects."""
    return [CatalogEntry.model_validate(item) for item in SAMPLE_MENU]


@pytest.fixture
def menu_data_dir(tmp_path):
    """Directory with two valid restaurant files and one broken file.

    micro_dose.json uses the older coffee_shop_* field names.
    """
    (tmp_path / "micro_dose.json").write_text(json.dumps(MICRO_DOSE_MENU), encoding="utf-8")
    (tmp_path / "burger_joint.json").write_text(json.dumps(BURGER_JOINT_MENU), encoding="utf-8")
    (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
    return tmp_path
