"""
Tests for order item verification.

Covers modifier extraction, special instruction classification, catalog
lookup and the full verify_order_items() flow against a sample coffee menu.
"""

from decimal import Decimal

import pytest

from menu_matcher.matching import (
    extract_modifiers,
    find_menu_item_by_name,
    is_likely_special_instruction,
    suggest_menu_item,
    verify_order_items,
)
from menu_matcher.models import RequestedLine


# =============================================================================
# Modifier Extraction
# =============================================================================

class TestExtractModifiers:
    """Tests for extract_modifiers()."""

    def test_no_modifiers(self):
        assert extract_modifiers("Vanilla Latte") == ("Vanilla Latte", [])

    def test_multiple_modifiers(self):
        """Modifiers are returned in pattern order and removed from the name."""
        base, modifiers = extract_modifiers("Burger no onions extra cheese")
        assert base == "Burger"
        assert modifiers == ["no onions", "extra cheese"]

    def test_repeated_modifier(self):
        """Every occurrence of a modifier is captured."""
        base, modifiers = extract_modifiers("Burger no onions no pickles")
        assert base == "Burger"
        assert modifiers == ["no onions", "no pickles"]

    def test_with_modifier(self):
        assert extract_modifiers("Americano with milk") == ("Americano", ["with milk"])

    def test_modifier_only(self):
        assert extract_modifiers("no onions") == ("", ["no onions"])

    def test_modifier_words_inside_names_ignored(self):
        """'no' inside 'Americano' is not a modifier."""
        assert extract_modifiers("Iced Americano") == ("Iced Americano", [])


class TestIsLikelySpecialInstruction:
    """Tests for is_likely_special_instruction()."""

    @pytest.mark.parametrize("text", ["napkins", "extra ketchup", "bring a fork", "sauce on the side"])
    def test_requests(self, text):
        assert is_likely_special_instruction(text) is True

    @pytest.mark.parametrize("text", ["bagel", "pepperoni pizza", "Blueberry Muffin", "Cappuccino"])
    def test_menu_items(self, text):
        """Keywords only match whole words."""
        assert is_likely_special_instruction(text) is False


# =============================================================================
# Catalog Lookup
# =============================================================================

class TestFindMenuItemByName:
    """Tests for find_menu_item_by_name()."""

    def test_misspelling_found_by_exact_pass(self, sample_menu):
        match = find_menu_item_by_name("expresso", sample_menu)
        assert match.entry.name == "Espresso"
        assert match.exact is True
        assert match.similarity == 1.0

    def test_contained_name_prefers_shortest(self, sample_menu):
        match = find_menu_item_by_name("muffin", sample_menu)
        assert match.entry.name == "Blueberry Muffin"
        assert match.exact is True
        assert match.similarity == pytest.approx(0.85 + 0.1 * 6 / 16)

    def test_abbreviation(self, sample_menu):
        match = find_menu_item_by_name("cm", sample_menu)
        assert match.entry.name == "Caramel Macchiato"

    def test_fuzzy_match(self, sample_menu):
        match = find_menu_item_by_name("latte vanilla", sample_menu)
        assert match.entry.name == "Vanilla Latte"
        assert match.exact is False
        assert match.similarity == pytest.approx(0.95)

    def test_threshold_rejects_fuzzy_match(self, sample_menu):
        assert find_menu_item_by_name("latte vanilla", sample_menu, threshold=0.99) is None

    def test_caller_threshold_cannot_lower_fuzzy_bar(self):
        """A low threshold does not accept a score below the search's own threshold."""
        catalog = [{"name": "Mocha", "price": "4.00"}]
        assert find_menu_item_by_name("moxi", catalog, threshold=0.3) is None

    def test_empty_name(self, sample_menu):
        assert find_menu_item_by_name("", sample_menu) is None

    def test_accepts_dicts(self):
        match = find_menu_item_by_name("quick", [{"id": "q1", "name": "The Quickie", "price": 5.99}])
        assert match.entry.id == "q1"
        assert match.entry.price == Decimal("5.99")


class TestSuggestMenuItem:
    """Tests for suggest_menu_item()."""

    def test_clear_suggestion(self):
        catalog = [{"name": "Espresso", "price": "3.00"}, {"name": "Blueberry Muffin", "price": "3.25"}]
        suggestion = suggest_menu_item("bluebird", catalog)
        assert suggestion.matched_text == "Blueberry Muffin"
        assert suggestion.similarity == pytest.approx(0.375)

    def test_ambiguous_suggestion(self):
        """No suggestion when the runner-up is within the margin."""
        catalog = [{"name": "Blueberry Muffin", "price": "3.25"}, {"name": "Blueberry Muffins", "price": "3.25"}]
        assert suggest_menu_item("bluebird", catalog) is None

    def test_nothing_close(self, sample_menu):
        assert suggest_menu_item("qqqq", sample_menu) is None


# =============================================================================
# Order Verification
# =============================================================================

class TestVerifyOrderItems:
    """Tests for verify_order_items()."""

    def test_spoken_variant_verified(self):
        """A misheard name resolves to the catalog item with its price."""
        results = verify_order_items(
            [{"name": "quick", "quantity": 2}],
            [{"id": "q1", "name": "The Quickie", "price": 5.99}],
        )
        assert len(results) == 1
        line = results[0]
        assert line.verified is True
        assert line.name == "The Quickie"
        assert line.price == Decimal("5.99")
        assert line.quantity == 2
        assert line.id == "q1"
        assert line.is_special_instruction is False

    def test_modifier_only_line_is_special_instruction(self, sample_menu):
        line = verify_order_items([{"name": "no onions"}], sample_menu)[0]
        assert line.is_special_instruction is True
        assert line.verified is False
        assert line.price == Decimal("0")
        assert line.confidence == 0.0
        assert line.modifiers == ["no onions"]
        assert line.special_instructions == "no onions"

    @pytest.mark.parametrize("name", ["extra napkins", "ketchup"])
    def test_requests_are_special_instructions(self, sample_menu, name):
        line = verify_order_items([{"name": name}], sample_menu)[0]
        assert line.is_special_instruction is True
        assert line.price == Decimal("0")
        assert line.special_instructions == name

    def test_keyword_item_on_menu_stays_an_item(self):
        """A catalog item containing a keyword is not turned into a request."""
        line = verify_order_items(
            [{"name": "chocolate milk"}],
            [{"name": "Chocolate Milk", "price": "2.50"}],
        )[0]
        assert line.is_special_instruction is False
        assert line.verified is True
        assert line.price == Decimal("2.50")

    def test_misspelling(self, sample_menu):
        line = verify_order_items([{"name": "expresso"}], sample_menu)[0]
        assert line.verified is True
        assert line.name == "Espresso"
        assert line.price == Decimal("3.00")
        assert line.id == "2"
        assert line.confidence == 1.0

    def test_abbreviation(self, sample_menu):
        line = verify_order_items([{"name": "cm"}], sample_menu)[0]
        assert line.name == "Caramel Macchiato"
        assert line.price == Decimal("5.25")

    def test_word_order(self, sample_menu):
        line = verify_order_items([{"name": "latte vanilla"}], sample_menu)[0]
        assert line.name == "Vanilla Latte"
        assert line.confidence == pytest.approx(0.95)

    def test_modifiers_kept_on_verified_line(self, sample_menu):
        line = verify_order_items([{"name": "Vanilla Latte extra shot"}], sample_menu)[0]
        assert line.verified is True
        assert line.name == "Vanilla Latte"
        assert line.modifiers == ["extra shot"]
        assert line.special_instructions == "extra shot"

    def test_unmatched_line_keeps_price_hint(self, sample_menu):
        line = verify_order_items([{"name": "qqqq", "price": 9.99, "quantity": 3}], sample_menu)[0]
        assert line.verified is False
        assert line.is_special_instruction is False
        assert line.name == "qqqq"
        assert line.quantity == 3
        assert line.price == Decimal("9.99")
        assert line.suggestion is None
        assert line.confidence == 0.0

    def test_unmatched_line_without_hint_is_free(self, sample_menu):
        line = verify_order_items([{"name": "qqqq"}], sample_menu)[0]
        assert line.price == Decimal("0")

    def test_modifier_phrase_naming_menu_item(self):
        """A menu item whose name reads as a modifier is charged for."""
        catalog = [
            {"id": "d1", "name": "Double Espresso", "price": "3.50"},
            {"id": "c1", "name": "Cappuccino", "price": "4.50"},
        ]
        espresso, request = verify_order_items(
            [{"name": "Double Espresso"}, {"name": "no onions"}],
            catalog,
        )
        assert espresso.verified is True
        assert espresso.is_special_instruction is False
        assert espresso.name == "Double Espresso"
        assert espresso.price == Decimal("3.50")
        assert espresso.id == "d1"
        assert espresso.modifiers == []

        assert request.is_special_instruction is True
        assert request.price == Decimal("0")

    def test_quickie(self, sample_menu):
        line = verify_order_items([{"name": "Quickie"}], sample_menu)[0]
        assert line.verified is True
        assert line.name == "The Quickie"
        assert line.price == Decimal("6.00")

    def test_unknown_item(self, sample_menu):
        line = verify_order_items([{"name": "Xyzzyplonk"}], sample_menu)[0]
        assert line.verified is False
        assert line.is_special_instruction is False
        assert line.name == "Xyzzyplonk"
        assert line.price == Decimal("0")
        assert line.suggestion is None

    def test_low_threshold_widens_suggestion(self):
        """Below the fuzzy bar, a low threshold still yields a suggestion."""
        line = verify_order_items(
            [{"name": "moxi"}],
            [{"name": "Mocha", "price": "4.00"}],
            threshold=0.3,
        )[0]
        assert line.verified is False
        assert line.suggestion == "Mocha"
        assert line.confidence == pytest.approx(0.4)

    def test_unmatched_line_with_suggestion(self):
        catalog = [{"name": "Espresso", "price": "3.00"}, {"name": "Blueberry Muffin", "price": "3.25"}]
        line = verify_order_items([{"name": "bluebird"}], catalog)[0]
        assert line.verified is False
        assert line.name == "bluebird"
        assert line.suggestion == "Blueberry Muffin"
        assert line.confidence == pytest.approx(0.375)

    def test_malformed_catalog_entries_skipped(self):
        """Entries without a name or price never match."""
        catalog = [
            {"price": 1},
            {"name": "   ", "price": 1},
            {"name": "Latte"},
            {"name": "Espresso", "price": "3.00"},
        ]
        espresso, latte = verify_order_items([{"name": "espresso"}, {"name": "latte"}], catalog)
        assert espresso.verified is True
        assert latte.verified is False

    def test_accepts_requested_line_objects(self, sample_menu):
        results = verify_order_items([RequestedLine(name="cappuccino", id="line-1")], sample_menu)
        assert results[0].verified is True
        assert results[0].id == "1"

    def test_order_preserved(self, sample_menu):
        """Every requested line comes back, in request order."""
        names = ["expresso", "no onions", "qqqq", "muffin"]
        results = verify_order_items([{"name": name} for name in names], sample_menu)
        assert len(results) == 4
        assert results[0].name == "Espresso"
        assert results[1].is_special_instruction is True
        assert results[2].verified is False
        assert results[3].name == "Blueberry Muffin"

    def test_empty_inputs(self, sample_menu):
        assert verify_order_items([], sample_menu) == []
        line = verify_order_items([{"name": "latte"}], [])[0]
        assert line.verified is False
