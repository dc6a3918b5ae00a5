"""
Matching Constants.

Static lookup tables used by the normalizer, the similarity scorer and the
order item verifier. These tables are built once at import time and are
never mutated afterwards, so the matching functions can share them freely
across threads.

Table order is significant wherever a table is a tuple of pairs: entries are
applied in sequence and later entries see the output of earlier ones.
"""

import re

# =============================================================================
# Normalization Substitutions
# =============================================================================

# (variant, canonical) pairs applied at word boundaries, in order.
# Multi-word misspellings come before their sub-word variants, and an empty
# canonical value removes the phrase entirely.
SUBSTITUTIONS: tuple[tuple[str, str], ...] = (
    # Coffee terms
    ("expresso", "espresso"),
    ("expreso", "espresso"),
    ("esp", "espresso"),
    ("cappacino", "cappuccino"),
    ("cappucino", "cappuccino"),
    ("capuccino", "cappuccino"),
    ("cap", "cappuccino"),
    ("capp", "cappuccino"),
    ("machiato", "macchiato"),
    ("maciato", "macchiato"),
    ("machato", "macchiato"),
    ("mach", "macchiato"),
    ("mocca", "mocha"),
    ("moca", "mocha"),
    ("carmel", "caramel"),
    ("car", "caramel"),
    ("vanila", "vanilla"),
    ("van", "vanilla"),
    ("choclate", "chocolate"),
    ("chocalate", "chocolate"),
    ("choc", "chocolate"),
    ("choco", "chocolate"),
    ("late", "latte"),
    ("lat", "latte"),
    ("american", "americano"),
    ("americono", "americano"),
    ("amer", "americano"),
    ("ameri", "americano"),
    ("frapuccino", "frappuccino"),
    ("frappucino", "frappuccino"),
    ("frap", "frappuccino"),
    ("frappe", "frappuccino"),
    ("frapp", "frappuccino"),

    # Food terms
    ("bagle", "bagel"),
    ("crossant", "croissant"),
    ("crossiant", "croissant"),
    ("crosant", "croissant"),
    ("crois", "croissant"),
    ("sandwitch", "sandwich"),
    ("sandwhich", "sandwich"),
    ("sand", "sandwich"),
    ("sandw", "sandwich"),
    ("mufin", "muffin"),
    ("muff", "muffin"),
    ("scon", "scone"),
    ("buger", "burger"),
    ("burgur", "burger"),
    ("burg", "burger"),
    ("chese", "cheese"),
    ("piza", "pizza"),
    ("peperoni", "pepperoni"),
    ("pep", "pepperoni"),
    ("pepp", "pepperoni"),
    ("margarita", "margherita"),
    ("marg", "margherita"),
    ("hawain", "hawaiian"),
    ("hawian", "hawaiian"),
    ("haw", "hawaiian"),

    # Size and dietary abbreviations
    ("sm", "small"),
    ("med", "medium"),
    ("lg", "large"),
    ("xxl", "extra extra large"),
    ("xl", "extra large"),
    ("reg", "regular"),
    ("decaff", "decaf"),
    ("dec", "decaf"),
    ("veggie", "vegetarian"),
    ("vegitarian", "vegetarian"),
    ("veg", "vegetarian"),
    ("glutin", "gluten"),
    ("gf", "gluten free"),
    ("suger", "sugar"),
    ("sweetner", "sweetener"),
    ("sweet", "sweetener"),

    # Milk alternatives
    ("creme", "cream"),
    ("whiped", "whipped"),
    ("whip", "whipped"),
    ("almnd", "almond"),
    ("alm", "almond"),
    ("cocnut", "coconut"),
    ("coco", "coconut"),
    ("non-fat", "nonfat"),
    ("non fat", "nonfat"),
    ("fat free", "nonfat"),
    ("fatfree", "nonfat"),
    ("fat-free", "nonfat"),
    ("2%", "two percent"),
    ("1%", "one percent"),

    # Modifier shorthand
    ("w/o", "without"),
    ("w/", "with"),
    ("wo", "without"),
    ("xtra", "extra"),

    # Menu-specific spoken variants
    ("des kwikis", "the quickie"),
    ("quicky", "the quickie"),
    ("quik", "the quickie"),
    ("quick", "the quickie"),

    # Filler phrases
    ("please", ""),
    ("can i have", ""),
    ("i would like", ""),
    ("i want", ""),
    ("give me", ""),
    ("i'll take", ""),
    ("could i get", ""),
    ("may i have", ""),
    ("let me get", ""),
    ("let me have", ""),
    ("i need", ""),
    ("i'd like", ""),
    ("a ", " "),
    ("the ", " "),
    ("an ", " "),
)

# Speech filler tokens stripped anywhere in the text
FILLER_WORDS: tuple[str, ...] = (
    "um", "uh", "like", "just", "so", "yeah", "well",
    "actually", "basically", "you know", "i mean",
)


def _boundary_pattern(phrase: str) -> re.Pattern:
    """Compile a phrase so it only matches on word edges that are word characters."""
    pattern = re.escape(phrase)
    if re.match(r"\w", phrase):
        pattern = r"\b" + pattern
    if re.search(r"\w$", phrase):
        pattern = pattern + r"\b"
    return re.compile(pattern, re.IGNORECASE)


SUBSTITUTION_PATTERNS: tuple[tuple[re.Pattern, str], ...] = tuple(
    (_boundary_pattern(variant), canonical) for variant, canonical in SUBSTITUTIONS
)

FILLER_PATTERN = re.compile(
    r"\b(?:" + "|".join(re.escape(word) for word in FILLER_WORDS) + r")\b",
    re.IGNORECASE,
)

# =============================================================================
# Phonetic Folding
# =============================================================================

# (spelling, sound) folds applied to both strings before comparing them.
# Longer spellings come first so "ck" and "ch" fold before a bare "c".
PHONETIC_FOLDS: tuple[tuple[str, str], ...] = (
    ("tion", "sh"),
    ("sion", "sh"),
    ("dge", "j"),
    ("ph", "f"),
    ("ff", "f"),
    ("kn", "n"),
    ("gn", "n"),
    ("wh", "w"),
    ("ck", "k"),
    ("ch", "k"),
    ("q", "k"),
    ("ps", "s"),
    ("sc", "s"),
    ("c", "k"),
    ("g", "j"),
    ("ie", "i"),
    ("y", "i"),
    ("oa", "o"),
    ("ow", "o"),
    ("oo", "u"),
    ("ou", "u"),
    ("ur", "er"),
    ("ir", "er"),
    ("or", "er"),
    ("s", "z"),
)

# =============================================================================
# Order Line Modifiers
# =============================================================================

# Modifier phrases embedded in a requested line name ("burger no onions").
# Checked in order; every occurrence is recorded and removed from the name.
MODIFIER_PATTERNS: tuple[re.Pattern, ...] = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"\bwithout\s+(\w+)",
        r"\bno\s+(\w+)",
        r"\bextra\s+(\w+)",
        r"\blight\s+(\w+)",
        r"\bheavy\s+(\w+)",
        r"\bdouble\s+(\w+)",
        r"\btriple\s+(\w+)",
        r"\bhold\s+the\s+(\w+)",
        r"\bremove\s+(\w+)",
        r"\bminus\s+(\w+)",
        r"\bplus\s+(\w+)",
        r"\badd\s+(\w+)",
        r"\bwith\s+(\w+)",
        r"\bon\s+the\s+side\b",
        r"\bmake\s+it\s+(\w+)",
    )
)

# =============================================================================
# Special Instruction Keywords
# =============================================================================

# Words that suggest a requested line is a request rather than a menu item.
# Matched as whole words, allowing a plural "s"/"es" suffix.
SPECIAL_INSTRUCTION_KEYWORDS: tuple[str, ...] = (
    # Table items
    "napkin", "silverware", "utensil", "fork", "knife", "knives", "spoon",
    "straw", "lid", "cup holder",
    # Condiments
    "condiment", "sauce", "ketchup", "mustard", "mayo", "mayonnaise",
    "ranch", "bbq",
    "salt", "pepper", "sugar", "cream", "milk", "honey", "syrup",
    # Request verbs and phrasing
    "please", "extra", "without", "no", "add", "include", "bring", "need",
    "want", "put", "give", "provide", "make sure", "ensure", "don't forget",
    "remember", "request", "instruction", "note", "special", "light",
    "heavy", "double", "triple", "hold", "remove", "minus", "plus",
    "on the side", "separate",
    # Packaging and fulfillment
    "bag", "to go", "for here", "dine in", "takeout", "pickup", "delivery",
    "receipt", "change",
)

SPECIAL_INSTRUCTION_PATTERN = re.compile(
    r"\b(?:"
    + "|".join(re.escape(keyword) for keyword in SPECIAL_INSTRUCTION_KEYWORDS)
    + r")(?:e?s)?\b",
    re.IGNORECASE,
)

# =============================================================================
# Restaurant Aliases
# =============================================================================

# Common mispronunciations or alternate ways callers refer to restaurants.
# Values are restaurant ids; entries pointing at unknown ids are ignored.
RESTAURANT_ALIASES: dict[str, str] = {
    # Micro Dose
    "micro dose": "micro_dose",
    "micro dose coffee": "micro_dose",
    "microdose": "micro_dose",
    "microdose coffee": "micro_dose",
    "micro does": "micro_dose",
    "micro-dose": "micro_dose",
    "my crow dose": "micro_dose",
    "micro doze": "micro_dose",
    "micro": "micro_dose",
    "dose": "micro_dose",
    "micro d": "micro_dose",
    "md": "micro_dose",
    "macrodo's": "micro_dose",
    "macrodose": "micro_dose",
    "macro dose": "micro_dose",
    "macro does": "micro_dose",
    "macro doze": "micro_dose",
    "macros": "micro_dose",
    # Drinx
    "drinks": "drinx",
    "drink": "drinx",
    "drinx coffee": "drinx",
    "drinx cafe": "drinx",
    "drinks coffee": "drinx",
    # Burger Joint
    "burger place": "burger_joint",
    "burgers": "burger_joint",
    "burger spot": "burger_joint",
    # Pizza Palace
    "pizza place": "pizza_palace",
    "pizza": "pizza_palace",
    "palace": "pizza_palace",
}
