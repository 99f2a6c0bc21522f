"""Category vocabularies and fallback keyword tables.

Every list type that can be categorized has a closed, ordered category set
and a keyword table used by the local fallback. Tables are immutable and
shared across requests.
"""

import logging
from enum import Enum
from typing import Optional, Tuple

# Configure module logger
logger = logging.getLogger(__name__)

OTHER_CATEGORY = "Other"

KeywordTable = Tuple[Tuple[str, Tuple[str, ...]], ...]


class ListType(str, Enum):
    """Kind of list an item belongs to."""

    GROCERY = "grocery"
    SHOPPING = "shopping"
    PROJECT = "project"

    @classmethod
    def resolve(cls, value: Optional[str]) -> "ListType":
        """Map a raw list type onto a ListType.

        Missing values and values we do not recognize resolve to GROCERY.

        Args:
            value: Raw list type from the request, possibly None.

        Returns:
            The matching ListType.
        """
        if value is None:
            return cls.GROCERY
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            logger.warning(
                "Unknown list type, using grocery",
                extra={"list_type": value},
            )
            return cls.GROCERY


GROCERY_CATEGORIES: Tuple[str, ...] = (
    "Produce",
    "Meat & Seafood",
    "Refrigerated",
    "Dairy",
    "Bakery",
    "Pantry",
    "Frozen",
    "Snacks",
    "Beverages",
    "Household",
    "Personal Care",
    "Pet Supplies",
    OTHER_CATEGORY,
)

SHOPPING_CATEGORIES: Tuple[str, ...] = (
    "Clothing",
    "Shoes",
    "Accessories",
    "Electronics",
    "Home & Kitchen",
    "Beauty",
    "Health",
    "Toys & Games",
    "Sports & Outdoors",
    "Books & Media",
    "Office Supplies",
    OTHER_CATEGORY,
)

# Order matters: the first row with a matching keyword wins, and no keyword
# may contain a keyword from an earlier row.
# Frozen comes first so "ice cream" and "frozen yogurt" skip the cold case.
# Refrigerated precedes Produce so "orange juice" is not read as an orange.
# Household precedes Pantry so "foil" is not caught by "oil".
GROCERY_KEYWORDS: KeywordTable = (
    ("Frozen", ("frozen", "ice cream", "popsicle", "pizza", "waffle")),
    (
        "Refrigerated",
        (
            "milk", "yogurt", "eggs", "egg white", "butter", "sour cream",
            "cream cheese", "juice", "tofu", "hummus", "tortilla", "deli",
        ),
    ),
    (
        "Produce",
        (
            "apple", "banana", "orange", "lemon", "lime", "grape", "berr",
            "lettuce", "tomato", "onion", "garlic", "potato", "carrot",
            "broccoli", "spinach", "pepper", "cucumber", "avocado",
            "mushroom", "celery", "eggplant", "melon", "herb", "fruit",
            "vegetable",
        ),
    ),
    (
        "Meat & Seafood",
        (
            "chicken", "beef", "pork", "fish", "salmon", "tuna", "shrimp",
            "turkey", "bacon", "sausage", "steak", "lamb",
        ),
    ),
    ("Dairy", ("cheese", "cream", "kefir", "cottage")),
    (
        "Bakery",
        ("bread", "bagel", "muffin", "croissant", "cake", "donut", "roll", "bun"),
    ),
    (
        "Snacks",
        ("chip", "cracker", "cookie", "pretzel", "popcorn", "candy", "chocolate", "nut"),
    ),
    (
        "Beverages",
        ("water", "soda", "coffee", "tea", "beer", "wine", "kombucha"),
    ),
    (
        "Household",
        (
            "paper", "towel", "tissue", "cleaner", "detergent", "soap",
            "sponge", "trash bag", "foil", "battery", "bleach",
        ),
    ),
    (
        "Pantry",
        (
            "rice", "pasta", "cereal", "oat", "soup", "sauce", "oil", "flour",
            "sugar", "salt", "spice", "bean", "canned", "vinegar", "honey",
        ),
    ),
    (
        "Personal Care",
        ("shampoo", "conditioner", "toothpaste", "toothbrush", "deodorant", "lotion", "razor", "floss"),
    ),
    ("Pet Supplies", ("dog", "cat food", "cat litter", "pet", "kibble", "litter")),
)

# Office Supplies precedes Books & Media so "notebook" is not caught by "book".
SHOPPING_KEYWORDS: KeywordTable = (
    (
        "Shoes",
        ("shoe", "sneaker", "boot", "sandal", "slipper", "loafer", "heels", "cleat"),
    ),
    (
        "Clothing",
        (
            "shirt", "pants", "jeans", "dress", "skirt", "jacket", "coat",
            "sweater", "hoodie", "sock", "underwear", "shorts", "legging",
        ),
    ),
    (
        "Accessories",
        ("hat", "scarf", "glove", "belt", "wallet", "purse", "watch", "sunglasses", "jewelry"),
    ),
    (
        "Electronics",
        (
            "phone", "laptop", "tablet", "charger", "cable", "headphone",
            "earbud", "speaker", "camera", "monitor", "keyboard", "mouse", "tv",
        ),
    ),
    (
        "Home & Kitchen",
        ("pan", "pot", "plate", "mug", "knife", "blender", "pillow", "blanket", "sheet", "lamp", "towel"),
    ),
    ("Beauty", ("makeup", "lipstick", "mascara", "perfume", "nail polish", "skincare")),
    ("Health", ("vitamin", "medicine", "bandage", "thermometer", "supplement")),
    ("Toys & Games", ("toy", "lego", "puzzle", "board game", "doll", "video game")),
    (
        "Sports & Outdoors",
        ("bike", "ball", "yoga", "tent", "fishing", "dumbbell", "racket", "camping"),
    ),
    ("Office Supplies", ("pen", "pencil", "notebook", "stapler", "printer", "envelope", "folder")),
    ("Books & Media", ("book", "novel", "magazine", "dvd", "vinyl")),
)


def get_category_set(list_type: ListType) -> Optional[Tuple[str, ...]]:
    """Return the category vocabulary for a list type, or None for projects."""
    if list_type is ListType.PROJECT:
        return None
    if list_type is ListType.SHOPPING:
        return SHOPPING_CATEGORIES
    return GROCERY_CATEGORIES


def get_keyword_table(list_type: ListType) -> Optional[KeywordTable]:
    """Return the fallback keyword table for a list type, or None for projects."""
    if list_type is ListType.PROJECT:
        return None
    if list_type is ListType.SHOPPING:
        return SHOPPING_KEYWORDS
    return GROCERY_KEYWORDS
