"""
poolpass.charsets
Fixed character categories, their alphabets and the ambiguous-character set.
"""

import enum
import string
from types import MappingProxyType
from typing import Iterable, List


class Category(enum.Flag):
    UPPERCASE = 1
    LOWERCASE = 2
    NUMBERS = 4
    SYMBOLS = 8
    ALL = 15


DEFAULT_SYMBOLS = "!@#$%^&*()-_=+[]{};:,.<>/?"

# concatenation order of the pool, do not reorder
CATEGORY_ORDER = (
    Category.UPPERCASE,
    Category.LOWERCASE,
    Category.NUMBERS,
    Category.SYMBOLS,
)

ALPHABETS = MappingProxyType({
    Category.UPPERCASE: string.ascii_uppercase,
    Category.LOWERCASE: string.ascii_lowercase,
    Category.NUMBERS: string.digits,
    Category.SYMBOLS: DEFAULT_SYMBOLS,
})

# visually confusable characters
AMBIGUOUS = frozenset("l1IoO0")

_NAMES = {
    "uppercase": Category.UPPERCASE,
    "upper": Category.UPPERCASE,
    "lowercase": Category.LOWERCASE,
    "lower": Category.LOWERCASE,
    "numbers": Category.NUMBERS,
    "digits": Category.NUMBERS,
    "symbols": Category.SYMBOLS,
}


def parse_categories(names: Iterable[str]) -> Category:
    """
    Turn category names (e.g. ["uppercase", "digits"]) into a Category flag.
    Raises ValueError on an unknown name.
    """
    if isinstance(names, str):
        names = names.split(",")
    elif not isinstance(names, (list, tuple, set, frozenset)):
        raise ValueError("categories must be a list of names or a comma-separated string")
    result = Category(0)
    for name in names:
        if not isinstance(name, str):
            raise ValueError(f"Category names must be strings, got {name!r}")
        key = name.strip().lower()
        if not key:
            continue
        if key not in _NAMES:
            raise ValueError(f"Unknown character category: {name!r}")
        result |= _NAMES[key]
    return result


def category_names(categories: Category) -> List[str]:
    """Canonical names of the enabled categories, in pool order."""
    return [c.name.lower() for c in CATEGORY_ORDER if c in categories]
