"""Keyword tables for the planning engine.

Everything the planner matches against lives here as plain data, so the
tables can be inspected in tests and extended without touching the builders.
Matching is case-insensitive and English-only.
"""

# Words dropped when turning leftover text into a title filter.
STOP_WORDS = (
    "please",
    "all",
    "products",
    "product",
    "items",
    "item",
    "the",
    "to",
    "for",
    "of",
    "with",
    "and",
    "that",
    "my",
)

CURRENCY_SYMBOLS = ("$", "€", "£", "₹", "¥", "₤", "₱", "₦", "₽")

# Only symbols that name exactly one currency; "$" and "¥" are ambiguous.
CURRENCY_SYMBOL_CODES = {
    "€": "EUR",
    "£": "GBP",
    "₹": "INR",
    "₱": "PHP",
    "₦": "NGN",
    "₽": "RUB",
}

CURRENCY_CODES = (
    "USD",
    "EUR",
    "GBP",
    "INR",
    "JPY",
    "CNY",
    "CAD",
    "AUD",
    "PHP",
    "NGN",
    "RUB",
)

# Checked in this order; the first matching family wins.
FAMILY_TRIGGERS = (
    ("price", r"price|compare[\s_-]?at"),
    ("tags", r"\btag"),
    ("inventory", r"inventory|stock|quantity"),
    ("status", r"publish|unpublish|archive|draft"),
)

FAMILIES = tuple(family for family, _ in FAMILY_TRIGGERS)

# Price / compare-at
PRICE_INCREASE = r"\b(?:increase|raise)"
PRICE_DECREASE = r"\b(?:decrease|reduce|lower)"
PRICE_SET = r"\b(?:set|change)"
PRICE_NOUN = r"price"
COMPARE_AT = r"compare[\s_-]?at"

# Tags
TAG_KEYWORD = r"\btags?\b"
TAG_REPLACE = r"\breplace"
TAG_REMOVE = r"\b(?:remove|delete)"

# Inventory; when both match, decrease wins.
INVENTORY_INCREASE = r"\b(?:increase|add|plus)"
INVENTORY_DECREASE = r"\b(?:decrease|remove|minus|deduct)"
LOCATION_PHRASE = r"\b(?:location|at|in)\s+(?:location\s+)?([\w\s-]+)"

# Status rules, first match wins.
STATUS_RULES = (
    ("ACTIVE", r"(?<!un)publish|\bactivate"),
    ("DRAFT", r"unpublish|\bdraft"),
    ("ARCHIVED", r"\barchive"),
)

FILTER_TERM_PREPOSITIONS = ("for", "of", "on", "in")

# Fragments each builder has already interpreted. They are removed before the
# leftover text is read as a title filter.
CONSUMED_FRAGMENTS = {
    "price": (
        "increase",
        "increased",
        "raise",
        "decrease",
        "reduce",
        "lower",
        "set",
        "change",
        "price",
        "prices",
        "compare at",
        "compare-at",
        "compare_at",
        "by",
    ),
    "tags": (
        "tag",
        "tags",
        "add",
        "remove",
        "delete",
        "replace",
        "from",
        "on",
    ),
    "inventory": (
        "inventory",
        "stock",
        "quantity",
        "set",
        "increase",
        "add",
        "plus",
        "decrease",
        "remove",
        "minus",
        "deduct",
        "reduce",
        "lower",
        "by",
        "at",
        "in",
        "location",
        "from",
    ),
    "status": (
        "publish",
        "unpublish",
        "archive",
        "archived",
        "draft",
        "activate",
        "status",
        "set",
        "change",
        "mark",
        "as",
    ),
}
