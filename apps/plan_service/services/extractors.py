"""Extraction primitives for pulling plan parameters out of merchant text."""
import math
import re
from typing import List, Optional

from apps.plan_service.services.vocabulary import (
    CURRENCY_CODES,
    CURRENCY_SYMBOL_CODES,
    CURRENCY_SYMBOLS,
    FILTER_TERM_PREPOSITIONS,
    LOCATION_PHRASE,
    STATUS_RULES,
    TAG_KEYWORD,
)

NUMBER = r"-?\d+(?:\.\d+)?"

_SYMBOL_CLASS = "[" + "".join(re.escape(symbol) for symbol in CURRENCY_SYMBOLS) + "]"

PERCENT_RE = re.compile(rf"({NUMBER})\s*%")
CURRENCY_AMOUNT_RE = re.compile(rf"{_SYMBOL_CLASS}\s*({NUMBER})")
PLAIN_NUMBER_RE = re.compile(rf"({NUMBER})")
INTEGER_RE = re.compile(r"(-?\d+)(?:\.(\d+))?")
CURRENCY_CODE_RE = re.compile(rf"\b({'|'.join(CURRENCY_CODES)})\b")
CURRENCY_SYMBOL_CODE_RE = re.compile(
    "[" + "".join(re.escape(symbol) for symbol in CURRENCY_SYMBOL_CODES) + "]"
)
FILTER_TERM_RE = re.compile(
    rf"\b(?:{'|'.join(FILTER_TERM_PREPOSITIONS)})\s+(.+?)[\s.,;:!?]*$",
    re.IGNORECASE,
)
# A single quote only opens or closes a literal at a word edge, so the
# apostrophe in "men's" is left alone.
QUOTED_RE = re.compile(r"\"([^\"]+)\"|(?<!\w)'([^']+)'(?!\w)")
TAG_KEYWORD_RE = re.compile(TAG_KEYWORD, re.IGNORECASE)
TAG_SEPARATOR_RE = re.compile(r"[,&]")
LOCATION_RE = re.compile(LOCATION_PHRASE, re.IGNORECASE)
STATUS_RES = tuple((status, re.compile(pattern, re.IGNORECASE)) for status, pattern in STATUS_RULES)


def _to_finite(token: str) -> Optional[float]:
    # Digit runs too long for a float overflow to inf.
    value = float(token)
    if not math.isfinite(value):
        return None
    return value


class TextExtractor:
    """Stateless extractors over raw merchant text.

    None of these raise: a value that is not present comes back as ``None``
    (or an empty list for tags) and the caller decides what that means.
    """

    @staticmethod
    def normalize(text: str) -> str:
        """Trim surrounding whitespace."""
        return text.strip()

    @staticmethod
    def extract_percentage(text: str) -> Optional[float]:
        """
        Extract the first signed number written as a percentage.

        Args:
            text: Merchant text

        Returns:
            Signed value as written (``"-15%"`` -> -15.0), or None when absent
            or too large to represent

        Examples:
            - "raise by 10%" -> 10.0
            - "lower by 2.5 %" -> 2.5
        """
        match = PERCENT_RE.search(text)
        if not match:
            return None
        return _to_finite(match.group(1))

    @staticmethod
    def extract_currency_amount(text: str) -> Optional[float]:
        """
        Extract an amount, preferring one written after a currency symbol.

        Args:
            text: Merchant text

        Returns:
            Signed amount or None. Falls back to the first plain number when
            no symbol-prefixed amount is present.
        """
        match = CURRENCY_AMOUNT_RE.search(text)
        if match:
            return _to_finite(match.group(1))
        return TextExtractor.extract_plain_number(text)

    @staticmethod
    def extract_plain_number(text: str) -> Optional[float]:
        """Extract the first signed decimal anywhere in the text."""
        match = PLAIN_NUMBER_RE.search(text)
        if not match:
            return None
        return _to_finite(match.group(1))

    @staticmethod
    def extract_integer(text: str) -> Optional[int]:
        """
        Extract the first number as an exact integer.

        Args:
            text: Merchant text

        Returns:
            Signed integer, or None when the first number has a fractional
            part (or no number is present)

        Examples:
            - "set stock to 10 at Main" -> 10
            - "add 2.0 units" -> 2
            - "add 2.5 units" -> None
        """
        match = INTEGER_RE.search(text)
        if not match:
            return None
        whole, fraction = match.group(1), match.group(2)
        if fraction and fraction.strip("0"):
            return None
        try:
            return int(whole)
        except ValueError:
            # Past the interpreter's int string conversion limit.
            return None

    @staticmethod
    def extract_currency_code(text: str) -> Optional[str]:
        """
        Extract an explicit ISO currency code.

        Args:
            text: Merchant text

        Returns:
            Code written in upper case ("EUR"), or the code of an unambiguous
            currency symbol ("€" -> "EUR"), or None
        """
        match = CURRENCY_CODE_RE.search(text)
        if match:
            return match.group(1)
        symbol = CURRENCY_SYMBOL_CODE_RE.search(text)
        if symbol:
            return CURRENCY_SYMBOL_CODES[symbol.group(0)]
        return None

    @staticmethod
    def extract_filter_term(text: str) -> Optional[str]:
        """
        Extract the phrase after a preposition (for/of/on/in).

        Used by the single-page price flow; the planner derives its filter
        from the leftover text instead.

        Examples:
            - "raise prices by 5% for summer hoodies." -> "summer hoodies"
        """
        match = FILTER_TERM_RE.search(text)
        if not match:
            return None
        term = match.group(1).strip()
        return term or None

    @staticmethod
    def parse_tags(text: str) -> List[str]:
        """
        Extract tag literals.

        Quoted literals win and are returned in order of appearance. Without
        quotes, everything after the word "tag"/"tags" is split on commas and
        ampersands.
        Unquoted tags must come after the keyword: in "add sale tag to hoodies"
        the tag read is "to hoodies" and "sale" is left for the filter.

        Args:
            text: Merchant text

        Returns:
            Tags in input order with case preserved; empty list if none

        Examples:
            - 'add "Summer Sale" and "Clearance" tags' -> ["Summer Sale", "Clearance"]
            - "remove tags sale, winter & old" -> ["sale", "winter", "old"]
        """
        quoted = [
            (double or single).strip()
            for double, single in QUOTED_RE.findall(text)
        ]
        quoted = [tag for tag in quoted if tag]
        if quoted:
            return quoted

        match = TAG_KEYWORD_RE.search(text)
        if not match:
            return []
        tail = text[match.end():]
        return [part.strip() for part in TAG_SEPARATOR_RE.split(tail) if part.strip()]

    @staticmethod
    def detect_location(text: str) -> Optional[str]:
        """
        Extract the location phrase after "location", "at" or "in".

        Examples:
            - "set stock to 5 at Main Warehouse" -> "Main Warehouse"
            - "add 3 in location Berlin" -> "Berlin"
        """
        match = LOCATION_RE.search(text)
        if not match:
            return None
        location = match.group(1).strip()
        return location or None

    @staticmethod
    def derive_status(text: str) -> Optional[str]:
        """
        Map status keywords to a product status.

        Returns:
            'ACTIVE', 'DRAFT', 'ARCHIVED' or None. The first matching rule wins.
        """
        for status, pattern in STATUS_RES:
            if pattern.search(text):
                return status
        return None
