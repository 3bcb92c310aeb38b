"""Turn leftover request text into a title filter."""
import re
from typing import Iterable

from apps.plan_service.schemas import FilterSpec
from apps.plan_service.services.extractors import NUMBER, QUOTED_RE
from apps.plan_service.services.vocabulary import CURRENCY_SYMBOLS, STOP_WORDS

MIN_TITLE_FILTER_LENGTH = 3

_SYMBOL_CLASS = "[" + "".join(re.escape(symbol) for symbol in CURRENCY_SYMBOLS) + "]"

NUMERIC_TOKEN_RE = re.compile(rf"{_SYMBOL_CLASS}?\s*{NUMBER}\s*%?")
STOP_WORDS_RE = re.compile(rf"\b(?:{'|'.join(STOP_WORDS)})\b", re.IGNORECASE)
WHITESPACE_RE = re.compile(r"\s+")
EDGE_PUNCTUATION = " ,.;:!?&-'\""


def _fragment_pattern(fragment: str) -> re.Pattern:
    # Whole words only, so "set" never eats into "sets" or "reset".
    return re.compile(rf"(?<!\w){re.escape(fragment)}(?!\w)", re.IGNORECASE)


def build_filter_spec(text: str, consumed: Iterable[str] = ()) -> FilterSpec:
    """
    Build a filter spec from whatever the operation parser did not use.

    Quoted literals, the consumed fragments, numbers (with currency symbol,
    sign and percent) and stop-words are stripped. What remains, if at least
    three characters long, is taken as a "title contains" hint.

    Args:
        text: Original merchant text
        consumed: Fragments the family builder already interpreted

    Returns:
        FilterSpec with ``title_contains`` set, or an empty FilterSpec
    """
    cleaned = QUOTED_RE.sub(" ", text)

    fragments = sorted({fragment for fragment in consumed if fragment}, key=len, reverse=True)
    for fragment in fragments:
        cleaned = _fragment_pattern(fragment).sub(" ", cleaned)

    cleaned = NUMERIC_TOKEN_RE.sub(" ", cleaned)
    cleaned = STOP_WORDS_RE.sub(" ", cleaned)
    cleaned = WHITESPACE_RE.sub(" ", cleaned).strip(EDGE_PUNCTUATION)

    if len(cleaned) < MIN_TITLE_FILTER_LENGTH:
        return FilterSpec()
    return FilterSpec(title_contains=cleaned)
