import re
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from string_analyzer.errors import UnparsableQuery

# (filter key, pattern, extractor) checked in order against the lower-cased query.
# Each rule stands alone; append a tuple to recognise a new phrase.
# Digits and letters are ASCII only.
NaturalLanguageRule = Tuple[str, re.Pattern, Callable[[re.Match], object]]

NATURAL_LANGUAGE_RULES: List[NaturalLanguageRule] = [
    ("is_palindrome", re.compile(r"palindromic", re.ASCII), lambda m: True),
    ("word_count", re.compile(r"single word", re.ASCII), lambda m: 1),
    ("min_word_count", re.compile(r"at least (\d+) words?", re.ASCII), lambda m: int(m.group(1))),
    ("max_word_count", re.compile(r"at most (\d+) words?", re.ASCII), lambda m: int(m.group(1))),
    # "longer than N" is strict, stored as an inclusive lower bound
    ("min_length", re.compile(r"longer than (\d+) characters?", re.ASCII), lambda m: int(m.group(1)) + 1),
    ("max_length", re.compile(r"shorter than (\d+) characters?", re.ASCII), lambda m: int(m.group(1)) - 1),
    ("contains_character", re.compile(r"containing the letter (\w)", re.ASCII), lambda m: m.group(1)),
]


def _matches(
    record: Dict,
    is_palindrome: Optional[bool] = None,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
    word_count: Optional[int] = None,
    min_word_count: Optional[int] = None,
    max_word_count: Optional[int] = None,
    contains_character: Optional[str] = None,
) -> bool:
    properties = record["properties"]

    if is_palindrome is not None and properties["is_palindrome"] != is_palindrome:
        return False
    if min_length is not None and properties["length"] < min_length:
        return False
    if max_length is not None and properties["length"] > max_length:
        return False
    if word_count is not None and properties["word_count"] != word_count:
        return False
    if min_word_count is not None and properties["word_count"] < min_word_count:
        return False
    if max_word_count is not None and properties["word_count"] > max_word_count:
        return False
    # checked against the value as submitted, not the trimmed one
    if contains_character is not None and contains_character not in record["value"]:
        return False
    return True


def apply_filters(records: Iterable[Dict], **filters) -> List[Dict]:
    """Keep the records satisfying every given filter, in their original order"""
    return [record for record in records if _matches(record, **filters)]


def filter_structured(
    records: Iterable[Dict],
    is_palindrome: Optional[bool] = None,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
    word_count: Optional[int] = None,
    contains_character: Optional[str] = None,
) -> Dict:
    """
    Filter records with explicit query parameters.

    Unset parameters impose no constraint but are still echoed back
    in filters_applied.
    """
    filters_applied = {
        "is_palindrome": is_palindrome,
        "min_length": min_length,
        "max_length": max_length,
        "word_count": word_count,
        "contains_character": contains_character,
    }
    data = apply_filters(records, **filters_applied)

    return {
        "data": data,
        "count": len(data),
        "filters_applied": filters_applied,
    }


def parse_natural_language_query(query: str) -> Dict:
    """
    Parse natural language query into filter parameters
    Examples:
    - "all single word palindromic strings" -> {word_count: 1, is_palindrome: true}
    - "strings longer than 10 characters" -> {min_length: 11}
    - "strings containing the letter z" -> {contains_character: "z"}

    Raises UnparsableQuery when no rule matches.
    """
    lowered = query.lower()
    filters = {}

    for key, pattern, extract in NATURAL_LANGUAGE_RULES:
        match = pattern.search(lowered)
        if match:
            filters[key] = extract(match)

    if not filters:
        raise UnparsableQuery(query)

    return filters


def filter_natural_language(records: Iterable[Dict], query: str) -> Dict:
    """Filter records with the constraints recognised in a free-text query"""
    parsed_filters = parse_natural_language_query(query)
    data = apply_filters(records, **parsed_filters)

    return {
        "data": data,
        "count": len(data),
        "interpreted_query": {
            "original": query,
            "parsed_filters": parsed_filters,
        },
    }
