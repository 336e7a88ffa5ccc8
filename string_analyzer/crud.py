import logging
from typing import Dict, Optional

from string_analyzer.errors import DuplicateRecord, NotFound
from string_analyzer.filters import filter_natural_language, filter_structured
from string_analyzer.utils import analyze_string, build_string_record

logger = logging.getLogger(__name__)


def create_string_analysis(store, value: str) -> Dict:
    """Analyze and store a new string, rejecting duplicates by content hash"""
    record = build_string_record(value)

    if store.exists(record["id"]):
        logger.info(f"Duplicate string rejected: {record['id']}")
        raise DuplicateRecord(record["id"])

    store.save(record["id"], record)
    logger.info(f"Stored string analysis {record['id']}")
    return record


def get_string_by_value(store, value: str) -> Dict:
    """Get string analysis by raw value (looked up by hash of the trimmed value)"""
    string_id = analyze_string(value)["sha256_hash"]
    record = store.get(string_id)
    if record is None:
        raise NotFound(string_id)
    return record


def get_all_strings(
    store,
    is_palindrome: Optional[bool] = None,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
    word_count: Optional[int] = None,
    contains_character: Optional[str] = None
) -> Dict:
    """Get all strings with optional filters"""
    return filter_structured(
        store.list_all(),
        is_palindrome=is_palindrome,
        min_length=min_length,
        max_length=max_length,
        word_count=word_count,
        contains_character=contains_character,
    )


def get_strings_by_natural_language(store, query: str) -> Dict:
    """Get strings matching a natural language query"""
    return filter_natural_language(store.list_all(), query)


def delete_string(store, value: str) -> None:
    """Delete string analysis by raw value"""
    string_id = analyze_string(value)["sha256_hash"]
    if not store.delete(string_id):
        raise NotFound(string_id)
    logger.info(f"Deleted string analysis {string_id}")