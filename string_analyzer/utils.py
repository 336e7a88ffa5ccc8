import hashlib
import re
from collections import Counter
from datetime import datetime, timezone
from typing import Dict, Optional

from string_analyzer.errors import InvalidInput

# Space separators, line terminators and the byte order mark.
# Unlike str.strip() this includes U+FEFF and leaves out U+001C-U+001F and U+0085.
WHITESPACE = (
    "\t\n\v\f\r \u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005"
    "\u2006\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)
WORD_PATTERN = re.compile(f"[^{WHITESPACE}]+")


def trim(text: str) -> str:
    """Strip leading and trailing whitespace"""
    return text.strip(WHITESPACE)


def compute_sha256(text: str) -> str:
    """Compute SHA-256 hash of a string (UTF-8 bytes, lowercase hex)"""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def is_palindrome(text: str) -> bool:
    """Check if string reads the same reversed, ignoring case.

    Reversal works on code points, so combining characters and
    multi-codepoint graphemes are not kept together.
    """
    return text.lower() == text[::-1].lower()


def count_unique_characters(text: str) -> int:
    """Count distinct characters in string"""
    return len(set(text))


def count_words(text: str) -> int:
    """Count words separated by runs of whitespace"""
    return len(WORD_PATTERN.findall(text))


def get_character_frequency(text: str) -> Dict[str, int]:
    """Get frequency map of each character"""
    return dict(Counter(text))


def analyze_string(value: str) -> Dict:
    """
    Analyze a string and return all computed properties.

    Every property is computed on the value with leading and trailing
    whitespace removed. Raises InvalidInput if value is not a str.
    """
    if not isinstance(value, str):
        raise InvalidInput("Value must be a string")

    trimmed = trim(value)

    return {
        "length": len(trimmed),
        "is_palindrome": is_palindrome(trimmed),
        "unique_characters": count_unique_characters(trimmed),
        "word_count": count_words(trimmed),
        "sha256_hash": compute_sha256(trimmed),
        "character_frequency_map": get_character_frequency(trimmed),
    }


def build_string_record(value: str, created_at: Optional[datetime] = None) -> Dict:
    """Wrap the analysis of value into a storable record keyed by its hash"""
    properties = analyze_string(value)

    return {
        "id": properties["sha256_hash"],
        "value": value,
        "properties": properties,
        "created_at": created_at or datetime.now(timezone.utc),
    }
