"""
Filter construction for medicine searches.

All builders treat user text as a literal: pattern-special characters are
escaped before the text reaches a `$regex` clause, so a query such as
"a.b*c" only matches that exact character sequence.
"""
import re
from typing import Dict, Sequence

from utils.errors import ValidationError

SMART_SEARCH_FIELDS = ("product_name", "sub_category", "salt_composition", "medicine_desc")

_WHITESPACE = re.compile(r"\s+")


def _require_text(text):
    if text is None or not str(text).strip():
        raise ValidationError("Search text must not be empty")
    return str(text)


def _regex_clause(pattern: str) -> Dict:
    return {"$regex": pattern, "$options": "i"}


def literal_pattern(text: str) -> str:
    return re.escape(_require_text(text))


def flexible_pattern(text: str) -> str:
    """Escape `text` and let each whitespace run match any (possibly empty) whitespace run."""
    words = _WHITESPACE.split(_require_text(text).strip())
    return r"\s*".join(re.escape(word) for word in words)


def build_single_field_filter(field: str, text: str) -> Dict:
    return {field: _regex_clause(literal_pattern(text))}


def build_multi_field_filter(fields: Sequence[str], text: str) -> Dict:
    pattern = literal_pattern(text)
    return {"$or": [{field: _regex_clause(pattern)} for field in fields]}


def build_escaped_flexible_filter(fields: Sequence[str], text: str) -> Dict:
    pattern = flexible_pattern(text)
    return {"$or": [{field: _regex_clause(pattern)} for field in fields]}
