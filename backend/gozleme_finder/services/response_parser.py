"""
Recovers a JSON array from freeform AI output.

The model is asked for a bare JSON array but may wrap it in code fences,
use smart quotes and dashes, or leave stray non-ASCII bytes inside strings.
Cleanup runs first, then each parse strategy is tried in order until one
returns a list. Nothing here raises: an unrecoverable reply is an empty list.
"""
import json
import logging
import re
from typing import Callable, Optional

from gozleme_finder.core.logger import logs

_FENCE_JSON = re.compile(r"```json\s*", re.IGNORECASE)
_FENCE = re.compile(r"```\s*")
_ARRAY_SPAN = re.compile(r"\[.*\]", re.DOTALL)
_QUOTED = re.compile(r'"([^"]*)"')
_NON_PRINTABLE = re.compile(r"[^\x20-\x7E]")

_PUNCTUATION = str.maketrans({
    "‘": "'",
    "’": "'",
    "“": '"',
    "”": '"',
    "–": "-",
    "—": "-",
})


# ===== Cleanup =====

def strip_code_fences(text: str) -> str:
    return _FENCE.sub("", _FENCE_JSON.sub("", text))


def extract_array_span(text: str) -> Optional[str]:
    """Greedy span from the first '[' to the last ']'."""
    match = _ARRAY_SPAN.search(text)
    return match.group(0) if match else None


def normalise_punctuation(text: str) -> str:
    return text.translate(_PUNCTUATION)


# ===== Parse strategies =====

def parse_strict(text: str) -> Optional[list]:
    try:
        value = json.loads(text)
    except (ValueError, RecursionError):
        # RecursionError: pathologically deep nesting
        return None
    return value if isinstance(value, list) else None


def parse_sanitised(text: str) -> Optional[list]:
    """Strip non-printable-ASCII characters inside quoted strings, then parse."""
    sanitised = _QUOTED.sub(
        lambda m: '"' + _NON_PRINTABLE.sub("", m.group(1)) + '"', text
    )
    return parse_strict(sanitised)


PARSE_STRATEGIES: tuple[Callable[[str], Optional[list]], ...] = (
    parse_strict,
    parse_sanitised,
)


def recover_json_array(text: Optional[str], label: str = "response") -> list:
    if not text:
        return []

    span = extract_array_span(strip_code_fences(text))
    if span is None:
        logs.log(logging.WARNING, f"No JSON array found in {label}")
        return []

    candidate = normalise_punctuation(span)
    for strategy in PARSE_STRATEGIES:
        result = strategy(candidate)
        if result is not None:
            return result

    logs.log(logging.WARNING, f"Could not parse JSON array from {label}", extra={"preview": candidate[:200]})
    return []
