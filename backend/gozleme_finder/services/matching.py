"""
Text matching used when aggregating places and AI-suggested spots.

- Review keyword filter: does any review mention gozleme?
- Name deduplication: has a spot with this (normalised) name been seen?
"""
import re
from typing import Iterable, Optional

# Spellings seen in real reviews. Matching is plain substring containment
# after lowercasing, so any variant not listed here is missed.
GOZLEME_TERMS = ("gozleme", "gözleme", "gozlemé", "gozlemi", "gözlemi")

_NON_ALNUM = re.compile(r"[^a-z0-9]")


# ===== Review keyword filter =====

def mentions_gozleme(text: Optional[str]) -> bool:
    if not text:
        return False
    lower = text.lower()
    return any(term in lower for term in GOZLEME_TERMS)


def find_matching_review(texts: Optional[Iterable[Optional[str]]]) -> Optional[str]:
    """Return the raw text of the first review mentioning gozleme, else None."""
    for text in texts or ():
        if mentions_gozleme(text):
            return text
    return None


def is_relevant(texts: Optional[Iterable[Optional[str]]]) -> bool:
    return find_matching_review(texts) is not None


def review_text(review: dict) -> str:
    """Text of a Places API review, falling back to the untranslated original."""
    for key in ("text", "originalText"):
        block = review.get(key) or {}
        if isinstance(block, dict) and block.get("text"):
            return block["text"]
    return ""


def filter_places_by_review(places: Iterable[dict]) -> list[dict]:
    """
    Keep the places whose reviews mention gozleme.

    Repeated places (same display name and address) are dropped, and each
    kept place gets a ``matchedReview`` field with the first matching review.
    """
    filtered = []
    seen = set()

    for place in places:
        key = f"{(place.get('displayName') or {}).get('text', '')}|{place.get('formattedAddress', '')}"
        if key in seen:
            continue
        seen.add(key)

        matched = find_matching_review(review_text(r) for r in place.get("reviews") or [])
        if matched is None:
            continue

        filtered.append({**place, "matchedReview": matched})

    return filtered


# ===== Name deduplication =====

def normalise_name(name: str) -> str:
    """Lowercase and drop everything outside a-z and 0-9."""
    return _NON_ALNUM.sub("", name.lower())


class NameDeduplicator:
    """
    Running set of normalised spot names.

    A name is a duplicate when its key equals a seen key or either key
    contains the other, so "Cafe X" and "Cafe X Restaurant" collapse into
    whichever came first. Short names can swallow longer, unrelated ones
    ("Cafe" vs "Cafe Rouge") and reordered words are not caught; both are
    accepted trade-offs of substring matching.
    """

    def __init__(self, seen: Iterable[str] = ()):
        self.seen: set[str] = set(seen)

    def __len__(self) -> int:
        return len(self.seen)

    def _matches(self, key: str) -> bool:
        return any(s == key or key in s or s in key for s in self.seen)

    def is_duplicate(self, name: str) -> bool:
        return self._matches(normalise_name(name))

    def add(self, name: str) -> bool:
        """
        Record ``name`` unless it duplicates a seen one.
        Returns True when the name was accepted.
        """
        key = normalise_name(name)
        # An empty key is contained in every key and would reject all later names
        if not key or self._matches(key):
            return False
        self.seen.add(key)
        return True
