import pytest

from gozleme_finder.services.matching import (
    GOZLEME_TERMS,
    NameDeduplicator,
    filter_places_by_review,
    find_matching_review,
    is_relevant,
    mentions_gozleme,
    normalise_name,
    review_text,
)


# ── Review keyword filter ────────────────────────────────────────────────


@pytest.mark.parametrize("term", GOZLEME_TERMS)
def test_every_variant_matches_in_any_case(term):
    review = f"Loved the {term.upper()} with spinach"
    assert is_relevant(["Great coffee", review])
    assert find_matching_review(["Great coffee", review]) == review


def test_first_matching_review_is_surfaced():
    reviews = ["Nice tea", "The gozleme was fresh", "Best Gözleme in Hackney"]
    assert find_matching_review(reviews) == "The gozleme was fresh"


def test_no_variant_means_not_relevant():
    assert not is_relevant(["Great kebab", "Lovely pide and lahmacun"])
    assert find_matching_review(["Great kebab"]) is None


def test_empty_or_absent_reviews():
    assert not is_relevant([])
    assert not is_relevant(None)
    assert not is_relevant([None, ""])
    assert not mentions_gozleme(None)


def test_unlisted_spelling_is_missed():
    # "gözlême" is not one of the enumerated variants
    assert not mentions_gozleme("amazing gözlême")


def test_review_text_falls_back_to_original_text():
    assert review_text({"text": {"text": "translated"}, "originalText": {"text": "orig"}}) == "translated"
    assert review_text({"originalText": {"text": "gözleme harika"}}) == "gözleme harika"
    assert review_text({}) == ""


def _place(name, address, *reviews):
    return {
        "displayName": {"text": name},
        "formattedAddress": address,
        "reviews": [{"text": {"text": r}} for r in reviews],
    }


def test_filter_places_by_review_keeps_matches_with_evidence():
    places = [
        _place("Sultan Kitchen", "1 Mare St", "okay food", "their gozleme is superb"),
        _place("Pizza Place", "2 Mare St", "good pizza"),
        _place("No Reviews", "3 Mare St"),
    ]

    result = filter_places_by_review(places)

    assert [p["displayName"]["text"] for p in result] == ["Sultan Kitchen"]
    assert result[0]["matchedReview"] == "their gozleme is superb"
    assert result[0]["formattedAddress"] == "1 Mare St"


def test_filter_places_by_review_skips_repeated_places():
    place = _place("Sultan Kitchen", "1 Mare St", "gozleme!")
    assert len(filter_places_by_review([place, dict(place)])) == 1


# ── Name deduplication ───────────────────────────────────────────────────


def test_normalise_name():
    assert normalise_name("Cafe Istanbul") == "cafeistanbul"
    assert normalise_name("cafe-istanbul!!") == "cafeistanbul"
    assert normalise_name("Gözleme Hut") == "gzlemehut"


def test_punctuation_variants_are_duplicates():
    names = NameDeduplicator()
    assert names.add("Cafe Istanbul")
    assert not names.add("cafe-istanbul!!")
    assert len(names) == 1


@pytest.mark.parametrize("first, second", [
    ("Cafe X", "Cafe X Restaurant"),
    ("Cafe X Restaurant", "Cafe X"),
])
def test_substring_pairs_keep_first_seen(first, second):
    names = NameDeduplicator()
    assert names.add(first)
    assert not names.add(second)
    assert names.seen == {normalise_name(first)}


def test_short_names_swallow_longer_ones():
    names = NameDeduplicator()
    assert names.add("Cafe")
    assert names.is_duplicate("Cafe Rouge")
    assert not names.add("Cafe Rouge")


def test_reordered_words_are_not_duplicates():
    names = NameDeduplicator()
    assert names.add("Istanbul Cafe")
    assert names.add("Cafe Istanbul")


def test_empty_key_is_rejected_without_blocking_later_names():
    names = NameDeduplicator()
    assert not names.add("!!!")
    assert not names.add("Öğü")
    assert names.add("Anatolia Kitchen")
    assert names.add("Bosphorus Grill")
