import json

from gozleme_finder.services.response_parser import (
    PARSE_STRATEGIES,
    extract_array_span,
    normalise_punctuation,
    parse_sanitised,
    parse_strict,
    recover_json_array,
    strip_code_fences,
)

SPOTS = [
    {"name": "Anatolia Kitchen", "area": "Dalston", "tags": ["turkish", "brunch"]},
    {"name": "Mangal Market Stall", "area": "Walthamstow", "description": "Hand-rolled flatbreads"},
]


def test_clean_array_parses():
    assert recover_json_array(json.dumps(SPOTS)) == SPOTS


def test_fenced_smart_quoted_payload_matches_clean_payload():
    clean = json.dumps(SPOTS)
    messy = (
        "Here you go:\n```json\n"
        + clean.replace('"', "“", 1).replace('"', "”", 1)
        + "\n```\nEnjoy!"
    )
    assert recover_json_array(messy) == recover_json_array(clean)


def test_smart_dashes_and_single_quotes_are_normalised():
    text = '[{"name": "Ali’s – Gozleme — Bar"}]'
    assert recover_json_array(text) == [{"name": "Ali's - Gozleme - Bar"}]


def test_non_printable_characters_inside_strings_are_stripped():
    text = '[{"name": "Cafe\x07 Rouge", "area": "Soho"}]'
    assert parse_strict(text) is None
    assert recover_json_array(text) == [{"name": "Cafe Rouge", "area": "Soho"}]


def test_greedy_span_from_first_to_last_bracket():
    text = 'Options [see below]: [{"name": "A"}] done'
    assert extract_array_span(text) == '[see below]: [{"name": "A"}]'
    # Greedy span is not valid JSON, so the reply yields nothing
    assert recover_json_array(text) == []


def test_no_array_yields_empty_result():
    assert recover_json_array("Sorry, I don't know any places there.") == []
    assert recover_json_array("") == []
    assert recover_json_array(None) == []


def test_unrecoverable_json_yields_empty_result():
    assert recover_json_array('[{"name": "Broken", }') == []
    assert recover_json_array('[{"name": "Broken" "area": "x"}]') == []


def test_non_array_json_counts_as_failure():
    assert parse_strict('{"name": "A"}') is None


def test_strip_code_fences():
    assert strip_code_fences("```JSON\n[1]\n```") == "[1]\n"


def test_normalise_punctuation():
    assert normalise_punctuation("‘a’ “b” – —") == "'a' \"b\" - -"


def test_strategies_are_tried_in_order():
    assert PARSE_STRATEGIES == (parse_strict, parse_sanitised)


def test_deeply_nested_reply_yields_empty_result():
    text = "[" * 100000 + "]" * 100000

    assert parse_strict(text) is None
    assert recover_json_array(text) == []
