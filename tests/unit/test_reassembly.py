import json

import pytest

from scorecard_parser.errors import ResponseParseError
from scorecard_parser.reassembly import dump_result, parse_response_text, reassemble, strip_code_fence


CARD_A = {"course": {"name": "Blue Lagoon", "holes": [2] * 18}, "players": {"Ann": [3] * 18}}
CARD_B = {"course": {"name": "Cherry Blossom", "holes": [3] * 18}, "players": {"Bo": [2] * 18}}


def test_reply_keys_mapped_to_labels_in_input_order():
    parsed = parse_response_text(json.dumps({"image1": CARD_A, "image2": CARD_B}))
    out = reassemble(parsed, ["a", "b"])
    assert list(out) == ["a", "b"]
    assert out["a"] == CARD_A
    assert out["b"] == CARD_B


def test_arbitrary_keys_are_mapped_by_position():
    parsed = parse_response_text(json.dumps({"first": CARD_A, "second": CARD_B}))
    out = reassemble(parsed, ["a", "b"])
    assert out == {"a": CARD_A, "b": CARD_B}


def test_image_keys_out_of_order_are_mapped_by_number():
    parsed = parse_response_text(json.dumps({"image2": CARD_B, "image1": CARD_A}))
    out = reassemble(parsed, ["a", "b"])
    assert out["a"] == CARD_A
    assert out["b"] == CARD_B
    assert list(out) == ["a", "b"]


def test_key_count_mismatch_is_an_error():
    with pytest.raises(ResponseParseError):
        reassemble({"image1": CARD_A}, ["a", "b"])
    with pytest.raises(ResponseParseError):
        reassemble({"image1": CARD_A, "image2": CARD_B}, ["a"])


def test_markdown_fence_is_stripped():
    text = "```json\n" + json.dumps(CARD_A) + "\n```"
    assert parse_response_text(text) == CARD_A
    assert strip_code_fence("  {}  ") == "{}"


@pytest.mark.parametrize("text", ["", "   ", "Sorry, I cannot read this card.", "{\"course\": "])
def test_unparseable_reply(text):
    with pytest.raises(ResponseParseError):
        parse_response_text(text)


def test_top_level_must_be_an_object():
    with pytest.raises(ResponseParseError):
        parse_response_text("[1, 2, 3]")


def test_pretty_and_compact_output_hold_the_same_document():
    doc = {"a": CARD_A, "b": CARD_B}
    compact = dump_result(doc)
    pretty = dump_result(doc, pretty=True)
    assert "\n" not in compact
    assert "\n  " in pretty
    assert json.loads(compact) == json.loads(pretty) == doc


def test_non_ascii_player_names_are_kept():
    out = dump_result({"players": {"Zoë": [1]}})
    assert "Zoë" in out
