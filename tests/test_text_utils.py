import pytest

from recipe_ingest.const import DEFAULT_TRUNCATION_MARKER
from recipe_ingest.text_utils import preprocess_raw_recipe_text, strip_markdown_fences, truncate_text_by_lines


def test_text_within_bound_is_unchanged():
    text = "a\nb\nc"
    assert truncate_text_by_lines(text, 5) is text


def test_trailing_blank_lines_are_kept():
    assert truncate_text_by_lines("a\nb\n", 3) == "a\nb\n"


def test_truncation_appends_marker():
    assert truncate_text_by_lines("a\nb\nc", 2) == f"a\nb\n\n{DEFAULT_TRUNCATION_MARKER}"


def test_custom_marker():
    assert truncate_text_by_lines("a\nb\nc", 1, marker="[cut]") == "a\n\n[cut]"


def test_zero_lines_returns_only_marker():
    assert truncate_text_by_lines("a\nb", 0) == f"\n\n{DEFAULT_TRUNCATION_MARKER}"


@pytest.mark.parametrize("text", [None, ""])
def test_missing_text_gives_empty_string(text):
    assert truncate_text_by_lines(text, 3) == ""


def test_preprocess_raw_recipe_text():
    raw = "  Pancakes\r\n2 eggs\r\n\r\n\r\n\r\nMix well.\rServe.  "
    assert preprocess_raw_recipe_text(raw) == "Pancakes\n2 eggs\n\nMix well.\nServe."


@pytest.mark.parametrize(
    "text, expected",
    [
        ('```json\n{"a": 1}\n```', '{"a": 1}'),
        ("```\n[]\n```", "[]"),
        ('{"a": 1}', '{"a": 1}'),
        ("```json\n{}", "```json\n{}"),
    ],
)
def test_strip_markdown_fences(text, expected):
    assert strip_markdown_fences(text) == expected
