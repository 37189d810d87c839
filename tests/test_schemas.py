"""Tests for themecomposer.core.schemas."""

import pytest

from themecomposer.core.schemas import (
    BIBLE_SCHEMA,
    DUAL_TRANSLATION_SCHEMA,
    OBS_SONG_SCHEMA,
    PRAYER_SCHEMA,
    SONG_SCHEMA,
    TWO_LINE_SCHEMA,
    available_schemas,
    get_schema,
)
from themecomposer.errors import UnknownLineType, UnknownVariant


def test_two_line_schema_has_no_references() -> None:
    """Test the two-line schema has two ordinary lines and no references."""
    assert TWO_LINE_SCHEMA.required_ordinary_types() == ("original", "translation")
    assert TWO_LINE_SCHEMA.reference_types() == frozenset()


def test_song_schema_has_three_lines() -> None:
    """Test the song schema order."""
    assert SONG_SCHEMA.required_ordinary_types() == ("original", "transliteration", "translation")
    assert SONG_SCHEMA.default_line_order() == ["original", "transliteration", "translation"]


def test_bible_schema_reference_lines() -> None:
    """Test Bible references follow the ordinary lines and name their fields."""
    assert BIBLE_SCHEMA.required_ordinary_types() == ("hebrew", "english")
    assert BIBLE_SCHEMA.reference_types() == frozenset({"reference", "referenceEnglish"})
    assert BIBLE_SCHEMA.default_line_order() == ["hebrew", "english", "reference", "referenceEnglish"]
    assert BIBLE_SCHEMA.reference_spec("referenceEnglish").position_field == "referenceEnglishPosition"


def test_bible_reference_geometry_is_distinct() -> None:
    """Test the two Bible references sit on opposite sides near the bottom."""
    hebrew_ref = BIBLE_SCHEMA.default_position("reference")
    english_ref = BIBLE_SCHEMA.default_position("referenceEnglish")
    assert hebrew_ref.align_h == "left"
    assert english_ref.align_h == "right"
    assert english_ref.x > hebrew_ref.x
    assert hebrew_ref.y > 50 and english_ref.y > 50


def test_prayer_schema_lines_and_references() -> None:
    """Test the prayer schema has six lines then two reference lines."""
    assert PRAYER_SCHEMA.required_ordinary_types() == (
        "title",
        "titleTranslation",
        "subtitle",
        "subtitleTranslation",
        "description",
        "descriptionTranslation",
    )
    assert PRAYER_SCHEMA.reference_types() == frozenset({"reference", "referenceTranslation"})
    assert PRAYER_SCHEMA.default_line_order()[-2:] == ["reference", "referenceTranslation"]
    spec = PRAYER_SCHEMA.reference_spec("referenceTranslation")
    assert spec.position_field == "referenceTranslationPosition"
    assert spec.style_field == "referenceTranslationStyle"


def test_prayer_schema_defaults() -> None:
    """Test prayer defaults for titles and reference lines."""
    title = PRAYER_SCHEMA.default_position("title")
    assert title.y == 3
    assert title.align_h == "right"
    assert PRAYER_SCHEMA.default_style("title").color == "#FF8C42"
    assert PRAYER_SCHEMA.default_position("reference").y == 31.78
    translation_ref = PRAYER_SCHEMA.default_position("referenceTranslation")
    assert translation_ref.y == 70.32
    assert translation_ref.align_h == "left"
    assert PRAYER_SCHEMA.default_style("referenceTranslation").opacity == 0.7
    assert PRAYER_SCHEMA.default_viewer_background.type == "transparent"


def test_dual_translation_schema() -> None:
    """Test the dual translation schema adds a second translation line."""
    schema = get_schema("dual-translation")
    assert schema is DUAL_TRANSLATION_SCHEMA
    assert schema.default_line_order() == ["original", "transliteration", "translation", "translationB"]
    assert schema.reference_types() == frozenset()
    assert schema.label_for("translationB") == "Translation B"
    assert schema.default_style("original").font_size == 195


def test_defaults_are_total_over_own_ids() -> None:
    """Test every schema has a visible default for each of its line types."""
    for schema in available_schemas():
        for line_type in schema.default_line_order():
            assert schema.default_position(line_type) is not None
            assert schema.default_style(line_type).visible is True


def test_unknown_line_type_raises() -> None:
    """Test default lookup outside the schema raises."""
    with pytest.raises(UnknownLineType):
        SONG_SCHEMA.default_position("hebrew")
    with pytest.raises(UnknownLineType):
        TWO_LINE_SCHEMA.default_style("reference")


def test_get_schema_by_variant() -> None:
    """Test schemas are looked up by variant name."""
    assert get_schema("bible") is BIBLE_SCHEMA
    assert get_schema("prayer") is PRAYER_SCHEMA
    assert get_schema("obs-songs").default_viewer_background.type == "transparent"
    assert OBS_SONG_SCHEMA in available_schemas()
    assert len(available_schemas()) == 6
    with pytest.raises(UnknownVariant):
        get_schema("karaoke")
