"""Line-type schemas: which text lines a theme variant has and their defaults."""

from __future__ import annotations

from dataclasses import dataclass

from themecomposer.core import constants as c
from themecomposer.core.layout import LinePosition, LineStyle, ViewerBackground
from themecomposer.errors import UnknownLineType, UnknownVariant


@dataclass(frozen=True, slots=True)
class LineSpec:
    """One ordinary text line stored in the ``linePositions``/``lineStyles`` maps."""

    line_type: str
    label: str
    position: LinePosition
    style: LineStyle


@dataclass(frozen=True, slots=True)
class ReferenceLineSpec:
    """A reference line persisted under its own named fields."""

    line_type: str
    label: str
    position: LinePosition
    style: LineStyle
    position_field: str
    style_field: str


@dataclass(frozen=True, slots=True)
class LineTypeSchema:
    """Describes one theme variant.

    ``lines`` keeps display order; it is the default ``lineOrder`` before the
    reference lines are appended.
    """

    variant: str
    label: str
    new_theme_name: str
    lines: tuple[LineSpec, ...]
    references: tuple[ReferenceLineSpec, ...] = ()
    default_viewer_background: ViewerBackground = c.DEFAULT_VIEWER_BACKGROUND

    def __post_init__(self) -> None:
        if len(self.references) > 2:
            raise ValueError(f"{self.variant}: at most two reference lines are supported")
        ids = [spec.line_type for spec in self.lines] + [spec.line_type for spec in self.references]
        if len(set(ids)) != len(ids):
            raise ValueError(f"{self.variant}: duplicate line type ids {ids}")

    def required_ordinary_types(self) -> tuple[str, ...]:
        return tuple(spec.line_type for spec in self.lines)

    def reference_types(self) -> frozenset[str]:
        return frozenset(spec.line_type for spec in self.references)

    def ordered_reference_types(self) -> tuple[str, ...]:
        return tuple(spec.line_type for spec in self.references)

    def default_line_order(self) -> list[str]:
        return [*self.required_ordinary_types(), *self.ordered_reference_types()]

    def is_reference(self, line_type: str) -> bool:
        return any(spec.line_type == line_type for spec in self.references)

    def knows(self, line_type: str) -> bool:
        return self._spec(line_type, required=False) is not None

    def label_for(self, line_type: str) -> str:
        return self._spec(line_type).label

    def default_position(self, line_type: str) -> LinePosition:
        return self._spec(line_type).position

    def default_style(self, line_type: str) -> LineStyle:
        return self._spec(line_type).style

    def reference_spec(self, line_type: str) -> ReferenceLineSpec:
        for spec in self.references:
            if spec.line_type == line_type:
                return spec
        raise UnknownLineType(line_type)

    def _spec(self, line_type: str, *, required: bool = True) -> LineSpec | ReferenceLineSpec | None:
        for spec in self.lines:
            if spec.line_type == line_type:
                return spec
        for spec in self.references:
            if spec.line_type == line_type:
                return spec
        if required:
            raise UnknownLineType(line_type)
        return None


def _lines(
    positions: dict[str, LinePosition],
    styles: dict[str, LineStyle],
    labels: dict[str, str],
) -> tuple[LineSpec, ...]:
    return tuple(
        LineSpec(line_type=key, label=labels[key], position=positions[key], style=styles[key])
        for key in positions
    )


TWO_LINE_SCHEMA = LineTypeSchema(
    variant="two-line",
    label="Two-Line Theme",
    new_theme_name="New Theme",
    lines=_lines(
        c.TWO_LINE_POSITIONS,
        c.TWO_LINE_STYLES,
        {"original": "Original", "translation": "Translation"},
    ),
)

BIBLE_SCHEMA = LineTypeSchema(
    variant="bible",
    label="Bible Theme",
    new_theme_name="New Bible Theme",
    lines=_lines(
        c.BIBLE_POSITIONS,
        c.BIBLE_STYLES,
        {"hebrew": "Hebrew", "english": "English"},
    ),
    references=(
        ReferenceLineSpec(
            line_type="reference",
            label="Reference (Hebrew)",
            position=c.BIBLE_REFERENCE_POSITION,
            style=c.BIBLE_REFERENCE_STYLE,
            position_field="referencePosition",
            style_field="referenceStyle",
        ),
        ReferenceLineSpec(
            line_type="referenceEnglish",
            label="Reference (English)",
            position=c.BIBLE_REFERENCE_ENGLISH_POSITION,
            style=c.BIBLE_REFERENCE_ENGLISH_STYLE,
            position_field="referenceEnglishPosition",
            style_field="referenceEnglishStyle",
        ),
    ),
)

SONG_SCHEMA = LineTypeSchema(
    variant="songs",
    label="Song Theme",
    new_theme_name="New Theme",
    lines=_lines(
        c.SONG_POSITIONS,
        c.SONG_STYLES,
        {"original": "Original", "transliteration": "Transliteration", "translation": "Translation"},
    ),
)

OBS_SONG_SCHEMA = LineTypeSchema(
    variant="obs-songs",
    label="OBS Song Overlay",
    new_theme_name="New OBS Theme",
    lines=_lines(
        c.OBS_SONG_POSITIONS,
        c.OBS_SONG_STYLES,
        {"original": "Original", "transliteration": "Transliteration", "translation": "Translation"},
    ),
    default_viewer_background=c.TRANSPARENT_VIEWER_BACKGROUND,
)

DUAL_TRANSLATION_SCHEMA = LineTypeSchema(
    variant="dual-translation",
    label="Dual Translation Theme",
    new_theme_name="New Dual Translation Theme",
    lines=_lines(
        c.DUAL_TRANSLATION_POSITIONS,
        c.DUAL_TRANSLATION_STYLES,
        {
            "original": "Original",
            "transliteration": "Transliteration",
            "translation": "Translation A",
            "translationB": "Translation B",
        },
    ),
)

PRAYER_SCHEMA = LineTypeSchema(
    variant="prayer",
    label="Prayer Theme",
    new_theme_name="New Prayer Theme",
    lines=_lines(
        c.PRAYER_POSITIONS,
        c.PRAYER_STYLES,
        {
            "title": "Title",
            "titleTranslation": "Title Translation",
            "subtitle": "Subtitle",
            "subtitleTranslation": "Subtitle Translation",
            "description": "Description",
            "descriptionTranslation": "Description Translation",
        },
    ),
    references=(
        ReferenceLineSpec(
            line_type="reference",
            label="Reference",
            position=c.PRAYER_REFERENCE_POSITION,
            style=c.PRAYER_REFERENCE_STYLE,
            position_field="referencePosition",
            style_field="referenceStyle",
        ),
        ReferenceLineSpec(
            line_type="referenceTranslation",
            label="Reference Translation",
            position=c.PRAYER_REFERENCE_TRANSLATION_POSITION,
            style=c.PRAYER_REFERENCE_TRANSLATION_STYLE,
            position_field="referenceTranslationPosition",
            style_field="referenceTranslationStyle",
        ),
    ),
    default_viewer_background=c.TRANSPARENT_VIEWER_BACKGROUND,
)

_SCHEMAS: dict[str, LineTypeSchema] = {
    schema.variant: schema
    for schema in (
        TWO_LINE_SCHEMA,
        BIBLE_SCHEMA,
        SONG_SCHEMA,
        OBS_SONG_SCHEMA,
        DUAL_TRANSLATION_SCHEMA,
        PRAYER_SCHEMA,
    )
}


def get_schema(variant: str) -> LineTypeSchema:
    try:
        return _SCHEMAS[variant]
    except KeyError:
        raise UnknownVariant(variant) from None


def available_schemas() -> list[LineTypeSchema]:
    return list(_SCHEMAS.values())
