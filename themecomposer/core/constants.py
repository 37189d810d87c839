"""Theme engine constants and shipped layout defaults."""

from __future__ import annotations

from themecomposer.core.layout import CanvasDimensions, LinePosition, LineStyle, ViewerBackground

MAX_BACKGROUND_BOXES = 3
DEFAULT_THEME_NAME = "Untitled Theme"
DEFAULT_SAVED_DISPLAY_MS = 2000

DEFAULT_CANVAS_DIMENSIONS = CanvasDimensions(width=1920, height=1080)
DEFAULT_VIEWER_BACKGROUND = ViewerBackground(type="color", color="#000000")
TRANSPARENT_VIEWER_BACKGROUND = ViewerBackground(type="transparent", color=None)

# -- two-line --

TWO_LINE_POSITIONS: dict[str, LinePosition] = {
    "original": LinePosition(
        x=0, y=32, width=100, height=16,
        padding_top=2, padding_bottom=2, align_h="center", align_v="center",
    ),
    "translation": LinePosition(
        x=0, y=50, width=100, height=16,
        padding_top=1, padding_bottom=1, align_h="center", align_v="top",
    ),
}

TWO_LINE_STYLES: dict[str, LineStyle] = {
    "original": LineStyle(font_size=180, font_weight="700", color="#ffffff", opacity=1),
    "translation": LineStyle(font_size=140, font_weight="400", color="#cfcfcf", opacity=0.85),
}

# -- bible --

BIBLE_POSITIONS: dict[str, LinePosition] = {
    "hebrew": LinePosition(
        x=2, y=2, width=96, height=45,
        padding_top=0, padding_bottom=0, align_h="right", align_v="top",
    ),
    "english": LinePosition(
        x=2, y=50, width=96, height=40,
        padding_top=0, padding_bottom=0, align_h="left", align_v="top",
    ),
}

BIBLE_STYLES: dict[str, LineStyle] = {
    "hebrew": LineStyle(font_size=83, font_weight="400", color="#ffffff", opacity=1),
    "english": LineStyle(font_size=78, font_weight="200", color="#ffffff", opacity=1),
}

BIBLE_REFERENCE_POSITION = LinePosition(
    x=2, y=92, width=48, height=5,
    padding_top=0, padding_bottom=0, align_h="left", align_v="center",
)
BIBLE_REFERENCE_STYLE = LineStyle(font_size=50, font_weight="400", color="#a0a0a0", opacity=1)

BIBLE_REFERENCE_ENGLISH_POSITION = LinePosition(
    x=50, y=92, width=48, height=5,
    padding_top=0, padding_bottom=0, align_h="right", align_v="center",
)
BIBLE_REFERENCE_ENGLISH_STYLE = LineStyle(font_size=50, font_weight="400", color="#a0a0a0", opacity=1)

# -- songs --

SONG_POSITIONS: dict[str, LinePosition] = {
    "original": LinePosition(
        x=0, y=27.897104546981193, width=100, height=11.379800853485063,
        padding_top=2, padding_bottom=2, align_h="center", align_v="center",
    ),
    "transliteration": LinePosition(
        x=0, y=38.96539940433855, width=100, height=12.138454243717401,
        padding_top=1, padding_bottom=1, align_h="center", align_v="center",
    ),
    "translation": LinePosition(
        x=0, y=50.838474679449185, width=100, height=27.311522048364157,
        padding_top=1, padding_bottom=1, align_h="center", align_v="top",
    ),
}

SONG_STYLES: dict[str, LineStyle] = {
    "original": LineStyle(font_size=187, font_weight="700", color="#ffffff", opacity=1),
    "transliteration": LineStyle(font_size=136, font_weight="400", color="#e0e0e0", opacity=0.9),
    "translation": LineStyle(font_size=146, font_weight="400", color="#b0b0b0", opacity=0.85),
}

# -- obs songs (streaming browser source) --

OBS_SONG_POSITIONS: dict[str, LinePosition] = {
    "original": LinePosition(
        x=0, y=70, width=100, height=10,
        padding_top=1, padding_bottom=1, align_h="center", align_v="center",
    ),
    "transliteration": LinePosition(
        x=0, y=80, width=100, height=8,
        padding_top=1, padding_bottom=1, align_h="center", align_v="center",
    ),
    "translation": LinePosition(
        x=0, y=88, width=100, height=10,
        padding_top=1, padding_bottom=1, align_h="center", align_v="center",
    ),
}

OBS_SONG_STYLES: dict[str, LineStyle] = {
    "original": LineStyle(font_size=120, font_weight="700", color="#ffffff", opacity=1),
    "transliteration": LineStyle(font_size=90, font_weight="400", color="#e0e0e0", opacity=0.9),
    "translation": LineStyle(font_size=100, font_weight="400", color="#b0b0b0", opacity=0.85),
}

# -- prayer (hebrew right, translation left) --

PRAYER_POSITIONS: dict[str, LinePosition] = {
    "title": LinePosition(
        x=0, y=3, width=100, height=8,
        padding_top=1, padding_bottom=1, align_h="right", align_v="center",
    ),
    "titleTranslation": LinePosition(
        x=0, y=40.97, width=100, height=8.85,
        padding_top=0, padding_bottom=1, align_h="left", align_v="center",
    ),
    "subtitle": LinePosition(
        x=0, y=11.15, width=100, height=10.87,
        padding_top=2, padding_bottom=2, align_h="right", align_v="top",
    ),
    "subtitleTranslation": LinePosition(
        x=0, y=50.90, width=100, height=9.61,
        padding_top=1, padding_bottom=1, align_h="left", align_v="top",
    ),
    "description": LinePosition(
        x=0, y=21.65, width=100, height=10.12,
        padding_top=1, padding_bottom=1, align_h="right", align_v="top",
    ),
    "descriptionTranslation": LinePosition(
        x=0, y=60.18, width=100, height=10,
        padding_top=1, padding_bottom=1, align_h="left", align_v="center",
    ),
}

PRAYER_STYLES: dict[str, LineStyle] = {
    "title": LineStyle(font_size=130, font_weight="700", color="#FF8C42", opacity=1),
    "titleTranslation": LineStyle(font_size=129, font_weight="700", color="#FF8C42", opacity=0.9),
    "subtitle": LineStyle(font_size=94, font_weight="700", color="#ffffff", opacity=1),
    "subtitleTranslation": LineStyle(font_size=94, font_weight="700", color="#e0e0e0", opacity=0.9),
    "description": LineStyle(font_size=90, font_weight="400", color="#e0e0e0", opacity=0.9),
    "descriptionTranslation": LineStyle(font_size=90, font_weight="400", color="#b0b0b0", opacity=0.85),
}

PRAYER_REFERENCE_POSITION = LinePosition(
    x=0, y=31.78, width=100, height=5.11,
    padding_top=0, padding_bottom=0, align_h="right", align_v="center",
)
PRAYER_REFERENCE_STYLE = LineStyle(font_size=56, font_weight="500", color="#ffffff", opacity=0.8)

PRAYER_REFERENCE_TRANSLATION_POSITION = LinePosition(
    x=0, y=70.32, width=100, height=8,
    padding_top=0, padding_bottom=0, align_h="left", align_v="center",
)
PRAYER_REFERENCE_TRANSLATION_STYLE = LineStyle(font_size=60, font_weight="400", color="#ffffff", opacity=0.7)

# -- dual translation (song with a second translation) --

DUAL_TRANSLATION_POSITIONS: dict[str, LinePosition] = {
    "original": LinePosition(
        x=0, y=20, width=100, height=14,
        padding_top=2, padding_bottom=2, align_h="center", align_v="center",
    ),
    "transliteration": LinePosition(
        x=0, y=34, width=100, height=12,
        padding_top=1, padding_bottom=1, align_h="center", align_v="center",
    ),
    "translation": LinePosition(
        x=0, y=46, width=100, height=14,
        padding_top=1, padding_bottom=1, align_h="center", align_v="top",
    ),
    "translationB": LinePosition(
        x=0, y=60, width=100, height=14,
        padding_top=1, padding_bottom=1, align_h="center", align_v="top",
    ),
}

DUAL_TRANSLATION_STYLES: dict[str, LineStyle] = {
    "original": LineStyle(font_size=195, font_weight="700", color="#ffffff", opacity=1),
    "transliteration": LineStyle(font_size=150, font_weight="400", color="#ffffff", opacity=0.9),
    "translation": LineStyle(font_size=160, font_weight="400", color="#cfcfcf", opacity=0.85),
    "translationB": LineStyle(font_size=160, font_weight="400", color="#a0c8e0", opacity=0.85),
}
