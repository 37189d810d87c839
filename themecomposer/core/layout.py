"""Layout primitives for percentage-based theme canvases.

Every value type parses from the persisted (camelCase) mapping shape with
``from_mapping(raw, default)``: each field present and well-formed in
``raw`` wins, anything else falls back to the same field of ``default``.
``to_dict()`` produces the persisted shape again.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Literal, Mapping

AlignH = Literal["left", "center", "right"]
AlignV = Literal["top", "center", "bottom"]
BackgroundType = Literal["color", "transparent"]

ALIGN_H_VALUES: frozenset[str] = frozenset({"left", "center", "right"})
ALIGN_V_VALUES: frozenset[str] = frozenset({"top", "center", "bottom"})
BACKGROUND_TYPES: frozenset[str] = frozenset({"color", "transparent"})


def _number(value: Any, fallback: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return fallback
    if value != value:  # NaN
        return fallback
    return value


def _positive(value: Any, fallback: float) -> float:
    number = _number(value, fallback)
    return number if number > 0 else fallback


def _non_negative(value: Any, fallback: float) -> float:
    number = _number(value, fallback)
    return number if number >= 0 else fallback


def _unit(value: Any, fallback: float) -> float:
    number = _number(value, fallback)
    return min(1.0, max(0.0, number))


def _text(value: Any, fallback: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return fallback


def _choice(value: Any, allowed: frozenset[str], fallback: str) -> str:
    if isinstance(value, str) and value in allowed:
        return value
    return fallback


@dataclass(frozen=True, slots=True)
class CanvasDimensions:
    """Reference resolution that percentage coordinates are relative to."""

    width: int = 1920
    height: int = 1080

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    @classmethod
    def from_mapping(cls, raw: Any, default: CanvasDimensions) -> CanvasDimensions:
        """Return ``raw`` when it is a valid width/height pair, else ``default``."""
        if not isinstance(raw, Mapping):
            return default
        width = raw.get("width")
        height = raw.get("height")
        if not (_is_pixel_count(width) and _is_pixel_count(height)):
            return default
        return cls(width=int(width), height=int(height))

    def to_dict(self) -> dict[str, int]:
        return {"width": self.width, "height": self.height}


def _is_pixel_count(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return value > 0 and float(value).is_integer()


@dataclass(frozen=True, slots=True)
class ViewerBackground:
    """Canvas fill behind all content; color only applies to ``type == "color"``."""

    type: BackgroundType = "color"
    color: str | None = "#000000"

    @classmethod
    def from_mapping(cls, raw: Any, default: ViewerBackground) -> ViewerBackground:
        if not isinstance(raw, Mapping):
            return default
        kind = raw.get("type")
        if kind == "transparent":
            return cls(type="transparent", color=None)
        if kind == "color" and isinstance(raw.get("color"), str) and raw["color"].strip():
            return cls(type="color", color=raw["color"].strip())
        return default

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "color": self.color if self.type == "color" else None}


@dataclass(frozen=True, slots=True)
class LinePosition:
    """Box of one text line, in percent of the canvas.

    ``x + width`` and ``y + height`` may exceed 100; placement outside the
    canvas is left to the operator.
    """

    x: float = 0
    y: float = 0
    width: float = 100
    height: float = 10
    padding_top: float = 0
    padding_bottom: float = 0
    align_h: AlignH = "center"
    align_v: AlignV = "center"

    @classmethod
    def from_mapping(cls, raw: Any, default: LinePosition) -> LinePosition:
        if not isinstance(raw, Mapping):
            return default
        return cls(
            x=_number(raw.get("x"), default.x),
            y=_number(raw.get("y"), default.y),
            width=_non_negative(raw.get("width"), default.width),
            height=_non_negative(raw.get("height"), default.height),
            padding_top=_non_negative(raw.get("paddingTop"), default.padding_top),
            padding_bottom=_non_negative(raw.get("paddingBottom"), default.padding_bottom),
            align_h=_choice(raw.get("alignH"), ALIGN_H_VALUES, default.align_h),
            align_v=_choice(raw.get("alignV"), ALIGN_V_VALUES, default.align_v),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "paddingTop": self.padding_top,
            "paddingBottom": self.padding_bottom,
            "alignH": self.align_h,
            "alignV": self.align_v,
        }

    def moved_to(self, x: float, y: float) -> LinePosition:
        return replace(self, x=x, y=y)


@dataclass(frozen=True, slots=True)
class LineStyle:
    """Typography of one text line."""

    font_size: float = 100
    font_weight: str = "400"
    color: str = "#ffffff"
    opacity: float = 1.0
    visible: bool = True

    @classmethod
    def from_mapping(cls, raw: Any, default: LineStyle) -> LineStyle:
        if not isinstance(raw, Mapping):
            return default
        weight = raw.get("fontWeight")
        if isinstance(weight, int) and not isinstance(weight, bool):
            weight = str(weight)
        visible = raw.get("visible")
        return cls(
            font_size=_positive(raw.get("fontSize"), default.font_size),
            font_weight=_text(weight, default.font_weight),
            color=_text(raw.get("color"), default.color),
            opacity=_unit(raw.get("opacity"), default.opacity),
            visible=visible if isinstance(visible, bool) else default.visible,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "fontSize": self.font_size,
            "fontWeight": self.font_weight,
            "color": self.color,
            "opacity": self.opacity,
            "visible": self.visible,
        }

    def with_visibility(self, visible: bool) -> LineStyle:
        return replace(self, visible=visible)


@dataclass(frozen=True, slots=True)
class BackgroundBox:
    """Decorative rectangle drawn behind the text lines."""

    id: str
    x: float = 10
    y: float = 10
    width: float = 30
    height: float = 30
    color: str = "#1a1a2e"
    opacity: float = 0.8
    border_radius: float = 8

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any], fallback_id: str) -> BackgroundBox:
        default = cls(id=fallback_id)
        return cls(
            id=_text(raw.get("id"), fallback_id),
            x=_number(raw.get("x"), default.x),
            y=_number(raw.get("y"), default.y),
            width=_non_negative(raw.get("width"), default.width),
            height=_non_negative(raw.get("height"), default.height),
            color=_text(raw.get("color"), default.color),
            opacity=_unit(raw.get("opacity"), default.opacity),
            border_radius=_non_negative(raw.get("borderRadius"), default.border_radius),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "color": self.color,
            "opacity": self.opacity,
            "borderRadius": self.border_radius,
        }


@dataclass(frozen=True, slots=True)
class ResolutionPreset:
    label: str
    width: int
    height: int
    description: str

    @property
    def dimensions(self) -> CanvasDimensions:
        return CanvasDimensions(self.width, self.height)


RESOLUTION_PRESETS: tuple[ResolutionPreset, ...] = (
    ResolutionPreset("1080p", 1920, 1080, "Full HD (16:9)"),
    ResolutionPreset("720p", 1280, 720, "HD (16:9)"),
    ResolutionPreset("4K", 3840, 2160, "Ultra HD (16:9)"),
    ResolutionPreset("1080p Vertical", 1080, 1920, "Full HD Portrait (9:16)"),
    ResolutionPreset("4:3", 1440, 1080, "Standard (4:3)"),
    ResolutionPreset("Square", 1080, 1080, "Square (1:1)"),
)


def match_preset(dimensions: CanvasDimensions) -> str | None:
    """Return the label of the preset with exactly these dimensions."""
    for preset in RESOLUTION_PRESETS:
        if preset.width == dimensions.width and preset.height == dimensions.height:
            return preset.label
    return None
