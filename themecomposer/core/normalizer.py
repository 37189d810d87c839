"""Conversion between persisted theme records and canonical themes."""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from typing import Any, Mapping

from themecomposer.core.constants import DEFAULT_CANVAS_DIMENSIONS, DEFAULT_THEME_NAME
from themecomposer.core.layout import (
    BackgroundBox,
    CanvasDimensions,
    LinePosition,
    LineStyle,
    ViewerBackground,
)
from themecomposer.core.schemas import LineTypeSchema
from themecomposer.core.theme import Theme

logger = logging.getLogger(__name__)

# Fields stored as JSON text by older SQLite-backed stores.
_JSON_FIELDS = (
    "viewerBackground",
    "canvasDimensions",
    "lineOrder",
    "linePositions",
    "lineStyles",
    "backgroundBoxes",
)


def new_theme(schema: LineTypeSchema) -> Theme:
    """Build an unsaved theme populated with the schema defaults."""
    theme = normalize(schema, {})
    theme.name = schema.new_theme_name
    return theme


def normalize(schema: LineTypeSchema, raw: Mapping[str, Any] | None) -> Theme:
    """Return a fully populated theme for ``schema`` from a persisted record.

    Never raises: malformed or missing fields fall back to defaults so the
    editor can always open.
    """
    if not isinstance(raw, Mapping):
        if raw is not None:
            logger.warning("ignoring non-mapping %s theme record: %r", schema.variant, type(raw))
        raw = {}
    data = _decode_json_fields(raw, schema)

    reference_positions: dict[str, LinePosition] = {}
    reference_styles: dict[str, LineStyle] = {}
    for spec in schema.references:
        reference_positions[spec.line_type] = LinePosition.from_mapping(
            data.get(spec.position_field), spec.position
        )
        reference_styles[spec.line_type] = LineStyle.from_mapping(
            data.get(spec.style_field), spec.style
        )

    return Theme(
        variant=schema.variant,
        id=_str_or_default(data.get("id"), ""),
        name=_str_or_default(data.get("name"), DEFAULT_THEME_NAME),
        is_built_in=_flag(data.get("isBuiltIn")),
        viewer_background=ViewerBackground.from_mapping(
            data.get("viewerBackground"), schema.default_viewer_background
        ),
        canvas_dimensions=CanvasDimensions.from_mapping(
            data.get("canvasDimensions"), DEFAULT_CANVAS_DIMENSIONS
        ),
        line_order=_line_order(data.get("lineOrder"), schema),
        line_positions=_merged_map(data.get("linePositions"), schema, LinePosition, position=True),
        line_styles=_merged_map(data.get("lineStyles"), schema, LineStyle, position=False),
        reference_positions=reference_positions,
        reference_styles=reference_styles,
        background_boxes=_boxes(data.get("backgroundBoxes")),
    )


def serialize(theme: Theme, schema: LineTypeSchema, *, include_identity: bool = True) -> dict[str, Any]:
    """Return the persisted record for ``theme``.

    With ``include_identity=False`` the server-owned ``id`` and ``isBuiltIn``
    are left out, which is the shape sent to create/update.
    """
    record: dict[str, Any] = {}
    if include_identity:
        record["id"] = theme.id
        record["isBuiltIn"] = theme.is_built_in
    record.update(
        {
            "name": theme.name,
            "viewerBackground": theme.viewer_background.to_dict(),
            "canvasDimensions": theme.canvas_dimensions.to_dict(),
            "lineOrder": list(theme.line_order),
            "linePositions": {key: value.to_dict() for key, value in theme.line_positions.items()},
            "lineStyles": {key: value.to_dict() for key, value in theme.line_styles.items()},
        }
    )
    for spec in schema.references:
        record[spec.position_field] = theme.reference_positions[spec.line_type].to_dict()
        record[spec.style_field] = theme.reference_styles[spec.line_type].to_dict()
    record["backgroundBoxes"] = [box.to_dict() for box in theme.background_boxes]
    return record


def _decode_json_fields(raw: Mapping[str, Any], schema: LineTypeSchema) -> dict[str, Any]:
    data = dict(raw)
    fields = list(_JSON_FIELDS)
    for spec in schema.references:
        fields.extend((spec.position_field, spec.style_field))
    for key in fields:
        value = data.get(key)
        if not isinstance(value, str):
            continue
        try:
            data[key] = json.loads(value)
        except json.JSONDecodeError:
            logger.warning("%s theme field %r is not valid JSON; using defaults", schema.variant, key)
            data[key] = None
    return data


def _str_or_default(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value
    return default


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    return False


def _line_order(value: Any, schema: LineTypeSchema) -> list[str]:
    if isinstance(value, (list, tuple)):
        order = [item for item in value if isinstance(item, str) and item]
    else:
        order = list(schema.required_ordinary_types())
    # Themes saved before reference lines existed do not list them.
    for line_type in schema.ordered_reference_types():
        if line_type not in order:
            order.append(line_type)
    return order


def _merged_map(value: Any, schema: LineTypeSchema, kind: type, *, position: bool) -> dict:
    raw_map = value if isinstance(value, Mapping) else {}
    merged = {}
    for line_type in schema.required_ordinary_types():
        default = schema.default_position(line_type) if position else schema.default_style(line_type)
        merged[line_type] = kind.from_mapping(raw_map.get(line_type), default)
    return merged


def _boxes(value: Any) -> list[BackgroundBox]:
    if not isinstance(value, (list, tuple)):
        return []
    boxes: list[BackgroundBox] = []
    seen: set[str] = set()
    for index, item in enumerate(value):
        if not isinstance(item, Mapping):
            logger.warning("skipping malformed background box at index %d", index)
            continue
        box = BackgroundBox.from_mapping(item, fallback_id=_unused_id(f"box-{index + 1}", seen))
        if box.id in seen:
            box = replace(box, id=_unused_id(f"{box.id}-{index + 1}", seen))
        seen.add(box.id)
        boxes.append(box)
    return boxes


def _unused_id(candidate: str, seen: set[str]) -> str:
    unique = candidate
    suffix = 2
    while unique in seen:
        unique = f"{candidate}-{suffix}"
        suffix += 1
    return unique
