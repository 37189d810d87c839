"""Canonical in-memory theme model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from themecomposer.core.layout import (
    BackgroundBox,
    CanvasDimensions,
    LinePosition,
    LineStyle,
    ViewerBackground,
)
from themecomposer.errors import UnknownLineType

LineKind = Literal["line", "reference"]


@dataclass
class Theme:
    """A fully populated theme for one variant.

    Ordinary lines live in ``line_positions``/``line_styles``; reference lines
    live in ``reference_positions``/``reference_styles`` and are persisted as
    separate named fields. Use the ``*_for`` accessors to read or write either
    kind without caring which storage backs it.
    """

    variant: str
    id: str = ""
    name: str = ""
    is_built_in: bool = False
    viewer_background: ViewerBackground = field(default_factory=ViewerBackground)
    canvas_dimensions: CanvasDimensions = field(default_factory=CanvasDimensions)
    line_order: list[str] = field(default_factory=list)
    line_positions: dict[str, LinePosition] = field(default_factory=dict)
    line_styles: dict[str, LineStyle] = field(default_factory=dict)
    reference_positions: dict[str, LinePosition] = field(default_factory=dict)
    reference_styles: dict[str, LineStyle] = field(default_factory=dict)
    background_boxes: list[BackgroundBox] = field(default_factory=list)

    def kind_of(self, line_type: str) -> LineKind:
        if line_type in self.reference_positions:
            return "reference"
        if line_type in self.line_positions:
            return "line"
        raise UnknownLineType(line_type)

    def position_for(self, line_type: str) -> LinePosition:
        if self.kind_of(line_type) == "reference":
            return self.reference_positions[line_type]
        return self.line_positions[line_type]

    def style_for(self, line_type: str) -> LineStyle:
        if self.kind_of(line_type) == "reference":
            return self.reference_styles[line_type]
        return self.line_styles[line_type]

    def set_position(self, line_type: str, position: LinePosition) -> None:
        if self.kind_of(line_type) == "reference":
            self.reference_positions[line_type] = position
        else:
            self.line_positions[line_type] = position

    def set_style(self, line_type: str, style: LineStyle) -> None:
        if self.kind_of(line_type) == "reference":
            self.reference_styles[line_type] = style
        else:
            self.line_styles[line_type] = style

    def all_positions(self) -> dict[str, LinePosition]:
        """Ordinary and reference positions merged, for renderers."""
        return {**self.line_positions, **self.reference_positions}

    def all_styles(self) -> dict[str, LineStyle]:
        return {**self.line_styles, **self.reference_styles}

    def box(self, box_id: str) -> BackgroundBox | None:
        for box in self.background_boxes:
            if box.id == box_id:
                return box
        return None
