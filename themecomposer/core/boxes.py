"""Background box collection management."""

from __future__ import annotations

import logging
import uuid

from themecomposer.core.constants import MAX_BACKGROUND_BOXES
from themecomposer.core.layout import BackgroundBox
from themecomposer.errors import CapacityExceeded

logger = logging.getLogger(__name__)

_BOX_OFFSET_STEP = 5


class BoxManager:
    """Add/update/delete over a theme's ``background_boxes`` list, in place."""

    def __init__(self, boxes: list[BackgroundBox], limit: int = MAX_BACKGROUND_BOXES) -> None:
        self._boxes = boxes
        self._limit = limit

    @property
    def limit(self) -> int:
        return self._limit

    def can_add(self) -> bool:
        return len(self._boxes) < self._limit

    def add(self) -> BackgroundBox:
        """Append a new box; raises ``CapacityExceeded`` when the list is full."""
        count = len(self._boxes)
        if count >= self._limit:
            logger.info("background box rejected: %d of %d in use", count, self._limit)
            raise CapacityExceeded(self._limit)
        offset = 10 + count * _BOX_OFFSET_STEP
        box = BackgroundBox(id=f"box-{uuid.uuid4().hex[:12]}", x=offset, y=offset)
        self._boxes.append(box)
        return box

    def update(self, box: BackgroundBox) -> bool:
        for index, existing in enumerate(self._boxes):
            if existing.id == box.id:
                self._boxes[index] = box
                return True
        return False

    def delete(self, box_id: str) -> bool:
        for index, existing in enumerate(self._boxes):
            if existing.id == box_id:
                del self._boxes[index]
                return True
        return False
