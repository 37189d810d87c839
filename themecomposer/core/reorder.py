"""Layer reordering for line order and background boxes."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
LayerKind = Literal["line", "box"]


def move(items: Sequence[T], source: int, target: int) -> list[T]:
    """Move the element at ``source`` so that it ends up at ``target``.

    ``target`` indexes the list after the element has been removed, so every
    other element keeps its relative order.
    """
    result = list(items)
    if source == target:
        return result
    if not (0 <= source < len(result)) or not (0 <= target < len(result)):
        raise IndexError(f"move({source}, {target}) out of range for {len(result)} items")
    element = result.pop(source)
    result.insert(target, element)
    return result


@dataclass(frozen=True, slots=True)
class DragState:
    """An active drag; ``target_index`` is set while hovering a drop slot."""

    kind: LayerKind
    item_id: str
    source_index: int
    target_index: int | None = None


class LayerReorderEngine:
    """Drag/drop state machine over one kind of layer at a time.

    ``Idle -> Dragging -> DragOver* -> Idle``. Hover targets are a rendering
    hint only; the collection changes on ``drop`` and nowhere else.
    """

    def __init__(self) -> None:
        self._drag: DragState | None = None

    @property
    def state(self) -> DragState | None:
        return self._drag

    @property
    def is_dragging(self) -> bool:
        return self._drag is not None

    def start_drag(self, kind: LayerKind, item_id: str, index: int) -> None:
        self._drag = DragState(kind=kind, item_id=item_id, source_index=index)

    def drag_over(self, kind: LayerKind, index: int) -> None:
        if self._drag is None or self._drag.kind != kind:
            return
        self._drag = DragState(
            kind=self._drag.kind,
            item_id=self._drag.item_id,
            source_index=self._drag.source_index,
            target_index=index,
        )

    def is_drop_target(self, kind: LayerKind, index: int) -> bool:
        drag = self._drag
        return drag is not None and drag.kind == kind and drag.target_index == index

    def drop(self, kind: LayerKind, target_index: int, items: Sequence[T]) -> list[T] | None:
        """Finish the drag onto ``target_index``.

        Returns the reordered list, or ``None`` when nothing moves (no drag,
        other kind, same slot, or an index outside ``items``). The engine is
        idle afterwards either way.
        """
        drag = self._drag
        self._drag = None
        if drag is None or drag.kind != kind:
            return None
        if drag.source_index == target_index:
            return None
        try:
            return move(items, drag.source_index, target_index)
        except IndexError:
            logger.warning(
                "ignoring %s drop from %d to %d with %d items",
                kind, drag.source_index, target_index, len(items),
            )
            return None

    def cancel(self) -> None:
        self._drag = None
