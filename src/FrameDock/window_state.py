from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Any, Optional
from PySide6.QtCore import QPointF, QSizeF, QRectF


@dataclass(frozen=True)
class WindowDescriptor:
    """
    One-shot description of a floating window for the current frame's render pass.
    Fields left as None mean the renderer keeps whatever it had last frame.
    """
    id: Any
    constrain_to: QRectF
    title: str = ""
    title_bar: bool = False
    current_pos: Optional[QPointF] = None
    fixed_size: Optional[QSizeF] = None
    min_height: Optional[float] = None
    max_height: Optional[float] = None


class WindowState:
    """
    The state of a floating surface that has to survive between frames.

    Doubles as a handle for the surface, allowing the application to queue
    a new position or size for the next frame.
    """

    def __init__(self):
        # The rect this window was last taking up, None until drawn once.
        self._screen_rect: Optional[QRectF] = None
        # Was this window dragged in the last frame?
        self._dragged = False
        self._next_position: Optional[QPointF] = None
        self._next_size: Optional[QSizeF] = None
        # Height of the window before it was fully collapsed.
        self._expanded_height: Optional[float] = None
        # True the first frame this window is drawn.
        self._new = True
        self._minimized = False

    def __repr__(self):
        return (f"WindowState(rect={self.rect().getRect()}, dragged={self._dragged}, "
                f"new={self._new}, minimized={self._minimized})")

    def set_position(self, position: QPointF) -> WindowState:
        """Set the position for this window in screen coordinates, applied next frame."""
        self._next_position = QPointF(position)
        return self

    def set_size(self, size: QSizeF) -> WindowState:
        """Set the size of this window, applied next frame."""
        self._next_size = QSizeF(size)
        return self

    def rect(self) -> QRectF:
        """
        Get the rect this window occupies.
        If this window hasn't been shown yet, this is an empty rect at the origin.
        """
        if self._screen_rect is None:
            return QRectF()
        return QRectF(self._screen_rect)

    def is_dragged(self) -> bool:
        return self._dragged

    def is_minimized(self) -> bool:
        return self._minimized

    def is_new(self) -> bool:
        return self._new

    def toggle_minimized(self):
        self._minimized = not self._minimized

    # --- Render step feedback ---

    def set_screen_rect(self, rect: QRectF) -> WindowState:
        self._screen_rect = QRectF(rect)
        return self

    def set_dragged(self, dragged: bool) -> WindowState:
        self._dragged = dragged
        return self

    def set_expanded_height(self, height: float) -> WindowState:
        """Used by the render step: height to pin on the next new frame."""
        self._expanded_height = height
        return self

    def set_new(self, new: bool) -> WindowState:
        """Used by the layout when a collapsed window expands again."""
        self._new = new
        return self

    # --- One-shot consumers ---

    def take_next_position(self) -> Optional[QPointF]:
        """Used by the render step. Returns the pending position and clears it."""
        position, self._next_position = self._next_position, None
        return position

    def take_next_size(self) -> Optional[QSizeF]:
        """Used by the render step. Returns the pending size and clears it."""
        size, self._next_size = self._next_size, None
        return size

    def take_expanded_height(self) -> Optional[float]:
        """Used by the render step. Returns the pending expanded height and clears it."""
        height, self._expanded_height = self._expanded_height, None
        return height

    def create_window(self, window_id, bounds: QRectF) -> WindowDescriptor:
        """
        Builds this frame's descriptor, consuming any pending position and size.

        On the first frame after creation (or after set_new(True)) the height is
        pinned to the pending expanded height, so a window coming back from a
        full collapse does not flash at a default size. The new flag is always
        cleared afterwards.
        """
        new = self._new
        min_height = max_height = None

        current_pos = self.take_next_position()
        fixed_size = self.take_next_size()
        # Reset the height of the window if it is now expanded
        if new:
            height = self.take_expanded_height()
            if height is not None:
                min_height = max_height = height
        self._new = False

        return WindowDescriptor(
            id=window_id,
            constrain_to=QRectF(bounds),
            current_pos=current_pos,
            fixed_size=fixed_size,
            min_height=min_height,
            max_height=max_height,
        )

    # --- Persistence ---

    def to_dict(self) -> dict:
        """
        Serializes the state to a mapping that strict JSON encoders accept.
        A rect that was never drawn, or any value that is not finite, is stored as None.
        """
        screen_rect = None
        if self._screen_rect is not None:
            screen_rect = _finite_list(self._screen_rect.getRect())
        next_position = None
        if self._next_position is not None:
            next_position = _finite_list((self._next_position.x(), self._next_position.y()))
        next_size = None
        if self._next_size is not None:
            next_size = _finite_list((self._next_size.width(), self._next_size.height()))
        expanded_height = None
        if self._expanded_height is not None and math.isfinite(self._expanded_height):
            expanded_height = self._expanded_height

        return {
            'screen_rect': screen_rect,
            'dragged': self._dragged,
            'next_position': next_position,
            'next_size': next_size,
            'expanded_height': expanded_height,
            'new': self._new,
            'minimized': self._minimized,
        }

    @classmethod
    def from_dict(cls, data: dict) -> WindowState:
        """
        Recreates a state from to_dict() output. Missing keys keep their defaults,
        and values that are not finite are dropped as if they were never set.
        """
        state = cls()
        rect_data = _finite_list(data.get('screen_rect'))
        if rect_data is not None:
            state._screen_rect = QRectF(*rect_data)

        position = _finite_list(data.get('next_position'))
        if position is not None:
            state._next_position = QPointF(*position)
        size = _finite_list(data.get('next_size'))
        if size is not None:
            state._next_size = QSizeF(*size)
        height = data.get('expanded_height')
        if height is not None and math.isfinite(height):
            state._expanded_height = float(height)

        state._dragged = bool(data.get('dragged', False))
        state._new = bool(data.get('new', True))
        state._minimized = bool(data.get('minimized', False))
        return state


def _finite_list(values) -> Optional[list]:
    if values is None or not all(math.isfinite(v) for v in values):
        return None
    return list(values)
