from __future__ import annotations
from PySide6.QtCore import QObject, Signal, QPointF, QSizeF, QRectF

from .dock_model import DockState
from .tab_removal import TabRemoval, LeafRemoval, SurfaceRemoval, removal_from, removal_order
from .window_state import WindowDescriptor


class DockingSignals(QObject):
    """
    A collection of signals to allow applications to react to layout changes.
    """
    # Emitted after a tab was removed by the compaction pass.
    # Args: surface, node, tab
    tab_closed = Signal(int, int, int)

    # Emitted after a whole tab group was removed.
    # Args: surface, node
    leaf_closed = Signal(int, int)

    # Emitted after a floating window and its state were removed.
    # Args: surface
    window_closed = Signal(int)

    # Emitted once per frame in which anything was removed.
    layout_changed = Signal()


class DockingManager(QObject):
    """
    Drives the dock state through a frame.

    Each frame the host calls begin_frame() to get window descriptors, renders,
    reports each window's placement back with report_window(), queues removals
    while walking the layout, and finally calls end_frame() to apply them.
    """

    def __init__(self, main_tabs: list | None = None, bounds: QRectF | None = None):
        super().__init__()
        self.model = DockState(main_tabs)
        self.bounds = QRectF(bounds) if bounds is not None else QRectF()
        self.signals = DockingSignals()
        self._to_remove = []

    def add_window(self, tabs: list, position: QPointF | None = None, size: QSizeF | None = None) -> int:
        """
        Creates a floating window holding the given tabs.

        :param position: Optional top-left for the window's first frame.
        :param size: Optional size for the window's first frame.
        :return: The surface index of the new window.
        """
        surface = self.model.add_window(tabs)
        state = self.model.window_state(surface)
        if position is not None:
            state.set_position(position)
        if size is not None:
            state.set_size(size)
        return surface

    def begin_frame(self) -> list[WindowDescriptor]:
        """Materializes every visible floating window once for this frame."""
        descriptors = []
        for surface, state in self.model.windows():
            if state.is_minimized():
                continue
            descriptors.append(state.create_window(surface, self.bounds))
        return descriptors

    def report_window(self, surface: int, rect: QRectF, dragged: bool):
        """Stores where the render pass actually drew a window and whether it was dragged."""
        self.model.window_state(surface).set_screen_rect(rect).set_dragged(dragged)

    def queue_removal(self, address):
        """Records a removal to apply at the end of the frame. See removal_from() for address shapes."""
        self._to_remove.append(removal_from(address))

    def close_tab(self, surface: int, node: int, tab: int):
        """
        Queues removal of a tab, plus its node once every tab of it is queued,
        plus its window once every node of it is queued.
        """
        self.queue_removal((surface, node, tab))
        pending = set(self._to_remove)
        surface_obj = self.model.surfaces[surface]

        tabs = surface_obj.nodes[node].tabs
        if any(TabRemoval(surface, node, i) not in pending for i in range(len(tabs))):
            return
        self.queue_removal((surface, node))
        pending.add(LeafRemoval(surface, node))

        if surface_obj.is_window and all(LeafRemoval(surface, i) in pending for i in range(len(surface_obj.nodes))):
            self.queue_removal(surface)

    def pending_removals(self) -> list:
        """Returns a copy of the removals queued so far this frame."""
        return list(self._to_remove)

    def replace_model(self, model: DockState):
        """
        Swaps in a new dock state. Queued removals address the old tree, so they are dropped.
        """
        self._to_remove.clear()
        self.model = model

    def end_frame(self) -> int:
        """
        The compaction pass. Applies every queued removal, highest index first,
        and clears the queue. Returns the number of records applied.
        """
        records = removal_order(self._to_remove)
        self._to_remove.clear()

        for record in records:
            self.model.apply_removal(record)
            if isinstance(record, TabRemoval):
                self.signals.tab_closed.emit(record.surface, record.node, record.tab)
            elif isinstance(record, LeafRemoval):
                self.signals.leaf_closed.emit(record.surface, record.node)
            elif isinstance(record, SurfaceRemoval):
                self.signals.window_closed.emit(record.surface)

        if records:
            self.signals.layout_changed.emit()
        return len(records)
