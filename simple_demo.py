#!/usr/bin/env python3
"""Simple demo script running a few frames of FrameDock with 3 floating windows."""

import sys
from PySide6.QtCore import QCoreApplication, QPointF, QSizeF, QRectF

# Add the src directory to the path so we can import FrameDock
sys.path.insert(0, 'src')

from FrameDock.docking_manager import DockingManager
from FrameDock.model.layout_serializer import LayoutSerializer


def fake_render(manager, descriptors):
    """Stand-in for a render pass: place each window where it was asked to go."""
    for descriptor in descriptors:
        state = manager.model.window_state(descriptor.id)
        rect = state.rect()
        if descriptor.current_pos is not None:
            rect.moveTopLeft(descriptor.current_pos)
        if descriptor.fixed_size is not None:
            rect.setSize(descriptor.fixed_size)
        if descriptor.max_height is not None:
            rect.setHeight(descriptor.max_height)
        manager.report_window(descriptor.id, rect, dragged=False)


def main():
    app = QCoreApplication(sys.argv)

    manager = DockingManager(main_tabs=["Editor", "Console"], bounds=QRectF(0, 0, 1920, 1080))
    manager.signals.window_closed.connect(lambda surface: print(f"--- SIGNAL[window_closed]: surface {surface} ---"))
    manager.signals.layout_changed.connect(lambda: print("--- SIGNAL[layout_changed] ---"))

    for i, title in enumerate(["Table", "Buttons", "Notes"]):
        manager.add_window([title], position=QPointF(100 + 80 * i, 100 + 60 * i), size=QSizeF(320, 240))

    for frame in range(3):
        descriptors = manager.begin_frame()
        fake_render(manager, descriptors)
        if frame == 1:
            manager.close_tab(2, 0, 0)
        manager.end_frame()

    manager.model.pretty_print()
    print(LayoutSerializer(manager).save_layout_to_bytearray().decode('utf-8'))
    return 0


if __name__ == "__main__":
    sys.exit(main())
