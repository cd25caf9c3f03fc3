from __future__ import annotations
import uuid
from dataclasses import dataclass, field
from typing import Any, Optional

from .window_state import WindowState
from .tab_removal import RemovalRecord, TabRemoval, LeafRemoval, SurfaceRemoval

# --- Node Definitions ---

@dataclass
class TabGroupNode:
    """A leaf of the layout. Holds the tabs shown together in one tab bar."""
    tabs: list[Any] = field(default_factory=list)
    id: uuid.UUID = field(default_factory=uuid.uuid4, init=False)

@dataclass
class Surface:
    """
    A top-level area holding tab groups. The main surface has no window state,
    every floating surface owns exactly one.
    """
    nodes: list[TabGroupNode] = field(default_factory=list)
    window_state: Optional[WindowState] = None
    id: uuid.UUID = field(default_factory=uuid.uuid4, init=False)

    @property
    def is_window(self) -> bool:
        return self.window_state is not None

# --- Dock State ---

class DockState:
    """The complete model of the dock layout: the main surface plus floating windows."""

    MAIN_SURFACE = 0

    def __init__(self, main_tabs: list | None = None):
        main = Surface()
        if main_tabs:
            main.nodes.append(TabGroupNode(tabs=list(main_tabs)))
        self.surfaces: list[Surface] = [main]

    def add_window(self, tabs: list) -> int:
        """Adds a floating surface holding the given tabs and returns its index."""
        surface = Surface(nodes=[TabGroupNode(tabs=list(tabs))], window_state=WindowState())
        self.surfaces.append(surface)
        return len(self.surfaces) - 1

    def window_state(self, surface: int) -> WindowState:
        state = self.surfaces[surface].window_state
        if state is None:
            raise ValueError(f"Surface {surface} is not a floating window")
        return state

    def windows(self):
        """Yields (index, WindowState) for every floating surface."""
        for index, surface in enumerate(self.surfaces):
            if surface.window_state is not None:
                yield index, surface.window_state

    # --- Primitive removals. Indices are not checked against staleness. ---

    def remove_tab(self, surface: int, node: int, tab: int):
        return self.surfaces[surface].nodes[node].tabs.pop(tab)

    def remove_leaf(self, surface: int, node: int) -> TabGroupNode:
        return self.surfaces[surface].nodes.pop(node)

    def remove_surface(self, surface: int) -> Surface:
        if surface == self.MAIN_SURFACE:
            raise ValueError("The main surface cannot be removed")
        return self.surfaces.pop(surface)

    def apply_removal(self, record: RemovalRecord):
        """Applies a single removal record. Callers own the ordering, see removal_order()."""
        if isinstance(record, TabRemoval):
            return self.remove_tab(record.surface, record.node, record.tab)
        elif isinstance(record, LeafRemoval):
            return self.remove_leaf(record.surface, record.node)
        elif isinstance(record, SurfaceRemoval):
            return self.remove_surface(record.surface)
        raise TypeError(f"Not a removal record: {record!r}")

    def get_all_tabs(self) -> list:
        """Returns a flat list of every tab on every surface."""
        return [tab for surface in self.surfaces for node in surface.nodes for tab in node.tabs]

    def pretty_print(self):
        """Outputs the current state of the entire layout model to the console."""
        print("\n--- DOCKING LAYOUT STATE ---")
        for i, surface in enumerate(self.surfaces):
            kind = "Window" if surface.is_window else "Main"
            print(f"\n[Surface {i}: {kind} ID: ...{str(surface.id)[-4:]}]")
            if surface.window_state is not None:
                print(f"  {surface.window_state!r}")
            if not surface.nodes:
                print("  (No nodes)")
            for j, node in enumerate(surface.nodes):
                print(f"  ↳ TabGroup {j} [id: ...{str(node.id)[-4:]}] - Tabs: {len(node.tabs)}")
                for tab in node.tabs:
                    print(f"    ↳ Tab: '{tab}'")
        print("----------------------------\n")
