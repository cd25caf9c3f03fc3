import json

from ..dock_model import DockState, Surface, TabGroupNode
from ..window_state import WindowState


class LayoutSerializer:
    """
    Handles serialization and deserialization of dock layout state.
    Output is strict JSON, so window states must never carry infinite values.
    """

    def __init__(self, manager):
        """
        Initialize with reference to DockingManager for accessing state.

        Args:
            manager: Reference to the DockingManager instance
        """
        self.manager = manager

    def save_layout_to_bytearray(self) -> bytearray:
        """
        Serializes the entire layout state to UTF-8 JSON.

        Returns:
            bytearray: Serialized layout data that can be saved to file
        """
        layout_data = [self._serialize_surface(surface) for surface in self.manager.model.surfaces]
        return bytearray(json.dumps(layout_data, allow_nan=False).encode('utf-8'))

    def _serialize_surface(self, surface: Surface) -> dict:
        return {
            'type': 'Window' if surface.is_window else 'Main',
            'nodes': [{'type': 'TabGroupNode', 'tabs': list(node.tabs)} for node in surface.nodes],
            'window_state': surface.window_state.to_dict() if surface.window_state is not None else None,
        }

    def load_layout_from_bytearray(self, data: bytearray) -> bool:
        """
        Replaces the manager's layout with the deserialized one.
        On malformed data the current layout is kept and False is returned.

        Args:
            data: Layout data from save_layout_to_bytearray()
        """
        try:
            layout_data = json.loads(bytes(data).decode('utf-8'))
            surfaces = [self._deserialize_surface(surface_data) for surface_data in layout_data]
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            print(f"Error deserializing layout data: {e}")
            return False

        if not surfaces or surfaces[0].is_window:
            print("ERROR: Layout data does not start with a main surface.")
            return False

        model = DockState()
        model.surfaces = surfaces
        self.manager.replace_model(model)
        self.manager.signals.layout_changed.emit()
        return True

    def _deserialize_surface(self, surface_data: dict) -> Surface:
        nodes = [self._deserialize_node(node_data) for node_data in surface_data.get('nodes', [])]
        window_state = None
        if surface_data['type'] == 'Window':
            window_state = WindowState.from_dict(surface_data.get('window_state') or {})
        elif surface_data['type'] != 'Main':
            raise ValueError(f"Unknown surface type '{surface_data['type']}'")
        return Surface(nodes=nodes, window_state=window_state)

    def _deserialize_node(self, node_data: dict) -> TabGroupNode:
        if node_data.get('type') != 'TabGroupNode':
            raise ValueError(f"Unknown node type '{node_data.get('type')}'")
        return TabGroupNode(tabs=list(node_data.get('tabs', [])))
