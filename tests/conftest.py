import pytest
from PySide6.QtCore import QCoreApplication


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    """Signals are delivered synchronously, but keep one application object around like a real host."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app
