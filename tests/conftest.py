import pytest
from PySide6.QtCore import QCoreApplication

from app.config import TestConfig

REFERENCE = ("hi", "only", "few", "people", "can", "read", "this")


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def reference():
    return REFERENCE


@pytest.fixture
def config():
    return TestConfig()
