# Headless defaults for the whole suite: Qt renders offscreen and matplotlib
# never tries to open a window. Set before any test module imports PyQt6.

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("MPLBACKEND", "Agg")


@pytest.fixture(scope="session")
def qapp():
    """Shared QApplication (offscreen) for widgets and QThread signal delivery."""
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication(sys.argv)
    return app


@pytest.fixture
def dataset_body():
    from tests.factories import packaged_body

    return packaged_body()
