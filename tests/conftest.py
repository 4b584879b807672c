"""
Pytest configuration for the test suite.

Adds the project root to sys.path so that the modules can be imported
without installing the project, and adds tests/ so the page builders in
``samplePages`` can be imported. The gazetteer fixture is read from tests/data.
"""

import sys
from pathlib import Path

import pytest

# Add project root so ``import gazetteer`` etc. work
_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

# Add tests/ directory so ``from samplePages import ...`` works
_tests_dir = str(Path(__file__).resolve().parent)
if _tests_dir not in sys.path:
    sys.path.insert(0, _tests_dir)

from gazetteer import loadGazetteer

DATA_DIR = str(Path(__file__).resolve().parent / "data")


@pytest.fixture(scope="session")
def dataDir():
    return DATA_DIR


@pytest.fixture(scope="session")
def gazetteer():
    return loadGazetteer(DATA_DIR)
