"""
Root conftest.py for the product catalog project.

This file helps pytest discover and configure tests across services.
Each service keeps its code in a top-level 'app' package under
services/<name>/, which is not importable from the repository root.
"""

import sys
from pathlib import Path


def pytest_configure(config):
    """
    Configure pytest to add service directories to sys.path.

    Runs before collection, so test modules and the integration suite
    can import 'app' directly.
    """
    root_dir = Path(__file__).parent

    for service_path in sorted((root_dir / "services").iterdir()):
        if (service_path / "app").is_dir() and str(service_path) not in sys.path:
            sys.path.insert(0, str(service_path))
