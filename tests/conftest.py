"""
Pytest configuration and shared fixtures.
This file ensures the project root is in sys.path for imports.
"""

import sys
from pathlib import Path

import pytest

# Add project root to sys.path so we can import domain, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture(autouse=True)
def _reset_app_state():
    """Drop dependency overrides and session stores left behind by a test."""
    yield
    main = sys.modules.get("main")
    if main is not None:
        main.app.dependency_overrides.clear()
    for module_name, store_name in (
        ("services.planner_service", "boards"),
        ("services.sketch_service", "pads"),
    ):
        module = sys.modules.get(module_name)
        if module is not None:
            getattr(module, store_name).clear()
