"""
Pytest markers and configuration for the portfolio tests.

Markers are registered here and added automatically from the test file
location so ``pytest -m unit`` or ``pytest -m api`` select consistently.
"""

import pytest


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "api: mark test as API endpoint test")
    config.addinivalue_line("markers", "auth: mark test as authentication-related")
    config.addinivalue_line("markers", "services: mark test as service layer test")
    config.addinivalue_line("markers", "repositories: mark test as repository test")
    config.addinivalue_line("markers", "view: mark test as filter/sort engine test")
    config.addinivalue_line("markers", "client: mark test as API client test")


def pytest_collection_modifyitems(config, items):
    """Modify test items during collection."""
    for item in items:
        path = str(item.fspath)

        # Add markers based on test file location
        if "unit" in path:
            item.add_marker(pytest.mark.unit)

        if "integration" in path:
            item.add_marker(pytest.mark.integration)

        if "auth" in path or "auth" in item.name:
            item.add_marker(pytest.mark.auth)

        if "service" in path:
            item.add_marker(pytest.mark.services)

        if "repo" in path:
            item.add_marker(pytest.mark.repositories)

        if "view" in path:
            item.add_marker(pytest.mark.view)

        if "client" in path or "cli" in path:
            item.add_marker(pytest.mark.client)
