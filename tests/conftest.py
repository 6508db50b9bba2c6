"""
Central pytest configuration for the portfolio tests.

The environment is set before any application module is imported so the
lazily built engine and the config getters see the test values.
"""

import os

# Test database configuration (set early so import-time engines use it)
os.environ["DATABASE_URL"] = "sqlite:///:memory:"  # In-memory SQLite for fast tests
os.environ["TESTING"] = "true"
os.environ["FLASK_ENV"] = "testing"
os.environ["RATE_LIMIT_ENABLED"] = "0"  # Disable rate limiting in tests
os.environ["LOG_TO_FILE"] = "0"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret-key-used-only-by-pytest"
os.environ.pop("ADMIN_PASSWORD", None)
os.environ.pop("SENTRY_DSN", None)

from tests.config.markers import (  # noqa: E402,F401
    pytest_collection_modifyitems,
    pytest_configure,
)
from tests.fixtures.app_fixtures import (  # noqa: E402,F401
    app,
    auth_headers,
    client,
    database,
    registered_user,
)
from tests.fixtures.domain_fixtures import (  # noqa: E402,F401
    domain_payload,
    make_domain,
    sample_domains,
    sold_domain_payload,
)
