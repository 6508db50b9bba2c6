import os

from flask import request
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Monitoring endpoints are scraped often and never throttled
EXEMPT_PATHS = ("/metrics", "/health")

# Global Limiter instance to be imported by controllers.
# create_app() disables it when RATE_LIMIT_ENABLED=0.
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["1000 per hour", "200 per minute"],
    storage_uri=os.getenv("LIMITER_STORAGE_URI", "memory://"),
    enabled=True,
)


@limiter.request_filter
def _is_monitoring_request() -> bool:
    return request.path in EXEMPT_PATHS
