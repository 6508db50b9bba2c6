import logging
import os

from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS

# Load environment variables conditionally
# Only load from .env when DATABASE_URL is not already defined by the environment
if not os.getenv("DATABASE_URL"):
    load_dotenv()

from portfolio.core.config import (  # noqa: E402
    get_cors_origins,
    get_environment,
    get_rate_limit_enabled,
    is_production,
    is_testing,
    log_config,
)

logger = logging.getLogger(__name__)


def create_app(config: dict | None = None) -> Flask:
    env = get_environment()
    production = is_production()

    app = Flask(__name__)
    app.json.sort_keys = False
    if is_testing():
        app.config["TESTING"] = True
    if config:
        app.config.update(config)

    # Request hooks need the app, so logging is set up after it exists
    from portfolio.core.logging_config import setup_logging

    setup_logging(
        app=app,
        log_level=logging.INFO if production else logging.DEBUG,
        use_json_format=production,
    )
    log_config()

    # Sentry error tracking, only when a DSN is configured
    sentry_dsn = os.getenv("SENTRY_DSN")
    if sentry_dsn:
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration
        from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

        sentry_sdk.init(
            dsn=sentry_dsn,
            environment=env,
            release=os.getenv("GIT_SHA", "unknown"),
            integrations=[FlaskIntegration(), SqlalchemyIntegration()],
            traces_sample_rate=0.1,
            send_default_pii=False,
        )
        logger.info("Sentry initialized", extra={"context": {"environment": env}})

    # Prometheus metrics on /metrics, one registry per app
    from prometheus_client import CollectorRegistry
    from prometheus_flask_exporter import PrometheusMetrics

    metrics = PrometheusMetrics(app, registry=CollectorRegistry())
    metrics.info(
        "app_info",
        "Application information",
        version=os.getenv("GIT_SHA", "unknown"),
        environment=env,
    )

    CORS(app, resources={r"/api/*": {"origins": get_cors_origins()}})

    from portfolio.core.limiter_config import limiter

    app.config["RATELIMIT_ENABLED"] = get_rate_limit_enabled()
    limiter.init_app(app)
    limiter.enabled = app.config["RATELIMIT_ENABLED"]
    if not limiter.enabled:
        logger.info("Rate limiting disabled", extra={"context": {"environment": env}})

    from portfolio.core.exceptions import register_error_handlers

    register_error_handlers(app)

    from portfolio.controllers import (
        auth_bp,
        domain_bp,
        evaluation_bp,
        health_bp,
        report_bp,
        settings_bp,
    )

    app.register_blueprint(auth_bp)
    app.register_blueprint(domain_bp)
    app.register_blueprint(evaluation_bp)
    app.register_blueprint(report_bp)
    app.register_blueprint(settings_bp)
    app.register_blueprint(health_bp)

    from portfolio.db.seed import seed_all
    from portfolio.db.session import create_tables

    create_tables()
    seed_all()

    logger.info(
        "Application created",
        extra={
            "context": {
                "environment": env,
                "blueprints": sorted(app.blueprints),
            }
        },
    )
    return app
