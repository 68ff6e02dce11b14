"""
Task Service Flask Application Factory.

Provides the ``create_app`` factory function that assembles the task
service. The task store and the feature-flag evaluator are owned by the
application instance and can be injected, so every test can build an
isolated app with its own data and its own flag answers.

The service registers one blueprint:
  * **api_bp** -- JSON REST endpoints for tasks and feature flags, mounted
    at the root.

Key Concepts Demonstrated:
- Application factory pattern (``create_app``)
- Dependency injection of state (``TaskStore``) and external capabilities
  (``FlagEvaluator``) instead of module-level singletons
"""

from __future__ import annotations

import logging

from flask import Flask

from config import get_config

from .flags import FlagEvaluator, FlagGateway, LaunchDarklyEvaluator
from .service import TaskService
from .store import TaskStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(
    config_name: str | None = None,
    *,
    store: TaskStore | None = None,
    flag_evaluator: FlagEvaluator | None = None,
) -> Flask:
    """
    Create and configure the task service application.

    Args:
        config_name: Optional configuration environment name
            (``"development"``, ``"testing"``, ``"production"``).  When *None*,
            the value is read from the ``FLASK_ENV`` environment variable,
            defaulting to ``"development"``.
        store: Task store to serve. A fresh, empty store is created when
            omitted.
        flag_evaluator: Feature-flag provider. Defaults to a LaunchDarkly
            client configured from ``LAUNCHDARKLY_*`` settings.

    Returns:
        A fully configured Flask application instance ready to serve requests.
    """
    app = Flask(__name__)
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    logger.info("Creating task service app with config: %s", config_class.__name__)

    if flag_evaluator is None:
        flag_evaluator = LaunchDarklyEvaluator(
            app.config["LAUNCHDARKLY_SDK_KEY"],
            offline=app.config["LAUNCHDARKLY_OFFLINE"],
            init_timeout=app.config["FLAG_INIT_TIMEOUT"],
        )

    app.extensions["task_service"] = TaskService(
        store=store if store is not None else TaskStore(),
        flags=FlagGateway(flag_evaluator),
    )

    from .routes.api import api_bp

    app.register_blueprint(api_bp)

    return app
