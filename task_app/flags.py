"""
Feature-Flag Gateway for the Task Service.

Wraps an external boolean flag provider behind a fail-closed gateway: any
provider problem (initialisation timeout, network error, non-boolean
variation) is logged and reported to callers as a disabled flag. Callers
never see the underlying failure.

The provider is an injected ``FlagEvaluator``. Production wiring uses
``LaunchDarklyEvaluator``; tests pass in fakes.

Key Concepts Demonstrated:
- Dependency injection of an external capability behind a small protocol
- Fail-closed handling of third-party errors
- Lazy client initialisation with a bounded wait
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Any, Protocol

from ldclient import Context
from ldclient.client import LDClient
from ldclient.config import Config as LDConfig

from .errors import FlagEvaluationFailure
from .models import UserContext

logger = logging.getLogger(__name__)


class FeatureFlag(str, Enum):
    """Statically known flag keys."""

    TASK_PRIORITIES = "task-priorities"
    TASK_ANALYTICS = "task-analytics"
    ADVANCED_FILTERING = "advanced-filtering"
    TASK_SHARING = "task-sharing"


class FlagEvaluator(Protocol):
    """Anything that can answer "is this flag on for this user"."""

    def evaluate(self, flag_key: str, user_context: UserContext) -> Any:
        ...


def build_ld_context(user_context: UserContext) -> Context:
    """Translate a ``UserContext`` into a LaunchDarkly evaluation context."""
    builder = Context.builder(user_context.key)
    if user_context.name is not None:
        builder.name(user_context.name)
    if user_context.email is not None:
        builder.set("email", user_context.email)
    for attribute, value in user_context.attributes.items():
        builder.set(attribute, value)
    return builder.build()


class LaunchDarklyEvaluator:
    """
    ``FlagEvaluator`` backed by the LaunchDarkly server-side SDK.

    The SDK client is created on first use. ``LDClient`` blocks for at most
    ``init_timeout`` seconds while it connects; if it is still not
    initialised afterwards every evaluation raises ``FlagEvaluationFailure``
    until the client catches up. Without an SDK key the client runs
    offline and returns the default (``False``) for every flag.
    """

    def __init__(self, sdk_key: str, *, offline: bool = False, init_timeout: float = 5.0) -> None:
        self.sdk_key = sdk_key
        self.offline = offline or not sdk_key
        self.init_timeout = init_timeout
        self._client: LDClient | None = None
        self._lock = threading.Lock()

    @property
    def client(self) -> LDClient:
        with self._lock:
            if self._client is None:
                logger.info(
                    "Initialising LaunchDarkly client (offline=%s, timeout=%ss)",
                    self.offline,
                    self.init_timeout,
                )
                self._client = LDClient(
                    config=LDConfig(self.sdk_key, offline=self.offline),
                    start_wait=self.init_timeout,
                )
            return self._client

    def evaluate(self, flag_key: str, user_context: UserContext) -> Any:
        client = self.client
        if not client.is_initialized():
            raise FlagEvaluationFailure("LaunchDarkly client is not initialised")
        return client.variation(flag_key, build_ld_context(user_context), False)

    def close(self) -> None:
        with self._lock:
            if self._client is not None:
                self._client.close()
                self._client = None


class FlagGateway:
    """Fail-closed front door to a ``FlagEvaluator``."""

    def __init__(self, evaluator: FlagEvaluator) -> None:
        self.evaluator = evaluator

    def evaluate(self, flag_key: str | FeatureFlag, user_context: UserContext) -> bool:
        """
        Evaluate one flag for a user.

        Returns:
            The provider's answer when it is a boolean, otherwise ``False``.
            Errors are logged and never raised.
        """
        key = flag_key.value if isinstance(flag_key, FeatureFlag) else flag_key
        try:
            value = self.evaluator.evaluate(key, user_context)
        except Exception:
            logger.exception("Error checking feature flag '%s'", key)
            return False

        if not isinstance(value, bool):
            logger.warning(
                "Feature flag '%s' returned non-boolean value %r; treating as disabled",
                key,
                value,
            )
            return False
        return value

    def evaluate_all(self, user_context: UserContext) -> dict[str, bool]:
        """Evaluate every ``FeatureFlag`` for a user; the key set never varies."""
        return {flag.value: self.evaluate(flag, user_context) for flag in FeatureFlag}
