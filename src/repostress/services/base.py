"""BaseService — abstract foundation for all repostress services.

Every service receives the :class:`Repository` under test and, when
plugins are active, the :class:`PluginManager` whose hooks it calls.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from repostress.services._helpers import error_code
from repostress.services.result import ServiceResult

if TYPE_CHECKING:
    from repostress.infrastructure.repository import Repository
    from repostress.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes."""

    def __init__(self, repository: Repository, *, plugins: PluginManager | None = None) -> None:
        self._repository = repository
        self._plugins = plugins

    def _dispatch_event(
        self,
        hook_name: str,
        payload: dict[str, Any],
        warnings: list[str],
    ) -> None:
        """Call a plugin hook synchronously. No-op without plugins.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        if self._plugins is None:
            return
        hook_fn = getattr(self._plugins.hook, hook_name, None)
        if hook_fn is None:
            return
        try:
            hook_fn(**payload)
        except Exception:
            logger.debug("Plugin hook %s failed", hook_name, exc_info=True)
            message = f"Plugin hook {hook_name} failed"
            if message not in warnings:
                warnings.append(message)

    @staticmethod
    def _error_result(op: str, exc: Exception) -> ServiceResult:
        """Translate a repostress exception into an ``ok=False`` result."""
        return ServiceResult.failure(op, error_code(exc), str(exc), type=type(exc).__name__)
