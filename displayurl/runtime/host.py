"""Host context passed explicitly to providers and lookups."""

from __future__ import annotations

import logging
from typing import TypeVar

from displayurl.core.config import DisplayUrlSettings
from displayurl.runtime.extensions import ExtensionRegistry

T = TypeVar("T")


class HostNotStartedError(RuntimeError):
    """Raised when the host is used before startup has completed."""


class HostContext:
    """Root URL, extension registry and lifecycle state of the CI host."""

    _logger = logging.getLogger(__name__)

    def __init__(
        self,
        *,
        settings: DisplayUrlSettings,
        registry: ExtensionRegistry | None = None,
    ) -> None:
        self._settings = settings
        self._registry = registry or ExtensionRegistry()
        self._started = False

    @property
    def settings(self) -> DisplayUrlSettings:
        return self._settings

    @property
    def registry(self) -> ExtensionRegistry:
        return self._registry

    @property
    def is_started(self) -> bool:
        return self._started

    @property
    def root_url(self) -> str | None:
        """Configured root URL, or None when the location is unconfigured."""

        return self._settings.root_url

    @property
    def preferred_provider(self) -> str | None:
        return self._settings.provider

    def start(self) -> None:
        """Marks startup as complete."""

        self._started = True
        self._logger.info("host started: root_url=%s", self.root_url)

    def stop(self) -> None:
        self._started = False
        self._logger.info("host stopped")

    def require_started(self) -> None:
        """Raises HostNotStartedError unless the host has started."""

        if not self._started:
            raise HostNotStartedError("host has not started")

    def get_extension_list(self, extension_type: type[T]) -> list[T]:
        """Returns registered extensions of ``extension_type`` in registry order."""

        self.require_started()
        return self._registry.get_extension_list(extension_type)
