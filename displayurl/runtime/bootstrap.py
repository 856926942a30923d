"""Host startup: provider registration, validation and start."""

from __future__ import annotations

import logging

from displayurl.core.config import DisplayUrlSettings
from displayurl.core.startup_validation import validate_all
from displayurl.providers.base import DisplayURLProvider
from displayurl.providers.classic import ClassicDisplayURLProvider
from displayurl.providers.template import (
    TemplateDisplayURLProvider,
    TemplateDisplayURLProviderConfig,
)
from displayurl.runtime.host import HostContext

PLUGIN_ENTRY_POINT_GROUP = "displayurl.providers"

_logger = logging.getLogger(__name__)


def register_builtin_providers(*, host: HostContext) -> None:
    """Registers the classic provider and, when configured, the template provider."""

    registry = host.registry
    registry.register(
        ClassicDisplayURLProvider(host=host),
        extension_type=DisplayURLProvider,
    )
    settings = host.settings
    if settings.has_template_provider():
        registry.register(
            TemplateDisplayURLProvider(
                host=host,
                config=TemplateDisplayURLProviderConfig.from_settings(settings),
            ),
            extension_type=DisplayURLProvider,
            ordinal=settings.template_ordinal,
        )


def register_plugin_providers(*, host: HostContext) -> int:
    """Registers providers advertised under the ``displayurl.providers`` entry point group.

    Each entry point must name a DisplayURLProvider subclass constructible
    with ``host=``. A class-level ``ordinal`` sets its priority.
    """

    def factory(provider_cls: type[DisplayURLProvider]) -> DisplayURLProvider:
        return provider_cls(host=host)

    return host.registry.load_entry_points(
        PLUGIN_ENTRY_POINT_GROUP,
        extension_type=DisplayURLProvider,
        factory=factory,
    )


def bootstrap_host(
    *,
    settings: DisplayUrlSettings | None = None,
    load_plugins: bool | None = None,
    validate: bool = True,
) -> HostContext:
    """Creates, populates and starts a host.

    Args:
        settings: Settings to use. Loaded from the environment when None.
        load_plugins: Overrides ``settings.load_plugins`` when not None.
        validate: Runs startup validation before starting.

    Raises:
        ValidationError: If validation is enabled and fails.
    """

    settings = settings or DisplayUrlSettings()
    host = HostContext(settings=settings)
    register_builtin_providers(host=host)

    should_load_plugins = settings.load_plugins if load_plugins is None else load_plugins
    if should_load_plugins:
        count = register_plugin_providers(host=host)
        _logger.info("plugin providers registered: count=%s", count)

    if validate:
        validate_all(settings=settings, registry=host.registry)
    if settings.root_url is None:
        _logger.warning("root URL is not configured; links will use the unconfigured location")

    host.start()
    return host
