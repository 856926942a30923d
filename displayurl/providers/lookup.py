"""Resolution of the active display URL provider."""

from __future__ import annotations

import logging
import weakref

from displayurl.providers.base import DisplayURLProvider
from displayurl.providers.classic import ClassicDisplayURLProvider
from displayurl.runtime.host import HostContext

_logger = logging.getLogger(__name__)

# Hosts whose unmatched preferred provider has already been logged.
_warned_hosts: weakref.WeakSet[HostContext] = weakref.WeakSet()


class DefaultProviderMissingError(LookupError):
    """Raised when the classic provider is not registered with the host."""


def get_provider(*, host: HostContext) -> DisplayURLProvider:
    """Returns the active display URL provider.

    A preferred provider named in settings wins when it is registered.
    Otherwise the first registered provider other than the classic one is
    returned, falling back to the classic provider. Registry order decides
    between several alternatives (highest ordinal first).

    Raises:
        HostNotStartedError: If the host has not started.
        DefaultProviderMissingError: If no classic provider is registered.
    """

    providers = host.get_extension_list(DisplayURLProvider)
    default = next(
        (provider for provider in providers if type(provider) is ClassicDisplayURLProvider),
        None,
    )
    if default is None:
        raise DefaultProviderMissingError(
            f"{ClassicDisplayURLProvider.__name__} is not registered with the host."
        )

    preferred = _find_preferred(host, providers)
    if preferred is not None:
        return preferred

    alternatives = [provider for provider in providers if provider is not default]
    return alternatives[0] if alternatives else default


def matches_preferred(provider: DisplayURLProvider, preferred_name: str) -> bool:
    """Returns True if ``preferred_name`` names ``provider``.

    Matches the provider name case-insensitively, or the fully-qualified
    class name exactly.
    """

    klass = type(provider)
    qualified = f"{klass.__module__}.{klass.__qualname__}"
    return provider.get_name().lower() == preferred_name.lower() or qualified == preferred_name


def _find_preferred(
    host: HostContext, providers: list[DisplayURLProvider]
) -> DisplayURLProvider | None:
    preferred_name = host.preferred_provider
    if preferred_name is None:
        return None
    for provider in providers:
        if matches_preferred(provider, preferred_name):
            return provider
    if host not in _warned_hosts:
        _warned_hosts.add(host)
        _logger.warning("preferred provider is not registered: provider=%s", preferred_name)
    return None
