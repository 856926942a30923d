"""Startup validation for display URL configuration.

This module checks that the host is configured consistently before it starts
serving provider lookups.
"""

from __future__ import annotations

from urllib.parse import urlsplit

from displayurl.core.config import DisplayUrlSettings
from displayurl.providers.base import DisplayURLProvider
from displayurl.providers.classic import ClassicDisplayURLProvider
from displayurl.providers.lookup import matches_preferred
from displayurl.runtime.extensions import ExtensionRegistry


class ValidationError(RuntimeError):
    """Raised when validation fails."""


def validate_root_url(*, root_url: str) -> None:
    """Validates that the root URL is an absolute http(s) URL.

    Raises:
        ValidationError: If the URL is relative or uses another scheme.
    """
    parts = urlsplit(root_url)
    if parts.scheme not in {"http", "https"}:
        raise ValidationError(
            f"DISPLAYURL_ROOT_URL must use http or https, got: {root_url}"
        )
    if not parts.netloc:
        raise ValidationError(f"DISPLAYURL_ROOT_URL must include a host, got: {root_url}")


def validate_default_provider(*, registry: ExtensionRegistry) -> None:
    """Validates that the classic provider is registered.

    Raises:
        ValidationError: If no classic provider is registered.
    """
    providers = registry.get_extension_list(DisplayURLProvider)
    if not any(type(provider) is ClassicDisplayURLProvider for provider in providers):
        raise ValidationError(f"{ClassicDisplayURLProvider.__name__} is not registered.")


def validate_template_configuration(*, settings: DisplayUrlSettings) -> None:
    """Validates that URL templates are configured all together or not at all.

    Raises:
        ValidationError: If only some URL templates are set.
    """
    templates = settings.template_urls()
    missing = [kind for kind, source in templates.items() if source is None]
    if missing and len(missing) != len(templates):
        env_names = ", ".join(f"DISPLAYURL_TEMPLATE_{kind.upper()}_URL" for kind in missing)
        raise ValidationError(f"Template provider is partially configured. Missing: {env_names}")


def validate_preferred_provider(*, preferred: str, registry: ExtensionRegistry) -> None:
    """Validates that the preferred provider is registered.

    Raises:
        ValidationError: If no registered provider matches by name or class.
    """
    providers = registry.get_extension_list(DisplayURLProvider)
    known: list[str] = []
    for provider in providers:
        if matches_preferred(provider, preferred):
            return
        known.append(provider.get_name())
    raise ValidationError(
        f"DISPLAYURL_PROVIDER is set to '{preferred}' but no such provider is registered. "
        f"Registered providers: {', '.join(known) or '(none)'}"
    )


def validate_all(*, settings: DisplayUrlSettings, registry: ExtensionRegistry) -> None:
    """Validates display URL configuration.

    Args:
        settings: Display URL settings.
        registry: Extension registry populated with providers.

    Raises:
        ValidationError: If any validation fails.
    """
    errors: list[str] = []

    if settings.root_url is not None:
        try:
            validate_root_url(root_url=settings.root_url)
        except ValidationError as exc:
            errors.append(f"Root URL validation failed: {exc}")

    try:
        validate_default_provider(registry=registry)
    except ValidationError as exc:
        errors.append(f"Default provider validation failed: {exc}")

    try:
        validate_template_configuration(settings=settings)
    except ValidationError as exc:
        errors.append(f"Template configuration validation failed: {exc}")

    if settings.provider is not None:
        try:
            validate_preferred_provider(preferred=settings.provider, registry=registry)
        except ValidationError as exc:
            errors.append(f"Preferred provider validation failed: {exc}")

    if errors:
        error_message = "Startup validation failed:\n\n" + "\n".join(f"  - {err}" for err in errors)
        raise ValidationError(error_message)
