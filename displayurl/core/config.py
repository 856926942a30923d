"""Display URL configuration.

Settings are read from ``DISPLAYURL_*`` environment variables or a ``.env``
file in the working directory.
"""

from __future__ import annotations

from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DisplayUrlSettings(BaseSettings):
    """Settings for the display URL host."""

    model_config = SettingsConfigDict(
        env_prefix="DISPLAYURL_",
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Public root of the CI host, e.g. "https://ci.example.com/".
    root_url: str | None = None

    # Preferred provider, by provider name or fully-qualified class name.
    provider: str | None = None

    # Template provider. Registered only when all four URL templates are set.
    template_name: str = "template"
    template_ordinal: int = 0
    template_run_url: str | None = None
    template_changes_url: str | None = None
    template_job_url: str | None = None
    template_test_url: str | None = None

    # Discover providers advertised by installed distributions.
    load_plugins: bool = True

    @field_validator(
        "root_url",
        "provider",
        "template_run_url",
        "template_changes_url",
        "template_job_url",
        "template_test_url",
        mode="before",
    )
    @classmethod
    def _normalize_env_string(cls, value: Any) -> Any:
        """Normalizes env var strings.

        Docker's `--env-file` does not strip quotes, so we trim whitespace and
        strip a single pair of surrounding quotes. Empty values become None.
        """

        if value is None or not isinstance(value, str):
            return value
        text = value.strip()
        if len(text) >= 2 and ((text[0] == text[-1] == '"') or (text[0] == text[-1] == "'")):
            text = text[1:-1].strip()
        return text or None

    @field_validator("root_url")
    @classmethod
    def _ensure_trailing_slash(cls, value: str | None) -> str | None:
        if value is not None and not value.endswith("/"):
            return value + "/"
        return value

    def template_urls(self) -> dict[str, str | None]:
        """Returns the configured URL templates keyed by URL kind."""

        return {
            "run": self.template_run_url,
            "changes": self.template_changes_url,
            "job": self.template_job_url,
            "test": self.template_test_url,
        }

    def has_template_provider(self) -> bool:
        """Returns True when every URL template is configured."""

        return all(value is not None for value in self.template_urls().values())
