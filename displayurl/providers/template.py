"""Template provider (settings-driven).

This provider renders each URL from a Jinja2 template configured through
``DISPLAYURL_TEMPLATE_*`` settings. It lets an installation point
notifications at a secondary UI without writing a plugin, e.g.::

    DISPLAYURL_TEMPLATE_RUN_URL="{{ root }}ui/{{ run.job.full_name | raw_encode }}/runs/{{ run.number }}/"
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from displayurl.core.config import DisplayUrlSettings
from displayurl.providers.base import DisplayURLProvider, JobRef, RunRef, TestResultRef
from displayurl.rendering.url_template import UrlTemplateInput, UrlTemplateRenderer
from displayurl.runtime.host import HostContext


@dataclass(frozen=True)
class TemplateDisplayURLProviderConfig:
    """Configuration for TemplateDisplayURLProvider."""

    name: str
    run_url: str
    changes_url: str
    job_url: str
    test_url: str

    @classmethod
    def from_settings(cls, settings: DisplayUrlSettings) -> TemplateDisplayURLProviderConfig:
        """Builds the config from settings.

        Raises:
            ValueError: If any URL template is missing.
        """

        templates = settings.template_urls()
        missing = [kind for kind, source in templates.items() if source is None]
        if missing:
            raise ValueError(f"URL templates are not configured: kinds={','.join(missing)}")
        return cls(
            name=settings.template_name,
            run_url=templates["run"],
            changes_url=templates["changes"],
            job_url=templates["job"],
            test_url=templates["test"],
        )


class TemplateDisplayURLProvider(DisplayURLProvider):
    """Provider that renders URLs from configured templates."""

    _logger = logging.getLogger(__name__)

    def __init__(self, *, host: HostContext, config: TemplateDisplayURLProviderConfig) -> None:
        super().__init__(host=host)
        self._config = config
        self._renderer = UrlTemplateRenderer(
            templates={
                "run": config.run_url,
                "changes": config.changes_url,
                "job": config.job_url,
                "test": config.test_url,
            }
        )

    def get_name(self) -> str:
        return self._config.name

    def get_run_url(self, run: RunRef) -> str:
        return self._render("run", job=run.job, run=run)

    def get_changes_url(self, run: RunRef) -> str:
        return self._render("changes", job=run.job, run=run)

    def get_job_url(self, job: JobRef) -> str:
        return self._render("job", job=job)

    def get_test_url(self, result: TestResultRef) -> str:
        return self._render("test", job=result.run.job, run=result.run, test=result)

    def _render(
        self,
        kind: str,
        *,
        job: JobRef,
        run: RunRef | None = None,
        test: TestResultRef | None = None,
    ) -> str:
        url = self._renderer.render(
            kind,
            data=UrlTemplateInput(root=self.get_root(), job=job, run=run, test=test),
        )
        self._logger.debug("url rendered: provider=%s kind=%s url=%s", self.get_name(), kind, url)
        return url
