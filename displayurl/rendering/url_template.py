"""URL rendering from Jinja2 templates."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from jinja2 import Environment, StrictUndefined

from displayurl.providers.base import JobRef, RunRef, TestResultRef, encode, raw_encode


@dataclass(frozen=True)
class UrlTemplateInput:
    """Input to render a URL.

    ``run``, ``job`` and ``test`` are None when the URL kind does not have them.
    """

    root: str
    job: JobRef | None = None
    run: RunRef | None = None
    test: TestResultRef | None = None


class UrlTemplateRenderer:
    """Renders display URLs from Jinja2 template strings, one per URL kind.

    Templates see ``root``, ``job``, ``run`` and ``test`` plus the ``encode``
    and ``raw_encode`` filters. Undefined names raise at render time.
    """

    def __init__(self, *, templates: Mapping[str, str]) -> None:
        env = Environment(
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=False,
        )
        env.filters["encode"] = encode
        env.filters["raw_encode"] = raw_encode
        self._templates = {kind: env.from_string(source) for kind, source in templates.items()}

    def render(self, kind: str, *, data: UrlTemplateInput) -> str:
        """Renders the URL of ``kind`` and strips surrounding whitespace.

        Raises:
            KeyError: If no template is configured for ``kind``.
        """

        template = self._templates[kind]
        return template.render(
            root=data.root,
            job=data.job,
            run=data.run,
            test=data.test,
        ).strip()
