"""Classic UI provider, always registered as the default."""

from __future__ import annotations

from displayurl.providers.base import (
    DisplayURLProvider,
    JobRef,
    RunRef,
    TestResultRef,
    encode,
    raw_encode,
)


class ClassicDisplayURLProvider(DisplayURLProvider):
    """Provider that links to the host's classic UI pages."""

    def get_name(self) -> str:
        return "classic"

    def get_run_url(self, run: RunRef) -> str:
        return self.get_root() + encode(run.url)

    def get_changes_url(self, run: RunRef) -> str:
        return self.get_run_url(run) + "changes"

    def get_job_url(self, job: JobRef) -> str:
        return self.get_root() + encode(job.url)

    def get_test_url(self, result: TestResultRef) -> str:
        """Links to the test object under the run's test report page.

        The report path is split on ``/`` and each non-empty segment is
        escaped as a single path component.
        """

        test_path = f"{result.action_url_name}/{result.url}"
        segments = test_path.split("/")
        encoded = "/".join(raw_encode(segment) for segment in segments if segment)
        return self.get_run_url(result.run) + encoded
