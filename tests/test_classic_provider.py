from __future__ import annotations

import pytest

from displayurl.core.config import DisplayUrlSettings
from displayurl.providers.base import JobRef, RunRef, TestResultRef
from displayurl.providers.classic import ClassicDisplayURLProvider
from displayurl.runtime.host import HostContext, HostNotStartedError


def _started_host(root_url: str | None) -> HostContext:
    host = HostContext(settings=DisplayUrlSettings(_env_file=None, root_url=root_url))
    host.start()
    return host


def test_get_root_returns_configured_root_url() -> None:
    provider = ClassicDisplayURLProvider(host=_started_host("https://ci.example.com/"))
    assert provider.get_root() == "https://ci.example.com/"


def test_get_root_returns_sentinel_when_unconfigured() -> None:
    provider = ClassicDisplayURLProvider(host=_started_host(None))
    assert provider.get_root() == "http://unconfigured-jenkins-location/"


def test_get_root_percent_encodes_spaces_and_non_ascii() -> None:
    provider = ClassicDisplayURLProvider(host=_started_host("https://ci.example.com/my ci/é/"))
    assert provider.get_root() == "https://ci.example.com/my%20ci/%C3%A9/"


def test_get_root_fails_before_host_start() -> None:
    host = HostContext(settings=DisplayUrlSettings(_env_file=None, root_url="https://ci.example.com/"))
    provider = ClassicDisplayURLProvider(host=host)
    with pytest.raises(HostNotStartedError):
        provider.get_root()
    with pytest.raises(HostNotStartedError):
        provider.get_job_url(JobRef.for_full_name("app"))


def test_classic_urls_follow_classic_ui_layout() -> None:
    provider = ClassicDisplayURLProvider(host=_started_host("https://ci.example.com/"))
    job = JobRef.for_full_name("folder/my job")
    run = RunRef.for_job(job, 42)

    assert provider.get_name() == "classic"
    assert job.url == "job/folder/job/my%20job/"
    assert provider.get_job_url(job) == "https://ci.example.com/job/folder/job/my%20job/"
    assert provider.get_run_url(run) == "https://ci.example.com/job/folder/job/my%20job/42/"
    assert (
        provider.get_changes_url(run)
        == "https://ci.example.com/job/folder/job/my%20job/42/changes"
    )


def test_classic_run_url_encodes_non_ascii_job_url() -> None:
    provider = ClassicDisplayURLProvider(host=_started_host("https://ci.example.com/"))
    job = JobRef(full_name="café", url="job/café/")
    assert provider.get_run_url(RunRef.for_job(job, 1)) == "https://ci.example.com/job/caf%C3%A9/1/"


def test_classic_test_url_escapes_each_report_segment() -> None:
    provider = ClassicDisplayURLProvider(host=_started_host("https://ci.example.com/"))
    run = RunRef.for_job(JobRef.for_full_name("app"), 7)
    result = TestResultRef(run=run, url="/pkg/MyClass/test one?")

    assert (
        provider.get_test_url(result)
        == "https://ci.example.com/job/app/7/testReport/pkg/MyClass/test%20one%3F"
    )


def test_classic_test_url_uses_action_url_name() -> None:
    provider = ClassicDisplayURLProvider(host=_started_host("https://ci.example.com/"))
    run = RunRef.for_job(JobRef.for_full_name("app"), 7)
    result = TestResultRef(run=run, url="suite/case", action_url_name="junitReport")

    assert provider.get_test_url(result) == "https://ci.example.com/job/app/7/junitReport/suite/case"


def test_classic_test_url_keeps_whitespace_in_report_segments() -> None:
    provider = ClassicDisplayURLProvider(host=_started_host("https://ci.example.com/"))
    run = RunRef.for_job(JobRef.for_full_name("app"), 7)
    result = TestResultRef(run=run, url="/pkg/Cls/ spaced test ")

    assert (
        provider.get_test_url(result)
        == "https://ci.example.com/job/app/7/testReport/pkg/Cls/%20spaced%20test%20"
    )


def test_classic_job_url_escapes_tilde_in_job_name() -> None:
    provider = ClassicDisplayURLProvider(host=_started_host("https://ci.example.com/"))
    job = JobRef.for_full_name("~user/app")

    assert job.url == "job/%7Euser/job/app/"
    assert provider.get_job_url(job) == "https://ci.example.com/job/%7Euser/job/app/"
