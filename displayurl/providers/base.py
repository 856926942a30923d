"""Provider interface for generating display URLs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from urllib.parse import quote

if TYPE_CHECKING:
    from displayurl.runtime.host import HostContext

UNCONFIGURED_ROOT_URL = "http://unconfigured-jenkins-location/"

# Printable ASCII other than space passes through `encode` untouched.
_ENCODE_SAFE = "".join(chr(code) for code in range(0x21, 0x7F))
_RAW_ENCODE_SAFE = "!@$&*()=+',"


def encode(text: str) -> str:
    """Escapes non-ASCII characters and spaces in a URL as UTF-8 ``%XX``."""

    return quote(text, safe=_ENCODE_SAFE)


def raw_encode(text: str) -> str:
    """Escapes a single path component, including ``/``, ``?``, ``#``, ``%`` and ``~``."""

    # quote() never escapes "~".
    return quote(text, safe=_RAW_ENCODE_SAFE).replace("~", "%7E")


@dataclass(frozen=True)
class JobRef:
    """Job reference passed to a provider.

    Attributes:
        full_name: Slash-separated full name, e.g. ``folder/my-job``.
        url: Host-relative URL of the job, e.g. ``job/folder/job/my-job/``.
    """

    full_name: str
    url: str

    @classmethod
    def for_full_name(cls, full_name: str) -> JobRef:
        """Builds a reference using the host's ``job/<name>/`` URL layout."""

        segments = [segment for segment in full_name.split("/") if segment]
        url = "".join(f"job/{raw_encode(segment)}/" for segment in segments)
        return cls(full_name="/".join(segments), url=url)


@dataclass(frozen=True)
class RunRef:
    """Run reference passed to a provider."""

    job: JobRef
    number: int
    url: str

    @classmethod
    def for_job(cls, job: JobRef, number: int) -> RunRef:
        return cls(job=job, number=number, url=f"{job.url}{number}/")


@dataclass(frozen=True)
class TestResultRef:
    """Test result reference passed to a provider.

    Attributes:
        run: Run that produced the result.
        url: Path of the test object within the report, e.g. ``/pkg/Class/test``.
        action_url_name: URL name of the run's test report page.
    """

    __test__ = False

    run: RunRef
    url: str
    action_url_name: str = "testReport"


class DisplayURLProvider:
    """Abstract display URL provider.

    Implementations generate fully qualified URLs for well known UI locations
    (run pages, changes, job home, test results) for use in notifications.
    Plugins register alternative implementations to override the classic UI
    links; the first non-classic provider wins.
    """

    extension_point = True

    def __init__(self, *, host: HostContext) -> None:
        self._host = host

    @staticmethod
    def get(host: HostContext) -> DisplayURLProvider:
        """Returns the active provider for ``host``."""

        from displayurl.providers.lookup import get_provider

        return get_provider(host=host)

    def get_root(self) -> str:
        """Fully qualified root URL of the host, percent-encoded.

        Raises:
            HostNotStartedError: If the host has not started.
        """

        self._host.require_started()
        root = self._host.root_url
        if root is None:
            root = UNCONFIGURED_ROOT_URL
        return encode(root)

    def get_name(self) -> str:
        """Name of this display URL provider."""

        raise NotImplementedError

    def get_run_url(self, run: RunRef) -> str:
        """Fully qualified URL for a run."""

        raise NotImplementedError

    def get_changes_url(self, run: RunRef) -> str:
        """Fully qualified URL for a page that displays changes for a run."""

        raise NotImplementedError

    def get_job_url(self, job: JobRef) -> str:
        """Fully qualified URL for a job's home page."""

        raise NotImplementedError

    def get_test_url(self, result: TestResultRef) -> str:
        """Fully qualified URL to the test details page for a test result."""

        raise NotImplementedError
