"""Approval scanner service.

Core service that walks every visible CodeCommit repository, inspects its
open pull requests and collects console links for the ones the caller has
to approve (or, in "mine" mode, the ones the caller opened).

Every step returns an ``(ok, value_or_error)`` tuple. The first failure ends
the scan; nothing is retried and later repositories are not visited.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from approvalradar.domain.codecommit import Repository, pull_request_url
from approvalradar.domain.errors import AuthError, ScanError, UpstreamError
from approvalradar.domain.identity import Identity
from approvalradar.infrastructure.aws.client import CodeCommitClient
from approvalradar.infrastructure.terminal.renderer import StatusLineRenderer


@dataclass
class ResultAccumulator:
    """Ordered, lock-guarded list of pull request links."""

    region: str
    _urls: list[str] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def add(self, repository_name: str, pull_request_id: str) -> str:
        url = pull_request_url(self.region, repository_name, pull_request_id)
        with self._lock:
            self._urls.append(url)
        return url

    def urls(self) -> list[str]:
        with self._lock:
            return list(self._urls)

    def __len__(self) -> int:
        with self._lock:
            return len(self._urls)


@dataclass
class ApprovalScanner:
    """Finds open pull requests that need the caller's attention.

    Uses CodeCommitClient for AWS calls and StatusLineRenderer for progress
    output (dependency injection).
    """

    client: CodeCommitClient
    renderer: StatusLineRenderer
    region: str
    return_mine: bool = False
    results: ResultAccumulator = field(init=False)

    def __post_init__(self):
        self.results = ResultAccumulator(self.region)

    # ============================================================
    # Public API
    # ============================================================

    def scan(self) -> tuple[bool, list[str] | ScanError]:
        """Run the whole scan.

        Returns:
            Tuple of (success, links in discovery order or the first error)
        """
        ok, identity = self.resolve_identity()
        if not ok:
            return False, identity

        ok, repositories = self.list_repositories()
        if not ok:
            return False, repositories
        self.renderer.debug(f"Found {len(repositories)} repositories")

        for repository in repositories:
            self.renderer.info(self.renderer.tag("Scanning repo:"), " ", self.renderer.value(repository.name))
            ok, error = self.check_repository(repository, identity)
            if not ok:
                return False, error

        # Nothing is reported once the deadline has passed.
        if self.client.deadline.expired:
            return False, UpstreamError(self.client.deadline.describe())

        return True, self.results.urls()

    def resolve_identity(self) -> tuple[bool, Identity | AuthError]:
        ok, result = self.client.get_user()
        if not ok:
            return False, AuthError(result)

        self.renderer.debug(f"Scanning as {result.user_name} ({result.arn})")
        return True, result

    def list_repositories(self) -> tuple[bool, list[Repository] | UpstreamError]:
        ok, result = self.client.list_repositories()
        if not ok:
            return False, UpstreamError(result)
        return True, result

    def list_open_pull_requests(
        self,
        repository: Repository,
        identity: Identity,
    ) -> tuple[bool, list[str] | UpstreamError]:
        """List open pull request ids in a repository.

        In "mine" mode the listing is filtered server-side to pull requests
        authored by ``identity``.
        """
        author_arn = identity.arn if self.return_mine else None
        ok, result = self.client.list_open_pull_requests(repository.name, author_arn=author_arn)
        if not ok:
            return False, UpstreamError(result)
        return True, result

    def check_repository(
        self,
        repository: Repository,
        identity: Identity,
    ) -> tuple[bool, UpstreamError | None]:
        """Evaluate every open pull request in ``repository``.

        Returns:
            Tuple of (success, the first error or None)
        """
        ok, pull_request_ids = self.list_open_pull_requests(repository, identity)
        if not ok:
            return False, pull_request_ids

        for pull_request_id in pull_request_ids:
            self.renderer.debug("Found PR: ", pull_request_id)

            ok, result = self.evaluate_pull_request(repository, pull_request_id, identity)
            if not ok:
                return False, result

        return True, None

    def evaluate_pull_request(
        self,
        repository: Repository,
        pull_request_id: str,
        identity: Identity,
    ) -> tuple[bool, str | None | UpstreamError]:
        """Fetch a pull request and record it if it belongs in the report.

        Args:
            repository: Repository the pull request lives in
            pull_request_id: Pull request to fetch
            identity: The caller

        Returns:
            Tuple of (success, the recorded link, None if skipped, or the error)
        """
        ok, pull_request = self.client.get_pull_request(pull_request_id)
        if not ok:
            return False, UpstreamError(pull_request)

        if not pull_request.is_reportable(identity, self.return_mine):
            self.renderer.debug(f"Skipping PR {pull_request_id} in {repository.name}: {pull_request.title}")
            return True, None

        url = self.results.add(repository.name, pull_request_id)
        rule = None if self.return_mine else pull_request.approval_rule_for(identity)
        reason = f" (rule: {rule.name})" if rule else ""
        self.renderer.debug(f"Matched PR {pull_request_id} in {repository.name}: {pull_request.title}{reason}")
        return True, url
