"""AWS client wrapper.

Infrastructure component that wraps the boto3 IAM and CodeCommit clients.
Every call returns a ``(success, result_or_error)`` tuple, so services can be
tested without talking to AWS and never see botocore exceptions.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Callable

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from approvalradar.domain.codecommit import PullRequest, Repository
from approvalradar.domain.identity import Identity

OPEN_STATUS = "OPEN"

_AWS_ERRORS = (BotoCoreError, ClientError)


@dataclass
class Deadline:
    """Wall-clock budget shared by every call in one scan."""

    seconds: float
    started: float = field(default_factory=time.monotonic)

    def remaining(self) -> float:
        return self.seconds - (time.monotonic() - self.started)

    @property
    def expired(self) -> bool:
        return self.remaining() <= 0

    def describe(self) -> str:
        return f"scan deadline exceeded after {self.seconds:g}s"


@dataclass
class CodeCommitClient:
    """Runs IAM and CodeCommit calls through boto3.

    This is the production client. For testing, pass MagicMock objects as
    ``iam`` and ``codecommit``, or mock this class entirely.
    """

    iam: Any
    codecommit: Any
    deadline: Deadline

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def create(cls, region: str, timeout_seconds: float) -> CodeCommitClient:
        """Build clients from the default credential chain.

        Args:
            region: AWS region for both clients
            timeout_seconds: Overall scan budget; also caps each socket timeout

        Returns:
            A client whose deadline starts now
        """
        config = Config(
            region_name=region,
            connect_timeout=timeout_seconds,
            read_timeout=timeout_seconds,
            retries={"max_attempts": 1, "mode": "standard"},
        )
        session = boto3.session.Session(region_name=region)
        return cls(
            iam=session.client("iam", config=config),
            codecommit=session.client("codecommit", config=config),
            deadline=Deadline(timeout_seconds),
        )

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    def get_user(self) -> tuple[bool, Identity | str]:
        """Fetch the caller's IAM user.

        Returns:
            Tuple of (success, Identity or error string)
        """
        success, result = self._call(self.iam.get_user)
        if not success:
            return False, result
        user = result.get("User")
        if not user:
            return False, "IAM GetUser returned no user record"
        return True, Identity.from_dict(user)

    def list_repositories(self) -> tuple[bool, list[Repository] | str]:
        """List every repository visible to the caller, following all pages.

        Returns:
            Tuple of (success, list of Repository or error string)
        """
        success, result = self._paginate("list_repositories", "repositories")
        if not success:
            return False, result
        return True, [Repository.from_dict(item) for item in result]

    def list_open_pull_requests(
        self,
        repository_name: str,
        author_arn: str | None = None,
    ) -> tuple[bool, list[str] | str]:
        """List the ids of open pull requests in a repository.

        Args:
            repository_name: Repository to list
            author_arn: Only return pull requests opened by this ARN

        Returns:
            Tuple of (success, list of pull request ids or error string)
        """
        kwargs = {"repositoryName": repository_name, "pullRequestStatus": OPEN_STATUS}
        if author_arn:
            kwargs["authorArn"] = author_arn
        return self._paginate("list_pull_requests", "pullRequestIds", **kwargs)

    def get_pull_request(self, pull_request_id: str) -> tuple[bool, PullRequest | str]:
        """Fetch a pull request with its approval rules.

        Returns:
            Tuple of (success, PullRequest or error string)
        """
        success, result = self._call(self.codecommit.get_pull_request, pullRequestId=pull_request_id)
        if not success:
            return False, result
        return True, PullRequest.from_dict(result.get("pullRequest", {}))

    # --------------------------------------------------------
    # Private Methods
    # --------------------------------------------------------

    def _call(self, method: Callable[..., dict], **kwargs) -> tuple[bool, dict | str]:
        if self.deadline.expired:
            return False, self.deadline.describe()
        try:
            result = method(**kwargs)
        except _AWS_ERRORS as e:
            return False, str(e)
        # A call that outlived the deadline counts as failed.
        if self.deadline.expired:
            return False, self.deadline.describe()
        return True, result

    def _paginate(self, operation: str, result_key: str, **kwargs) -> tuple[bool, list | str]:
        items: list = []
        if self.deadline.expired:
            return False, self.deadline.describe()
        try:
            for page in self.codecommit.get_paginator(operation).paginate(**kwargs):
                items.extend(page.get(result_key, []))
                if self.deadline.expired:
                    return False, self.deadline.describe()
        except _AWS_ERRORS as e:
            return False, str(e)
        return True, items
