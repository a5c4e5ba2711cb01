"""Domain models for CodeCommit repositories and pull requests.

Parse-once pattern: boto3 response dictionaries are parsed into type-safe
models at the boundary. Services use the typed API, not dictionary access.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from approvalradar.domain.identity import Identity

# Marker that CodeCommit writes into approval rule content for each
# approver pool member.
APPROVER_MARKER = "CodeCommitApprovers:"

CONSOLE_URL = (
    "https://{region}.console.aws.amazon.com/codesuite/codecommit/repositories/"
    "{repository}/pull-requests/{pull_request_id}/details?region={region}"
)


# ============================================================
# Domain Models
# ============================================================


@dataclass
class Repository:
    """A repository from ListRepositories. Only the name is consulted."""

    name: str

    @classmethod
    def from_dict(cls, data: dict) -> Repository:
        return cls(name=data.get("repositoryName", ""))


@dataclass
class ApprovalRule:
    """An approval rule attached to a pull request.

    ``content`` is the rule's serialized JSON, kept as an opaque string.
    """

    name: str
    content: str

    @classmethod
    def from_dict(cls, data: dict) -> ApprovalRule:
        return cls(
            name=data.get("approvalRuleName", ""),
            content=data.get("approvalRuleContent") or "",
        )

    def names_approver(self, user_name: str) -> bool:
        """Whether the rule content lists ``user_name`` as an approver.

        A plain substring test: the content is not parsed.
        """
        return f"{APPROVER_MARKER}{user_name}" in self.content


@dataclass
class PullRequest:
    """A pull request as returned by GetPullRequest."""

    pull_request_id: str
    title: str = ""
    author_arn: str | None = None
    approval_rules: list[ApprovalRule] = field(default_factory=list)

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict) -> PullRequest:
        """Parse the ``pullRequest`` mapping of a GetPullRequest response.

        Args:
            data: Raw ``pullRequest`` dictionary from boto3

        Returns:
            Typed PullRequest instance
        """
        return cls(
            pull_request_id=data.get("pullRequestId", ""),
            title=data.get("title", ""),
            author_arn=data.get("authorArn"),
            approval_rules=[ApprovalRule.from_dict(r) for r in data.get("approvalRules", [])],
        )

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    def is_authored_by(self, identity: Identity) -> bool:
        """Whether ``identity`` opened this pull request. A missing author never matches."""
        return self.author_arn is not None and self.author_arn == identity.arn

    def approval_rule_for(self, identity: Identity) -> ApprovalRule | None:
        """The first approval rule that names ``identity`` as an approver, if any."""
        for rule in self.approval_rules:
            if rule.names_approver(identity.user_name):
                return rule
        return None

    def awaits_approval_from(self, identity: Identity) -> bool:
        return self.approval_rule_for(identity) is not None

    def is_reportable(self, identity: Identity, return_mine: bool) -> bool:
        """Decide whether this pull request belongs in the report.

        Args:
            identity: The caller
            return_mine: Report the caller's own pull requests instead of
                the ones awaiting the caller's approval

        Returns:
            True if the pull request should be reported
        """
        mine = self.is_authored_by(identity)
        if return_mine:
            return mine
        if mine:
            # Nobody approves their own pull request.
            return False
        return self.awaits_approval_from(identity)


# ============================================================
# Helpers
# ============================================================


def pull_request_url(region: str, repository: str, pull_request_id: str) -> str:
    """Build the CodeCommit console link for a pull request."""
    return CONSOLE_URL.format(region=region, repository=repository, pull_request_id=pull_request_id)
