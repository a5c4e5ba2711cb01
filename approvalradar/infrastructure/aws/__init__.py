"""AWS API wrapper."""

from approvalradar.infrastructure.aws.client import CodeCommitClient, Deadline

__all__ = ["CodeCommitClient", "Deadline"]
