"""Domain models for ApprovalRadar."""

from approvalradar.domain.codecommit import (
    APPROVER_MARKER,
    ApprovalRule,
    PullRequest,
    Repository,
    pull_request_url,
)
from approvalradar.domain.errors import AuthError, ConfigError, ScanError, UpstreamError
from approvalradar.domain.identity import Identity
from approvalradar.domain.settings import ScanSettings

__all__ = [
    "APPROVER_MARKER",
    "ApprovalRule",
    "AuthError",
    "ConfigError",
    "Identity",
    "PullRequest",
    "Repository",
    "ScanError",
    "ScanSettings",
    "UpstreamError",
    "pull_request_url",
]
