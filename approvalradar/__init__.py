"""ApprovalRadar CLI tool.

Scans the AWS CodeCommit repositories visible to the caller and reports open
pull requests that are waiting on the caller's approval (or, with --mine,
the ones the caller authored).

Usage:
    python -m approvalradar [--region REGION] [--mine] [--debug]
    approvalradar [--region REGION] [--mine] [--debug]

Structure:
    approvalradar/
    ├── __main__.py          # Entry point dispatcher
    ├── domain/              # Domain models (parse-once pattern)
    │   ├── codecommit.py    # Repository, PullRequest, ApprovalRule
    │   ├── identity.py      # Identity
    │   ├── errors.py        # ScanError, AuthError, UpstreamError
    │   └── settings.py      # ScanSettings
    ├── services/            # Business logic services
    │   └── approval_scanner.py
    ├── infrastructure/      # External system interactions
    │   ├── aws/client.py    # boto3 IAM + CodeCommit wrapper
    │   └── terminal/        # Status line renderer
    └── commands/            # Thin command orchestrators
        └── scan.py
"""
