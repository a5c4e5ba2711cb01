"""Infrastructure components for ApprovalRadar.

This layer handles external system interactions:
- AWS IAM and CodeCommit via boto3
- Terminal output

Organized into subdirectories:
- aws/ - boto3 wrapper with a per-scan deadline
- terminal/ - status line renderer
"""

from .aws import CodeCommitClient, Deadline
from .terminal import OnDisable, RenderMode, StatusLineRenderer, is_terminal

__all__ = [
    # AWS
    "CodeCommitClient",
    "Deadline",
    # Terminal
    "OnDisable",
    "RenderMode",
    "StatusLineRenderer",
    "is_terminal",
]
