"""Services for ApprovalRadar.

Services encapsulate business logic and orchestrate domain models.
They receive dependencies via constructor injection.
"""

from approvalradar.services.approval_scanner import ApprovalScanner, ResultAccumulator

__all__ = ["ApprovalScanner", "ResultAccumulator"]
