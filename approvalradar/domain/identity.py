"""Domain model for the authenticated IAM principal."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """The caller, as reported by IAM GetUser.

    ``arn`` is compared against pull request authorship; ``user_name`` is
    searched for in approval rule content.
    """

    user_name: str
    user_id: str
    arn: str

    @classmethod
    def from_dict(cls, data: dict) -> Identity:
        """Parse the ``User`` record of a GetUser response.

        Args:
            data: The ``User`` mapping from the IAM response

        Returns:
            Typed Identity instance
        """
        return cls(
            user_name=data.get("UserName", ""),
            user_id=data.get("UserId", ""),
            arn=data.get("Arn", ""),
        )
