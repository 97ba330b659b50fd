"""Policy Lookup Port - Interface for resolving policies by id."""
from typing import Protocol

from incapsula_manager.domain.entities import Policy


class PolicyLookupPort(Protocol):
    """Port interface for fetching a policy, used by the uniqueness validator."""

    def get_policy(self, policy_id: str, account_id: int | None = None) -> Policy:
        """
        Fetch a policy.

        Args:
            policy_id: Id of the policy
            account_id: Optional sub-account context

        Returns:
            The Policy
        """
        ...
