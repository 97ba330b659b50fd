"""Policy entity from the policies v2 API."""
from dataclasses import dataclass

from incapsula_manager.domain.value_objects.asset_type import PolicyType


@dataclass
class Policy:
    """A named rule-set managed independently of sites."""

    id: int
    name: str
    policy_type: str
    account_id: int = 0
    description: str = ""
    enabled: bool = True

    @classmethod
    def from_dict(cls, data: dict) -> "Policy":
        """Decode the `value` object of a policy response."""
        return cls(
            id=int(data.get("id") or 0),
            name=data.get("name") or "",
            policy_type=data.get("policyType") or "",
            account_id=int(data.get("accountId") or 0),
            description=data.get("description") or "",
            enabled=bool(data.get("enabled", True)),
        )

    def is_unique_per_asset(self) -> bool:
        """Check if an asset may carry at most one policy of this type.

        Policy types this client does not know about are unconstrained.
        """
        try:
            return PolicyType(self.policy_type).is_unique_per_asset
        except ValueError:
            return False

    def __str__(self) -> str:
        return f"Policy({self.id}, {self.name}, {self.policy_type})"
