"""Enumerations for asset and policy types."""
from enum import Enum


class AssetType(str, Enum):
    """Asset types a policy can be associated with."""

    WEBSITE = "WEBSITE"

    @property
    def display_name(self) -> str:
        """Human-readable name for the asset type."""
        mapping = {
            AssetType.WEBSITE: "Website (Incapsula site)",
        }
        return mapping[self]


class PolicyType(str, Enum):
    """Policy types known to the policies API."""

    ACL = "ACL"
    WHITELIST = "WHITELIST"
    WAF_RULES = "WAF_RULES"

    @property
    def is_unique_per_asset(self) -> bool:
        """Check if at most one policy of this type may target an asset."""
        return self == PolicyType.WAF_RULES
