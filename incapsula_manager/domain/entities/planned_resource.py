"""PlannedResource entity: one resource configuration from a declarative plan."""
from dataclasses import dataclass, field
from typing import Any

POLICY_ASSET_ASSOCIATION_TYPE = "incapsula_policy_asset_association"


@dataclass
class PlannedResource:
    """A resource as it will look after the plan is applied."""

    address: str
    resource_type: str
    values: dict = field(default_factory=dict)

    def get(self, attribute: str, default: Any = None) -> Any:
        """Get a planned attribute value."""
        value = self.values.get(attribute)
        return default if value is None else value

    def is_policy_asset_association(self) -> bool:
        return self.resource_type == POLICY_ASSET_ASSOCIATION_TYPE

    def __str__(self) -> str:
        return f"PlannedResource({self.address})"
