"""Policy Association Port - Interface for managing policy asset associations."""
from typing import Protocol


class PolicyAssociationPort(Protocol):
    """Port interface for the remote association calls used by the resource manager."""

    def add_policy_asset_association(
        self, policy_id: str, asset_id: str, asset_type: str, account_id: int | None = None
    ) -> None:
        ...

    def is_policy_asset_associated(
        self, policy_id: str, asset_id: str, asset_type: str, account_id: int | None = None
    ) -> bool:
        ...

    def delete_policy_asset_association(
        self, policy_id: str, asset_id: str, asset_type: str, account_id: int | None = None
    ) -> None:
        ...
