"""Policy asset association entities."""
from dataclasses import dataclass

from incapsula_manager.domain.exceptions import InvalidIdentifierError

ID_SEPARATOR = "/"


@dataclass(frozen=True)
class PolicyAssetAssociation:
    """
    Binding of a policy to an asset.

    There is no remote identity; the association is the tuple itself and
    its synthetic id is `policy_id/asset_id/asset_type`.
    """

    policy_id: str
    asset_id: str
    asset_type: str
    account_id: int | None = None

    @property
    def synthetic_id(self) -> str:
        return ID_SEPARATOR.join((self.policy_id, self.asset_id, self.asset_type))

    @classmethod
    def from_synthetic_id(cls, synthetic_id: str, account_id: int | None = None) -> "PolicyAssetAssociation":
        """
        Split a synthetic id back into its parts.

        Raises:
            InvalidIdentifierError: if the id does not have exactly three parts
        """
        parts = synthetic_id.split(ID_SEPARATOR)
        if len(parts) != 3:
            raise InvalidIdentifierError(
                f"Invalid policy asset association ID {synthetic_id!r}: "
                "expected policy_id/asset_id/asset_type"
            )
        policy_id, asset_id, asset_type = parts
        return cls(policy_id=policy_id, asset_id=asset_id, asset_type=asset_type, account_id=account_id)

    def __str__(self) -> str:
        return f"{self.policy_id}-{self.asset_id}-{self.asset_type}"


@dataclass
class AssociationState:
    """
    Persisted state of a policy_asset_association resource.

    Mirrors the declarative tool's resource data: an empty `id` means the
    resource is gone and will be dropped from state.
    """

    policy_id: str = ""
    asset_id: str = ""
    asset_type: str = ""
    account_id: int = 0
    id: str = ""

    IMMUTABLE_FIELDS = ("policy_id", "asset_id", "asset_type", "account_id")

    @property
    def exists(self) -> bool:
        return bool(self.id)

    def clear(self) -> None:
        """Drop the resource identity."""
        self.id = ""

    def to_association(self, account_id: int | None = None) -> PolicyAssetAssociation:
        return PolicyAssetAssociation(
            policy_id=self.policy_id,
            asset_id=self.asset_id,
            asset_type=self.asset_type,
            account_id=account_id,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "policy_id": self.policy_id,
            "asset_id": self.asset_id,
            "asset_type": self.asset_type,
            "account_id": self.account_id,
        }
