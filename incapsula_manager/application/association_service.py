"""Policy asset association resource - lifecycle callbacks for the declarative tool."""

from incapsula_manager.domain.entities import AssociationState, PolicyAssetAssociation
from incapsula_manager.domain.exceptions import UnsupportedOperationError
from incapsula_manager.ports.outbound import LoggerPort, PolicyAssociationPort


def resolve_account_id(explicit_account_id: int | None, ambient_account_id: int | None) -> int | None:
    """
    Pick the account an operation runs in.

    The account set on the resource wins; otherwise the caller's current
    account is used. None means the API key's own account.
    """
    if explicit_account_id:
        return explicit_account_id
    return ambient_account_id or None


class PolicyAssetAssociationResource:
    """
    Create/read/delete for the policy_asset_association resource.

    The resource has no mutable fields, so there is no update: a change to
    any attribute forces the declarative tool to replace it.
    """

    def __init__(self, client: PolicyAssociationPort, logger: LoggerPort):
        """
        Initialize the resource manager.

        Args:
            client: Remote association calls
            logger: Logger for operation logging
        """
        self._client = client
        self._logger = logger

    def create(self, state: AssociationState, ambient_account_id: int | None = None) -> AssociationState:
        """
        Create the association described by `state`, then read it back.

        Args:
            state: Resource data with policy_id, asset_id, asset_type and
                optionally account_id set
            ambient_account_id: Current account of the caller

        Returns:
            The same state, with id and derived fields populated
        """
        account_id = resolve_account_id(state.account_id, ambient_account_id)
        association = state.to_association(account_id)

        try:
            self._client.add_policy_asset_association(
                association.policy_id, association.asset_id, association.asset_type, account_id
            )
        except Exception as e:
            self._logger.error(
                f"Could not create Incapsula policy asset association: {e}",
                exception=e,
                policy_id=association.policy_id,
                asset_id=association.asset_id,
                asset_type=association.asset_type,
            )
            raise

        state.id = association.synthetic_id
        self._logger.info(f"Created Incapsula policy asset association with ID: {state.id}")

        return self.read(state, ambient_account_id)

    def read(self, state: AssociationState, ambient_account_id: int | None = None) -> AssociationState:
        """
        Refresh `state` from the remote service.

        If the association no longer exists the id is cleared and no error
        is raised; calling read again on a cleared state is a no-op.

        Args:
            state: Resource data with its synthetic id set
            ambient_account_id: Current account of the caller

        Returns:
            The refreshed (or cleared) state
        """
        if not state.exists:
            return state

        account_id = resolve_account_id(state.account_id, ambient_account_id)
        association = PolicyAssetAssociation.from_synthetic_id(state.id, account_id)

        self._logger.info(
            f"Trying to read Incapsula policy asset association: {association}",
            account_id=account_id,
        )
        try:
            is_associated = self._client.is_policy_asset_associated(
                association.policy_id, association.asset_id, association.asset_type, account_id
            )
        except Exception as e:
            self._logger.error(
                f"Could not read Incapsula policy asset association: {association}",
                exception=e,
            )
            raise

        if not is_associated:
            self._logger.warning(
                f"Could not find Incapsula policy asset association: {association}, removing from state"
            )
            state.clear()
            return state

        self._logger.info(f"Successfully read policy asset association: {association}")
        state.policy_id = association.policy_id
        state.asset_id = association.asset_id
        state.asset_type = association.asset_type
        if account_id is not None:
            state.account_id = account_id
        state.id = association.synthetic_id
        return state

    def update(self, state: AssociationState, new_state: AssociationState) -> AssociationState:
        """Associations cannot be changed in place."""
        raise UnsupportedOperationError(
            "policy asset associations cannot be updated; changing "
            f"{', '.join(self.changed_fields(state, new_state)) or 'any field'} requires replacement"
        )

    def delete(self, state: AssociationState, ambient_account_id: int | None = None) -> AssociationState:
        """
        Remove the association and clear the state id.

        Remote errors propagate unchanged.
        """
        account_id = resolve_account_id(state.account_id, ambient_account_id)
        association = state.to_association(account_id)

        self._logger.info(
            f"Trying to delete Incapsula policy asset association: {association}",
            account_id=account_id,
        )
        self._client.delete_policy_asset_association(
            association.policy_id, association.asset_id, association.asset_type, account_id
        )

        state.clear()
        return state

    def import_state(self, synthetic_id: str, ambient_account_id: int | None = None) -> AssociationState:
        """Import an existing association by its `policy_id/asset_id/asset_type` id."""
        association = PolicyAssetAssociation.from_synthetic_id(synthetic_id)
        state = AssociationState(
            policy_id=association.policy_id,
            asset_id=association.asset_id,
            asset_type=association.asset_type,
            id=synthetic_id,
        )
        return self.read(state, ambient_account_id)

    @staticmethod
    def changed_fields(old: AssociationState, new: AssociationState) -> list[str]:
        """List the immutable fields that differ between two states."""
        changed = []
        for name in AssociationState.IMMUTABLE_FIELDS:
            old_value, new_value = getattr(old, name), getattr(new, name)
            # account_id is computed: an unset planned value keeps the known one
            if name == "account_id" and not new_value:
                continue
            if old_value != new_value:
                changed.append(name)
        return changed

    @classmethod
    def requires_replacement(cls, old: AssociationState, new: AssociationState) -> bool:
        """Check if moving from `old` to `new` forces a destroy and create."""
        return bool(cls.changed_fields(old, new))
